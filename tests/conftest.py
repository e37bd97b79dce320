"""Pytest fixtures for locatif tests."""

import os
import sys
from datetime import date

import pytest
from dateutil.relativedelta import relativedelta

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from locatif.domain.models import Bien, Locataire, Lot, Loyer, TypeFinancement  # noqa: E402

AS_OF = date(2025, 6, 15)


@pytest.fixture
def as_of():
    """Fixed reference date so results do not depend on today."""
    return AS_OF


@pytest.fixture
def sample_charges():
    """Charges of the reference property (1200 €/year tax, monthly others)."""
    return {
        "taxe_fonciere": 1200.0,
        "charges_copro": 100.0,
        "assurance": 30.0,
        "frais_gestion": 50.0,
        "autres_charges": 20.0,
    }


@pytest.fixture
def bien_cash(sample_charges):
    """Cash property bought two years before the reference date."""
    return Bien(
        id="cash-1",
        nom="Studio Lyon",
        type_financement=TypeFinancement.CASH,
        loyer_mensuel=1000.0,
        prix_achat=200000.0,
        date_acquisition=AS_OF - relativedelta(years=2),
        **sample_charges,
    )


@pytest.fixture
def bien_credit(sample_charges):
    """Credit property with a 20-year loan started two years ago."""
    return Bien(
        id="credit-1",
        nom="T3 Nantes",
        type_financement=TypeFinancement.CREDIT,
        loyer_mensuel=1000.0,
        montant_credit=200000.0,
        taux_credit=3.5,
        duree_credit=240,
        date_debut_credit=AS_OF - relativedelta(months=24),
        prix_achat=230000.0,
        frais_notaire=17000.0,
        travaux_initiaux=3000.0,
        date_acquisition=AS_OF - relativedelta(months=24),
        date_mise_en_location=AS_OF - relativedelta(months=24),
        **sample_charges,
    )


@pytest.fixture
def bien_immeuble(sample_charges):
    """Subdivided credit property with a stored 500 € payment."""
    return Bien(
        id="immeuble-1",
        nom="Immeuble Rennes",
        type_financement=TypeFinancement.CREDIT,
        loyer_mensuel=1000.0,
        mensualite_credit=500.0,
        montant_credit=100000.0,
        taux_credit=2.0,
        duree_credit=240,
        prix_achat=150000.0,
        **sample_charges,
    )


@pytest.fixture
def lots_immeuble():
    return [
        Lot(id="lot-a", bien_id="immeuble-1", numero_lot="A", loyer_mensuel=600.0),
        Lot(id="lot-b", bien_id="immeuble-1", numero_lot="B", loyer_mensuel=400.0),
    ]


@pytest.fixture
def locataires_immeuble():
    """One tenant in lot A, two co-tenants sharing lot B."""
    return [
        Locataire(id="t1", lot_id="lot-a", nom="Martin", prenom="Paul", montant_apl=100.0),
        Locataire(id="t2", lot_id="lot-b", nom="Durand", prenom="Anne"),
        Locataire(id="t3", lot_id="lot-b", nom="Petit", prenom="Luc", montant_apl=250.0),
    ]


@pytest.fixture
def loyers_2025():
    """Rent ledger for 2025 with a lot-only row, a shared-lot row and noise."""
    rows = [
        Loyer(annee=2025, mois=m, locataire_id="t1", lot_id="lot-a", paye_locataire=True, paye_apl=m <= 2)
        for m in (1, 2, 3)
    ]
    rows += [
        # Duplicate of January, must not be counted twice
        Loyer(annee=2025, mois=1, locataire_id="t1", paye_locataire=True),
        # Lot-only row, attributed to the sole tenant of lot A
        Loyer(annee=2025, mois=4, lot_id="lot-a", paye_locataire=True),
        # Lot-only row on a shared lot: cannot be attributed
        Loyer(annee=2025, mois=1, lot_id="lot-b", paye_locataire=True),
        Loyer(annee=2025, mois=1, locataire_id="t2", paye_locataire=True),
        # Other year
        Loyer(annee=2024, mois=12, locataire_id="t3", paye_locataire=True, paye_apl=True),
    ]
    return rows
