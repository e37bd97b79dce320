"""End-to-end test: raw records as the CRUD layer stores them -> dashboard figures."""

from datetime import date

import pytest

from locatif.application.services import (
    PatrimoineProjectionEngine,
    build_rapport_bien,
    calculate_portfolio_stats,
)
from locatif.domain.calculator import calculate_collection
from locatif.domain.models import Bien, Locataire, Lot, Loyer

AS_OF = date(2025, 6, 15)

RAW_BIENS = [
    {
        "id": "b1",
        "nom": "Maison Angers",
        "type_financement": "credit",
        "loyer_mensuel": "1 350,00",
        "taxe_fonciere": "1440",
        "charges_copro": "",
        "assurance": "25,50",
        "montant_credit": "180000",
        "taux_credit": "1,9",
        "duree_credit": "300",
        "date_debut_credit": "2019-09-01T00:00:00.000Z",
        "prix_achat": "195000",
        "frais_notaire": "14500",
        "date_acquisition": "01/09/2019",
        "date_mise_en_location": "2019-10-01",
        "userId": "u-1",
    },
    {
        "id": "b2",
        "nom": "Studio Tours",
        "type_financement": "CASH",
        "loyer_mensuel": 520,
        "taxe_fonciere": 600,
        "frais_gestion": 31.2,
        "prix_achat": 72000,
        "travaux_initiaux": 6000,
        "date_acquisition": "2022-03-10",
    },
    {
        "id": "b3",
        "nom": "Parking (fiche incomplète)",
        "loyer_mensuel": "80",
    },
]

RAW_LOTS = [
    {"id": "l1", "bien_id": "b1", "numero_lot": "RDC", "loyer_mensuel": "750"},
    {"id": "l2", "bien_id": "b1", "numero_lot": "Etage", "loyer_mensuel": "600"},
]

RAW_LOCATAIRES = [
    {"id": "t1", "lot_id": "l1", "nom": "Bernard", "montant_apl": "180"},
    {"id": "t2", "lot_id": "l2", "nom": "Roux", "montant_apl": None},
]


@pytest.fixture
def portfolio():
    biens = [Bien(**raw) for raw in RAW_BIENS]
    lots = [Lot(**raw) for raw in RAW_LOTS]
    locataires = [Locataire(**{k: v for k, v in raw.items() if v is not None}) for raw in RAW_LOCATAIRES]
    return biens, lots, locataires


class TestPipeline:
    def test_records_parsed(self, portfolio):
        biens, _, _ = portfolio
        maison = biens[0]
        assert maison.is_credit
        assert maison.loyer_mensuel == 1350.0
        assert maison.taux_credit == 1.9
        assert maison.duree_credit == 300
        assert maison.date_acquisition == date(2019, 9, 1)
        assert maison.charges_copro is None

    def test_rapport(self, portfolio):
        biens, lots, _ = portfolio
        rapport = build_rapport_bien(biens[0], lots, as_of=AS_OF)

        assert rapport.avertissements == []
        assert rapport.charges.total == pytest.approx(120 + 25.5)
        assert rapport.credit.mois_ecoules == 69
        assert sum(lot.cash_flow for lot in rapport.lots) == pytest.approx(rapport.cash_flow_mensuel)
        assert rapport.rentabilite.mois_possession == 68
        assert rapport.tri_pct is not None

    def test_portfolio(self, portfolio):
        biens, _, _ = portfolio
        stats = calculate_portfolio_stats(biens, AS_OF)
        assert stats.nombre_biens == 3
        assert stats.loyers_mensuels == pytest.approx(1350 + 520 + 80)
        assert stats.repartition.finances == 2
        assert stats.repartition.finances + stats.repartition.autofinances + stats.repartition.partiels + (
            stats.repartition.non_autofinances
        ) == 3

    def test_projection(self, portfolio):
        biens, _, _ = portfolio
        projection = PatrimoineProjectionEngine().project(biens, AS_OF)

        assert projection.biens_incomplets == ["b3"]
        assert projection.degraded is False
        assert projection.valeur_actuelle > 78000
        assert projection.valeur_finale > projection.valeur_actuelle

    def test_collection(self, portfolio):
        _, lots, locataires = portfolio
        loyers = [
            Loyer(annee=2025, mois=m, locataire_id="t1", paye_locataire=True, paye_apl=True) for m in range(1, 6)
        ] + [Loyer(annee=2025, mois=m, lot_id="l2", paye_locataire=m != 3) for m in range(1, 6)]

        summary = calculate_collection(lots, locataires, loyers, 2025)
        assert summary.encaisse_total == pytest.approx((570 + 180) * 5 + 600 * 4)
        assert summary.prevu_total == pytest.approx(1350 * 12)
        assert summary.paiements_ignores == 0
