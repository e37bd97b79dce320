"""
Standardized financing status definitions.
Single Source of Truth for how a property is labelled on the dashboard.
"""
from __future__ import annotations

from datetime import date
from typing import Literal, TypedDict

from locatif.core.constants import STATUT_THRESHOLDS, StatutThresholds
from locatif.domain.calculator.cashflow import calculate_net_rent
from locatif.domain.calculator.credit import loan_is_repaid, loan_payment_for
from locatif.domain.models.bien import Bien

StatutType = Literal["FINANCE", "AUTOFINANCE", "PARTIEL", "NON_AUTOFINANCE"]


class StatutBien(TypedDict):
    type: StatutType
    label: str
    taux: float
    badge: str


def calculate_autofinancement_pct(bien: Bien) -> float:
    """
    Share of the loan payment covered by the rent net of charges.
    100 = the rent exactly pays the loan. Cash properties and loans without
    a payment count as fully covered.
    """
    if not bien.is_credit:
        return 100.0

    mensualite = loan_payment_for(bien)
    if mensualite == 0:
        return 100.0

    return calculate_net_rent(bien) / mensualite * 100


def classify_bien(
    bien: Bien,
    as_of: date | None = None,
    thresholds: StatutThresholds = STATUT_THRESHOLDS,
) -> StatutBien:
    """
    Financing status of a property:
    1. FINANCE: bought cash, or loan fully repaid
    2. AUTOFINANCE / PARTIEL / NON_AUTOFINANCE: by autofinancement rate
    """
    if not bien.is_credit:
        return {"type": "FINANCE", "label": "Financé (Cash)", "taux": 100.0, "badge": "Financé"}

    if loan_is_repaid(bien, as_of):
        return {
            "type": "FINANCE",
            "label": "Financé (Crédit remboursé)",
            "taux": 100.0,
            "badge": "Financé",
        }

    taux = calculate_autofinancement_pct(bien)
    arrondi = round(taux)

    if taux >= thresholds["autofinance"]:
        return {
            "type": "AUTOFINANCE",
            "label": f"Autofinancé ({arrondi}%)",
            "taux": taux,
            "badge": f"Autofinancé {arrondi}%",
        }
    if taux >= thresholds["partiel"]:
        return {
            "type": "PARTIEL",
            "label": f"Partiellement autofinancé ({arrondi}%)",
            "taux": taux,
            "badge": f"Partiel {arrondi}%",
        }
    return {
        "type": "NON_AUTOFINANCE",
        "label": f"Non autofinancé ({arrondi}%)",
        "taux": taux,
        "badge": f"{arrondi}%",
    }
