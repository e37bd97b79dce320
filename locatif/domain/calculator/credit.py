"""Loan state of a property.

Thin property-aware layer over ``locatif.core.financial``: resolves which
payment, principal and start date a property's loan uses.
"""

from __future__ import annotations

from datetime import date

from locatif.core.financial import (
    calculate_monthly_payment,
    calculate_remaining_balance,
    elapsed_months,
)
from locatif.domain.models.bien import Bien, as_amount
from locatif.domain.models.resultats import LoanProgress


def loan_payment_for(bien: Bien) -> float:
    """Monthly loan payment of a property (0 for cash purchases).

    The stored payment wins; otherwise it is derived from the loan terms.
    """
    if not bien.is_credit:
        return 0.0
    if bien.mensualite_credit:
        return bien.mensualite_credit
    return calculate_monthly_payment(bien.montant_credit, bien.taux_credit, bien.duree_credit)


def loan_start_date(bien: Bien) -> date | None:
    """Loan start, falling back on acquisition then record creation."""
    return bien.date_debut_credit or bien.date_acquisition or bien.created_at


def loan_is_repaid(bien: Bien, as_of: date | None = None) -> bool:
    """True once every installment of a credit property is behind us."""
    as_of = as_of or date.today()
    debut = loan_start_date(bien)
    if not bien.is_credit or not debut or not bien.duree_credit:
        return False
    return elapsed_months(debut, as_of) >= bien.duree_credit


def loan_progress(bien: Bien, as_of: date | None = None) -> LoanProgress | None:
    """Repayment progress of a property's loan, or None without loan data."""
    as_of = as_of or date.today()
    debut = loan_start_date(bien)
    if not bien.is_credit or not debut or not bien.duree_credit or bien.duree_credit <= 0:
        return None

    principal = as_amount(bien.montant_credit)
    duree = bien.duree_credit
    ecoules = min(elapsed_months(debut, as_of), duree)

    if bien.capital_restant_du is not None:
        restant = min(principal, bien.capital_restant_du)
        source = "stored"
    else:
        restant = calculate_remaining_balance(
            principal, bien.taux_credit, duree, loan_payment_for(bien), ecoules
        )
        source = "computed"

    rembourse = max(0.0, principal - restant)
    progression = (rembourse / principal) * 100 if principal > 0 else 0.0

    return LoanProgress(
        mois_ecoules=ecoules,
        mois_restants=max(0, duree - ecoules),
        duree_totale=duree,
        capital_rembourse=rembourse,
        capital_restant=max(0.0, restant),
        progression_pct=min(100.0, max(0.0, progression)),
        source=source,
    )
