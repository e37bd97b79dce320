"""Financial calculation functions.

Core loan and amortization calculations. Every consumer of loan maths in the
engine goes through this module; nothing else re-implements the formulas.
"""

from __future__ import annotations

from datetime import date
from typing import Any

import numpy_financial as npf
from dateutil.relativedelta import relativedelta


def _monthly_rate(annual_rate_pct: float | None) -> float:
    """Monthly rate as a decimal; missing or negative rates count as 0."""
    if not annual_rate_pct or annual_rate_pct < 0:
        return 0.0
    return (annual_rate_pct / 100.0) / 12.0


def calculate_monthly_payment(
    principal: float | None,
    annual_rate_pct: float | None,
    duration_months: int | None,
) -> float:
    """Calculate monthly loan payment (principal + interest).

    Args:
        principal: Loan amount in €
        annual_rate_pct: Annual interest rate as percentage (e.g., 3.5 for 3.5%)
        duration_months: Loan term in months

    Returns:
        Monthly payment amount in €, 0 when the loan is not computable
    """
    if not principal or principal <= 0 or not duration_months or duration_months <= 0:
        return 0.0

    monthly_rate = _monthly_rate(annual_rate_pct)

    if monthly_rate == 0:
        return principal / duration_months

    return float(-npf.pmt(monthly_rate, duration_months, principal))


def calculate_remaining_balance(
    principal: float | None,
    annual_rate_pct: float | None,
    duration_months: int | None,
    monthly_payment: float | None,
    elapsed_months: int,
) -> float:
    """Calculate remaining loan balance after N months.

    Args:
        principal: Initial loan amount in €
        annual_rate_pct: Annual interest rate %
        duration_months: Original loan term in months
        monthly_payment: Payment actually made each month; recomputed from
            the annuity formula when missing
        elapsed_months: Number of months already paid

    Returns:
        Remaining balance in €, within [0, principal]
    """
    if not principal or principal <= 0:
        return 0.0

    if elapsed_months <= 0:
        return principal

    if not duration_months or duration_months <= 0:
        # No schedule to follow: nothing is considered repaid
        return principal

    if elapsed_months >= duration_months:
        return 0.0

    monthly_rate = _monthly_rate(annual_rate_pct)

    if monthly_rate == 0:
        return principal - (principal / duration_months) * elapsed_months

    if not monthly_payment or monthly_payment <= 0:
        monthly_payment = calculate_monthly_payment(principal, annual_rate_pct, duration_months)

    growth = (1 + monthly_rate) ** elapsed_months
    remaining = principal * growth - monthly_payment * (growth - 1) / monthly_rate

    return min(principal, max(0.0, remaining))


def calculate_capital_repaid(
    principal: float | None,
    annual_rate_pct: float | None,
    duration_months: int | None,
    monthly_payment: float | None,
    elapsed_months: int,
) -> float:
    """Principal already repaid after N months, within [0, principal]."""
    if not principal or principal <= 0:
        return 0.0
    remaining = calculate_remaining_balance(
        principal, annual_rate_pct, duration_months, monthly_payment, elapsed_months
    )
    return principal - remaining


def elapsed_months(start: date | None, as_of: date) -> int:
    """Whole months between two dates; 0 when not started or unknown.

    A start in the future yields 0 ("not yet started"), never a negative count.
    """
    if start is None:
        return 0
    if as_of <= start:
        return 0
    delta = relativedelta(as_of, start)
    return delta.years * 12 + delta.months


def generate_amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    duration_months: int,
) -> dict[str, Any]:
    """Generate full loan amortization schedule.

    Args:
        principal: Loan amount in €
        annual_rate_pct: Annual interest rate %
        duration_months: Loan term in months

    Returns:
        Dict with keys:
        - mois: List of month numbers
        - capital_restant_debut: List of start balances
        - interet: List of interest payments
        - principal: List of principal payments
        - paiement: List of total payments
        - capital_restant_fin: List of end balances
        - pmt: Monthly payment amount
        - nmois: Number of months
    """
    if principal <= 0 or duration_months <= 0:
        return {
            "mois": [],
            "capital_restant_debut": [],
            "interet": [],
            "principal": [],
            "paiement": [],
            "capital_restant_fin": [],
            "pmt": 0.0,
            "nmois": 0,
        }

    monthly_rate = _monthly_rate(annual_rate_pct)
    pmt = calculate_monthly_payment(principal, annual_rate_pct, duration_months)

    debut, interets, principals, paiements, fin = [], [], [], [], []
    balance = principal

    for month in range(1, duration_months + 1):
        interest = balance * monthly_rate
        principal_payment = pmt - interest
        if month == duration_months:
            # Last installment absorbs floating residue
            principal_payment = balance
        new_balance = max(0.0, balance - principal_payment)

        debut.append(balance)
        interets.append(interest)
        principals.append(principal_payment)
        paiements.append(principal_payment + interest)
        fin.append(new_balance)

        balance = new_balance

    return {
        "mois": list(range(1, duration_months + 1)),
        "capital_restant_debut": debut,
        "interet": interets,
        "principal": principals,
        "paiement": paiements,
        "capital_restant_fin": fin,
        "pmt": pmt,
        "nmois": duration_months,
    }
