"""Per-property calculators: charges, cash flow, rentability and IRR."""

from .cashflow import (
    calculate_collection,
    calculate_lot_breakdown,
    calculate_lot_ratio,
    calculate_lots_breakdown,
    calculate_net_cash_flow,
    calculate_net_rent,
    calculate_property_cash_flow,
    calculate_tenant_net_rent,
    check_lots_coherence,
)
from .charges import calculate_charges_breakdown, calculate_monthly_charges, normalize_charge_input
from .credit import loan_is_repaid, loan_payment_for, loan_progress, loan_start_date
from .irr import calculate_npv, calculate_property_irr, solve_monthly_irr
from .rentabilite import (
    analyze_rentabilite,
    calculate_months_owned,
    calculate_total_investment,
    cumulative_series,
)

__all__ = [
    "calculate_charges_breakdown",
    "calculate_monthly_charges",
    "normalize_charge_input",
    "loan_payment_for",
    "loan_start_date",
    "loan_is_repaid",
    "loan_progress",
    "calculate_net_cash_flow",
    "calculate_property_cash_flow",
    "calculate_net_rent",
    "calculate_lot_ratio",
    "calculate_lot_breakdown",
    "calculate_lots_breakdown",
    "check_lots_coherence",
    "calculate_tenant_net_rent",
    "calculate_collection",
    "calculate_total_investment",
    "calculate_months_owned",
    "analyze_rentabilite",
    "cumulative_series",
    "calculate_npv",
    "solve_monthly_irr",
    "calculate_property_irr",
]
