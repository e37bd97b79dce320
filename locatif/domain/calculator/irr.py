"""IRR and NPV calculations.

The IRR is found by bisection on the monthly rate. The search is bracketed and
hard-capped in iterations, so it always terminates; when no root can be
pinned down the result is ``None``.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import numpy_financial as npf

from locatif.core.constants import (
    IRR_MAX_ANNUAL_PCT,
    IRR_MAX_ITERATIONS,
    IRR_MIN_MONTHS,
    IRR_NPV_TOLERANCE,
    IRR_RATE_BRACKET,
    MONTHS_PER_YEAR,
)
from locatif.core.logging import get_logger

log = get_logger(__name__)

# Bracket narrower than this cannot be split further in double precision
_MIN_BRACKET_WIDTH = 1e-12


def calculate_npv(rate: float, cash_flows: Sequence[float]) -> float:
    """NPV of periodic cash flows, the first one at period 0.

    Near the bottom of the bracket the array division overflows to +/- inf
    (nan when inflows and outflows both overflow); floating point warnings
    are silenced and the solver checks for nan itself.
    """
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return float(npf.npv(rate, list(cash_flows)))


def build_cash_flow_series(total_investment: float, net_cash_flow: float, months_owned: int) -> list[float]:
    """Initial outflow followed by ``months_owned`` equal monthly inflows."""
    return [-total_investment] + [net_cash_flow] * months_owned


def solve_monthly_irr(
    cash_flows: Sequence[float],
    bracket: tuple[float, float] = IRR_RATE_BRACKET,
    max_iterations: int = IRR_MAX_ITERATIONS,
    tolerance: float = IRR_NPV_TOLERANCE,
) -> float | None:
    """Periodic rate zeroing the NPV of ``cash_flows``.

    Args:
        cash_flows: Periodic flows, outflows negative
        bracket: Search interval for the rate
        max_iterations: Bisection budget
        tolerance: |NPV| below which the rate is accepted

    Returns:
        The rate as a decimal, or None without a sign change in the bracket
        or when the budget runs out
    """
    if len(cash_flows) < 2:
        return None
    if not any(cf > 0 for cf in cash_flows) or not any(cf < 0 for cf in cash_flows):
        return None

    lo, hi = bracket
    npv_lo = calculate_npv(lo, cash_flows)
    npv_hi = calculate_npv(hi, cash_flows)

    if math.isnan(npv_lo) or math.isnan(npv_hi):
        return None
    if npv_lo == 0:
        return lo
    if npv_hi == 0:
        return hi
    if (npv_lo > 0) == (npv_hi > 0):
        return None

    for _ in range(max_iterations):
        mid = (lo + hi) / 2
        npv_mid = calculate_npv(mid, cash_flows)

        if math.isnan(npv_mid):
            return None
        if abs(npv_mid) < tolerance or (hi - lo) < _MIN_BRACKET_WIDTH:
            return mid

        if (npv_mid > 0) == (npv_lo > 0):
            lo, npv_lo = mid, npv_mid
        else:
            hi = mid

    log.debug("irr_budget_exhausted", iterations=max_iterations, lo=lo, hi=hi)
    return None


def monthly_to_annual_pct(monthly_rate: float) -> float:
    """(1 + r)^12 - 1, in percent."""
    return ((1 + monthly_rate) ** MONTHS_PER_YEAR - 1) * 100


def calculate_property_irr(
    total_investment: float,
    net_cash_flow: float,
    months_owned: int,
    min_months: int = IRR_MIN_MONTHS,
    max_iterations: int = IRR_MAX_ITERATIONS,
    tolerance: float = IRR_NPV_TOLERANCE,
) -> float | None:
    """Annualized IRR of a property, in percent.

    Args:
        total_investment: Initial outlay in €
        net_cash_flow: Monthly net cash flow in €
        months_owned: Number of monthly flows since the rental started
        min_months: Shortest history for which an estimate is given

    Returns:
        Annual IRR in percent, or None when not computable (short history,
        no investment, no root, or an implausible result)
    """
    if months_owned < min_months or total_investment <= 0:
        return None

    flows = build_cash_flow_series(total_investment, net_cash_flow, months_owned)
    monthly = solve_monthly_irr(flows, max_iterations=max_iterations, tolerance=tolerance)
    if monthly is None:
        log.debug(
            "irr_not_converged",
            total_investment=total_investment,
            net_cash_flow=net_cash_flow,
            months_owned=months_owned,
        )
        return None

    annual = monthly_to_annual_pct(monthly)
    if not math.isfinite(annual) or abs(annual) > IRR_MAX_ANNUAL_PCT:
        log.debug("irr_out_of_range", annual_pct=annual)
        return None
    return annual
