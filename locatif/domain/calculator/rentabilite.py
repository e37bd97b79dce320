"""Rentability analysis.

Yield, cumulative balance and ROI of a property. Every ratio whose denominator
is zero comes back as ``None`` so the caller can show "not computable" instead
of a misleading 0 %.
"""

from __future__ import annotations

from datetime import date

from locatif.core.constants import MONTHS_PER_YEAR
from locatif.core.financial import elapsed_months
from locatif.domain.calculator.charges import calculate_monthly_charges
from locatif.domain.calculator.credit import loan_payment_for
from locatif.domain.models.bien import Bien, as_amount
from locatif.domain.models.resultats import (
    Computed,
    CumulativePoint,
    Override,
    RentabiliteMetrics,
    resolve_metric,
)

# Months shown by the cumulative cash flow chart
DEFAULT_SERIES_MONTHS = 12


def calculate_total_investment(bien: Bien) -> float:
    """Purchase price + notary fees + initial works + other costs."""
    return (
        as_amount(bien.prix_achat)
        + as_amount(bien.frais_notaire)
        + as_amount(bien.travaux_initiaux)
        + as_amount(bien.autres_frais)
    )


def calculate_gross_yield_pct(bien: Bien) -> float | None:
    """Annual rent / purchase price, in percent."""
    prix = as_amount(bien.prix_achat)
    if prix <= 0:
        return None
    return (bien.loyer_mensuel * MONTHS_PER_YEAR) / prix * 100


def calculate_net_yield_pct(bien: Bien) -> float | None:
    """(Annual rent - annual charges) / total investment, in percent."""
    investissement = calculate_total_investment(bien)
    if investissement <= 0:
        return None
    net_annuel = (bien.loyer_mensuel - calculate_monthly_charges(bien)) * MONTHS_PER_YEAR
    return net_annuel / investissement * 100


def calculate_annual_cash_flow(bien: Bien) -> float:
    """(Annual rent - annual charges) - annual loan payments."""
    loyer_annuel = bien.loyer_mensuel * MONTHS_PER_YEAR
    charges_annuelles = calculate_monthly_charges(bien) * MONTHS_PER_YEAR
    mensualites_annuelles = loan_payment_for(bien) * MONTHS_PER_YEAR
    return (loyer_annuel - charges_annuelles) - mensualites_annuelles


def calculate_months_owned(bien: Bien, as_of: date | None = None) -> int:
    """Months since the rental started (acquisition as fallback), 0 without dates."""
    as_of = as_of or date.today()
    debut = bien.date_mise_en_location or bien.date_acquisition
    return elapsed_months(debut, as_of)


def calculate_cumulative_revenue(bien: Bien, mois_possession: int) -> Computed | Override:
    return resolve_metric(bien.revenus_anterieurs_override, bien.loyer_mensuel * mois_possession)


def calculate_cumulative_charges(bien: Bien, mois_possession: int) -> Computed | Override:
    """Charges plus loan payments since the rental started, unless overridden."""
    mensuel = calculate_monthly_charges(bien) + loan_payment_for(bien)
    return resolve_metric(bien.charges_anterieures_override, mensuel * mois_possession)


def calculate_net_balance(revenus: float, charges: float) -> float:
    return revenus - charges


def calculate_roi_pct(bilan_net: float, investissement_total: float) -> float | None:
    """Net balance / total investment, in percent. None when nothing was invested."""
    if investissement_total <= 0:
        return None
    return bilan_net / investissement_total * 100


def analyze_rentabilite(bien: Bien, as_of: date | None = None) -> RentabiliteMetrics:
    """Compute every rentability metric of a property at ``as_of``.

    Args:
        bien: Property record
        as_of: Reference date, today by default

    Returns:
        RentabiliteMetrics; yields and ROI are None when not computable
    """
    charges_mensuelles = calculate_monthly_charges(bien)
    mensualite = loan_payment_for(bien)
    investissement = calculate_total_investment(bien)
    mois = calculate_months_owned(bien, as_of)

    revenus = calculate_cumulative_revenue(bien, mois)
    charges = calculate_cumulative_charges(bien, mois)
    bilan = calculate_net_balance(revenus.value, charges.value)

    return RentabiliteMetrics(
        loyer_annuel=bien.loyer_mensuel * MONTHS_PER_YEAR,
        charges_annuelles=charges_mensuelles * MONTHS_PER_YEAR,
        mensualites_annuelles=mensualite * MONTHS_PER_YEAR,
        investissement_total=investissement,
        rentabilite_brute_pct=calculate_gross_yield_pct(bien),
        rentabilite_nette_pct=calculate_net_yield_pct(bien),
        cash_flow_annuel=calculate_annual_cash_flow(bien),
        mois_possession=mois,
        revenus_cumules=revenus,
        charges_cumulees=charges,
        bilan_net=bilan,
        roi_pct=calculate_roi_pct(bilan, investissement),
    )


def cumulative_series(
    bien: Bien,
    mois_possession: int,
    max_mois: int = DEFAULT_SERIES_MONTHS,
) -> list[CumulativePoint]:
    """Month-by-month cumulative revenue, charges and cash flow.

    Covers at most ``max_mois`` months; empty when the property has no history.
    """
    nb_mois = max(0, min(max_mois, mois_possession))
    charges_mensuelles = calculate_monthly_charges(bien) + loan_payment_for(bien)

    points = []
    for mois in range(1, nb_mois + 1):
        revenus = bien.loyer_mensuel * mois
        charges = charges_mensuelles * mois
        points.append(
            CumulativePoint(mois=mois, revenus=revenus, charges=charges, cash_flow=revenus - charges)
        )
    return points
