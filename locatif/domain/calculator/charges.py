"""Charge aggregation.

Folds the heterogeneous charges of a property into monthly figures. Property
tax is the only component stored yearly; everything else is already monthly.
"""

from __future__ import annotations

from typing import Literal

from locatif.core.constants import MONTHS_PER_YEAR
from locatif.core.exceptions import InvalidParameterError
from locatif.domain.models.bien import Bien, as_amount
from locatif.domain.models.resultats import ChargesBreakdown

ChargeInputMode = Literal["mensuel", "annuel"]


def calculate_charges_breakdown(bien: Bien) -> ChargesBreakdown:
    """Monthly charges of a property, component by component."""
    return ChargesBreakdown(
        taxe_fonciere=as_amount(bien.taxe_fonciere) / MONTHS_PER_YEAR,
        charges_copro=as_amount(bien.charges_copro),
        assurance=as_amount(bien.assurance),
        frais_gestion=as_amount(bien.frais_gestion),
        autres_charges=as_amount(bien.autres_charges),
    )


def calculate_monthly_charges(bien: Bien) -> float:
    """Total monthly charges: taxe foncière / 12 + the monthly components."""
    return calculate_charges_breakdown(bien).total


def normalize_charge_input(value: float | None, mode: ChargeInputMode = "mensuel") -> float | None:
    """Convert a figure typed in a form into its stored monthly value.

    Used once, at capture time. Unset stays unset.

    Raises:
        InvalidParameterError: If mode is neither "mensuel" nor "annuel"
    """
    if mode not in ("mensuel", "annuel"):
        raise InvalidParameterError("mode", mode, "expected 'mensuel' or 'annuel'")
    if value is None:
        return None
    if mode == "annuel":
        return value / MONTHS_PER_YEAR
    return value
