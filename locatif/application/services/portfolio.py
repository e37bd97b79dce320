"""Portfolio-wide dashboard figures."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel, Field, computed_field

from locatif.core.constants import MONTHS_PER_YEAR
from locatif.core.glossary import classify_bien
from locatif.domain.calculator.cashflow import calculate_property_cash_flow
from locatif.domain.calculator.charges import calculate_monthly_charges
from locatif.domain.calculator.credit import loan_payment_for
from locatif.domain.calculator.rentabilite import calculate_net_yield_pct, calculate_total_investment
from locatif.domain.models.bien import Bien


class Repartition(BaseModel):
    """Number of properties per financing status."""

    finances: int = 0
    autofinances: int = 0
    partiels: int = 0
    non_autofinances: int = 0

    model_config = {"frozen": True}


class PortfolioStats(BaseModel):
    nombre_biens: int = 0
    cash_flow_global: float = Field(0.0, description="Sum of monthly cash flows")
    loyers_mensuels: float = 0.0
    charges_mensuelles: float = 0.0
    mensualites: float = 0.0
    investissement_total: float = 0.0
    rentabilite_nette_moyenne: Optional[float] = Field(
        None, description="Mean net yield % over properties where it is computable"
    )
    repartition: Repartition = Field(default_factory=Repartition)

    model_config = {"frozen": True}

    @computed_field
    @property
    def cash_flow_annuel(self) -> float:
        return self.cash_flow_global * MONTHS_PER_YEAR


_STATUT_KEYS = {
    "FINANCE": "finances",
    "AUTOFINANCE": "autofinances",
    "PARTIEL": "partiels",
    "NON_AUTOFINANCE": "non_autofinances",
}


def calculate_portfolio_stats(biens: Iterable[Bien], as_of: date | None = None) -> PortfolioStats:
    """Aggregate cash flow, rents and financing statuses over a portfolio."""
    as_of = as_of or date.today()

    nombre = 0
    cash_flow = loyers = charges = mensualites = investissement = 0.0
    rendements: list[float] = []
    counts = dict.fromkeys(_STATUT_KEYS.values(), 0)

    for bien in biens:
        nombre += 1
        cash_flow += calculate_property_cash_flow(bien)
        loyers += bien.loyer_mensuel
        charges += calculate_monthly_charges(bien)
        mensualites += loan_payment_for(bien)
        investissement += calculate_total_investment(bien)

        rendement = calculate_net_yield_pct(bien)
        if rendement is not None:
            rendements.append(rendement)

        counts[_STATUT_KEYS[classify_bien(bien, as_of)["type"]]] += 1

    return PortfolioStats(
        nombre_biens=nombre,
        cash_flow_global=cash_flow,
        loyers_mensuels=loyers,
        charges_mensuelles=charges,
        mensualites=mensualites,
        investissement_total=investissement,
        rentabilite_nette_moyenne=sum(rendements) / len(rendements) if rendements else None,
        repartition=Repartition(**counts),
    )
