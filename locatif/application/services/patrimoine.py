"""Patrimoine projection.

Quarterly net-worth time series of a whole portfolio, from a few years back to
a long horizon ahead. Cash properties appreciate at a fixed yearly rate;
credit properties contribute the principal already repaid on their loan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

import pandas as pd
from dateutil.relativedelta import relativedelta

from locatif.core.constants import (
    DEFAULT_APPRECIATION_PCT,
    MAX_LOAN_DURATION_MONTHS,
    MONTHS_PER_YEAR,
    PROJECTION_STEP_MONTHS,
    PROJECTION_YEARS_AHEAD,
    PROJECTION_YEARS_BACK,
)
from locatif.core.exceptions import ProjectionError
from locatif.core.financial import calculate_capital_repaid, elapsed_months
from locatif.core.logging import get_logger
from locatif.core.settings import EngineSettings, get_settings
from locatif.domain.calculator.credit import loan_payment_for, loan_start_date
from locatif.domain.calculator.rentabilite import calculate_total_investment
from locatif.domain.models.bien import Bien

log = get_logger(__name__)


@dataclass
class AppreciationModel:
    """Yearly appreciation applied to cash properties."""

    appreciation_pct: float = DEFAULT_APPRECIATION_PCT

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AppreciationModel:
        return cls(appreciation_pct=d.get("appreciation_pct", DEFAULT_APPRECIATION_PCT))

    def value_after(self, investment: float, years: float) -> float:
        """investment * (1 + rate)^years"""
        return investment * (1.0 + self.appreciation_pct / 100.0) ** years


@dataclass
class PatrimoinePoint:
    """Portfolio value at one sample date."""

    date: date
    valeur_cash: float
    capital_rembourse: float
    is_past: bool
    is_now: bool
    par_bien: dict[str, float] = field(default_factory=dict)

    @property
    def valeur_totale(self) -> float:
        return self.valeur_cash + self.capital_rembourse

    def to_dict(self) -> dict[str, Any]:
        return {
            "Date": self.date,
            "Patrimoine": self.valeur_totale,
            "Valeur Cash": self.valeur_cash,
            "Capital Remboursé": self.capital_rembourse,
            "Passé": self.is_past,
            "Aujourd'hui": self.is_now,
        }


@dataclass
class PatrimoineProjection:
    """Projection result.

    ``biens_incomplets`` lists properties left out for lack of investment data;
    ``degraded`` is set when a property failed on some samples and was skipped.
    """

    points: list[PatrimoinePoint]
    biens_incomplets: list[str] = field(default_factory=list)
    degraded: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def valeur_actuelle(self) -> float | None:
        for point in self.points:
            if point.is_now:
                return point.valeur_totale
        return None

    @property
    def valeur_finale(self) -> float | None:
        return self.points[-1].valeur_totale if self.points else None

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([p.to_dict() for p in self.points])


def _bien_key(bien: Bien, index: int) -> str:
    return bien.id or f"{bien.nom} #{index}"


class PatrimoineProjectionEngine:
    """Net-worth projection over a portfolio of properties.

    Samples are anchored on the reference date so that one of them always
    falls exactly on it.
    """

    def __init__(
        self,
        appreciation: AppreciationModel | None = None,
        years_back: int = PROJECTION_YEARS_BACK,
        years_ahead: int = PROJECTION_YEARS_AHEAD,
        step_months: int = PROJECTION_STEP_MONTHS,
        max_loan_duration_months: int = MAX_LOAN_DURATION_MONTHS,
    ):
        if years_back < 0:
            raise ProjectionError(f"years_back must be >= 0, got {years_back}")
        if years_ahead <= 0:
            raise ProjectionError(f"years_ahead must be > 0, got {years_ahead}")
        if step_months <= 0:
            raise ProjectionError(f"step_months must be > 0, got {step_months}")
        if max_loan_duration_months <= 0:
            raise ProjectionError("max_loan_duration_months must be > 0")

        self.appreciation = appreciation or AppreciationModel()
        self.years_back = years_back
        self.years_ahead = years_ahead
        self.step_months = step_months
        self.max_loan_duration_months = max_loan_duration_months

    @classmethod
    def from_settings(cls, settings: EngineSettings | None = None) -> PatrimoineProjectionEngine:
        settings = settings or get_settings()
        return cls(
            appreciation=AppreciationModel(appreciation_pct=settings.appreciation_pct),
            years_back=settings.projection_years_back,
            years_ahead=settings.projection_years_ahead,
            step_months=settings.projection_step_months,
            max_loan_duration_months=settings.max_loan_duration_months,
        )

    def sample_dates(self, as_of: date) -> list[date]:
        """Sample dates from ``as_of - years_back`` to ``as_of + years_ahead``."""
        first = -(self.years_back * MONTHS_PER_YEAR // self.step_months)
        last = self.years_ahead * MONTHS_PER_YEAR // self.step_months
        return [as_of + relativedelta(months=k * self.step_months) for k in range(first, last + 1)]

    def project_cash_value(self, bien: Bien, t: date, as_of: date) -> float:
        """Appreciated value of a cash property at ``t``; 0 before its acquisition."""
        investment = calculate_total_investment(bien)
        debut = bien.date_acquisition or bien.created_at or as_of
        if debut > t:
            return 0.0
        years = elapsed_months(debut, t) / MONTHS_PER_YEAR
        return self.appreciation.value_after(investment, years)

    def project_credit_equity(self, bien: Bien, t: date, as_of: date) -> float | None:
        """Principal repaid on a credit property's loan at ``t``.

        Returns None for loans with a degenerate duration, which are skipped.
        """
        duree = bien.duree_credit
        if not duree or duree <= 0 or duree > self.max_loan_duration_months:
            return None

        principal = bien.montant_credit or calculate_total_investment(bien)
        # A stored payment belongs to the stored principal only
        mensualite = loan_payment_for(bien) if bien.montant_credit else None
        debut = loan_start_date(bien) or as_of

        return calculate_capital_repaid(
            principal, bien.taux_credit, duree, mensualite, elapsed_months(debut, t)
        )

    def _value_at(self, bien: Bien, t: date, as_of: date) -> float | None:
        if bien.is_credit:
            return self.project_credit_equity(bien, t, as_of)
        return self.project_cash_value(bien, t, as_of)

    def project(self, biens: Iterable[Bien], as_of: date | None = None) -> PatrimoineProjection:
        """Run the projection.

        Args:
            biens: Portfolio properties
            as_of: Reference date, today by default

        Returns:
            PatrimoineProjection with one point per sample date
        """
        as_of = as_of or date.today()
        dates = self.sample_dates(as_of)

        retenus: list[tuple[str, Bien]] = []
        incomplets: list[str] = []
        for index, bien in enumerate(biens):
            key = _bien_key(bien, index)
            if calculate_total_investment(bien) <= 0:
                incomplets.append(key)
            else:
                retenus.append((key, bien))

        if incomplets:
            log.warning("projection_incomplete_properties", biens=incomplets)

        errors: list[str] = []
        points: list[PatrimoinePoint] = []

        for t in dates:
            valeur_cash, capital = 0.0, 0.0
            par_bien: dict[str, float] = {}

            for key, bien in retenus:
                try:
                    value = self._value_at(bien, t, as_of)
                except Exception as exc:
                    log.warning("projection_property_failed", bien=key, date=t.isoformat(), error=str(exc))
                    errors.append(f"{key} @ {t.isoformat()}: {exc}")
                    continue

                if value is None:
                    continue
                par_bien[key] = value
                if bien.is_credit:
                    capital += value
                else:
                    valeur_cash += value

            points.append(
                PatrimoinePoint(
                    date=t,
                    valeur_cash=valeur_cash,
                    capital_rembourse=capital,
                    is_past=t <= as_of,
                    is_now=t == as_of,
                    par_bien=par_bien,
                )
            )

        log.debug(
            "projection_done",
            points=len(points),
            biens=len(retenus),
            incomplets=len(incomplets),
            degraded=bool(errors),
        )

        return PatrimoineProjection(
            points=points,
            biens_incomplets=incomplets,
            degraded=bool(errors),
            errors=errors,
        )
