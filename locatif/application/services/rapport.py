"""Per-property report.

Gathers every metric the property page shows into one immutable model.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from locatif.core.glossary import StatutType, classify_bien
from locatif.core.logging import get_logger
from locatif.core.settings import EngineSettings, get_settings
from locatif.domain.calculator.cashflow import (
    calculate_lots_breakdown,
    calculate_net_rent,
    calculate_property_cash_flow,
    check_lots_coherence,
)
from locatif.domain.calculator.charges import calculate_charges_breakdown
from locatif.domain.calculator.credit import loan_payment_for, loan_progress
from locatif.domain.calculator.irr import calculate_property_irr
from locatif.domain.calculator.rentabilite import analyze_rentabilite, cumulative_series
from locatif.domain.models.bien import Bien, Lot, TypeFinancement
from locatif.domain.models.resultats import (
    ChargesBreakdown,
    CumulativePoint,
    LoanProgress,
    LotBreakdown,
    RentabiliteMetrics,
)

log = get_logger(__name__)


class StatutRapport(BaseModel):
    """Financing status as shown on the property page."""

    type: StatutType
    label: str
    taux: float
    badge: str

    model_config = {"frozen": True}


class RapportBien(BaseModel):
    """Every derived figure of one property at a reference date."""

    bien_id: Optional[str] = None
    nom: str
    type_financement: TypeFinancement
    date_calcul: date

    charges: ChargesBreakdown
    mensualite_credit: float
    loyer_net: float = Field(..., description="Rent minus charges, before the loan")
    cash_flow_mensuel: float

    credit: Optional[LoanProgress] = None
    rentabilite: RentabiliteMetrics
    tri_pct: Optional[float] = Field(None, description="Annual IRR %, None when not computable")
    statut: StatutRapport

    lots: list[LotBreakdown] = Field(default_factory=list)
    historique: list[CumulativePoint] = Field(default_factory=list)
    avertissements: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


def build_rapport_bien(
    bien: Bien,
    lots: Sequence[Lot] = (),
    as_of: date | None = None,
    settings: EngineSettings | None = None,
) -> RapportBien:
    """Compute the full report of a property.

    Args:
        bien: Property record
        lots: Its lots, if subdivided
        as_of: Reference date, today by default
        settings: IRR solver settings, global settings by default

    Returns:
        RapportBien
    """
    as_of = as_of or date.today()
    settings = settings or get_settings()

    rentabilite = analyze_rentabilite(bien, as_of)
    cash_flow = calculate_property_cash_flow(bien)

    tri = calculate_property_irr(
        rentabilite.investissement_total,
        cash_flow,
        rentabilite.mois_possession,
        min_months=settings.irr_min_months,
        max_iterations=settings.irr_max_iterations,
        tolerance=settings.irr_tolerance,
    )

    avertissements = []
    coherence = check_lots_coherence(bien, lots)
    if coherence:
        avertissements.append(coherence)
    if rentabilite.investissement_total <= 0:
        avertissements.append("Investissement total non renseigné")

    log.debug("rapport_built", bien=bien.nom, lots=len(lots), tri=tri)

    return RapportBien(
        bien_id=bien.id,
        nom=bien.nom,
        type_financement=bien.type_financement,
        date_calcul=as_of,
        charges=calculate_charges_breakdown(bien),
        mensualite_credit=loan_payment_for(bien),
        loyer_net=calculate_net_rent(bien),
        cash_flow_mensuel=cash_flow,
        credit=loan_progress(bien, as_of),
        rentabilite=rentabilite,
        tri_pct=tri,
        statut=StatutRapport(**classify_bien(bien, as_of)),
        lots=calculate_lots_breakdown(bien, lots),
        historique=cumulative_series(bien, rentabilite.mois_possession),
        avertissements=avertissements,
    )
