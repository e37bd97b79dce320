"""Data models for locatif."""

from .bien import Bien, Locataire, Lot, Loyer, TypeFinancement, as_amount
from .resultats import (
    ChargesBreakdown,
    CollectionSummary,
    Computed,
    CumulativePoint,
    LoanProgress,
    LotBreakdown,
    Metric,
    Override,
    RentabiliteMetrics,
    TenantCollection,
    resolve_metric,
)

__all__ = [
    "Bien",
    "Lot",
    "Locataire",
    "Loyer",
    "TypeFinancement",
    "as_amount",
    "ChargesBreakdown",
    "CollectionSummary",
    "Computed",
    "CumulativePoint",
    "LoanProgress",
    "LotBreakdown",
    "Metric",
    "Override",
    "RentabiliteMetrics",
    "TenantCollection",
    "resolve_metric",
]
