"""Application services."""

from .patrimoine import AppreciationModel, PatrimoineProjection, PatrimoineProjectionEngine
from .portfolio import PortfolioStats, calculate_portfolio_stats
from .rapport import RapportBien, StatutRapport, build_rapport_bien

__all__ = [
    "PatrimoineProjectionEngine",
    "PatrimoineProjection",
    "AppreciationModel",
    "RapportBien",
    "StatutRapport",
    "build_rapport_bien",
    "PortfolioStats",
    "calculate_portfolio_stats",
]
