"""Core loan maths, settings and shared infrastructure."""

from .exceptions import (
    CalculationError,
    ConfigurationError,
    InvalidParameterError,
    LocatifError,
    ProjectionError,
)
from .financial import (
    calculate_capital_repaid,
    calculate_monthly_payment,
    calculate_remaining_balance,
    elapsed_months,
    generate_amortization_schedule,
)
from .settings import EngineSettings, get_settings

__all__ = [
    "calculate_monthly_payment",
    "calculate_remaining_balance",
    "calculate_capital_repaid",
    "elapsed_months",
    "generate_amortization_schedule",
    "EngineSettings",
    "get_settings",
    # Exceptions
    "LocatifError",
    "CalculationError",
    "ProjectionError",
    "InvalidParameterError",
    "ConfigurationError",
]
