"""Custom exceptions for locatif.

Missing or degenerate data never raises: calculators return ``None`` or a
documented fallback instead. These exceptions are reserved for misuse of the
engine itself (bad configuration, impossible parameters).
"""

from __future__ import annotations

from typing import Any


class LocatifError(Exception):
    """Base exception for all locatif errors."""
    pass


# --- Calculation Errors ---

class CalculationError(LocatifError):
    """Error during a financial calculation."""
    pass


class ProjectionError(CalculationError):
    """The patrimoine projection cannot be produced at all."""
    pass


class InvalidParameterError(LocatifError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


# --- Configuration Errors ---

class ConfigurationError(LocatifError):
    """Error in engine configuration."""
    pass
