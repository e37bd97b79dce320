"""Engine constants - single source of truth for thresholds and bounds.

These are the defaults behind the settings in ``locatif.core.settings`` and
the fixed bounds that pure calculators use when no setting is passed.
"""

from typing import TypedDict


class StatutThresholds(TypedDict):
    """Type definition for financing status thresholds (in %)."""
    autofinance: float
    partiel: float


# Financing status thresholds on the autofinancement rate
STATUT_THRESHOLDS: StatutThresholds = {
    "autofinance": 100.0,    # Rent net of charges covers the loan payment
    "partiel": 70.0,         # Covers at least 70% of it
}

# IRR solver
IRR_MIN_MONTHS = 6
IRR_MAX_ITERATIONS = 100
IRR_NPV_TOLERANCE = 1e-6
IRR_RATE_BRACKET = (-0.99, 1.0)   # monthly rate search interval
IRR_MAX_ANNUAL_PCT = 100.0        # larger estimates are reported as not computable

# Patrimoine projection
DEFAULT_APPRECIATION_PCT = 2.0
PROJECTION_YEARS_BACK = 2
PROJECTION_YEARS_AHEAD = 20
PROJECTION_STEP_MONTHS = 3
MAX_LOAN_DURATION_MONTHS = 600

# Rent ledger
MONTHS_PER_YEAR = 12
