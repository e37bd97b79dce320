"""
locatif - Rental Property Portfolio Calculation Engine

This package contains the pure financial engine behind the portfolio tracker.

Modules:
    - core: Loan maths, financing status, settings, logging and exceptions
    - domain: Pydantic records (bien, lot, locataire, loyer) and calculators
    - application: Per-property report, portfolio stats, patrimoine projection
"""

__version__ = "1.4.0"
