"""
Global constants for NestEgg.

Purpose
-------
Centralizes default values and magic numbers used throughout the NestEgg
codebase. All rates are decimals (0.028, not 2.8).

Usage
-----
>>> from nestegg.constants import DEFAULT_CASH_RATIO, DEFAULT_DTI_LIMIT
>>> cfg = MortgageConfig(house_price_target=300_000,
...                      cash_ratio=DEFAULT_CASH_RATIO, dti_limit=DEFAULT_DTI_LIMIT)

Categories
----------
- Time: month/year conversion
- Mortgage: reserve, target price, cash ratio, DTI ceiling, loan term, rate
- Retirement: safe withdrawal rate, assumed real return
- Goals: default savings yield, safety margin, feasibility score bands
- Debt-to-income: classification levels
- Reserves: emergency fund sizing and savings-rate targets
- Market: reference-rate thresholds
"""

from typing import Tuple

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    # Mortgage
    "DEFAULT_EMERGENCY_FUND",
    "DEFAULT_HOUSE_TARGET",
    "DEFAULT_CASH_RATIO",
    "DEFAULT_DTI_LIMIT",
    "DEFAULT_LOAN_YEARS",
    "DEFAULT_ANNUAL_RATE",
    # Retirement
    "SAFE_WITHDRAWAL_RATE",
    "DEFAULT_FIRE_REAL_RETURN",
    # Goals
    "DEFAULT_GOAL_APY",
    "GOAL_SAFETY_MARGIN",
    "GOAL_SCORE_BANDS",
    # Debt-to-income levels
    "DTI_EXCELLENT_MAX",
    "DTI_GOOD_MAX",
    "DTI_FAIR_MAX",
    "DTI_POOR_MAX",
    # Reserves
    "EMERGENCY_MONTHS_RANGE",
    "LARGE_HOUSEHOLD_SIZE",
    "LARGE_HOUSEHOLD_MULTIPLIER",
    "VARIABLE_INCOME_MULTIPLIER",
    "MIN_SAVINGS_INCOME_SHARE",
    "MIN_SAVINGS_DISPOSABLE_SHARE",
    "RECOMMENDED_SAVINGS_INCOME_SHARE",
    "OPTIMAL_SAVINGS_INCOME_SHARE",
    "OPTIMAL_SAVINGS_DISPOSABLE_SHARE",
    # Forecast
    "DEFAULT_FORECAST_RETURN",
    "DEFAULT_FORECAST_YEARS",
    # Market
    "HIGH_RATE_THRESHOLD",
    "LOW_RATE_THRESHOLD",
    "ADVICE_HIGH_RATE_THRESHOLD",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (nominal annual rate / 12 = monthly rate)."""


# =============================================================================
# Mortgage Defaults
# =============================================================================

DEFAULT_EMERGENCY_FUND: float = 10_000.0
"""Default amount of liquid savings kept aside before funding a house."""

DEFAULT_HOUSE_TARGET: float = 500_000.0
"""Default target property price."""

DEFAULT_CASH_RATIO: float = 0.30
"""Fraction of price paid in cash: 20% down payment + ~10% taxes and fees."""

DEFAULT_DTI_LIMIT: float = 0.35
"""Maximum share of net monthly income allowed for total debt service."""

DEFAULT_LOAN_YEARS: int = 30
"""Default mortgage term in years."""

DEFAULT_ANNUAL_RATE: float = 0.028
"""Default fixed nominal mortgage rate (2.8%)."""


# =============================================================================
# Retirement
# =============================================================================

SAFE_WITHDRAWAL_RATE: float = 0.04
"""4% rule: FIRE number = annual expenses / 0.04 = annual expenses x 25."""

DEFAULT_FIRE_REAL_RETURN: float = 0.05
"""Assumed annual real return on invested assets when projecting FIRE."""


# =============================================================================
# Goals
# =============================================================================

DEFAULT_GOAL_APY: float = 0.03
"""Conservative annual yield on money set aside for a dated goal."""

GOAL_SAFETY_MARGIN: float = 0.20
"""Share of the monthly surplus held back before funding goals."""

GOAL_SCORE_BANDS: Tuple[Tuple[float, int], ...] = ((1.5, 100), (1.0, 80), (0.7, 60), (0.5, 40))
"""(minimum available/required ratio, score) pairs, best band first; below the last band scores 20."""


# =============================================================================
# Debt-to-Income Levels
# =============================================================================

# Upper bounds (inclusive) of each level, as fractions of net income
DTI_EXCELLENT_MAX: float = 0.20
DTI_GOOD_MAX: float = 0.36
DTI_FAIR_MAX: float = 0.43
DTI_POOR_MAX: float = 0.50


# =============================================================================
# Reserves
# =============================================================================

EMERGENCY_MONTHS_RANGE: Tuple[int, int] = (3, 6)
"""Recommended emergency fund size in months of fixed costs (min, max)."""

LARGE_HOUSEHOLD_SIZE: int = 2
"""Households with more members than this get a larger reserve."""

LARGE_HOUSEHOLD_MULTIPLIER: float = 1.25
"""Reserve multiplier for households larger than LARGE_HOUSEHOLD_SIZE."""

VARIABLE_INCOME_MULTIPLIER: float = 1.5
"""Reserve multiplier when household income is variable."""

MIN_SAVINGS_INCOME_SHARE: float = 0.05
MIN_SAVINGS_DISPOSABLE_SHARE: float = 0.10
RECOMMENDED_SAVINGS_INCOME_SHARE: float = 0.20
OPTIMAL_SAVINGS_INCOME_SHARE: float = 0.40
OPTIMAL_SAVINGS_DISPOSABLE_SHARE: float = 0.50


# =============================================================================
# Forecast
# =============================================================================

DEFAULT_FORECAST_RETURN: float = 0.07
"""Default annual return for the long-range investment forecast."""

DEFAULT_FORECAST_YEARS: int = 25
"""Default horizon of the investment forecast table."""


# =============================================================================
# Market
# =============================================================================

HIGH_RATE_THRESHOLD: float = 0.035
LOW_RATE_THRESHOLD: float = 0.020
ADVICE_HIGH_RATE_THRESHOLD: float = 0.030
