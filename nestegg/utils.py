"""General utilities for NestEgg

Contents
--------
- Validation helpers
- Rate conversions (nominal annual -> monthly)
- Calendar helpers (months between dates, month offsets)
- Formatting helpers (currency, percentage)
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Type

import numpy as np
import pandas as pd

from .constants import MONTHS_PER_YEAR
from .exceptions import InvalidConfigurationError, TimeIndexError, ValidationError

__all__ = [
    # Validation
    "check_non_negative",
    "check_finite",
    "check_open_unit_interval",
    # Rates
    "nominal_monthly_rate",
    # Calendar
    "months_between",
    "add_months",
    # Formatting
    "format_currency",
    "format_percentage",
]

# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def check_finite(name: str, value: float, *, error: Type[Exception] = ValidationError) -> None:
    """Raise if *value* is NaN or infinite."""
    if not np.isfinite(value):
        raise error(f"{name} must be a finite number (got {value}).")


def check_non_negative(
    name: str, value: float, *, error: Type[Exception] = ValidationError
) -> None:
    """Raise if *value* is negative or not finite (strict)."""
    check_finite(name, value, error=error)
    if value < 0:
        raise error(f"{name} must be non-negative (got {value}).")


def check_open_unit_interval(name: str, value: float) -> None:
    """Raise InvalidConfigurationError unless 0 < *value* < 1."""
    check_finite(name, value, error=InvalidConfigurationError)
    if not (0.0 < value < 1.0):
        raise InvalidConfigurationError(f"{name} must be in (0, 1) (got {value}).")


# ---------------------------------------------------------------------------
# Rate conversions
# ---------------------------------------------------------------------------

def nominal_monthly_rate(annual_rate: float) -> float:
    """Convert a nominal annual rate to its monthly rate: annual_rate / 12.

    Every compounding path in the package uses this convention.
    """
    return float(annual_rate) / MONTHS_PER_YEAR


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def months_between(start: date, end: date) -> int:
    """Whole calendar months from *start* to *end*, floored at 0.

    Only year and month are compared; the day of month is ignored.
    """
    months = (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)
    return max(0, months)


def add_months(start: date, months: int) -> date:
    """Return the calendar date *months* months after *start*.

    Month-end days are clamped (Jan 31 + 1 month -> Feb 28/29).
    """
    if months < 0:
        raise TimeIndexError(f"months must be non-negative, got {months}.")
    shifted = pd.Timestamp(start) + pd.DateOffset(months=int(months))
    return shifted.date()


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_currency(value: float, symbol: str = "€", decimals: int = 0) -> str:
    """
    Format a monetary amount for tables and messages.

    Examples
    --------
    >>> format_currency(90_000)
    '€90,000'
    >>> format_currency(885.37, decimals=2)
    '€885.37'
    >>> format_currency(-1_200)
    '-€1,200'
    """
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def format_percentage(value: Optional[float], decimals: int = 1) -> str:
    """Format a fraction as a percentage ('0.221' -> '22.1%'); None -> 'n/a'."""
    if value is None or not np.isfinite(value):
        return "n/a"
    return f"{value * 100:.{decimals}f}%"
