"""
Deterministic investment growth forecast.

Purpose
-------
Year-by-year projection of an investment balance under a fixed nominal
annual return (compounded monthly) and a level monthly contribution.
Balances come from growth.future_value; nothing is re-derived here.

Example
-------
>>> df = project_growth(10_000, 500, 0.07, years=25)
>>> bool(df.loc[25, "balance"] > df.loc[25, "contributions"])
True
"""

from __future__ import annotations

from datetime import date
from typing import Optional

import numpy as np
import pandas as pd

from .constants import DEFAULT_FORECAST_RETURN, DEFAULT_FORECAST_YEARS, MONTHS_PER_YEAR
from .exceptions import InvalidConfigurationError
from .growth import future_value
from .utils import check_non_negative, nominal_monthly_rate

__all__ = ["project_growth"]


def project_growth(
    principal: float,
    monthly_contribution: float = 0.0,
    annual_rate: float = DEFAULT_FORECAST_RETURN,
    years: int = DEFAULT_FORECAST_YEARS,
    *,
    start: Optional[date] = None,
) -> pd.DataFrame:
    """
    Forecast an investment balance at the end of each year.

    Parameters
    ----------
    principal : float
        Balance today.
    monthly_contribution : float, default 0.0
        Amount invested every month.
    annual_rate : float, default 0.07
        Nominal annual return (decimal), compounded monthly.
    years : int, default 25
        Forecast horizon.
    start : datetime.date, optional
        If given, the index holds calendar years (start.year + k);
        otherwise year offsets 0..years.

    Returns
    -------
    pd.DataFrame
        Columns ``balance``, ``contributions`` (principal plus deposits so
        far) and ``growth`` (balance - contributions), one row per year
        including year 0.
    """
    check_non_negative("principal", principal)
    check_non_negative("monthly_contribution", monthly_contribution)
    check_non_negative("annual_rate", annual_rate, error=InvalidConfigurationError)
    if years < 0:
        raise InvalidConfigurationError(f"years must be non-negative, got {years}")

    r = nominal_monthly_rate(annual_rate)
    offsets = np.arange(int(years) + 1)
    balances = np.array(
        [future_value(principal, monthly_contribution, k * MONTHS_PER_YEAR, r) for k in offsets]
    )
    contributions = principal + monthly_contribution * MONTHS_PER_YEAR * offsets

    index = pd.Index(offsets + (start.year if start else 0), name="year")
    return pd.DataFrame(
        {
            "balance": balances,
            "contributions": contributions.astype(float),
            "growth": balances - contributions,
        },
        index=index,
    )
