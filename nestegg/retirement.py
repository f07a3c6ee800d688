"""
FIRE (financial independence) projections.

Purpose
-------
Thin callers over the growth solver for the retirement number:

    FIRE number = annual expenses / safe withdrawal rate
                = annual expenses * 25            (4% rule)

Time to FIRE solves the annuity equation with
    present value = liquid investable assets
    contribution  = monthly income - monthly expenses
    target        = FIRE number
    rate          = assumed annual real return / 12

Example
-------
>>> fire_number(30_000)
750000.0
>>> projection = project_fire(monthly_income=4_000, monthly_expenses=2_500,
...                           liquid_assets=100_000)
>>> projection.time_to_fire.years
30.1...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import DEFAULT_FIRE_REAL_RETURN, MONTHS_PER_YEAR, SAFE_WITHDRAWAL_RATE
from .exceptions import InvalidConfigurationError
from .growth import MonthsEstimate, months_to_reach
from .utils import check_non_negative, nominal_monthly_rate

__all__ = [
    "FireProjection",
    "fire_number",
    "project_fire",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FireProjection:
    """
    Result of a FIRE projection.

    Attributes
    ----------
    fire_number : float
        Invested assets needed to cover annual expenses indefinitely.
    annual_expenses : float
        Monthly expenses * 12.
    monthly_savings : float
        Income - expenses; may be negative.
    time_to_fire : MonthsEstimate
        Months until the FIRE number is reached (may be never).
    progress : float
        liquid assets / FIRE number, capped at 1.
    monthly_passive_income : float
        Monthly income the current assets would support at the
        safe withdrawal rate.
    """
    fire_number: float
    annual_expenses: float
    monthly_savings: float
    time_to_fire: MonthsEstimate
    progress: float
    monthly_passive_income: float

    @property
    def passive_income_coverage(self) -> float:
        """Share of monthly expenses covered by passive income, capped at 1."""
        monthly_expenses = self.annual_expenses / MONTHS_PER_YEAR
        if monthly_expenses <= 0:
            return 1.0
        return min(1.0, self.monthly_passive_income / monthly_expenses)


def fire_number(annual_expenses: float, safe_withdrawal_rate: float = SAFE_WITHDRAWAL_RATE) -> float:
    """
    Invested-asset target for a given level of annual expenses.

    Parameters
    ----------
    annual_expenses : float
        Yearly spending to cover.
    safe_withdrawal_rate : float, default 0.04
        Sustainable annual drawdown, in (0, 1].
    """
    check_non_negative("annual_expenses", annual_expenses)
    if not (0 < safe_withdrawal_rate <= 1):
        raise InvalidConfigurationError(
            f"safe_withdrawal_rate must be in (0, 1], got {safe_withdrawal_rate}"
        )
    return float(annual_expenses) / safe_withdrawal_rate


def project_fire(
    monthly_income: float,
    monthly_expenses: float,
    liquid_assets: float,
    *,
    annual_return: float = DEFAULT_FIRE_REAL_RETURN,
    safe_withdrawal_rate: float = SAFE_WITHDRAWAL_RATE,
) -> FireProjection:
    """
    Project the time until liquid assets reach the FIRE number.

    Parameters
    ----------
    monthly_income : float
        Household net income per month.
    monthly_expenses : float
        Fixed costs + variable spending per month.
    liquid_assets : float
        Cash, savings and investments available today.
    annual_return : float, default 0.05
        Assumed annual real return, compounded monthly (annual / 12).
    safe_withdrawal_rate : float, default 0.04
        Withdrawal rate defining the FIRE number.
    """
    check_non_negative("monthly_income", monthly_income)
    check_non_negative("monthly_expenses", monthly_expenses)
    check_non_negative("liquid_assets", liquid_assets)
    check_non_negative("annual_return", annual_return, error=InvalidConfigurationError)

    annual_expenses = monthly_expenses * MONTHS_PER_YEAR
    target = fire_number(annual_expenses, safe_withdrawal_rate)
    savings = monthly_income - monthly_expenses
    time_to_fire = months_to_reach(liquid_assets, savings, target, nominal_monthly_rate(annual_return))
    logger.debug(
        "FIRE projection: target=%.2f savings=%.2f reachable=%s",
        target, savings, time_to_fire.is_reachable,
    )

    return FireProjection(
        fire_number=target,
        annual_expenses=annual_expenses,
        monthly_savings=savings,
        time_to_fire=time_to_fire,
        progress=1.0 if target <= 0 else min(1.0, liquid_assets / target),
        monthly_passive_income=liquid_assets * safe_withdrawal_rate / MONTHS_PER_YEAR,
    )
