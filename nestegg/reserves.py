"""
Emergency fund sizing and savings-rate targets.

Purpose
-------
Pure lookup/multiplication rules, no solver involved.

Emergency fund
--------------
    range = fixed_costs * {3..6} * multiplier
    multiplier = 1.25 if household has more than 2 members
               * 1.5  if income is variable

The emergency goal is funded first from liquid assets; whatever is left
is available for other goals.

Savings targets
---------------
    disposable  = max(0, income - fixed_costs)
    minimum     = max(5% income, 10% disposable)
    recommended = 20% income
    optimal     = min(40% income, 50% disposable)
    savings rate = monthly savings / income (0 with no income)

Example
-------
>>> recommend_emergency_fund(2_000, household_size=3, variable_income=True)
EmergencyFundRange(minimum=11250.0, maximum=22500.0, multiplier=1.875)
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    EMERGENCY_MONTHS_RANGE,
    LARGE_HOUSEHOLD_MULTIPLIER,
    LARGE_HOUSEHOLD_SIZE,
    MIN_SAVINGS_DISPOSABLE_SHARE,
    MIN_SAVINGS_INCOME_SHARE,
    OPTIMAL_SAVINGS_DISPOSABLE_SHARE,
    OPTIMAL_SAVINGS_INCOME_SHARE,
    RECOMMENDED_SAVINGS_INCOME_SHARE,
    VARIABLE_INCOME_MULTIPLIER,
)
from .exceptions import InvalidConfigurationError
from .utils import check_finite, check_non_negative

__all__ = [
    "EmergencyFundRange",
    "EmergencyFundStatus",
    "SavingsTargets",
    "risk_multiplier",
    "recommend_emergency_fund",
    "emergency_fund_status",
    "savings_targets",
    "savings_rate",
]


@dataclass(frozen=True)
class EmergencyFundRange:
    """Recommended emergency fund bounds."""
    minimum: float
    maximum: float
    multiplier: float


@dataclass(frozen=True)
class EmergencyFundStatus:
    """How much of the emergency goal liquid assets already cover."""
    goal: float
    current: float
    available_for_goals: float

    @property
    def fully_funded(self) -> bool:
        return self.current >= self.goal

    @property
    def progress(self) -> float:
        if self.goal <= 0:
            return 1.0
        return min(1.0, self.current / self.goal)


@dataclass(frozen=True)
class SavingsTargets:
    """Monthly savings benchmarks derived from income and fixed costs."""
    minimum: float
    recommended: float
    optimal: float


def risk_multiplier(household_size: int = 1, variable_income: bool = False) -> float:
    """Reserve multiplier: x1.25 above two members, x1.5 for variable income."""
    if household_size < 1:
        raise InvalidConfigurationError(f"household_size must be >= 1, got {household_size}")
    factor = LARGE_HOUSEHOLD_MULTIPLIER if household_size > LARGE_HOUSEHOLD_SIZE else 1.0
    if variable_income:
        factor *= VARIABLE_INCOME_MULTIPLIER
    return factor


def recommend_emergency_fund(
    fixed_costs: float,
    household_size: int = 1,
    variable_income: bool = False,
    *,
    min_months: int = EMERGENCY_MONTHS_RANGE[0],
    max_months: int = EMERGENCY_MONTHS_RANGE[1],
) -> EmergencyFundRange:
    """
    Recommended emergency fund range in currency units.

    Parameters
    ----------
    fixed_costs : float
        Monthly fixed costs.
    household_size : int, default 1
        Number of household members.
    variable_income : bool, default False
        Whether household income is irregular.
    min_months, max_months : int
        Months of fixed costs to hold (3 and 6 by default).
    """
    check_non_negative("fixed_costs", fixed_costs)
    if not (0 < min_months <= max_months):
        raise InvalidConfigurationError(
            f"Need 0 < min_months <= max_months, got {min_months} and {max_months}"
        )
    factor = risk_multiplier(household_size, variable_income)
    return EmergencyFundRange(
        minimum=fixed_costs * min_months * factor,
        maximum=fixed_costs * max_months * factor,
        multiplier=factor,
    )


def emergency_fund_status(liquid_assets: float, emergency_goal: float) -> EmergencyFundStatus:
    """Fill the emergency goal first from liquid assets."""
    check_non_negative("liquid_assets", liquid_assets)
    check_non_negative("emergency_goal", emergency_goal)
    current = min(liquid_assets, emergency_goal)
    return EmergencyFundStatus(
        goal=emergency_goal,
        current=current,
        available_for_goals=liquid_assets - current,
    )


def savings_targets(monthly_income: float, fixed_costs: float) -> SavingsTargets:
    """Minimum / recommended / optimal monthly savings for the given budget."""
    check_non_negative("monthly_income", monthly_income)
    check_non_negative("fixed_costs", fixed_costs)
    disposable = max(0.0, monthly_income - fixed_costs)
    return SavingsTargets(
        minimum=max(MIN_SAVINGS_INCOME_SHARE * monthly_income, MIN_SAVINGS_DISPOSABLE_SHARE * disposable),
        recommended=RECOMMENDED_SAVINGS_INCOME_SHARE * monthly_income,
        optimal=min(OPTIMAL_SAVINGS_INCOME_SHARE * monthly_income, OPTIMAL_SAVINGS_DISPOSABLE_SHARE * disposable),
    )


def savings_rate(monthly_savings: float, monthly_income: float) -> float:
    """Share of income saved each month; negative for a deficit, 0 with no income."""
    check_finite("monthly_savings", monthly_savings)
    check_non_negative("monthly_income", monthly_income)
    if monthly_income <= 0:
        return 0.0
    return monthly_savings / monthly_income
