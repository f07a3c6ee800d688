# nestegg/goals.py
"""
Savings goals: delay estimation, required contributions and projections.

Purpose
-------
Domain-level helpers for dated savings goals (trip, car, down payment,
emergency fund) that reuse the growth solver instead of re-implementing
compounding:

- delay_months: how much an incidental expense pushes back the main goal
- required_monthly_contribution: level deposit that meets a target by a
  fixed number of months (closed-form inversion of the annuity FV)
- project_goal: months left, required deposit, projected balance and
  time to target for one Goal
- goal_feasibility: 0-100 score of a required deposit against the
  monthly amount the household can spare

Mathematical Framework
----------------------
Required contribution over n months at monthly rate r:

    c = (target - PV (1+r)^n) * r / ((1+r)^n - 1)      (r != 0)
    c = (target - PV) / n                              (r == 0)

floored at 0 once compounding alone covers the target.

Delay is a linear approximation, ceil(expense / monthly_savings). It
ignores the compounding used elsewhere.

Example
-------
>>> delay_months(5_000, 1_000, outstanding_gap=20_000)
MonthsEstimate(months=5.00, reached=False)
>>> required_monthly_contribution(12_000, 0, 12, 0.0)
1000.0
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .constants import DEFAULT_GOAL_APY, GOAL_SCORE_BANDS
from .exceptions import ValidationError
from .growth import MonthsEstimate, future_value, growth_factor, months_to_reach
from .utils import check_non_negative, months_between, nominal_monthly_rate

__all__ = [
    "Goal",
    "GoalProjection",
    "GoalFeasibility",
    "delay_months",
    "required_monthly_contribution",
    "months_until",
    "project_goal",
    "goal_feasibility",
]

logger = logging.getLogger(__name__)

GOAL_CATEGORIES = ("home", "trip", "kids", "emergency", "other", "mortgage", "car", "general")


class GoalFeasibility(int, enum.Enum):
    """0-100 score for a required deposit against what the household can spare."""
    VERY_VIABLE = 100
    VIABLE = 80
    CHALLENGING = 60
    DIFFICULT = 40
    VERY_DIFFICULT = 20
    NOT_VIABLE = 0


# ---------------------------------------------------------------------------
# Goal Definition
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Goal:
    """
    A savings target owned by the external store.

    Parameters
    ----------
    name : str
        Display name.
    target_amount : float
        Amount to reach; must be > 0.
    current_amount : float, default 0.0
        Amount already saved.
    deadline : datetime.date, optional
        Date by which the target should be met. Goals without a deadline
        have no required contribution.
    category : str, default "general"
        One of GOAL_CATEGORIES.
    is_main : bool, default False
        Marks the household's primary goal (the one delays are measured on).
    property_value : float, optional
        Full property price for home goals, where target_amount is the
        cash part only.

    Examples
    --------
    >>> Goal("Japan trip", target_amount=6_000, current_amount=1_500,
    ...      deadline=date(2027, 4, 1), category="trip")
    """
    name: str
    target_amount: float
    current_amount: float = 0.0
    deadline: Optional[date] = None
    category: str = "general"
    is_main: bool = False
    property_value: Optional[float] = None

    def __post_init__(self):
        if self.target_amount <= 0:
            raise ValidationError(f"target_amount must be > 0, got {self.target_amount}")
        check_non_negative("current_amount", self.current_amount)
        if self.category not in GOAL_CATEGORIES:
            raise ValidationError(
                f"category must be one of {GOAL_CATEGORIES}, got {self.category!r}"
            )
        if self.property_value is not None:
            check_non_negative("property_value", self.property_value)

    @property
    def remaining(self) -> float:
        """Amount still missing, floored at 0."""
        return max(0.0, self.target_amount - self.current_amount)

    @property
    def progress(self) -> float:
        """Fraction saved so far, capped at 1."""
        return min(1.0, self.current_amount / self.target_amount)

    def monthly_contribution_required(
        self, as_of: date, annual_rate: float = DEFAULT_GOAL_APY
    ) -> float:
        """Level monthly deposit that meets the target by the deadline (0 if no deadline)."""
        if self.deadline is None:
            return 0.0
        return required_monthly_contribution(
            self.target_amount,
            self.current_amount,
            months_until(self.deadline, as_of),
            nominal_monthly_rate(annual_rate),
        )

    def __repr__(self) -> str:
        deadline = self.deadline.isoformat() if self.deadline else "none"
        return (
            f"Goal({self.name!r}, target={self.target_amount:,.0f}, "
            f"current={self.current_amount:,.0f}, deadline={deadline})"
        )


@dataclass(frozen=True)
class GoalProjection:
    """Derived figures for one goal at a given date."""
    goal: Goal
    months_remaining: int
    required_contribution: float
    monthly_contribution: float
    projected_amount: float
    surplus: float
    time_to_target: MonthsEstimate
    reached_on: Optional[date]

    @property
    def on_track(self) -> bool:
        """True when the projected balance at the deadline meets the target."""
        # Tolerance for paying exactly the required contribution
        return self.surplus >= -1e-6 * self.goal.target_amount

    def feasibility(self, available: float) -> GoalFeasibility:
        """Score the required contribution against *available* per month."""
        return goal_feasibility(self.required_contribution, available)


# ---------------------------------------------------------------------------
# Calculations
# ---------------------------------------------------------------------------

def delay_months(
    expense_amount: float,
    monthly_savings_rate: float,
    outstanding_gap: float,
) -> MonthsEstimate:
    """
    Months an incidental expense delays the main savings goal.

    Parameters
    ----------
    expense_amount : float
        One-off spend that comes out of savings.
    monthly_savings_rate : float
        Average amount saved per month.
    outstanding_gap : float
        Cash still missing for the main goal.

    Returns
    -------
    MonthsEstimate
        - 0 months (reached) if the main goal is already met (gap <= 0)
        - never if there is no savings capacity (rate <= 0)
        - 0 months, not reached, if there is no expense (the goal is
          still open but nothing pushes it back)
        - otherwise ceil(expense / rate) whole months

    Notes
    -----
    Linear: the lost growth on the spent amount is ignored.
    """
    check_non_negative("expense_amount", expense_amount)
    if outstanding_gap <= 0:
        return MonthsEstimate.already_reached()
    if monthly_savings_rate <= 0:
        return MonthsEstimate.never()
    if expense_amount == 0:
        return MonthsEstimate(months=0.0)
    return MonthsEstimate(months=float(math.ceil(expense_amount / monthly_savings_rate)))


def required_monthly_contribution(
    target_value: float,
    present_value: float,
    months: int,
    monthly_rate: float,
) -> float:
    """
    Level monthly contribution that grows *present_value* to *target_value*.

    Parameters
    ----------
    target_value : float
        Balance required at the end of ``months``.
    present_value : float
        Balance today.
    months : int
        Number of monthly deposits until the deadline. ``months <= 0``
        returns 0 (the deadline has passed; nothing can be scheduled).
    monthly_rate : float
        Monthly growth rate (annual nominal / 12).

    Returns
    -------
    float
        Non-negative contribution; 0 when the target is already met or
        compounding alone covers it.
    """
    if months <= 0 or target_value - present_value <= 0:
        return 0.0
    if monthly_rate == 0:
        return float((target_value - present_value) / months)
    factor = growth_factor(monthly_rate, months)
    if not math.isfinite(factor):
        # Overflowed compounding: the level deposit tends to 0
        return 0.0
    remaining = target_value - present_value * factor
    if remaining <= 0:
        return 0.0
    return float(remaining * monthly_rate / (factor - 1.0))


def months_until(deadline: date, as_of: date) -> int:
    """Whole calendar months from *as_of* to *deadline*, floored at 0."""
    return months_between(as_of, deadline)


def project_goal(
    goal: Goal,
    as_of: date,
    *,
    annual_rate: float = DEFAULT_GOAL_APY,
    monthly_contribution: Optional[float] = None,
) -> GoalProjection:
    """
    Project a goal forward from *as_of*.

    Parameters
    ----------
    goal : Goal
        Goal to project.
    as_of : datetime.date
        Reference date ("today").
    annual_rate : float, default DEFAULT_GOAL_APY
        Nominal annual yield on the goal balance, compounded monthly.
    monthly_contribution : float, optional
        Planned deposit. Defaults to the required contribution.

    Returns
    -------
    GoalProjection
        ``projected_amount`` is the balance at the deadline under the
        planned deposit (the current balance if there is no deadline);
        ``time_to_target`` comes from the growth solver.
    """
    r = nominal_monthly_rate(annual_rate)
    months_left = months_until(goal.deadline, as_of) if goal.deadline else 0
    required = required_monthly_contribution(goal.target_amount, goal.current_amount, months_left, r)
    deposit = required if monthly_contribution is None else float(monthly_contribution)

    projected = future_value(goal.current_amount, deposit, months_left, r)
    time_to_target = months_to_reach(goal.current_amount, deposit, goal.target_amount, r)
    logger.debug("Projected goal %r: months_left=%d deposit=%.2f", goal.name, months_left, deposit)

    return GoalProjection(
        goal=goal,
        months_remaining=months_left,
        required_contribution=required,
        monthly_contribution=deposit,
        projected_amount=projected,
        surplus=projected - goal.target_amount,
        time_to_target=time_to_target,
        reached_on=time_to_target.reached_on(as_of),
    )


def goal_feasibility(required_monthly: float, available_monthly: float) -> GoalFeasibility:
    """
    Score how comfortably *available_monthly* covers *required_monthly*.

    Parameters
    ----------
    required_monthly : float
        Deposit the goal needs each month.
    available_monthly : float
        Amount the household can commit (see ``feasibility.available_monthly``).

    Returns
    -------
    GoalFeasibility
        VERY_VIABLE when nothing is required, NOT_VIABLE when nothing is
        available, otherwise banded on available / required:
        >= 1.5 -> 100, >= 1.0 -> 80, >= 0.7 -> 60, >= 0.5 -> 40, else 20.

    Examples
    --------
    >>> int(goal_feasibility(500, 600))
    80
    """
    if required_monthly <= 0:
        return GoalFeasibility.VERY_VIABLE
    if available_monthly <= 0:
        return GoalFeasibility.NOT_VIABLE
    ratio = available_monthly / required_monthly
    for minimum, score in GOAL_SCORE_BANDS:
        if ratio >= minimum:
            return GoalFeasibility(score)
    return GoalFeasibility.VERY_DIFFICULT
