"""
Type definitions for NestEgg.

Purpose
-------
TypedDict definitions for the JSON-safe dictionaries produced by
``nestegg.serialization`` and printed by the CLI. Non-finite values
(unreachable targets, DTI with zero income) are represented as ``None``.

Type Definitions
----------------
MonthsEstimateDict
    {"months", "whole_months", "reached", "reachable"}

FeasibilityResultDict
    Flat view of FeasibilityResult

FireProjectionDict
    Flat view of FireProjection
"""

from typing import Literal, Optional

from typing_extensions import TypedDict

__all__ = [
    "LimitingFactorName",
    "DebtToIncomeLevelName",
    "MonthsEstimateDict",
    "FeasibilityResultDict",
    "FireProjectionDict",
]

LimitingFactorName = Literal["cash", "dti", "none"]
DebtToIncomeLevelName = Literal["excellent", "good", "fair", "poor", "critical"]


class MonthsEstimateDict(TypedDict):
    """
    Serialized MonthsEstimate.

    Examples
    --------
    >>> never: MonthsEstimateDict = {
    ...     "months": None, "whole_months": None, "reached": False, "reachable": False
    ... }
    """

    months: Optional[float]
    whole_months: Optional[int]
    reached: bool
    reachable: bool


class FeasibilityResultDict(TypedDict):
    """Serialized FeasibilityResult; ``dti_for_target`` is None when income is 0."""

    household_net_income: float
    available_for_goal: float
    max_affordable_price: float
    required_cash_for_target: float
    missing_cash_for_target: float
    dti_for_target: Optional[float]
    dti_level: DebtToIncomeLevelName
    has_enough_cash: bool
    dti_ok: bool
    fully_ready: bool
    months_to_target: MonthsEstimateDict
    monthly_payment_for_target: float
    limiting_factor: LimitingFactorName
    max_by_cash: float
    max_by_dti: float
    max_mortgage_payment: float
    max_mortgage_principal: float


class FireProjectionDict(TypedDict):
    fire_number: float
    annual_expenses: float
    monthly_savings: float
    time_to_fire: MonthsEstimateDict
    progress: float
    monthly_passive_income: float
