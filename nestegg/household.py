"""
Household input snapshot.

Purpose
-------
Immutable records describing a household's monthly money flows at the
moment of a calculation. They are produced fresh by the caller (already
aggregated from accounts, costs and income sources) and never mutated by
the engine.

Example
-------
>>> household = HouseholdFinancials(
...     income_streams=(IncomeStream("Ana", 2_000), IncomeStream("Luis", 2_000)),
...     fixed_costs=1_200,
...     liquid_savings=50_000,
...     avg_monthly_savings=2_800,
... )
>>> household.total_income
4000.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .utils import check_finite, check_non_negative

__all__ = [
    "IncomeStream",
    "HouseholdFinancials",
]


@dataclass(frozen=True)
class IncomeStream:
    """A named monthly net income source (salary, pension, rent received)."""
    name: str
    monthly_amount: float

    def __post_init__(self) -> None:
        check_non_negative(f"income stream '{self.name}'", self.monthly_amount)


@dataclass(frozen=True)
class HouseholdFinancials:
    """
    Aggregated monthly figures for one household.

    Parameters
    ----------
    income_streams : tuple of IncomeStream
        Ordered monthly net income sources. Their sum is the household income.
    fixed_costs : float
        Total recurring monthly obligations.
    other_debt_payments : float, default 0.0
        Existing non-mortgage monthly debt service.
    liquid_savings : float, default 0.0
        Cash + savings + investment balance available for goals.
    avg_monthly_savings : float, default 0.0
        income - (fixed_costs + variable spending). May be negative
        (a deficit), which the engine treats as "no savings capacity".

    Notes
    -----
    All monetary fields are non-negative except ``avg_monthly_savings``.
    Lists passed as ``income_streams`` are frozen into a tuple.
    """
    income_streams: Tuple[IncomeStream, ...] = ()
    fixed_costs: float = 0.0
    other_debt_payments: float = 0.0
    liquid_savings: float = 0.0
    avg_monthly_savings: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "income_streams", tuple(self.income_streams))
        for stream in self.income_streams:
            if not isinstance(stream, IncomeStream):
                raise TypeError(
                    f"income_streams must contain IncomeStream items, got {type(stream).__name__}"
                )
        check_non_negative("fixed_costs", self.fixed_costs)
        check_non_negative("other_debt_payments", self.other_debt_payments)
        check_non_negative("liquid_savings", self.liquid_savings)
        check_finite("avg_monthly_savings", self.avg_monthly_savings)

    @classmethod
    def from_flows(
        cls,
        income_streams: Iterable[IncomeStream],
        fixed_costs: float,
        variable_spending: float = 0.0,
        *,
        other_debt_payments: float = 0.0,
        liquid_savings: float = 0.0,
    ) -> "HouseholdFinancials":
        """Build a snapshot, deriving avg_monthly_savings = income - fixed - variable."""
        streams = tuple(income_streams)
        check_non_negative("variable_spending", variable_spending)
        income = sum(s.monthly_amount for s in streams)
        return cls(
            income_streams=streams,
            fixed_costs=fixed_costs,
            other_debt_payments=other_debt_payments,
            liquid_savings=liquid_savings,
            avg_monthly_savings=income - fixed_costs - variable_spending,
        )

    @property
    def total_income(self) -> float:
        """Sum of all monthly income streams."""
        return float(sum(s.monthly_amount for s in self.income_streams))
