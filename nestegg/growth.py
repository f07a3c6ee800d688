"""
Compound-growth time-to-target solver.

Purpose
-------
Single home for annuity future-value mathematics with monthly compounding.
Every caller that needs "how long until a balance reaches X" or "what will
a balance be after n months" delegates here rather than re-deriving the
formula.

Mathematical Framework
----------------------
With present value PV, monthly contribution c and monthly rate r, the
balance after n months is

    FV(n) = PV (1+r)^n + c ((1+r)^n - 1) / r        (r != 0)
    FV(n) = PV + c n                                (r == 0)

Solving FV(n) = target for n gives

    n = ln((target + c/r) / (PV + c/r)) / ln(1 + r)

Outcomes are reported as a MonthsEstimate:
- already reached: months == 0, reached == True
- reachable:       months > 0,  reached == False
- never:           months is None (tagged "unreachable" state)

NaN and infinity never leave this module.

Example
-------
>>> months_to_reach(0, 1_000, 12_000, 0.0)
MonthsEstimate(months=12.0, reached=False)
>>> months_to_reach(0, 0, 1_000, 0.01).is_reachable
False
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

import numpy as np

from .exceptions import InvalidConfigurationError
from .utils import add_months, check_finite

__all__ = [
    "MonthsEstimate",
    "growth_factor",
    "future_value",
    "months_to_reach",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthsEstimate:
    """
    Number of months until a target is met, or the "never" state.

    Parameters
    ----------
    months : float or None
        Fractional months until the target is reached. ``None`` means the
        target is never reached in finite time under the given inputs.
    reached : bool
        True when the target is already met (months == 0).

    Examples
    --------
    >>> MonthsEstimate.never().is_reachable
    False
    >>> MonthsEstimate(17.86).whole_months
    18
    """
    months: Optional[float]
    reached: bool = False

    def __post_init__(self):
        if self.months is not None and (not math.isfinite(self.months) or self.months < 0):
            raise ValueError(f"months must be a finite non-negative number or None, got {self.months}")

    @classmethod
    def never(cls) -> "MonthsEstimate":
        """Tagged unreachable state."""
        return cls(months=None, reached=False)

    @classmethod
    def already_reached(cls) -> "MonthsEstimate":
        return cls(months=0.0, reached=True)

    @property
    def is_reachable(self) -> bool:
        return self.months is not None

    @property
    def whole_months(self) -> Optional[int]:
        """Months rounded up to whole calendar months (None if never)."""
        if self.months is None:
            return None
        # Guard against 11.999999999 style float noise before ceil
        return int(math.ceil(round(self.months, 9)))

    @property
    def years(self) -> Optional[float]:
        return None if self.months is None else self.months / 12.0

    def reached_on(self, start: date) -> Optional[date]:
        """Calendar date at which the target is met, counted from *start*."""
        if self.months is None:
            return None
        return add_months(start, self.whole_months)

    def __repr__(self) -> str:
        if self.months is None:
            return "MonthsEstimate(never)"
        return f"MonthsEstimate(months={self.months:.2f}, reached={self.reached})"


def growth_factor(monthly_rate: float, months: float) -> float:
    """Compounding factor (1 + r)^n, inf when it overflows."""
    with np.errstate(over="ignore"):
        return float(np.power(1.0 + monthly_rate, months))


def _check_rate(monthly_rate: float) -> None:
    check_finite("monthly_rate", monthly_rate, error=InvalidConfigurationError)
    if monthly_rate <= -1.0:
        raise InvalidConfigurationError(
            f"monthly_rate must be > -1, got {monthly_rate}. "
            f"A rate <= -100% would wipe out the balance."
        )


def future_value(
    present_value: float,
    monthly_contribution: float,
    months: float,
    monthly_rate: float,
) -> float:
    """
    Balance after *months* months of compounding plus level contributions.

    Contributions are made at the end of each month (ordinary annuity).

    Parameters
    ----------
    present_value : float
        Starting balance.
    monthly_contribution : float
        Amount added every month (may be negative for withdrawals).
    months : float
        Number of periods, must be non-negative.
    monthly_rate : float
        Growth rate per month (annual nominal / 12).
    """
    _check_rate(monthly_rate)
    if months < 0:
        raise InvalidConfigurationError(f"months must be non-negative, got {months}")
    if monthly_rate == 0:
        return float(present_value + monthly_contribution * months)
    factor = growth_factor(monthly_rate, months)
    return float(present_value * factor + monthly_contribution * (factor - 1.0) / monthly_rate)


def months_to_reach(
    present_value: float,
    monthly_contribution: float,
    target_value: float,
    monthly_rate: float,
) -> MonthsEstimate:
    """
    Solve the annuity future-value equation for the number of months.

    Parameters
    ----------
    present_value : float
        Balance today.
    monthly_contribution : float
        Level amount added each month. Non-positive contributions never
        close a gap.
    target_value : float
        Balance to reach.
    monthly_rate : float
        Growth rate per month. 0 means no growth (linear solve).

    Returns
    -------
    MonthsEstimate
        ``already_reached()`` if present_value >= target_value, checked
        before anything else (contribution and rate are not inspected),
        ``never()`` if the target cannot be reached in finite time,
        otherwise the fractional number of months.

    Raises
    ------
    InvalidConfigurationError
        If monthly_rate <= -1 or is not finite and the target is not
        already met.

    Examples
    --------
    >>> months_to_reach(40_000, 2_800, 90_000, 0.0)
    MonthsEstimate(months=17.86, reached=False)
    """
    if present_value >= target_value:
        return MonthsEstimate.already_reached()
    _check_rate(monthly_rate)

    if monthly_contribution <= 0:
        logger.debug(
            "Target %.2f unreachable: non-positive contribution %.2f",
            target_value, monthly_contribution,
        )
        return MonthsEstimate.never()

    if monthly_rate == 0:
        return MonthsEstimate(months=float((target_value - present_value) / monthly_contribution))

    offset = monthly_contribution / monthly_rate
    numerator = target_value + offset
    denominator = present_value + offset
    if denominator == 0 or numerator / denominator <= 0:
        logger.debug("Target %.2f unreachable: log argument not positive", target_value)
        return MonthsEstimate.never()

    n = math.log(numerator / denominator) / math.log1p(monthly_rate)
    if not math.isfinite(n) or n < 0:
        logger.debug("Target %.2f unreachable: degenerate solution n=%r", target_value, n)
        return MonthsEstimate.never()
    return MonthsEstimate(months=float(n))
