"""
Rate-environment classification.

Consumes an already-parsed reference rate (e.g. 12-month Euribor) as a
decimal and labels the borrowing climate. Fetching the rate is the
caller's job.
"""

from __future__ import annotations

import enum

from .constants import ADVICE_HIGH_RATE_THRESHOLD, HIGH_RATE_THRESHOLD, LOW_RATE_THRESHOLD
from .utils import check_finite

__all__ = [
    "RateEnvironment",
    "RateAdvice",
    "classify_rate_environment",
    "rate_advice",
]


class RateEnvironment(str, enum.Enum):
    SELLERS = "sellers"   # high rates
    NEUTRAL = "neutral"
    BUYERS = "buyers"     # low rates


class RateAdvice(str, enum.Enum):
    SHORTEN_TERM = "shorten_term"   # shorter term or larger down payment
    MODERATE = "moderate"
    LOCK_FIXED = "lock_fixed"       # lock in a fixed rate


def classify_rate_environment(reference_rate: float) -> RateEnvironment:
    """SELLERS above 3.5%, BUYERS below 2.0%, NEUTRAL otherwise."""
    check_finite("reference_rate", reference_rate)
    if reference_rate > HIGH_RATE_THRESHOLD:
        return RateEnvironment.SELLERS
    if reference_rate < LOW_RATE_THRESHOLD:
        return RateEnvironment.BUYERS
    return RateEnvironment.NEUTRAL


def rate_advice(reference_rate: float) -> RateAdvice:
    """SHORTEN_TERM above 3.0%, LOCK_FIXED below 2.0%, MODERATE otherwise."""
    check_finite("reference_rate", reference_rate)
    if reference_rate > ADVICE_HIGH_RATE_THRESHOLD:
        return RateAdvice.SHORTEN_TERM
    if reference_rate < LOW_RATE_THRESHOLD:
        return RateAdvice.LOCK_FIXED
    return RateAdvice.MODERATE
