"""
Amortization math for fixed-rate loans.

Purpose
-------
Closed-form routines for a level-payment, fixed nominal rate loan with
monthly compounding:

    r = annual_rate / 12,  n = years * 12
    payment   = P * r (1+r)^n / ((1+r)^n - 1)
    principal = M * ((1+r)^n - 1) / (r (1+r)^n)

Both are evaluated through the discounted share 1 - (1+r)^-n, computed
in log space so that very long terms or high rates stay finite instead
of overflowing to inf / inf. The two functions are exact algebraic
inverses of each other. Degenerate cases have explicit fallbacks and
never divide by zero:
- r == 0 -> straight-line (P / n, M * n)
- n == 0 -> 0

Example
-------
>>> monthly_payment(210_000, 0.03, 30)
885.37...
>>> max_principal_from_payment(885.37, 0.03, 30)
209999.9...
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .constants import MONTHS_PER_YEAR
from .exceptions import InvalidConfigurationError
from .utils import check_non_negative, nominal_monthly_rate

__all__ = [
    "monthly_payment",
    "max_principal_from_payment",
    "amortization_schedule",
    "total_interest",
]

logger = logging.getLogger(__name__)


def _discounted_share(monthly_rate: float, periods):
    """1 - (1+r)^-n, bounded in (0, 1] for r > 0 and n > 0."""
    return -np.expm1(-np.asarray(periods, dtype=float) * np.log1p(monthly_rate))


def _loan_terms(annual_rate: float, years: float) -> tuple[float, int]:
    """Validate and convert (annual_rate, years) to (monthly rate, n periods)."""
    check_non_negative("annual_rate", annual_rate, error=InvalidConfigurationError)
    check_non_negative("years", years, error=InvalidConfigurationError)
    return nominal_monthly_rate(annual_rate), int(round(years * MONTHS_PER_YEAR))


def monthly_payment(principal: float, annual_rate: float, years: float) -> float:
    """
    Level monthly payment that amortizes *principal* over *years*.

    Parameters
    ----------
    principal : float
        Amount borrowed. Must be non-negative.
    annual_rate : float
        Nominal annual interest rate as a decimal (0.03 for 3%).
    years : float
        Loan term in years. ``years == 0`` yields a payment of 0.

    Returns
    -------
    float
        Monthly payment, finite and non-negative.

    Raises
    ------
    InvalidConfigurationError
        If ``annual_rate`` or ``years`` is negative.
    """
    check_non_negative("principal", principal, error=InvalidConfigurationError)
    r, n = _loan_terms(annual_rate, years)
    if n == 0:
        return 0.0
    if r == 0:
        return float(principal) / n
    return float(principal * r / _discounted_share(r, n))


def max_principal_from_payment(max_payment: float, annual_rate: float, years: float) -> float:
    """
    Largest principal whose level payment does not exceed *max_payment*.

    Exact inverse of :func:`monthly_payment`, so
    ``monthly_payment(max_principal_from_payment(M, r, y), r, y) == M``
    up to floating-point error.

    Parameters
    ----------
    max_payment : float
        Monthly budget available for the loan. Must be non-negative.
    annual_rate : float
        Nominal annual interest rate as a decimal.
    years : float
        Loan term in years.

    Returns
    -------
    float
        Maximum principal. 0 when the budget or the term is 0.
    """
    check_non_negative("max_payment", max_payment, error=InvalidConfigurationError)
    r, n = _loan_terms(annual_rate, years)
    if n == 0 or max_payment == 0:
        return 0.0
    if r == 0:
        return float(max_payment) * n
    return float(max_payment * _discounted_share(r, n) / r)


def total_interest(principal: float, annual_rate: float, years: float) -> float:
    """Total interest paid over the life of the loan (payment * n - principal)."""
    _, n = _loan_terms(annual_rate, years)
    return max(0.0, monthly_payment(principal, annual_rate, years) * n - float(principal))


def amortization_schedule(principal: float, annual_rate: float, years: float) -> pd.DataFrame:
    """
    Month-by-month repayment schedule.

    Returns
    -------
    pd.DataFrame
        Indexed by ``month`` (1..n) with columns ``payment``, ``interest``,
        ``principal`` and ``balance`` (balance after that month's payment).
        Empty when the term is 0.

    Notes
    -----
    Balance after k payments uses the closed form
        B_k = P (1 - (1+r)^-(n-k)) / (1 - (1+r)^-n)
    (straight-line when r == 0), clipped at 0 against rounding.
    """
    r, n = _loan_terms(annual_rate, years)
    payment = monthly_payment(principal, annual_rate, years)
    columns = ["payment", "interest", "principal", "balance"]
    if n == 0:
        return pd.DataFrame(columns=columns, index=pd.RangeIndex(1, 1, name="month"), dtype=float)

    k = np.arange(0, n + 1, dtype=float)
    if r == 0:
        balances = principal - payment * k
    else:
        balances = principal * _discounted_share(r, n - k) / _discounted_share(r, n)
    balances = np.maximum(balances, 0.0)
    balances[-1] = 0.0

    opening = balances[:-1]
    interest = opening * r
    principal_paid = opening - balances[1:]

    logger.debug("Built amortization schedule: principal=%.2f rate=%.4f n=%d", principal, annual_rate, n)
    return pd.DataFrame(
        {
            "payment": interest + principal_paid,
            "interest": interest,
            "principal": principal_paid,
            "balance": balances[1:],
        },
        index=pd.RangeIndex(1, n + 1, name="month"),
    )
