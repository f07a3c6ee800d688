"""
House-purchase feasibility evaluation.

Purpose
-------
Turns a household snapshot and a mortgage configuration into a structured
affordability verdict. Two independent ceilings bound the price a household
can pay today:

- Cash ceiling:  available_for_goal / cash_ratio
- Debt ceiling:  max_principal(income * dti_limit - other_debt) / (1 - cash_ratio)

The affordable price is the smaller of the two. Readiness for one specific
target price is checked separately (enough cash AND DTI within limit), and
the time needed to save the missing cash is delegated to the growth solver.

Design Principles
-----------------
- Pure: no I/O, no shared state; inputs are never mutated
- Validated up front: MortgageConfig rejects out-of-domain values at
  construction with InvalidConfigurationError
- No re-derivation downstream: every figure a dashboard needs is a field
  of FeasibilityResult

Example
-------
>>> household = HouseholdFinancials(
...     income_streams=(IncomeStream("Salary", 4_000),),
...     fixed_costs=1_200, liquid_savings=50_000, avg_monthly_savings=2_800)
>>> cfg = MortgageConfig(emergency_fund_reserve=10_000, house_price_target=300_000,
...                      cash_ratio=0.30, dti_limit=0.35, annual_rate=0.03, loan_years=30)
>>> result = evaluate(household, cfg)
>>> result.limiting_factor
<LimitingFactor.CASH: 'cash'>
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Optional

from .amortization import max_principal_from_payment, monthly_payment
from .constants import (
    DEFAULT_ANNUAL_RATE,
    DEFAULT_CASH_RATIO,
    DEFAULT_DTI_LIMIT,
    DEFAULT_EMERGENCY_FUND,
    DEFAULT_HOUSE_TARGET,
    DEFAULT_LOAN_YEARS,
    DTI_EXCELLENT_MAX,
    DTI_FAIR_MAX,
    DTI_GOOD_MAX,
    DTI_POOR_MAX,
    GOAL_SAFETY_MARGIN,
)
from .exceptions import InvalidConfigurationError, ValidationError
from .growth import MonthsEstimate, months_to_reach
from .household import HouseholdFinancials
from .utils import check_finite, check_non_negative, check_open_unit_interval, nominal_monthly_rate

__all__ = [
    "LimitingFactor",
    "DebtToIncomeLevel",
    "MortgageConfig",
    "FeasibilityResult",
    "PurchaseCheck",
    "evaluate",
    "check_purchase",
    "max_safe_mortgage",
    "available_monthly",
    "classify_debt_to_income",
]

logger = logging.getLogger(__name__)


class LimitingFactor(str, enum.Enum):
    """Which ceiling keeps the affordable price below the target."""
    CASH = "cash"
    DTI = "dti"
    NONE = "none"


class DebtToIncomeLevel(str, enum.Enum):
    """Qualitative band for a debt-to-income ratio."""
    EXCELLENT = "excellent"   # <= 20%
    GOOD = "good"             # <= 36%
    FAIR = "fair"             # <= 43%
    POOR = "poor"             # <= 50%
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MortgageConfig:
    """
    Mortgage and saving assumptions for one evaluation.

    Parameters
    ----------
    emergency_fund_reserve : float
        Part of liquid savings that is never spent on the house.
    house_price_target : float
        Full price of the target property.
    cash_ratio : float
        Fraction of the price paid in cash (down payment + fees), in (0, 1).
    dti_limit : float
        Maximum total debt service as a fraction of net income, in (0, 1).
    annual_rate : float
        Nominal annual mortgage rate (decimal, >= 0).
    loan_years : int
        Mortgage term, positive integer.
    savings_return_rate : float, default 0.0
        Annual nominal return on cash while saving (>= 0, compounded monthly).

    Raises
    ------
    InvalidConfigurationError
        On any out-of-domain value. Values are never clipped into range.
    """
    emergency_fund_reserve: float = DEFAULT_EMERGENCY_FUND
    house_price_target: float = DEFAULT_HOUSE_TARGET
    cash_ratio: float = DEFAULT_CASH_RATIO
    dti_limit: float = DEFAULT_DTI_LIMIT
    annual_rate: float = DEFAULT_ANNUAL_RATE
    loan_years: int = DEFAULT_LOAN_YEARS
    savings_return_rate: float = 0.0

    def __post_init__(self) -> None:
        err = InvalidConfigurationError
        check_non_negative("emergency_fund_reserve", self.emergency_fund_reserve, error=err)
        check_non_negative("house_price_target", self.house_price_target, error=err)
        check_open_unit_interval("cash_ratio", self.cash_ratio)
        check_open_unit_interval("dti_limit", self.dti_limit)
        check_non_negative("annual_rate", self.annual_rate, error=err)
        check_non_negative("savings_return_rate", self.savings_return_rate, error=err)
        if isinstance(self.loan_years, bool) or not isinstance(self.loan_years, int) or self.loan_years <= 0:
            raise InvalidConfigurationError(
                f"loan_years must be a positive integer, got {self.loan_years!r}"
            )

    @property
    def loan_ratio(self) -> float:
        """Financed fraction of the price: 1 - cash_ratio."""
        return 1.0 - self.cash_ratio


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FeasibilityResult:
    """
    Affordability verdict for a household and a target price.

    Attributes
    ----------
    household_net_income : float
        Sum of income streams.
    available_for_goal : float
        Liquid savings minus emergency reserve, floored at 0.
    max_affordable_price : float
        min(max_by_cash, max_by_dti), floored at 0.
    required_cash_for_target : float
        house_price_target * cash_ratio.
    missing_cash_for_target : float
        Cash still to save, floored at 0.
    dti_for_target : float
        (payment for target + other debt) / income; ``math.inf`` when
        income is 0.
    has_enough_cash, dti_ok, fully_ready : bool
        Readiness flags for the target price.
    months_to_target : MonthsEstimate
        Time to save the missing cash (may be never).
    monthly_payment_for_target : float
        Mortgage payment on the financed part of the target price.
    limiting_factor : LimitingFactor
        NONE when the target is affordable, otherwise the tighter ceiling.
    max_by_cash, max_by_dti : float
        The two price ceilings.
    max_mortgage_payment, max_mortgage_principal : float
        Debt-ceiling budget and the loan it supports.
    """
    household_net_income: float
    available_for_goal: float
    max_affordable_price: float
    required_cash_for_target: float
    missing_cash_for_target: float
    dti_for_target: float
    has_enough_cash: bool
    dti_ok: bool
    fully_ready: bool
    months_to_target: MonthsEstimate
    monthly_payment_for_target: float
    limiting_factor: LimitingFactor
    max_by_cash: float = 0.0
    max_by_dti: float = 0.0
    max_mortgage_payment: float = 0.0
    max_mortgage_principal: float = 0.0

    @property
    def cash_progress(self) -> float:
        """Fraction of the required cash already available, capped at 1."""
        if self.required_cash_for_target <= 0:
            return 1.0
        return min(1.0, self.available_for_goal / self.required_cash_for_target)

    @property
    def dti_level(self) -> DebtToIncomeLevel:
        """Band of ``dti_for_target`` (CRITICAL when income is 0)."""
        return classify_debt_to_income(self.dti_for_target)


@dataclass(frozen=True)
class PurchaseCheck:
    """Outcome of a what-if check for one price or loan amount."""
    loan_amount: float
    monthly_payment: float
    dti: float
    cash_needed: float
    cash_deficit: float
    feasible: bool


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def _available_for_goal(financials: HouseholdFinancials, cfg: MortgageConfig) -> float:
    return max(0.0, financials.liquid_savings - cfg.emergency_fund_reserve)


def _debt_ratio(payment: float, financials: HouseholdFinancials, income: float) -> float:
    if income <= 0:
        return math.inf
    return (payment + financials.other_debt_payments) / income


def _debt_budget(financials: HouseholdFinancials, cfg: MortgageConfig) -> tuple[float, float]:
    """Monthly mortgage budget under the DTI ceiling and the principal it supports."""
    budget = max(0.0, financials.total_income * cfg.dti_limit - financials.other_debt_payments)
    if budget <= 0:
        return 0.0, 0.0
    return budget, max_principal_from_payment(budget, cfg.annual_rate, cfg.loan_years)


def max_safe_mortgage(financials: HouseholdFinancials, cfg: MortgageConfig) -> float:
    """
    Largest mortgage principal allowed by the DTI ceiling.

    The monthly budget is ``income * dti_limit - other_debt_payments``,
    floored at 0; the principal is 0 when no budget is left.
    """
    return _debt_budget(financials, cfg)[1]


def evaluate(financials: HouseholdFinancials, cfg: MortgageConfig) -> FeasibilityResult:
    """
    Evaluate whether a household can buy the target property.

    Parameters
    ----------
    financials : HouseholdFinancials
        Current household snapshot.
    cfg : MortgageConfig
        Validated mortgage configuration.

    Returns
    -------
    FeasibilityResult

    Notes
    -----
    Steps, in order:
    1. income = sum of income streams
    2. available = max(0, liquid_savings - emergency reserve)
    3. required cash = price * cash_ratio; missing = max(0, required - available)
    4. debt budget = max(0, income * dti_limit - other debt); max principal from it
    5. ceilings: by cash = available / cash_ratio, by DTI = principal / (1 - cash_ratio);
       limiting factor is NONE if affordable, CASH if the cash ceiling is
       strictly lower, otherwise DTI (equal ceilings resolve to DTI)
    6. target readiness: payment on price * (1 - cash_ratio), DTI and flags
    7. months to save the missing cash at savings_return_rate / 12
    """
    income = financials.total_income
    available = _available_for_goal(financials, cfg)
    logger.debug(
        "Evaluating feasibility: income=%.2f available=%.2f target=%.2f",
        income, available, cfg.house_price_target,
    )

    required_cash = cfg.house_price_target * cfg.cash_ratio
    missing_cash = max(0.0, required_cash - available)

    max_payment, max_principal = _debt_budget(financials, cfg)

    max_by_cash = available / cfg.cash_ratio
    max_by_dti = max_principal / cfg.loan_ratio
    max_affordable = max(0.0, min(max_by_cash, max_by_dti))

    if max_affordable >= cfg.house_price_target:
        limiting = LimitingFactor.NONE
    elif max_by_cash < max_by_dti:
        limiting = LimitingFactor.CASH
    else:
        limiting = LimitingFactor.DTI

    payment_for_target = monthly_payment(
        cfg.house_price_target * cfg.loan_ratio, cfg.annual_rate, cfg.loan_years
    )
    dti_for_target = _debt_ratio(payment_for_target, financials, income)
    has_enough_cash = available >= required_cash
    dti_ok = dti_for_target <= cfg.dti_limit

    if missing_cash <= 0:
        months = MonthsEstimate.already_reached()
    else:
        months = months_to_reach(
            available,
            financials.avg_monthly_savings,
            required_cash,
            nominal_monthly_rate(cfg.savings_return_rate),
        )

    result = FeasibilityResult(
        household_net_income=income,
        available_for_goal=available,
        max_affordable_price=max_affordable,
        required_cash_for_target=required_cash,
        missing_cash_for_target=missing_cash,
        dti_for_target=dti_for_target,
        has_enough_cash=has_enough_cash,
        dti_ok=dti_ok,
        fully_ready=has_enough_cash and dti_ok,
        months_to_target=months,
        monthly_payment_for_target=payment_for_target,
        limiting_factor=limiting,
        max_by_cash=max_by_cash,
        max_by_dti=max_by_dti,
        max_mortgage_payment=max_payment,
        max_mortgage_principal=max_principal,
    )
    logger.debug(
        "Feasibility: max_price=%.2f limiting=%s ready=%s",
        max_affordable, limiting.value, result.fully_ready,
    )
    return result


def check_purchase(
    financials: HouseholdFinancials,
    cfg: MortgageConfig,
    *,
    price: Optional[float] = None,
    loan_amount: Optional[float] = None,
) -> PurchaseCheck:
    """
    What-if check for a specific price or a specific loan amount.

    Exactly one of ``price`` or ``loan_amount`` must be given.

    - Price mode: the loan is ``price * (1 - cash_ratio)`` and the cash
      needed is ``price * cash_ratio``; feasible iff the DTI is within the
      limit and there is no cash deficit.
    - Loan mode: only the DTI limit matters; no cash is required.

    DTI includes ``other_debt_payments``, consistent with :func:`evaluate`.
    """
    if (price is None) == (loan_amount is None):
        raise InvalidConfigurationError("Specify exactly one of 'price' or 'loan_amount'")

    if price is not None:
        check_non_negative("price", price, error=InvalidConfigurationError)
        loan = price * cfg.loan_ratio
        cash_needed = price * cfg.cash_ratio
    else:
        check_non_negative("loan_amount", loan_amount, error=InvalidConfigurationError)
        loan = float(loan_amount)
        cash_needed = 0.0

    payment = monthly_payment(loan, cfg.annual_rate, cfg.loan_years)
    dti = _debt_ratio(payment, financials, financials.total_income)
    deficit = max(0.0, cash_needed - _available_for_goal(financials, cfg))
    return PurchaseCheck(
        loan_amount=loan,
        monthly_payment=payment,
        dti=dti,
        cash_needed=cash_needed,
        cash_deficit=deficit,
        feasible=dti <= cfg.dti_limit and deficit == 0,
    )


# ---------------------------------------------------------------------------
# Budget Indicators
# ---------------------------------------------------------------------------

def available_monthly(
    financials: HouseholdFinancials,
    safety_margin: float = GOAL_SAFETY_MARGIN,
) -> float:
    """
    Monthly amount a household can safely commit to goals.

    ``(income - fixed_costs - other_debt_payments) * (1 - safety_margin)``,
    floored at 0.

    Parameters
    ----------
    financials : HouseholdFinancials
        Current household snapshot.
    safety_margin : float, default 0.20
        Share of the surplus held back, in [0, 1).

    Examples
    --------
    >>> available_monthly(HouseholdFinancials(
    ...     income_streams=(IncomeStream("Salary", 4_000),), fixed_costs=1_500))
    2000.0
    """
    check_finite("safety_margin", safety_margin, error=InvalidConfigurationError)
    if not (0.0 <= safety_margin < 1.0):
        raise InvalidConfigurationError(f"safety_margin must be in [0, 1) (got {safety_margin}).")
    surplus = financials.total_income - financials.fixed_costs - financials.other_debt_payments
    return max(0.0, surplus * (1.0 - safety_margin))


def classify_debt_to_income(ratio: float) -> DebtToIncomeLevel:
    """
    Band a debt-to-income ratio (a fraction, 0.36 for 36%).

    Bounds are inclusive: 0.20 is EXCELLENT, 0.36 GOOD, 0.43 FAIR,
    0.50 POOR, anything above (including ``math.inf``) CRITICAL.
    """
    if math.isnan(ratio) or ratio < 0:
        raise ValidationError(f"ratio must be a non-negative number (got {ratio}).")
    if ratio <= DTI_EXCELLENT_MAX:
        return DebtToIncomeLevel.EXCELLENT
    if ratio <= DTI_GOOD_MAX:
        return DebtToIncomeLevel.GOOD
    if ratio <= DTI_FAIR_MAX:
        return DebtToIncomeLevel.FAIR
    if ratio <= DTI_POOR_MAX:
        return DebtToIncomeLevel.POOR
    return DebtToIncomeLevel.CRITICAL
