"""
Unit tests for feasibility.py module.

Tests MortgageConfig validation, evaluate() on the reference household,
limiting-factor selection and the what-if purchase check.
"""

import dataclasses
import math

import pytest

from nestegg.amortization import max_principal_from_payment, monthly_payment
from nestegg.exceptions import InvalidConfigurationError, ValidationError
from nestegg.feasibility import (
    DebtToIncomeLevel,
    LimitingFactor,
    MortgageConfig,
    available_monthly,
    check_purchase,
    classify_debt_to_income,
    evaluate,
    max_safe_mortgage,
)
from nestegg.household import HouseholdFinancials, IncomeStream


# ============================================================================
# MORTGAGECONFIG TESTS
# ============================================================================

class TestMortgageConfig:
    """Test MortgageConfig validation."""

    def test_defaults(self):
        cfg = MortgageConfig()
        assert cfg.cash_ratio == 0.30
        assert cfg.dti_limit == 0.35
        assert cfg.loan_years == 30
        assert cfg.loan_ratio == pytest.approx(0.70)

    @pytest.mark.parametrize("field,value", [
        ("cash_ratio", 0.0),
        ("cash_ratio", 1.0),
        ("cash_ratio", -0.2),
        ("dti_limit", 0.0),
        ("dti_limit", 1.5),
        ("annual_rate", -0.01),
        ("savings_return_rate", -0.01),
        ("emergency_fund_reserve", -1),
        ("house_price_target", math.nan),
        ("loan_years", 0),
        ("loan_years", -10),
        ("loan_years", 12.5),
        ("loan_years", True),
    ])
    def test_out_of_domain_rejected(self, field, value):
        """Bad values raise instead of being clipped."""
        with pytest.raises(InvalidConfigurationError):
            MortgageConfig(**{field: value})

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            MortgageConfig(cash_ratio=2.0)


# ============================================================================
# EVALUATE TESTS
# ============================================================================

class TestEvaluateReferenceHousehold:
    """evaluate() on 4,000 income, 50,000 liquid, 300,000 target."""

    @pytest.fixture
    def result(self, household, mortgage_config):
        return evaluate(household, mortgage_config)

    def test_income_and_available(self, result):
        assert result.household_net_income == pytest.approx(4_000)
        assert result.available_for_goal == pytest.approx(40_000)

    def test_cash_requirement(self, result):
        assert result.required_cash_for_target == pytest.approx(90_000)
        assert result.missing_cash_for_target == pytest.approx(50_000)
        assert not result.has_enough_cash
        assert result.cash_progress == pytest.approx(40_000 / 90_000)

    def test_payment_and_dti(self, result):
        assert result.monthly_payment_for_target == pytest.approx(885.37, rel=1e-3)
        assert result.dti_for_target == pytest.approx(0.2213, abs=1e-3)
        assert result.dti_ok

    def test_not_ready(self, result):
        assert not result.fully_ready

    def test_cash_is_limiting(self, result):
        assert result.max_by_cash == pytest.approx(133_333.33, rel=1e-6)
        assert result.max_by_cash < result.max_by_dti
        assert result.max_affordable_price == pytest.approx(result.max_by_cash)
        assert result.limiting_factor is LimitingFactor.CASH

    def test_debt_ceiling(self, result):
        assert result.max_mortgage_payment == pytest.approx(1_400)
        assert result.max_mortgage_principal == pytest.approx(
            max_principal_from_payment(1_400, 0.03, 30)
        )
        assert result.max_by_dti == pytest.approx(result.max_mortgage_principal / 0.70)

    def test_months_to_target(self, result):
        """50,000 missing at 2,800/month with no return: about 17.86 months."""
        assert result.months_to_target.months == pytest.approx(50_000 / 2_800)
        assert result.months_to_target.whole_months == 18


class TestEvaluateEdgeCases:
    """Limiting factor ties, zero income and degenerate savings."""

    def test_affordable_target(self, household, mortgage_config):
        rich = dataclasses.replace(household, liquid_savings=200_000)
        result = evaluate(rich, mortgage_config)
        assert result.limiting_factor is LimitingFactor.NONE
        assert result.fully_ready
        assert result.months_to_target.reached
        assert result.missing_cash_for_target == 0.0

    def test_equal_ceilings_resolve_to_dti(self):
        """6,000 / 0.5 == (500 * 12) / 0.5 == 12,000 < 20,000."""
        financials = HouseholdFinancials(
            income_streams=(IncomeStream("Salary", 1_000),),
            liquid_savings=6_000,
            avg_monthly_savings=100,
        )
        cfg = MortgageConfig(
            emergency_fund_reserve=0,
            house_price_target=20_000,
            cash_ratio=0.5,
            dti_limit=0.5,
            annual_rate=0.0,
            loan_years=1,
        )
        result = evaluate(financials, cfg)
        assert result.max_by_cash == pytest.approx(result.max_by_dti)
        assert result.limiting_factor is LimitingFactor.DTI

    def test_zero_income(self, mortgage_config):
        financials = HouseholdFinancials(liquid_savings=50_000, avg_monthly_savings=0)
        result = evaluate(financials, mortgage_config)
        assert math.isinf(result.dti_for_target)
        assert not result.dti_ok
        assert result.max_by_dti == 0.0
        assert result.max_affordable_price == 0.0
        assert result.limiting_factor is LimitingFactor.DTI
        assert not result.months_to_target.is_reachable

    def test_liquid_below_reserve(self, household, mortgage_config):
        poor = dataclasses.replace(household, liquid_savings=5_000)
        result = evaluate(poor, mortgage_config)
        assert result.available_for_goal == 0.0
        assert result.missing_cash_for_target == pytest.approx(90_000)

    def test_negative_savings_never_reaches(self, household, mortgage_config):
        deficit = dataclasses.replace(household, avg_monthly_savings=-300)
        result = evaluate(deficit, mortgage_config)
        assert not result.months_to_target.is_reachable

    def test_other_debt_reduces_budget(self, household, mortgage_config):
        indebted = dataclasses.replace(household, other_debt_payments=400)
        result = evaluate(indebted, mortgage_config)
        assert result.max_mortgage_payment == pytest.approx(1_000)
        assert result.dti_for_target == pytest.approx(
            (monthly_payment(210_000, 0.03, 30) + 400) / 4_000
        )

    def test_debt_above_limit_leaves_no_budget(self, household, mortgage_config):
        indebted = dataclasses.replace(household, other_debt_payments=2_000)
        assert max_safe_mortgage(indebted, mortgage_config) == 0.0

    def test_savings_return_shortens_wait(self, household, mortgage_config):
        flat = evaluate(household, mortgage_config)
        growing = evaluate(household, dataclasses.replace(mortgage_config, savings_return_rate=0.04))
        assert growing.months_to_target.months < flat.months_to_target.months

    def test_higher_price_never_helps(self, household, mortgage_config):
        cheap = evaluate(household, dataclasses.replace(mortgage_config, house_price_target=200_000))
        dear = evaluate(household, dataclasses.replace(mortgage_config, house_price_target=400_000))
        assert dear.missing_cash_for_target >= cheap.missing_cash_for_target
        assert dear.dti_for_target >= cheap.dti_for_target

    def test_max_affordable_not_above_ceilings(self, household, mortgage_config):
        result = evaluate(household, mortgage_config)
        assert result.max_affordable_price <= result.max_by_cash + 1e-9
        assert result.max_affordable_price <= result.max_by_dti + 1e-9


# ============================================================================
# CHECK_PURCHASE TESTS
# ============================================================================

class TestCheckPurchase:
    """Test the what-if check_purchase()."""

    def test_price_mode(self, household, mortgage_config):
        check = check_purchase(household, mortgage_config, price=100_000)
        assert check.loan_amount == pytest.approx(70_000)
        assert check.cash_needed == pytest.approx(30_000)
        assert check.cash_deficit == 0.0
        assert check.feasible

    def test_price_mode_cash_deficit(self, household, mortgage_config):
        check = check_purchase(household, mortgage_config, price=300_000)
        assert check.cash_deficit == pytest.approx(50_000)
        assert not check.feasible

    def test_loan_mode_ignores_cash(self, household, mortgage_config):
        check = check_purchase(household, mortgage_config, loan_amount=210_000)
        assert check.cash_needed == 0.0
        assert check.monthly_payment == pytest.approx(885.37, rel=1e-3)
        assert check.feasible

    def test_loan_mode_over_dti(self, household, mortgage_config):
        check = check_purchase(household, mortgage_config, loan_amount=600_000)
        assert check.dti > mortgage_config.dti_limit
        assert not check.feasible

    @pytest.mark.parametrize("kwargs", [{}, {"price": 1.0, "loan_amount": 1.0}])
    def test_exactly_one_mode(self, household, mortgage_config, kwargs):
        with pytest.raises(InvalidConfigurationError):
            check_purchase(household, mortgage_config, **kwargs)

    def test_negative_price_rejected(self, household, mortgage_config):
        with pytest.raises(InvalidConfigurationError):
            check_purchase(household, mortgage_config, price=-5)


class TestEvaluateLongTerm:
    """A very long loan at a high rate keeps every field finite."""

    def test_fields_are_finite(self, household):
        cfg = MortgageConfig(
            emergency_fund_reserve=10_000,
            house_price_target=300_000,
            annual_rate=1.0,
            loan_years=1_000,
        )
        result = evaluate(household, cfg)
        for value in (
            result.monthly_payment_for_target,
            result.dti_for_target,
            result.max_mortgage_principal,
            result.max_by_dti,
            result.max_affordable_price,
        ):
            assert math.isfinite(value)
        assert result.max_mortgage_principal == pytest.approx(1_400 * 12, rel=1e-9)


# ============================================================================
# BUDGET INDICATOR TESTS
# ============================================================================

class TestAvailableMonthly:
    """Test available_monthly()."""

    def test_reference_household(self, household):
        """(4,000 - 1,200) * 0.8."""
        assert available_monthly(household) == pytest.approx(2_240)

    def test_other_debt_is_subtracted(self, household):
        indebted = dataclasses.replace(household, other_debt_payments=800)
        assert available_monthly(indebted) == pytest.approx(1_600)

    def test_no_margin(self, household):
        assert available_monthly(household, safety_margin=0.0) == pytest.approx(2_800)

    def test_floored_at_zero(self, household):
        stretched = dataclasses.replace(household, fixed_costs=5_000)
        assert available_monthly(stretched) == 0.0

    @pytest.mark.parametrize("margin", [1.0, -0.1, float("nan")])
    def test_invalid_margin_rejected(self, household, margin):
        with pytest.raises(InvalidConfigurationError):
            available_monthly(household, safety_margin=margin)


class TestClassifyDebtToIncome:
    """Test classify_debt_to_income() bands."""

    @pytest.mark.parametrize("ratio,expected", [
        (0.0, DebtToIncomeLevel.EXCELLENT),
        (0.20, DebtToIncomeLevel.EXCELLENT),
        (0.2213, DebtToIncomeLevel.GOOD),
        (0.36, DebtToIncomeLevel.GOOD),
        (0.40, DebtToIncomeLevel.FAIR),
        (0.43, DebtToIncomeLevel.FAIR),
        (0.50, DebtToIncomeLevel.POOR),
        (0.51, DebtToIncomeLevel.CRITICAL),
        (math.inf, DebtToIncomeLevel.CRITICAL),
    ])
    def test_bands(self, ratio, expected):
        assert classify_debt_to_income(ratio) is expected

    @pytest.mark.parametrize("ratio", [float("nan"), -0.1])
    def test_invalid_ratio_rejected(self, ratio):
        with pytest.raises(ValidationError):
            classify_debt_to_income(ratio)

    def test_reference_result_level(self, household, mortgage_config):
        assert evaluate(household, mortgage_config).dti_level is DebtToIncomeLevel.GOOD

    def test_zero_income_is_critical(self, mortgage_config):
        financials = HouseholdFinancials(liquid_savings=50_000)
        assert evaluate(financials, mortgage_config).dti_level is DebtToIncomeLevel.CRITICAL
