"""
Unit tests for amortization.py module.

Tests monthly_payment, its inverse and the repayment schedule.
"""

import math

import numpy as np
import pytest

from nestegg.amortization import (
    amortization_schedule,
    max_principal_from_payment,
    monthly_payment,
    total_interest,
)
from nestegg.exceptions import InvalidConfigurationError


# ============================================================================
# MONTHLY PAYMENT TESTS
# ============================================================================

class TestMonthlyPayment:
    """Test monthly_payment()."""

    def test_reference_loan(self):
        """210,000 at 3% over 30 years costs about 885 per month."""
        assert monthly_payment(210_000, 0.03, 30) == pytest.approx(885.37, rel=1e-3)

    def test_zero_rate_is_straight_line(self):
        """With no interest the payment is principal / n."""
        assert monthly_payment(120_000, 0.0, 10) == pytest.approx(1_000.0)

    def test_zero_years_gives_zero_payment(self):
        assert monthly_payment(100_000, 0.03, 0) == 0.0

    def test_zero_principal(self):
        assert monthly_payment(0, 0.03, 30) == 0.0

    def test_higher_rate_costs_more(self):
        """Payment is strictly increasing in the rate."""
        assert monthly_payment(200_000, 0.04, 30) > monthly_payment(200_000, 0.03, 30)

    def test_longer_term_costs_less(self):
        assert monthly_payment(200_000, 0.03, 30) < monthly_payment(200_000, 0.03, 20)

    @pytest.mark.parametrize("principal,rate,years", [
        (-1, 0.03, 30),
        (100_000, -0.01, 30),
        (100_000, 0.03, -5),
    ])
    def test_negative_inputs_raise(self, principal, rate, years):
        with pytest.raises(InvalidConfigurationError):
            monthly_payment(principal, rate, years)


# ============================================================================
# INVERSE TESTS
# ============================================================================

class TestMaxPrincipalFromPayment:
    """Test max_principal_from_payment()."""

    @pytest.mark.parametrize("principal,rate,years", [
        (210_000, 0.03, 30),
        (50_000, 0.0, 15),
        (1_000_000, 0.065, 25),
        (10_000, 0.001, 1),
    ])
    def test_inverse_of_payment(self, principal, rate, years):
        """max_principal_from_payment(monthly_payment(P)) recovers P."""
        payment = monthly_payment(principal, rate, years)
        assert max_principal_from_payment(payment, rate, years) == pytest.approx(principal, rel=1e-9)

    def test_zero_budget(self):
        assert max_principal_from_payment(0, 0.03, 30) == 0.0

    def test_zero_term(self):
        assert max_principal_from_payment(1_000, 0.03, 0) == 0.0

    def test_zero_rate(self):
        assert max_principal_from_payment(500, 0.0, 10) == pytest.approx(60_000)

    def test_negative_budget_raises(self):
        with pytest.raises(InvalidConfigurationError):
            max_principal_from_payment(-100, 0.03, 30)


# ============================================================================
# SCHEDULE TESTS
# ============================================================================

class TestAmortizationSchedule:
    """Test amortization_schedule() and total_interest()."""

    def test_shape_and_columns(self):
        schedule = amortization_schedule(100_000, 0.03, 10)
        assert len(schedule) == 120
        assert list(schedule.columns) == ["payment", "interest", "principal", "balance"]
        assert schedule.index.name == "month"
        assert schedule.index[0] == 1

    def test_principal_repaid_in_full(self):
        schedule = amortization_schedule(100_000, 0.03, 10)
        assert schedule["principal"].sum() == pytest.approx(100_000)
        assert schedule["balance"].iloc[-1] == 0.0

    def test_payments_are_level(self):
        schedule = amortization_schedule(100_000, 0.03, 10)
        expected = monthly_payment(100_000, 0.03, 10)
        assert schedule["payment"].to_numpy() == pytest.approx(expected, rel=1e-9)

    def test_first_month_interest(self):
        schedule = amortization_schedule(120_000, 0.06, 20)
        assert schedule["interest"].iloc[0] == pytest.approx(600.0)

    def test_interest_matches_total(self):
        schedule = amortization_schedule(210_000, 0.03, 30)
        assert schedule["interest"].sum() == pytest.approx(total_interest(210_000, 0.03, 30), rel=1e-9)

    def test_zero_rate_has_no_interest(self):
        schedule = amortization_schedule(12_000, 0.0, 1)
        assert (schedule["interest"] == 0).all()
        assert total_interest(12_000, 0.0, 1) == 0.0

    def test_zero_term_is_empty(self):
        schedule = amortization_schedule(100_000, 0.03, 0)
        assert schedule.empty


# ============================================================================
# EXTREME TERMS AND MONOTONICITY
# ============================================================================

class TestExtremeTerms:
    """Long terms at high rates stay finite instead of overflowing."""

    def test_payment_tends_to_interest_only(self):
        """At 100% over 1000 years the payment is the monthly interest."""
        payment = monthly_payment(100_000, 1.0, 1_000)
        assert math.isfinite(payment)
        assert payment == pytest.approx(100_000 / 12, rel=1e-9)

    def test_max_principal_tends_to_perpetuity(self):
        principal = max_principal_from_payment(1_000, 1.0, 1_000)
        assert math.isfinite(principal)
        assert principal == pytest.approx(12_000, rel=1e-9)

    def test_inverse_holds_for_long_term(self):
        payment = monthly_payment(250_000, 0.5, 500)
        assert max_principal_from_payment(payment, 0.5, 500) == pytest.approx(250_000, rel=1e-9)

    def test_long_schedule_is_finite(self):
        schedule = amortization_schedule(100_000, 1.0, 1_000)
        assert len(schedule) == 12_000
        assert np.isfinite(schedule.to_numpy()).all()
        assert schedule["balance"].iloc[-1] == 0.0
        assert schedule["principal"].sum() == pytest.approx(100_000, rel=1e-6)


class TestPaymentMonotonicity:
    """A larger loan never costs less per month."""

    @pytest.mark.parametrize("rate", [0.0, 0.01, 0.03, 0.08])
    @pytest.mark.parametrize("years", [1, 15, 30])
    def test_non_decreasing_in_principal(self, rate, years):
        grid = [0, 1, 1e3, 2e5, 1e6]
        payments = [monthly_payment(p, rate, years) for p in grid]
        assert payments[0] == 0.0
        assert all(a <= b for a, b in zip(payments, payments[1:]))
