"""
Pytest configuration and fixtures for the NestEgg test suite.

Fixtures describe one reference household used across modules:
two salaries of 2,000/month, 1,200 fixed costs, 50,000 liquid savings,
a 10,000 emergency reserve and a 300,000 target house at 3% over 30 years.
"""

import json
from datetime import date

import pytest

from nestegg.config import HouseholdConfig, MortgageSettings, PlanConfig
from nestegg.feasibility import MortgageConfig
from nestegg.goals import Goal
from nestegg.household import HouseholdFinancials, IncomeStream
from nestegg.serialization import plan_to_dict


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def start_date() -> date:
    """Standard reference date for tests."""
    return date(2025, 1, 1)


# ---------------------------------------------------------------------------
# Household Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def income_streams():
    """Two equal salaries."""
    return (IncomeStream("Salary A", 2_000), IncomeStream("Salary B", 2_000))


@pytest.fixture
def household(income_streams) -> HouseholdFinancials:
    """
    Reference household.

    Income: 4,000/month
    Fixed costs: 1,200/month
    Savings: 2,800/month
    Liquid: 50,000
    """
    return HouseholdFinancials(
        income_streams=income_streams,
        fixed_costs=1_200,
        liquid_savings=50_000,
        avg_monthly_savings=2_800,
    )


@pytest.fixture
def mortgage_config() -> MortgageConfig:
    """300,000 target, 30% cash, 35% DTI, 3% over 30 years, no return on savings."""
    return MortgageConfig(
        emergency_fund_reserve=10_000,
        house_price_target=300_000,
        cash_ratio=0.30,
        dti_limit=0.35,
        annual_rate=0.03,
        loan_years=30,
    )


# ---------------------------------------------------------------------------
# Goal Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def trip_goal(start_date) -> Goal:
    """6,000 trip in 12 months with 1,500 already saved."""
    return Goal(
        name="Japan trip",
        target_amount=6_000,
        current_amount=1_500,
        deadline=date(2026, 1, 1),
        category="trip",
    )


# ---------------------------------------------------------------------------
# Plan Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def plan() -> PlanConfig:
    """Reference household as a plan file model."""
    return PlanConfig(
        name="Reference plan",
        household=HouseholdConfig(
            income_streams=[
                {"name": "Salary A", "monthly_amount": 2_000},
                {"name": "Salary B", "monthly_amount": 2_000},
            ],
            fixed_costs=1_200,
            liquid_savings=50_000,
            household_size=2,
        ),
        mortgage=MortgageSettings(
            emergency_fund_reserve=10_000,
            house_price_target=300_000,
            annual_rate=0.03,
        ),
        goals=[
            {
                "name": "Down payment",
                "target_amount": 90_000,
                "current_amount": 40_000,
                "deadline": "2027-01-01",
                "category": "home",
                "is_main": True,
                "property_value": 300_000,
            },
        ],
    )


@pytest.fixture
def plan_file(tmp_path, plan):
    """Reference plan written to a JSON file."""
    path = tmp_path / "plan.json"
    with open(path, "w") as f:
        json.dump(plan_to_dict(plan), f)
    return path
