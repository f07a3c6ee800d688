"""
Configuration management module for NestEgg.

Purpose
-------
Pydantic models for plan files and environment settings. Each model
validates ranges at load time and converts to the immutable engine
dataclass via ``to_domain()``; the engine itself never reads settings.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON
- Environment-aware: AppSettings reads NESTEGG_* variables and .env

Example
-------
>>> from nestegg.config import MortgageSettings, PlanConfig
>>> settings = MortgageSettings(house_price_target=300_000, annual_rate=0.03)
>>> cfg = settings.to_domain()
>>>
>>> # Serialize to dict/JSON
>>> data = settings.model_dump()
>>> loaded = MortgageSettings.model_validate(data)
"""

from __future__ import annotations

import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_ANNUAL_RATE,
    DEFAULT_CASH_RATIO,
    DEFAULT_DTI_LIMIT,
    DEFAULT_EMERGENCY_FUND,
    DEFAULT_FIRE_REAL_RETURN,
    DEFAULT_GOAL_APY,
    DEFAULT_HOUSE_TARGET,
    DEFAULT_LOAN_YEARS,
    SAFE_WITHDRAWAL_RATE,
)
from .feasibility import MortgageConfig
from .goals import GOAL_CATEGORIES, Goal
from .household import HouseholdFinancials, IncomeStream

__all__ = [
    "IncomeStreamConfig",
    "HouseholdConfig",
    "MortgageSettings",
    "GoalConfig",
    "FireConfig",
    "PlanConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Household Configuration
# ---------------------------------------------------------------------------

class IncomeStreamConfig(BaseModel):
    """Configuration for one monthly income source."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=50, description="Income source name")
    monthly_amount: float = Field(ge=0, description="Monthly net amount")


class HouseholdConfig(BaseModel):
    """
    Household snapshot as stored in a plan file.

    Attributes
    ----------
    income_streams : List[IncomeStreamConfig]
        Monthly net income sources.
    fixed_costs : float
        Recurring monthly obligations.
    variable_spending : float
        Average monthly discretionary spending.
    other_debt_payments : float
        Existing non-mortgage debt service per month.
    liquid_savings : float
        Cash + savings + investments.
    avg_monthly_savings : float, optional
        Overrides income - fixed - variable when given (may be negative).
    household_size : int
        Number of members (emergency fund sizing).
    variable_income : bool
        Whether income is irregular (emergency fund sizing).

    Examples
    --------
    >>> HouseholdConfig(
    ...     income_streams=[{"name": "Salary", "monthly_amount": 4000}],
    ...     fixed_costs=1200, liquid_savings=50000,
    ... ).to_domain().avg_monthly_savings
    2800.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    income_streams: List[IncomeStreamConfig] = Field(
        default_factory=list,
        description="Monthly net income sources"
    )
    fixed_costs: float = Field(default=0.0, ge=0, description="Monthly fixed costs")
    variable_spending: float = Field(default=0.0, ge=0, description="Monthly variable spending")
    other_debt_payments: float = Field(default=0.0, ge=0, description="Monthly non-mortgage debt service")
    liquid_savings: float = Field(default=0.0, ge=0, description="Liquid savings balance")
    avg_monthly_savings: Optional[float] = Field(
        default=None,
        description="Average monthly savings; derived from flows when omitted"
    )
    household_size: int = Field(default=1, ge=1, le=20, description="Number of members")
    variable_income: bool = Field(default=False, description="Income is irregular")

    @property
    def total_income(self) -> float:
        return sum(s.monthly_amount for s in self.income_streams)

    @property
    def monthly_expenses(self) -> float:
        return self.fixed_costs + self.variable_spending

    def to_domain(self) -> HouseholdFinancials:
        """Convert to the engine's immutable snapshot."""
        streams = tuple(IncomeStream(s.name, s.monthly_amount) for s in self.income_streams)
        if self.avg_monthly_savings is None:
            return HouseholdFinancials.from_flows(
                streams,
                self.fixed_costs,
                self.variable_spending,
                other_debt_payments=self.other_debt_payments,
                liquid_savings=self.liquid_savings,
            )
        return HouseholdFinancials(
            income_streams=streams,
            fixed_costs=self.fixed_costs,
            other_debt_payments=self.other_debt_payments,
            liquid_savings=self.liquid_savings,
            avg_monthly_savings=self.avg_monthly_savings,
        )


# ---------------------------------------------------------------------------
# Mortgage Configuration
# ---------------------------------------------------------------------------

class MortgageSettings(BaseModel):
    """
    Mortgage assumptions as stored in a plan file.

    Ranges mirror MortgageConfig: ratios in the open interval (0, 1),
    non-negative rates, positive integer term.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    emergency_fund_reserve: float = Field(default=DEFAULT_EMERGENCY_FUND, ge=0)
    house_price_target: float = Field(default=DEFAULT_HOUSE_TARGET, ge=0)
    cash_ratio: float = Field(default=DEFAULT_CASH_RATIO, gt=0, lt=1)
    dti_limit: float = Field(default=DEFAULT_DTI_LIMIT, gt=0, lt=1)
    annual_rate: float = Field(
        default=DEFAULT_ANNUAL_RATE,
        ge=0,
        le=1,
        description="Nominal annual rate as a decimal (0.028, not 2.8)"
    )
    loan_years: int = Field(default=DEFAULT_LOAN_YEARS, gt=0, le=50)
    savings_return_rate: float = Field(default=0.0, ge=0, le=1)

    def to_domain(self) -> MortgageConfig:
        return MortgageConfig(**self.model_dump())


# ---------------------------------------------------------------------------
# Goal Configuration
# ---------------------------------------------------------------------------

class GoalConfig(BaseModel):
    """Configuration for a dated savings goal."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    target_amount: float = Field(gt=0)
    current_amount: float = Field(default=0.0, ge=0)
    deadline: Optional[datetime.date] = None
    category: str = Field(default="general")
    is_main: bool = False
    property_value: Optional[float] = Field(default=None, ge=0)

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        """Ensure category is one of the known goal categories."""
        if v not in GOAL_CATEGORIES:
            raise ValueError(f"category must be one of {GOAL_CATEGORIES}, got {v!r}")
        return v

    def to_domain(self) -> Goal:
        return Goal(**self.model_dump())


class FireConfig(BaseModel):
    """Assumptions for the FIRE projection."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    annual_return: float = Field(default=DEFAULT_FIRE_REAL_RETURN, ge=0, le=1)
    safe_withdrawal_rate: float = Field(default=SAFE_WITHDRAWAL_RATE, gt=0, le=1)


# ---------------------------------------------------------------------------
# Plan Configuration
# ---------------------------------------------------------------------------

class PlanConfig(BaseModel):
    """
    Complete household plan: snapshot, mortgage assumptions, goals, FIRE.

    Examples
    --------
    >>> plan = PlanConfig(
    ...     name="Our flat",
    ...     household=HouseholdConfig(fixed_costs=1200, liquid_savings=50000,
    ...         income_streams=[{"name": "Salary", "monthly_amount": 4000}]),
    ...     mortgage=MortgageSettings(house_price_target=300_000),
    ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="Household plan", min_length=1, max_length=100)
    household: HouseholdConfig
    mortgage: MortgageSettings = Field(default_factory=MortgageSettings)
    goals: List[GoalConfig] = Field(default_factory=list)
    fire: FireConfig = Field(default_factory=FireConfig)

    @field_validator("goals")
    @classmethod
    def validate_single_main_goal(cls, v):
        """At most one goal can be the main goal."""
        if sum(1 for g in v if g.is_main) > 1:
            raise ValueError("At most one goal can have is_main=True")
        return v

    @property
    def main_goal(self) -> Optional[GoalConfig]:
        return next((g for g in self.goals if g.is_main), None)


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Environment variables are prefixed with NESTEGG_ (e.g. NESTEGG_DEBUG=true).

    Attributes
    ----------
    debug : bool
        Enable debug mode with verbose logging
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    currency_symbol : str
        Symbol used when printing amounts
    goal_apy : float
        Default annual yield assumed for dated goals

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="NESTEGG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    currency_symbol: str = Field(default="€", max_length=5)
    goal_apy: float = Field(default=DEFAULT_GOAL_APY, ge=0, le=1)
