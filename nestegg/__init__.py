"""
NestEgg: Household Feasibility and Projection Engine

Pure calculations that answer "can we buy this house, and when?",
"when can we retire?" and "how much must we save for this goal?" from
a snapshot of household finances.

Modules
-------
- amortization : Mortgage payment, inverse payment and repayment schedule
- growth       : Future value and months-to-target solver
- feasibility  : House-purchase feasibility and what-if checks
- goals        : Goal delay, required contributions and projections
- retirement   : FIRE number and time to financial independence
- reserves     : Emergency fund sizing and savings targets
- forecast     : Year-by-year investment growth forecast
- market       : Rate-environment classification
- config       : Pydantic plan files and environment settings
- cli          : Command-line interface

"""

from .amortization import monthly_payment, max_principal_from_payment, amortization_schedule
from .growth import MonthsEstimate, future_value, months_to_reach
from .household import IncomeStream, HouseholdFinancials
from .feasibility import (
    MortgageConfig, FeasibilityResult, LimitingFactor, DebtToIncomeLevel,
    evaluate, check_purchase, available_monthly, classify_debt_to_income,
)
from .goals import (
    Goal, GoalFeasibility, delay_months, required_monthly_contribution, project_goal, goal_feasibility,
)
from .retirement import FireProjection, fire_number, project_fire
from .reserves import recommend_emergency_fund, emergency_fund_status, savings_targets, savings_rate
from . import utils

__version__ = "0.1.0"
