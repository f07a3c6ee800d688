"""
Integration tests for end-to-end planning workflows.

Tests the full pipeline: plan file -> config models -> engine -> results,
and checks that derived views agree with the engine instead of
re-deriving its formulas.
"""

import json

import pytest
from click.testing import CliRunner

from nestegg.amortization import monthly_payment
from nestegg.cli import main
from nestegg.feasibility import LimitingFactor, available_monthly, evaluate
from nestegg.goals import GoalFeasibility, delay_months, project_goal
from nestegg.reserves import emergency_fund_status
from nestegg.retirement import project_fire
from nestegg.serialization import feasibility_to_dict, load_plan, save_plan


# ============================================================================
# HOUSE PURCHASE WORKFLOW
# ============================================================================

@pytest.mark.integration
class TestHousePurchaseWorkflow:
    """Plan file to feasibility verdict, delay and goal tracking."""

    def test_plan_to_verdict(self, plan_file):
        plan = load_plan(plan_file)
        result = evaluate(plan.household.to_domain(), plan.mortgage.to_domain())

        assert result.limiting_factor is LimitingFactor.CASH
        assert result.months_to_target.whole_months == 18
        assert result.monthly_payment_for_target == pytest.approx(
            monthly_payment(210_000, 0.03, 30)
        )

    def test_expense_delays_main_goal(self, plan_file):
        """An 8,400 expense costs three months at 2,800/month."""
        plan = load_plan(plan_file)
        financials = plan.household.to_domain()
        result = evaluate(financials, plan.mortgage.to_domain())

        delay = delay_months(8_400, financials.avg_monthly_savings, result.missing_cash_for_target)
        assert delay.whole_months == 3

    def test_emergency_reserve_matches_available_cash(self, plan_file):
        plan = load_plan(plan_file)
        status = emergency_fund_status(plan.household.liquid_savings, plan.mortgage.emergency_fund_reserve)
        result = evaluate(plan.household.to_domain(), plan.mortgage.to_domain())
        assert status.available_for_goals == pytest.approx(result.available_for_goal)

    def test_main_goal_projection(self, plan_file, start_date):
        """The down-payment goal needs 50,000 over 24 months."""
        plan = load_plan(plan_file)
        goal = plan.main_goal.to_domain()
        projection = project_goal(goal, start_date, annual_rate=0.0)

        assert projection.months_remaining == 24
        assert projection.required_contribution == pytest.approx(50_000 / 24)
        assert projection.on_track

    def test_main_goal_score(self, plan_file, start_date):
        """2,240 spare a month covers the 2,083 deposit, without the 1.5x cushion."""
        plan = load_plan(plan_file)
        spare = available_monthly(plan.household.to_domain())
        projection = project_goal(plan.main_goal.to_domain(), start_date, annual_rate=0.0)

        assert spare == pytest.approx(2_240)
        assert projection.feasibility(spare) is GoalFeasibility.VIABLE

    def test_saving_shrinks_the_wait(self, tmp_path, plan):
        """A year of saving later, the household is closer to the target."""
        later = plan.model_copy(update={
            "household": plan.household.model_copy(update={"liquid_savings": 50_000 + 12 * 2_800}),
        })
        path = tmp_path / "later.json"
        save_plan(later, path)

        before = evaluate(plan.household.to_domain(), plan.mortgage.to_domain())
        after = evaluate(load_plan(path).household.to_domain(), plan.mortgage.to_domain())
        assert after.months_to_target.months == pytest.approx(before.months_to_target.months - 12)


# ============================================================================
# CLI WORKFLOW
# ============================================================================

@pytest.mark.integration
class TestCLIWorkflow:
    """CLI output agrees with direct engine calls."""

    def test_evaluate_json_matches_engine(self, plan_file):
        plan = load_plan(plan_file)
        expected = feasibility_to_dict(evaluate(plan.household.to_domain(), plan.mortgage.to_domain()))

        result = CliRunner().invoke(main, ["evaluate", "-c", str(plan_file), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == expected

    def test_fire_json_matches_engine(self, plan_file):
        plan = load_plan(plan_file)
        projection = project_fire(
            plan.household.total_income,
            plan.household.monthly_expenses,
            plan.household.liquid_savings,
            annual_return=plan.fire.annual_return,
        )

        result = CliRunner().invoke(main, ["fire", "-c", str(plan_file), "--json"])
        data = json.loads(result.output)
        assert data["time_to_fire"]["months"] == pytest.approx(projection.time_to_fire.months)

    def test_created_plan_evaluates(self, tmp_path):
        path = tmp_path / "starter.json"
        runner = CliRunner()
        assert runner.invoke(main, ["config", "create", str(path)]).exit_code == 0

        result = runner.invoke(main, ["evaluate", "-c", str(path), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["household_net_income"] == pytest.approx(4_000)
