"""
Command-Line Interface for NestEgg.

Purpose
-------
Thin consumer of the engine: loads a plan file, calls the pure
functions and prints the results. No formula lives here.

Commands
--------
- evaluate: House-purchase feasibility for a plan
- fire: Time to financial independence
- goals: Required contributions and projections for dated goals
- emergency: Emergency fund recommendation and status
- delay: Months an expense delays the main goal
- forecast: Year-by-year investment growth
- rates: Rate-environment classification
- payment: Mortgage payment (and optional schedule)
- config: Validate or create plan files

Example Usage
-------------
    $ nestegg config create plan.json
    $ nestegg evaluate --config plan.json
    $ nestegg evaluate --config plan.json --json
    $ nestegg payment --principal 210000 --rate 0.03 --years 30
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from .config import AppSettings, HouseholdConfig, MortgageSettings, PlanConfig
from .exceptions import NestEggError
from .utils import format_currency, format_percentage

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def _configure_logging(settings: AppSettings, debug: bool) -> None:
    level = "DEBUG" if (debug or settings.debug) else settings.log_level
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(config: Path) -> PlanConfig:
    from .serialization import load_plan

    try:
        return load_plan(config)
    except NestEggError as e:
        click.echo(f"Error loading plan: {e}", err=True)
        sys.exit(1)


def _months_text(estimate) -> str:
    if not estimate.is_reachable:
        return "never"
    if estimate.reached:
        return "reached"
    return f"{estimate.whole_months} months"


def _print_table(ctx: click.Context, title: str, rows) -> None:
    console: Console = ctx.obj["console"]
    table = Table(title=title, show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for label, value in rows:
        table.add_row(label, value)
    console.print(table)


@click.group()
@click.version_option(version=__version__, prog_name="nestegg")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, quiet: bool, debug: bool) -> None:
    """
    NestEgg - household feasibility and projection engine.

    Answers "can we buy this house, and when?", "when can we retire?"
    and "how much must we save for this goal?" from a plan file.

    Use 'nestegg COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    _configure_logging(settings, debug)
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = Console()


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to plan file (JSON)"
)
@click.option("--price", type=float, default=None, help="Override the target house price")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def evaluate(ctx: click.Context, config: Path, price: Optional[float], as_json: bool) -> None:
    """
    Evaluate house-purchase feasibility.

    Example:
        nestegg evaluate -c plan.json --price 350000
    """
    from .feasibility import evaluate as run_evaluation
    from .serialization import feasibility_to_dict

    plan = _load(config)
    mortgage = plan.mortgage
    if price is not None:
        mortgage = mortgage.model_copy(update={"house_price_target": price})

    try:
        result = run_evaluation(plan.household.to_domain(), mortgage.to_domain())
    except NestEggError as e:
        click.echo(f"Error during evaluation: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(feasibility_to_dict(result), indent=2))
        return

    sym = ctx.obj["settings"].currency_symbol
    _print_table(ctx, f"Feasibility: {format_currency(mortgage.house_price_target, sym)}", [
        ("Household income", format_currency(result.household_net_income, sym)),
        ("Available for goal", format_currency(result.available_for_goal, sym)),
        ("Max price (savings)", format_currency(result.max_by_cash, sym)),
        ("Max price (income)", format_currency(result.max_by_dti, sym)),
        ("Max affordable price", format_currency(result.max_affordable_price, sym)),
        ("Required cash", format_currency(result.required_cash_for_target, sym)),
        ("Missing cash", format_currency(result.missing_cash_for_target, sym)),
        ("Monthly payment", format_currency(result.monthly_payment_for_target, sym, decimals=2)),
        ("DTI for target", format_percentage(result.dti_for_target)),
        ("DTI level", result.dti_level.value),
        ("Fully ready", "yes" if result.fully_ready else "no"),
        ("Limiting factor", result.limiting_factor.value),
        ("Time to target", _months_text(result.months_to_target)),
    ])


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to plan file (JSON)"
)
@click.option("--return-rate", type=float, default=None, help="Annual real return (decimal)")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def fire(ctx: click.Context, config: Path, return_rate: Optional[float], as_json: bool) -> None:
    """
    Project the time to financial independence (FIRE).

    Example:
        nestegg fire -c plan.json --return-rate 0.05
    """
    from .retirement import project_fire
    from .serialization import fire_to_dict

    plan = _load(config)
    household = plan.household
    try:
        projection = project_fire(
            household.total_income,
            household.monthly_expenses,
            household.liquid_savings,
            annual_return=plan.fire.annual_return if return_rate is None else return_rate,
            safe_withdrawal_rate=plan.fire.safe_withdrawal_rate,
        )
    except NestEggError as e:
        click.echo(f"Error during projection: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(fire_to_dict(projection), indent=2))
        return

    sym = ctx.obj["settings"].currency_symbol
    reached_on = projection.time_to_fire.reached_on(date.today())
    _print_table(ctx, "FIRE Projection", [
        ("FIRE number", format_currency(projection.fire_number, sym)),
        ("Monthly savings", format_currency(projection.monthly_savings, sym)),
        ("Progress", format_percentage(projection.progress)),
        ("Passive income / month", format_currency(projection.monthly_passive_income, sym)),
        ("Time to FIRE", _months_text(projection.time_to_fire)),
        ("FIRE date", reached_on.isoformat() if reached_on else "n/a"),
    ])


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to plan file (JSON)"
)
@click.pass_context
def goals(ctx: click.Context, config: Path) -> None:
    """
    Show required monthly contributions for every goal in a plan.

    Example:
        nestegg goals -c plan.json
    """
    from .feasibility import available_monthly
    from .goals import project_goal

    plan = _load(config)
    settings = ctx.obj["settings"]
    spare = available_monthly(plan.household.to_domain())
    if not plan.goals:
        click.echo("No goals defined in plan")
        return

    today = date.today()
    table = Table(title="Goals", show_header=True)
    for column in ("Goal", "Remaining", "Months left", "Required / month", "On track", "Score"):
        table.add_column(column)
    for goal_config in plan.goals:
        projection = project_goal(goal_config.to_domain(), today, annual_rate=settings.goal_apy)
        table.add_row(
            goal_config.name,
            format_currency(projection.goal.remaining, settings.currency_symbol),
            str(projection.months_remaining),
            format_currency(projection.required_contribution, settings.currency_symbol, decimals=2),
            "yes" if projection.on_track else "no",
            str(int(projection.feasibility(spare))),
        )
    ctx.obj["console"].print(table)


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to plan file (JSON)"
)
@click.pass_context
def emergency(ctx: click.Context, config: Path) -> None:
    """
    Recommend an emergency fund size for the household.

    Example:
        nestegg emergency -c plan.json
    """
    from .reserves import emergency_fund_status, recommend_emergency_fund

    plan = _load(config)
    household = plan.household
    recommendation = recommend_emergency_fund(
        household.fixed_costs, household.household_size, household.variable_income
    )
    status = emergency_fund_status(household.liquid_savings, plan.mortgage.emergency_fund_reserve)

    sym = ctx.obj["settings"].currency_symbol
    _print_table(ctx, "Emergency Fund", [
        ("Recommended minimum", format_currency(recommendation.minimum, sym)),
        ("Recommended maximum", format_currency(recommendation.maximum, sym)),
        ("Risk multiplier", f"x{recommendation.multiplier:g}"),
        ("Current reserve", format_currency(status.current, sym)),
        ("Funded", format_percentage(status.progress)),
    ])


@main.command()
@click.option("--expense", type=float, required=True, help="One-off expense amount")
@click.option("--savings", type=float, required=True, help="Average monthly savings")
@click.option("--gap", type=float, required=True, help="Cash still missing for the main goal")
@click.pass_context
def delay(ctx: click.Context, expense: float, savings: float, gap: float) -> None:
    """
    Estimate how many months an expense delays the main goal.

    Example:
        nestegg delay --expense 5000 --savings 1000 --gap 50000
    """
    from .goals import delay_months

    try:
        estimate = delay_months(expense, savings, gap)
    except NestEggError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not estimate.is_reachable:
        click.echo("Delay: unbounded (no savings capacity)")
    else:
        click.echo(f"Delay: {estimate.whole_months} months")


@main.command()
@click.option("--principal", "-p", type=float, required=True, help="Loan amount")
@click.option("--rate", "-r", type=float, required=True, help="Annual rate as a decimal (0.03)")
@click.option("--years", "-y", type=int, required=True, help="Loan term in years")
@click.option(
    "--schedule",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the amortization schedule to this CSV file"
)
@click.pass_context
def payment(
    ctx: click.Context,
    principal: float,
    rate: float,
    years: int,
    schedule: Optional[Path],
) -> None:
    """
    Compute the monthly payment of a fixed-rate mortgage.

    Example:
        nestegg payment -p 210000 -r 0.03 -y 30 --schedule schedule.csv
    """
    from .amortization import amortization_schedule, monthly_payment, total_interest

    try:
        amount = monthly_payment(principal, rate, years)
        interest = total_interest(principal, rate, years)
    except NestEggError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    sym = ctx.obj["settings"].currency_symbol
    click.echo(f"Monthly payment: {format_currency(amount, sym, decimals=2)}")
    click.echo(f"Total interest: {format_currency(interest, sym, decimals=2)}")

    if schedule:
        schedule.parent.mkdir(parents=True, exist_ok=True)
        amortization_schedule(principal, rate, years).to_csv(schedule)
        if not ctx.obj["quiet"]:
            click.echo(f"Schedule saved to {schedule}")


@main.command()
@click.option("--principal", "-p", type=float, required=True, help="Balance today")
@click.option("--contribution", type=float, default=0.0, help="Monthly contribution")
@click.option("--rate", "-r", type=float, default=None, help="Annual return (decimal)")
@click.option("--years", "-y", type=int, default=None, help="Forecast horizon in years")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the yearly table to this CSV file"
)
@click.pass_context
def forecast(
    ctx: click.Context,
    principal: float,
    contribution: float,
    rate: Optional[float],
    years: Optional[int],
    output: Optional[Path],
) -> None:
    """
    Forecast an investment balance year by year.

    Example:
        nestegg forecast -p 10000 --contribution 500 -r 0.07 -y 25
    """
    from .constants import DEFAULT_FORECAST_RETURN, DEFAULT_FORECAST_YEARS
    from .forecast import project_growth

    try:
        frame = project_growth(
            principal,
            contribution,
            DEFAULT_FORECAST_RETURN if rate is None else rate,
            DEFAULT_FORECAST_YEARS if years is None else years,
            start=date.today(),
        )
    except NestEggError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(output)
        if not ctx.obj["quiet"]:
            click.echo(f"Forecast saved to {output}")
        return

    sym = ctx.obj["settings"].currency_symbol
    table = Table(title="Investment Forecast", show_header=True)
    for column in ("Year", "Balance", "Contributions", "Growth"):
        table.add_column(column, justify="right")
    for year, row in frame.iterrows():
        table.add_row(
            str(year),
            format_currency(row["balance"], sym),
            format_currency(row["contributions"], sym),
            format_currency(row["growth"], sym),
        )
    ctx.obj["console"].print(table)


@main.command()
@click.argument("reference_rate", type=float)
def rates(reference_rate: float) -> None:
    """
    Classify a reference mortgage rate (decimal, e.g. 0.028).

    Example:
        nestegg rates 0.028
    """
    from .market import classify_rate_environment, rate_advice

    try:
        environment = classify_rate_environment(reference_rate)
        advice = rate_advice(reference_rate)
    except NestEggError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Rate: {format_percentage(reference_rate, decimals=2)}")
    click.echo(f"Market: {environment.value}")
    click.echo(f"Advice: {advice.value}")


@main.group()
def config() -> None:
    """
    Plan file management commands.
    """
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def config_validate(ctx: click.Context, config_file: Path) -> None:
    """
    Validate a plan file.

    Example:
        nestegg config validate plan.json
    """
    plan = _load(config_file)
    try:
        plan.household.to_domain()
        plan.mortgage.to_domain()
        for goal in plan.goals:
            goal.to_domain()
    except NestEggError as e:
        click.echo(f"Plan validation failed: {e}", err=True)
        sys.exit(1)

    click.echo("Plan is valid")
    if not ctx.obj["quiet"]:
        click.echo(f"Income streams: {len(plan.household.income_streams)}")
        click.echo(f"Goals: {len(plan.goals)}")


@config.command("create")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.pass_context
def config_create(ctx: click.Context, output_file: Path) -> None:
    """
    Create a starter plan file.

    Example:
        nestegg config create plan.json
    """
    from .serialization import save_plan

    plan = PlanConfig(
        name="Starter plan",
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
    )
    save_plan(plan, output_file)
    if not ctx.obj["quiet"]:
        click.echo(f"Created plan file: {output_file}")


@main.command()
def info() -> None:
    """
    Display package and dependency versions.
    """
    import numpy
    import pandas
    import pydantic

    click.echo(f"NestEgg Version: {__version__}")
    click.echo(f"Python: {sys.version.split()[0]}")
    for name, module in (("numpy", numpy), ("pandas", pandas), ("pydantic", pydantic), ("click", click)):
        click.echo(f"{name}: {getattr(module, '__version__', 'installed')}")


if __name__ == "__main__":
    main()
