"""
Serialization module for NestEgg plans and results.

Purpose
-------
JSON persistence for plan files (household snapshot + mortgage
assumptions + goals) and JSON-safe views of engine results for the CLI
and other consumers.

Design Principles
-----------------
- Type-safe: plan files are validated through PlanConfig
- Human-readable: indented JSON, easy to edit by hand
- Lossless for results: the "never" state and infinite DTI map to null
  instead of NaN/Infinity, which JSON cannot represent
- Versioned: files carry a schema_version; mismatches warn

Example
-------
>>> from nestegg.serialization import load_plan, feasibility_to_dict
>>> plan = load_plan(Path("plan.json"))
>>> result = evaluate(plan.household.to_domain(), plan.mortgage.to_domain())
>>> json.dumps(feasibility_to_dict(result))
"""

from __future__ import annotations

import json
import math
import warnings
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from .config import PlanConfig
from .exceptions import SerializationError
from .feasibility import FeasibilityResult
from .growth import MonthsEstimate
from .retirement import FireProjection
from .types import FeasibilityResultDict, FireProjectionDict, MonthsEstimateDict

__all__ = [
    "SCHEMA_VERSION",
    "save_plan",
    "load_plan",
    "plan_to_dict",
    "months_to_dict",
    "feasibility_to_dict",
    "fire_to_dict",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "1.0.0"


# ---------------------------------------------------------------------------
# Plan Files
# ---------------------------------------------------------------------------

def plan_to_dict(plan: PlanConfig) -> Dict[str, Any]:
    """Convert a PlanConfig to a JSON-ready dict including schema_version."""
    data = plan.model_dump(mode="json")
    return {"schema_version": SCHEMA_VERSION, **data}


def save_plan(plan: PlanConfig, path: Path) -> None:
    """
    Write a plan to a JSON file, creating parent directories.

    Parameters
    ----------
    plan : PlanConfig
        Plan to persist.
    path : Path
        Destination file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(plan_to_dict(plan), f, indent=2, ensure_ascii=False)


def load_plan(path: Path) -> PlanConfig:
    """
    Load and validate a plan file.

    Raises
    ------
    SerializationError
        If the file is not valid JSON or does not match the plan schema.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SerializationError(f"Could not read plan file {path}: {e}") from e

    if not isinstance(data, dict):
        raise SerializationError(f"Plan file {path} must contain a JSON object")

    version = data.pop("schema_version", None)
    if version != SCHEMA_VERSION:
        warnings.warn(
            f"Plan file schema version {version!r} differs from current {SCHEMA_VERSION!r}. "
            f"Loading anyway; re-save the plan to upgrade it.",
            UserWarning,
            stacklevel=2,
        )

    try:
        return PlanConfig.model_validate(data)
    except PydanticValidationError as e:
        raise SerializationError(f"Invalid plan file {path}: {e}") from e


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def _finite_or_none(value: float):
    return value if math.isfinite(value) else None


def months_to_dict(estimate: MonthsEstimate) -> MonthsEstimateDict:
    """JSON-safe view of a MonthsEstimate (never -> nulls)."""
    return {
        "months": estimate.months,
        "whole_months": estimate.whole_months,
        "reached": estimate.reached,
        "reachable": estimate.is_reachable,
    }


def feasibility_to_dict(result: FeasibilityResult) -> FeasibilityResultDict:
    """JSON-safe view of a FeasibilityResult."""
    return {
        "household_net_income": result.household_net_income,
        "available_for_goal": result.available_for_goal,
        "max_affordable_price": result.max_affordable_price,
        "required_cash_for_target": result.required_cash_for_target,
        "missing_cash_for_target": result.missing_cash_for_target,
        "dti_for_target": _finite_or_none(result.dti_for_target),
        "has_enough_cash": result.has_enough_cash,
        "dti_ok": result.dti_ok,
        "fully_ready": result.fully_ready,
        "months_to_target": months_to_dict(result.months_to_target),
        "monthly_payment_for_target": result.monthly_payment_for_target,
        "dti_level": result.dti_level.value,
        "limiting_factor": result.limiting_factor.value,
        "max_by_cash": result.max_by_cash,
        "max_by_dti": result.max_by_dti,
        "max_mortgage_payment": result.max_mortgage_payment,
        "max_mortgage_principal": result.max_mortgage_principal,
    }


def fire_to_dict(projection: FireProjection) -> FireProjectionDict:
    """JSON-safe view of a FireProjection."""
    return {
        "fire_number": projection.fire_number,
        "annual_expenses": projection.annual_expenses,
        "monthly_savings": projection.monthly_savings,
        "time_to_fire": months_to_dict(projection.time_to_fire),
        "progress": projection.progress,
        "monthly_passive_income": projection.monthly_passive_income,
    }
