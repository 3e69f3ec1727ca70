"""
PURPOSE: Planning-type and operation-size policy tables.

The engine reads these tables; it never edits them. Callers that maintain
their own tables can pass PlanningTypePolicy / OperationSizePolicy values
directly to the governance stage.
"""
from dataclasses import dataclass
from typing import Dict, Literal, Optional

from headcount_plan_internal.mvo.errors import UnknownPolicyError

MinHeadcountMode = Literal["lean", "governed", "reduction"]


@dataclass(frozen=True)
class PlanningTypePolicy:
    label: str
    description: str
    horizon_months: int
    variance_multiplier: float
    min_headcount_mode: MinHeadcountMode
    overhead_factor: Optional[float] = None
    max_reduction_percent: Optional[float] = None


@dataclass(frozen=True)
class OperationSizePolicy:
    label: str
    description: str
    workload_scale: float
    productivity_scale: float
    min_headcount_base: int


PLANNING_TYPES: Dict[str, PlanningTypePolicy] = {
    "NEW_PROJECT": PlanningTypePolicy(
        label="New Project",
        description="Setting up a new project with temporary or dedicated resources.",
        horizon_months=3,
        variance_multiplier=1.2,
        min_headcount_mode="lean",
    ),
    "NEW_FUNCTION": PlanningTypePolicy(
        label="New Function",
        description="Creating a new permanent function or department from scratch.",
        horizon_months=12,
        variance_multiplier=1.0,
        min_headcount_mode="governed",
    ),
    "NEW_BUSINESS_UNIT": PlanningTypePolicy(
        label="New Business Unit",
        description="Launching a new business unit with multiple functions and teams.",
        horizon_months=24,
        variance_multiplier=1.3,
        min_headcount_mode="governed",
        overhead_factor=1.1,
    ),
    "RESTRUCTURING": PlanningTypePolicy(
        label="Restructuring",
        description="Reorganizing an existing function to improve efficiency or reduce costs.",
        horizon_months=12,
        variance_multiplier=1.1,
        min_headcount_mode="reduction",
        max_reduction_percent=0.30,
    ),
}

OPERATION_SIZES: Dict[str, OperationSizePolicy] = {
    "SMALL_LEAN": OperationSizePolicy(
        label="Small / Lean (minimum team)",
        description="For pilot projects, small sites, low workload or tight budget situations.",
        workload_scale=0.7,
        productivity_scale=1.0,
        min_headcount_base=1,
    ),
    "MEDIUM_STANDARD": OperationSizePolicy(
        label="Medium / Standard (normal operations)",
        description="For regular daily operations with a balanced workload.",
        workload_scale=1.0,
        productivity_scale=1.0,
        min_headcount_base=2,
    ),
    "LARGE_EXTENDED": OperationSizePolicy(
        label="Large / Extended (full scale / growth)",
        description="For big projects, multiple locations, high demand or rapid expansion.",
        workload_scale=1.4,
        productivity_scale=0.9,
        min_headcount_base=3,
    ),
}


def get_planning_type(key: str) -> PlanningTypePolicy:
    try:
        return PLANNING_TYPES[key]
    except KeyError:
        raise UnknownPolicyError(f"Unknown planning type key: {key!r}") from None


def get_operation_size(key: str) -> OperationSizePolicy:
    try:
        return OPERATION_SIZES[key]
    except KeyError:
        raise UnknownPolicyError(f"Unknown operation size key: {key!r}") from None


def map_planning_type_to_key(label: str) -> str:
    """Map a display label to its planning-type key. Unknown labels map to NEW_FUNCTION."""
    for key, policy in PLANNING_TYPES.items():
        if policy.label == label:
            return key
    return "NEW_FUNCTION"


def map_operation_size_to_key(label: str) -> str:
    """Map a display label to its operation-size key. Unknown labels map to MEDIUM_STANDARD."""
    for key, policy in OPERATION_SIZES.items():
        if policy.label == label:
            return key
    return "MEDIUM_STANDARD"
