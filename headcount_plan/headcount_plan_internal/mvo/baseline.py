"""
PURPOSE: Deterministic, no-risk baseline headcount.

Uses only the most likely workload and productivity and the target
completion days. No randomness; identical specs give identical baselines.
This figure carries no risk buffer; the Monte Carlo candidates are compared
against it.
"""
import logging
import math

from headcount_plan_internal.mvo.config import AVAILABILITY_FACTOR
from headcount_plan_internal.mvo.errors import InvalidSpecError
from headcount_plan_internal.mvo.models import WorkloadSpec
from headcount_plan_internal.mvo.results import BaselineCalculation, BaselineHeadcount

logger = logging.getLogger(__name__)


def ceil_headcount(value: float) -> int:
    """ceil() for headcounts; 10 * 1.1 is 11 people, not 12."""
    return math.ceil(round(value, 9))


def require_workload_ranges(spec: WorkloadSpec) -> None:
    """Raise InvalidSpecError unless both required workload ranges are present."""
    missing = []
    if spec.total_work_units is None:
        missing.append("total_work_units")
    if spec.productivity_per_person_per_day is None:
        missing.append("productivity_per_person_per_day")
    if missing:
        raise InvalidSpecError(f"Missing required workload data: {', '.join(missing)}")


def estimate_baseline(spec: WorkloadSpec) -> BaselineHeadcount:
    """
    Compute the risk-free reference headcount.

    headcount = ceil(total_work_units.most_likely /
                     (productivity.most_likely * target_days * AVAILABILITY_FACTOR))

    Raises:
        InvalidSpecError: If a required range is missing, or the typical
            productivity is not positive (the formula is undefined).
    """
    require_workload_ranges(spec)

    total_workload = spec.total_work_units.most_likely
    avg_productivity = spec.productivity_per_person_per_day.most_likely
    target_days = spec.constraints.target_completion_days
    available_days = target_days * AVAILABILITY_FACTOR

    capacity_per_person = avg_productivity * available_days
    if capacity_per_person <= 0:
        raise InvalidSpecError(
            f"Typical productivity must be positive to estimate a baseline, got {avg_productivity}"
        )

    headcount = ceil_headcount(total_workload / capacity_per_person)

    formula = (
        f"{total_workload:g} units ÷ ({avg_productivity:g} units/person/day × "
        f"{available_days:.0f} working days)"
    )
    rationale = "\n".join([
        "Baseline Headcount (No-Risk) Calculation:",
        "",
        f"Total Work Units: {total_workload:,.0f}",
        f"Average Productivity: {avg_productivity:g} units/person/day",
        f"Target Duration: {target_days:g} days",
        f"Available Working Days: {available_days:.0f} days ({AVAILABILITY_FACTOR:.0%} availability)",
        "",
        "Formula: Total Workload ÷ (Average Productivity × Available Working Days)",
        "",
        f"Baseline Headcount = {total_workload:g} ÷ ({avg_productivity:g} × {available_days:.0f})",
        f"                   = {headcount} persons",
        "",
        "This is a deterministic estimate with NO RISK BUFFER.",
        "Monte Carlo simulation will add risk adjustment.",
    ])

    logger.debug("Baseline headcount %d from %s", headcount, formula)
    return BaselineHeadcount(
        headcount=headcount,
        calculation=BaselineCalculation(
            total_workload=total_workload,
            average_productivity=avg_productivity,
            available_working_days=available_days,
            formula=formula,
        ),
        rationale=rationale,
    )
