"""
PURPOSE: Apply organisation policy floors on top of the selector's pick.

Rules, in order:
- Work-type minimum floor
- Coordination overhead (planning types with an overhead factor)
- Maximum reduction cap for restructuring
- Absolute operation-size floor for governed planning types

Governance only ever raises the headcount. When it does, the result for the
new headcount is taken from the tested window or simulated anew, and is
flagged with min_headcount_applied; min_headcount_value keeps the
work-type floor that was in force.
"""
import logging
from typing import Optional, Sequence

import numpy as np

from headcount_plan_internal.mvo.baseline import ceil_headcount
from headcount_plan_internal.mvo.candidate import simulate_candidate
from headcount_plan_internal.mvo.config import NUM_ITERATIONS
from headcount_plan_internal.mvo.models import WorkloadSpec
from headcount_plan_internal.mvo.policies import OperationSizePolicy, PlanningTypePolicy
from headcount_plan_internal.mvo.results import GovernanceOutcome, HeadcountTestResult

logger = logging.getLogger(__name__)


def governed_headcount(
    headcount: int,
    work_type_minimum: int = 1,
    planning_policy: Optional[PlanningTypePolicy] = None,
    size_policy: Optional[OperationSizePolicy] = None,
    existing_headcount: Optional[int] = None,
) -> int:
    """Headcount after every policy floor. The governed floor also needs the size policy."""
    adjusted = max(headcount, work_type_minimum)

    if planning_policy is None:
        return adjusted

    if planning_policy.overhead_factor:
        if planning_policy.overhead_factor <= 0:
            raise ValueError(f"overhead_factor must be positive, got {planning_policy.overhead_factor}")
        adjusted = ceil_headcount(adjusted * planning_policy.overhead_factor)

    if planning_policy.min_headcount_mode == "reduction" and planning_policy.max_reduction_percent:
        current = existing_headcount or adjusted
        min_allowed = ceil_headcount(current * (1 - planning_policy.max_reduction_percent))
        adjusted = max(adjusted, min_allowed)

    if planning_policy.min_headcount_mode == "governed" and size_policy is not None:
        adjusted = max(adjusted, size_policy.min_headcount_base)

    return adjusted


def apply_governance(
    selected: HeadcountTestResult,
    test_results: Sequence[HeadcountTestResult],
    spec: WorkloadSpec,
    planning_policy: Optional[PlanningTypePolicy] = None,
    size_policy: Optional[OperationSizePolicy] = None,
    work_type_minimum: int = 1,
    existing_headcount: Optional[int] = None,
    iterations: int = NUM_ITERATIONS,
    seed_sequence: Optional[np.random.SeedSequence] = None,
) -> GovernanceOutcome:
    """
    Raise the selected headcount to the policy floors.

    Args:
        selected: The selector's pick.
        test_results: Every result from the tested window.
        spec: The workload spec, for simulating a headcount outside the window.
        planning_policy / size_policy: Resolved operating-context policies.
        work_type_minimum: Floor from the work-type lookup.
        existing_headcount: Current headcount, used by the restructuring cap.
        iterations: Trials for a headcount that was not tested.
        seed_sequence: Parent SeedSequence of the run; a new child stream is spawned from it.

    Returns:
        GovernanceOutcome with the adjusted headcount, the (possibly new)
        selected result and the full results tuple, ordered by headcount.
    """
    adjusted = governed_headcount(
        selected.headcount,
        work_type_minimum=work_type_minimum,
        planning_policy=planning_policy,
        size_policy=size_policy,
        existing_headcount=existing_headcount,
    )
    results = list(test_results)

    if adjusted == selected.headcount:
        return GovernanceOutcome(adjusted_headcount=adjusted, selected=selected, test_results=tuple(results))

    logger.info("Governance raised headcount from %d to %d", selected.headcount, adjusted)
    existing = next((r for r in results if r.headcount == adjusted), None)
    if existing is not None:
        flagged = existing.with_min_headcount(work_type_minimum)
        results = [flagged if r is existing else r for r in results]
    else:
        child_seed = seed_sequence.spawn(1)[0] if seed_sequence is not None else None
        flagged = simulate_candidate(spec, adjusted, iterations=iterations, random_state=child_seed)
        flagged = flagged.with_min_headcount(work_type_minimum)
        results.append(flagged)
        results.sort(key=lambda r: r.headcount)

    return GovernanceOutcome(adjusted_headcount=adjusted, selected=flagged, test_results=tuple(results))
