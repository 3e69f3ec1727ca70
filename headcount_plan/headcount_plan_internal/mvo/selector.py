"""
PURPOSE: Pick the Minimum Viable Organization from a window of candidate headcounts.

Steps:
1. Baseline (optionally rescaled by the operation-size policy)
2. Candidate window around the baseline, sized by operation size
3. Simulate every candidate
4. Reject candidates over the risk threshold or over budget
5. Choose the survivor closest to the risk threshold, then cheapest, then smallest

This is a small grid search. It does not extrapolate beyond the window: an
under-provisioned spec yields a flagged fallback instead of an optimum.
"""
import logging
import threading
import warnings
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import numpy as np

from headcount_plan_internal.mvo.baseline import ceil_headcount, estimate_baseline
from headcount_plan_internal.mvo.candidate import simulate_candidate
from headcount_plan_internal.mvo.config import (
    DEFAULT_OPERATION_SIZE,
    MAX_WORKERS,
    MIN_TESTED_HEADCOUNT,
    NUM_ITERATIONS,
    RANDOM_SEED,
    WINDOW_OFFSETS,
    get_window_offsets,
)
from headcount_plan_internal.mvo.distributions import RandomSource, make_seed_sequence
from headcount_plan_internal.mvo.errors import NoFeasibleCandidateWarning, SimulationCancelledError
from headcount_plan_internal.mvo.models import Constraints, OperatingContext, WorkloadSpec
from headcount_plan_internal.mvo.policies import (
    OperationSizePolicy,
    PlanningTypePolicy,
    get_operation_size,
    get_planning_type,
)
from headcount_plan_internal.mvo.results import HeadcountTestResult, SelectionOutcome

logger = logging.getLogger(__name__)


def resolve_context(
    context: Optional[OperatingContext],
) -> Tuple[Optional[PlanningTypePolicy], Optional[OperationSizePolicy]]:
    """Look up both policies. Policy rules only apply when the context names both keys."""
    if context is None or not context.planning_type_key or not context.size_of_operation_key:
        return None, None
    return get_planning_type(context.planning_type_key), get_operation_size(context.size_of_operation_key)


def scale_baseline(baseline_count: int, size_policy: Optional[OperationSizePolicy]) -> int:
    if size_policy is None:
        return baseline_count
    return max(ceil_headcount(baseline_count * size_policy.productivity_scale), size_policy.min_headcount_base)


def candidate_window(baseline_count: int, operation_size: str = DEFAULT_OPERATION_SIZE) -> List[int]:
    """Every headcount to test, ascending: [baseline - lower, baseline + upper], floored at 1."""
    if operation_size not in WINDOW_OFFSETS:
        logger.warning("Unknown operation size %r, using %r window", operation_size, DEFAULT_OPERATION_SIZE)
    lower, upper = get_window_offsets(operation_size)
    start = max(MIN_TESTED_HEADCOUNT, baseline_count - lower)
    stop = max(start, baseline_count + upper)
    return list(range(start, stop + 1))


def rejection_reason(result: HeadcountTestResult, constraints: Constraints) -> Optional[str]:
    allowed = constraints.allowed_failure_risk_percent
    if result.failure_risk > allowed:
        return f"Failure risk {result.failure_risk:.1f}% exceeds threshold {allowed:g}%"
    if constraints.max_budget is not None and result.avg_cost > constraints.max_budget:
        return (
            f"Average cost RM{result.avg_cost:,.0f} exceeds budget RM{constraints.max_budget:,.0f}"
        )
    return None


def apply_rejections(results: Sequence[HeadcountTestResult], constraints: Constraints) -> List[HeadcountTestResult]:
    """Return new results with the rejection flags set."""
    flagged = []
    for result in results:
        reason = rejection_reason(result, constraints)
        flagged.append(result.with_rejection(reason) if reason else result)
    return flagged


def pick_candidate(
    results: Sequence[HeadcountTestResult],
    allowed_failure_risk: float,
) -> Tuple[HeadcountTestResult, bool]:
    """
    Choose among flagged results.

    Returns:
        (selected, fallback). fallback is True when every candidate was
        rejected and the last (largest) one is returned instead.
    """
    if not results:
        raise ValueError("results must not be empty")
    valid = [r for r in results if not r.rejected]
    if not valid:
        return results[-1], True
    selected = min(
        valid,
        key=lambda r: (abs(r.failure_risk - allowed_failure_risk), r.avg_cost, r.headcount),
    )
    return selected, False


def run_candidates(
    spec: WorkloadSpec,
    headcounts: Sequence[int],
    iterations: int,
    seed_sequence: np.random.SeedSequence,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[HeadcountTestResult]:
    """
    Simulate each headcount with its own child random stream.

    Child streams are spawned in headcount order before any work starts, so
    the results are the same inline or on a thread pool.
    """
    child_seeds = seed_sequence.spawn(len(headcounts))

    def run_one(headcount: int, child_seed: np.random.SeedSequence) -> HeadcountTestResult:
        if cancel_event is not None and cancel_event.is_set():
            raise SimulationCancelledError(f"Cancelled before simulating headcount {headcount}")
        return simulate_candidate(spec, headcount, iterations=iterations, random_state=child_seed)

    if not max_workers or max_workers <= 1:
        return [run_one(hc, seed) for hc, seed in zip(headcounts, child_seeds)]

    executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="mvo-candidate")
    try:
        futures = [executor.submit(run_one, hc, seed) for hc, seed in zip(headcounts, child_seeds)]
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


def select_mvo(
    spec: WorkloadSpec,
    operation_size: str = DEFAULT_OPERATION_SIZE,
    context: Optional[OperatingContext] = None,
    iterations: int = NUM_ITERATIONS,
    random_state: RandomSource = RANDOM_SEED,
    max_workers: Optional[int] = MAX_WORKERS,
    cancel_event: Optional[threading.Event] = None,
) -> SelectionOutcome:
    """
    Run the candidate grid search and select the MVO before governance.

    Args:
        spec: Workload inputs for the planning unit.
        operation_size: "small_lean", "medium_standard" (default) or "large_extended".
        context: Optional operating context; its size policy rescales the baseline.
        iterations: Trials per candidate.
        random_state: Seed or SeedSequence. Reuse the same SeedSequence for
            follow-up simulations (governance) to keep the run reproducible.
        max_workers: Run candidates on a thread pool of this size; None runs inline.
        cancel_event: When set, the run stops before the next candidate.

    Raises:
        InvalidSpecError: Required workload ranges missing (before any simulation).
        SimulationCancelledError: cancel_event was set mid-run.
    """
    baseline = estimate_baseline(spec)
    _, size_policy = resolve_context(context)
    baseline_count = scale_baseline(baseline.headcount, size_policy)

    headcounts = candidate_window(baseline_count, operation_size)
    logger.info(
        "Testing headcounts %d..%d around baseline %d (%d iterations each)",
        headcounts[0], headcounts[-1], baseline_count, iterations,
    )

    seed_sequence = make_seed_sequence(random_state)
    raw_results = run_candidates(spec, headcounts, iterations, seed_sequence, max_workers, cancel_event)
    results = apply_rejections(raw_results, spec.constraints)

    allowed = spec.constraints.allowed_failure_risk_percent
    selected, fallback = pick_candidate(results, allowed)
    if fallback:
        message = (
            f"No headcount in {headcounts[0]}..{headcounts[-1]} meets the "
            f"{allowed:g}% risk and budget constraints; falling back to {selected.headcount}"
        )
        logger.warning(message)
        warnings.warn(message, NoFeasibleCandidateWarning, stacklevel=2)
    else:
        logger.info("Selected headcount %d (failure risk %.1f%%)", selected.headcount, selected.failure_risk)

    return SelectionOutcome(
        baseline=baseline,
        baseline_count=baseline_count,
        test_results=tuple(results),
        selected=selected,
        fallback=fallback,
    )
