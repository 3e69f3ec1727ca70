"""
End-to-end MVO run: selection -> governance -> classification.

Usage:
python -m headcount_plan_internal.mvo.engine

PURPOSE:
    Single entry point for callers (wizard, API, reports). Returns an
    MVOResult value object; storage and rendering belong to the caller.
"""
import logging
import os
import threading
from typing import Optional

from headcount_plan_internal.mvo.config import (
    MAX_WORKERS,
    NUM_ITERATIONS,
    OPERATION_SIZE_LABELS,
    RANDOM_SEED,
)
from headcount_plan_internal.mvo.distributions import RandomSource, make_seed_sequence
from headcount_plan_internal.mvo.governance import apply_governance
from headcount_plan_internal.mvo.models import OperatingContext, WorkloadSpec
from headcount_plan_internal.mvo.results import Comparison, HeadcountTestResult, MVOResult, SelectionOutcome
from headcount_plan_internal.mvo.selector import resolve_context, select_mvo
from headcount_plan_internal.mvo.strategy import classify
from headcount_plan_internal.mvo.work_types import WorkTypeMinimumLookup, get_min_headcount

logger = logging.getLogger(__name__)


def build_comparison(selected: HeadcountTestResult, baseline_result: Optional[HeadcountTestResult]) -> Comparison:
    """Baseline vs MVO. An untested baseline counts as 100% risk with no deltas."""
    if baseline_result is None:
        return Comparison(baseline_risk=100.0, mvo_risk=selected.failure_risk, cost_delta=0.0, time_delta=0.0)
    return Comparison(
        baseline_risk=baseline_result.failure_risk,
        mvo_risk=selected.failure_risk,
        cost_delta=selected.avg_cost - baseline_result.avg_cost,
        time_delta=baseline_result.avg_duration - selected.avg_duration,
    )


class MVOEngine:
    """
    Minimum Viable Organization sizing engine.

    Holds the run settings (iterations, seed, worker count, work-type lookup).
    Each identify() call is independent; the engine keeps no state between
    runs, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        iterations: int = NUM_ITERATIONS,
        random_state: RandomSource = RANDOM_SEED,
        max_workers: Optional[int] = MAX_WORKERS,
        work_type_minimum_lookup: WorkTypeMinimumLookup = get_min_headcount,
    ):
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        self.iterations = iterations
        self.random_state = random_state
        self.max_workers = max_workers
        self.work_type_minimum_lookup = work_type_minimum_lookup

    def work_type_minimum(self, spec: WorkloadSpec, operation_size: str) -> int:
        if not spec.work_type_id:
            return 1
        size_label = OPERATION_SIZE_LABELS.get(operation_size, "Medium")
        return self.work_type_minimum_lookup(spec.work_type_id, size_label)

    def identify(
        self,
        spec: WorkloadSpec,
        operation_size: str = "medium_standard",
        context: Optional[OperatingContext] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> MVOResult:
        """
        Identify the MVO for one planning unit.

        Raises:
            InvalidSpecError: Required workload ranges are missing.
            UnknownPolicyError: The context names an unknown policy key.
            SimulationCancelledError: cancel_event was set mid-run.
        """
        seed_sequence = make_seed_sequence(self.random_state)
        planning_policy, size_policy = resolve_context(context)

        selection: SelectionOutcome = select_mvo(
            spec,
            operation_size=operation_size,
            context=context,
            iterations=self.iterations,
            random_state=seed_sequence,
            max_workers=self.max_workers,
            cancel_event=cancel_event,
        )

        governance = apply_governance(
            selection.selected,
            selection.test_results,
            spec,
            planning_policy=planning_policy,
            size_policy=size_policy,
            work_type_minimum=self.work_type_minimum(spec, operation_size),
            existing_headcount=context.existing_headcount if context else None,
            iterations=self.iterations,
            seed_sequence=seed_sequence,
        )
        selected = governance.selected
        allowed = spec.constraints.allowed_failure_risk_percent

        classification = classify(
            spec,
            selection.baseline,
            selected,
            governance.test_results,
            allowed,
            fallback=selection.fallback,
            baseline_count=selection.baseline_count,
        )

        baseline_result = next(
            (r for r in governance.test_results if r.headcount == selection.baseline_count), None
        )
        run_warnings = ()
        if selection.fallback:
            run_warnings = (
                f"No tested headcount met the {allowed:g}% risk and budget constraints; "
                f"{selection.selected.headcount} is the largest tested option.",
            )

        logger.info(
            "MVO %d (baseline %d, strategy %s, fallback=%s)",
            selected.headcount, selection.baseline_count, classification.strategy.value, selection.fallback,
        )
        return MVOResult(
            recommended_headcount=selected.headcount,
            baseline_headcount=selection.baseline_count,
            baseline=selection.baseline,
            test_results=governance.test_results,
            selected_result=selected,
            strategy=classification.strategy,
            explanation=classification.explanation,
            suggestions=classification.suggestions,
            comparison=build_comparison(selected, baseline_result),
            fallback=selection.fallback,
            warnings=run_warnings,
        )


def identify_mvo(
    spec: WorkloadSpec,
    operation_size: str = "medium_standard",
    context: Optional[OperatingContext] = None,
    iterations: int = NUM_ITERATIONS,
    random_state: RandomSource = RANDOM_SEED,
    max_workers: Optional[int] = MAX_WORKERS,
    cancel_event: Optional[threading.Event] = None,
) -> MVOResult:
    """Functional wrapper around MVOEngine.identify()."""
    engine = MVOEngine(iterations=iterations, random_state=random_state, max_workers=max_workers)
    return engine.identify(spec, operation_size=operation_size, context=context, cancel_event=cancel_event)


if __name__ == "__main__":
    import json
    from headcount_plan_internal.mvo.models import DEFAULT_WORKLOAD_SPEC

    log_level_name = os.environ.get("HEADCOUNT_PLAN_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=log_level_name, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    result = identify_mvo(DEFAULT_WORKLOAD_SPEC, random_state=42)
    print(result.explanation)
    print(json.dumps(result.to_dict()["comparison"], indent=2))
