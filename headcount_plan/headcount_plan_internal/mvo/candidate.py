"""
PURPOSE: Monte Carlo simulation of one candidate headcount.

Runs N independent trials (default 5,000). Each trial:
- Samples workload and productivity
- Samples absenteeism, turnover and learning-curve impact (percent -> fraction)
- Degrades productivity by absenteeism, learning curve x turnover and day-to-day noise
- Computes days needed and the cost of staffing the candidate for that long
- Checks the deadline and the budget

SINGLE RESPONSIBILITY:
- Produce the duration/cost distribution and derived probabilities for one headcount
- Does NOT reject candidates; the selector decides
- Does NOT modify the input spec

Trials are independent, so they are drawn as numpy arrays rather than in a
Python loop. A trial whose effective capacity is zero or negative cannot
finish: its duration and cost are +inf.
"""
import logging
import math

import numpy as np

from headcount_plan_internal.mvo.baseline import require_workload_ranges
from headcount_plan_internal.mvo.config import (
    HOURS_PER_MONTH,
    MEDIUM_RISK_MULTIPLIER,
    NOISE_HIGH,
    NOISE_LOW,
    NUM_ITERATIONS,
    WORKING_DAYS_PER_MONTH,
)
from headcount_plan_internal.mvo.distributions import RandomSource, TriangularSampler
from headcount_plan_internal.mvo.models import WorkloadSpec
from headcount_plan_internal.mvo.results import HeadcountTestResult, RiskLevel

logger = logging.getLogger(__name__)

PERCENTILES = (0.5, 0.75, 0.9)


def percentile_index(count: int, percentile: float) -> int:
    """Index of a percentile in a sorted array of `count` items: floor(count * p), clamped."""
    index = int(math.floor(count * percentile))
    return max(0, min(index, count - 1))


def classify_risk(failure_risk: float, allowed_failure_risk: float) -> RiskLevel:
    if failure_risk <= allowed_failure_risk:
        return RiskLevel.LOW
    if failure_risk <= allowed_failure_risk * MEDIUM_RISK_MULTIPLIER:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def _mean(values: np.ndarray) -> float:
    # Any infeasible trial makes the mean infinite.
    if np.isinf(values).any():
        return math.inf
    return float(np.mean(values))


def simulate_candidate(
    spec: WorkloadSpec,
    headcount: int,
    iterations: int = NUM_ITERATIONS,
    random_state: RandomSource = None,
) -> HeadcountTestResult:
    """
    Simulate `iterations` trials of staffing the workload with `headcount` people.

    Args:
        spec: Workload, people-risk, cost and constraint inputs.
        headcount: Candidate headcount (>= 1).
        iterations: Number of independent trials (>= 1).
        random_state: Seed, SeedSequence or Generator for reproducible runs.

    Returns:
        HeadcountTestResult with duration/cost statistics and probabilities (percent).

    Raises:
        InvalidSpecError: If workload or productivity ranges are missing.
        ValueError: If headcount or iterations is below 1.
    """
    require_workload_ranges(spec)
    if headcount < 1:
        raise ValueError(f"headcount must be >= 1, got {headcount}")
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")

    sampler = TriangularSampler(random_state)
    risks = spec.people_risk_factors
    costs_in = spec.cost_variables
    constraints = spec.constraints
    n = iterations

    workload = sampler.sample_many(spec.total_work_units, n)
    productivity = sampler.sample_many(spec.productivity_per_person_per_day, n)
    absenteeism = sampler.sample_fraction(risks.absenteeism, n)
    turnover = sampler.sample_fraction(risks.turnover, n)
    learning_curve = sampler.sample_fraction(risks.learning_curve, n)

    productivity = productivity * (1 - absenteeism)
    productivity = productivity * (1 - learning_curve * turnover)
    productivity = productivity * sampler.uniform(NOISE_LOW, NOISE_HIGH, n)

    effective_headcount = headcount * (1 - absenteeism)
    daily_output = effective_headcount * productivity
    feasible = daily_output > 0
    with np.errstate(divide="ignore", invalid="ignore"):
        durations = np.where(feasible, workload / np.where(feasible, daily_output, 1.0), np.inf)

    salary = sampler.sample_many(costs_in.monthly_salary, n)
    overtime_hours = sampler.sample_many(costs_in.overtime_hours, n)
    months_needed = durations / WORKING_DAYS_PER_MONTH
    with np.errstate(invalid="ignore"):
        base_cost = headcount * salary * months_needed
        overtime_cost = (
            headcount * overtime_hours * (salary / HOURS_PER_MONTH)
            * costs_in.overtime_multiplier * months_needed
        )
        training_cost = headcount * costs_in.training_cost_per_hire * turnover
        costs = base_cost + overtime_cost + training_cost
    # 0 * inf is nan (zero salary on an infeasible trial); the trial still never ends.
    costs = np.where(feasible, costs, np.inf)

    deadline_met_count = int(np.count_nonzero(durations <= constraints.target_completion_days))
    if constraints.max_budget is None:
        within_budget_count = n
    else:
        within_budget_count = int(np.count_nonzero(costs <= constraints.max_budget))

    durations = np.sort(durations)
    costs = np.sort(costs)
    p50, p75, p90 = (float(durations[percentile_index(n, p)]) for p in PERCENTILES)

    deadline_met_probability = deadline_met_count / n * 100
    failure_risk = 100 - deadline_met_probability
    within_budget_probability = within_budget_count / n * 100

    result = HeadcountTestResult(
        headcount=headcount,
        iterations=n,
        avg_duration=_mean(durations),
        min_duration=float(durations[0]),
        max_duration=float(durations[-1]),
        p50_duration=p50,
        p75_duration=p75,
        p90_duration=p90,
        avg_cost=_mean(costs),
        min_cost=float(costs[0]),
        max_cost=float(costs[-1]),
        deadline_met_probability=deadline_met_probability,
        failure_risk=failure_risk,
        within_budget_probability=within_budget_probability,
        risk_level=classify_risk(failure_risk, constraints.allowed_failure_risk_percent),
    )
    logger.debug(
        "Candidate %d: failure_risk=%.1f%% avg_duration=%.1f avg_cost=%.2f",
        headcount, failure_risk, result.avg_duration, result.avg_cost,
    )
    return result
