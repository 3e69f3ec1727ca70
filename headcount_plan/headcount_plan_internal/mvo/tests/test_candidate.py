"""
PURPOSE: Unit tests for the single-candidate Monte Carlo simulation.

Tests verify:
- Statistics are internally consistent (min <= p50 <= p75 <= p90 <= max)
- Probabilities are percentages and failure risk is their complement
- More headcount never increases duration or failure risk; cost never decreases
- Zero-capacity trials are infeasible (+inf) instead of raising
- Small iteration counts clamp percentile indices
"""

import math
import unittest

from headcount_plan_internal.mvo.candidate import (
    classify_risk,
    percentile_index,
    simulate_candidate,
)
from headcount_plan_internal.mvo.errors import InvalidSpecError
from headcount_plan_internal.mvo.models import (
    DEFAULT_WORKLOAD_SPEC,
    Constraints,
    PeopleRiskFactors,
    RangeValue,
)
from headcount_plan_internal.mvo.results import RiskLevel


def _spec_with_absenteeism(percent):
    risks = DEFAULT_WORKLOAD_SPEC.people_risk_factors
    return DEFAULT_WORKLOAD_SPEC.model_copy(update={
        "people_risk_factors": PeopleRiskFactors(
            absenteeism=RangeValue.constant(percent),
            turnover=risks.turnover,
            learning_curve=risks.learning_curve,
        ),
    })


class TestSimulateCandidate(unittest.TestCase):

    def setUp(self):
        self.spec = DEFAULT_WORKLOAD_SPEC

    def test_runs_requested_iterations(self):
        result = simulate_candidate(self.spec, 2, iterations=500, random_state=42)
        self.assertEqual(result.headcount, 2)
        self.assertEqual(result.iterations, 500)
        self.assertFalse(result.rejected)
        self.assertFalse(result.min_headcount_applied)

    def test_duration_statistics_are_ordered(self):
        result = simulate_candidate(self.spec, 3, iterations=2000, random_state=1)
        self.assertLessEqual(result.min_duration, result.p50_duration)
        self.assertLessEqual(result.p50_duration, result.p75_duration)
        self.assertLessEqual(result.p75_duration, result.p90_duration)
        self.assertLessEqual(result.p90_duration, result.max_duration)
        self.assertLessEqual(result.min_duration, result.avg_duration)
        self.assertLessEqual(result.avg_duration, result.max_duration)
        self.assertLessEqual(result.min_cost, result.avg_cost)
        self.assertLessEqual(result.avg_cost, result.max_cost)

    def test_probabilities_are_percentages(self):
        result = simulate_candidate(self.spec, 2, iterations=1000, random_state=3)
        self.assertGreaterEqual(result.deadline_met_probability, 0.0)
        self.assertLessEqual(result.deadline_met_probability, 100.0)
        self.assertAlmostEqual(result.failure_risk, 100.0 - result.deadline_met_probability)
        self.assertEqual(result.success_rate, result.deadline_met_probability)
        # No max_budget: every trial is within budget.
        self.assertEqual(result.within_budget_probability, 100.0)

    def test_same_seed_is_reproducible(self):
        result1 = simulate_candidate(self.spec, 4, iterations=300, random_state=99)
        result2 = simulate_candidate(self.spec, 4, iterations=300, random_state=99)
        self.assertEqual(result1, result2)

    def test_monotonic_in_headcount(self):
        """With common random numbers, duration and risk fall and cost rises with headcount."""
        results = [simulate_candidate(self.spec, hc, iterations=3000, random_state=7) for hc in range(1, 8)]
        for smaller, larger in zip(results, results[1:]):
            self.assertLess(larger.avg_duration, smaller.avg_duration)
            self.assertLessEqual(larger.failure_risk, smaller.failure_risk)
            self.assertGreaterEqual(larger.avg_cost, smaller.avg_cost)

    def test_monotonic_in_headcount_with_independent_streams(self):
        """Independent streams still order averages when the headcounts are far apart."""
        small = simulate_candidate(self.spec, 1, iterations=5000, random_state=11)
        large = simulate_candidate(self.spec, 4, iterations=5000, random_state=12)
        self.assertLess(large.avg_duration, small.avg_duration)
        self.assertLessEqual(large.failure_risk, small.failure_risk)

    def test_one_person_misses_deadline(self):
        # About 116 days on average against a 90 day target.
        result = simulate_candidate(self.spec, 1, iterations=2000, random_state=5)
        self.assertGreater(result.failure_risk, 50.0)
        self.assertEqual(result.risk_level, RiskLevel.HIGH)

    def test_large_team_meets_deadline(self):
        result = simulate_candidate(self.spec, 6, iterations=2000, random_state=5)
        self.assertEqual(result.failure_risk, 0.0)
        self.assertEqual(result.risk_level, RiskLevel.LOW)

    def test_deterministic_inputs(self):
        """With zero-width ranges the only randomness is the day-to-day noise band."""
        spec = DEFAULT_WORKLOAD_SPEC.model_copy(update={
            "total_work_units": RangeValue.constant(1000),
            "productivity_per_person_per_day": RangeValue.constant(10),
            "people_risk_factors": PeopleRiskFactors(
                absenteeism=RangeValue.constant(0),
                turnover=RangeValue.constant(0),
                learning_curve=RangeValue.constant(0),
            ),
        })
        result = simulate_candidate(spec, 2, iterations=1000, random_state=0)
        # 1000 / (2 * 10 * noise) with noise in [0.9, 1.1)
        self.assertGreater(result.min_duration, 1000 / 22 - 1e-9)
        self.assertLessEqual(result.max_duration, 1000 / 18 + 1e-9)

    def test_cost_formula_without_noise_in_costs(self):
        spec = DEFAULT_WORKLOAD_SPEC.model_copy(update={
            "total_work_units": RangeValue.constant(1000),
            "productivity_per_person_per_day": RangeValue.constant(10),
            "people_risk_factors": PeopleRiskFactors(
                absenteeism=RangeValue.constant(0),
                turnover=RangeValue.constant(10),
                learning_curve=RangeValue.constant(0),
            ),
            "cost_variables": DEFAULT_WORKLOAD_SPEC.cost_variables.model_copy(update={
                "monthly_salary": RangeValue.constant(4400),
                "overtime_hours": RangeValue.constant(0),
            }),
        })
        result = simulate_candidate(spec, 2, iterations=200, random_state=0)
        # cost = hc * salary * days / 22 + hc * training * turnover
        #      = 2 * 4400 * days / 22 + 2 * 2000 * 0.1 = 400 * days + 400
        self.assertAlmostEqual(result.min_cost, 400 * result.min_duration + 400, places=6)
        self.assertAlmostEqual(result.max_cost, 400 * result.max_duration + 400, places=6)

    def test_budget_probability(self):
        spec = DEFAULT_WORKLOAD_SPEC.model_copy(update={
            "constraints": Constraints(target_completion_days=90, max_budget=1.0, allowed_failure_risk_percent=15),
        })
        result = simulate_candidate(spec, 3, iterations=500, random_state=2)
        self.assertEqual(result.within_budget_probability, 0.0)

    def test_zero_capacity_is_infeasible_not_an_error(self):
        result = simulate_candidate(_spec_with_absenteeism(100), 3, iterations=100, random_state=0)
        self.assertEqual(result.failure_risk, 100.0)
        self.assertTrue(math.isinf(result.avg_duration))
        self.assertTrue(math.isinf(result.p50_duration))
        self.assertTrue(math.isinf(result.avg_cost))

    def test_single_iteration_percentiles_clamp(self):
        result = simulate_candidate(self.spec, 2, iterations=1, random_state=0)
        self.assertEqual(result.p50_duration, result.min_duration)
        self.assertEqual(result.p90_duration, result.max_duration)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            simulate_candidate(self.spec, 0, iterations=10)
        with self.assertRaises(ValueError):
            simulate_candidate(self.spec, 2, iterations=0)

    def test_missing_ranges_raise_before_simulating(self):
        spec = DEFAULT_WORKLOAD_SPEC.model_copy(update={"total_work_units": None})
        with self.assertRaises(InvalidSpecError):
            simulate_candidate(spec, 2, iterations=10)


class TestHelpers(unittest.TestCase):

    def test_percentile_index(self):
        self.assertEqual(percentile_index(5000, 0.5), 2500)
        self.assertEqual(percentile_index(5000, 0.9), 4500)
        self.assertEqual(percentile_index(1, 0.9), 0)
        self.assertEqual(percentile_index(3, 0.75), 2)
        self.assertEqual(percentile_index(10, 1.0), 9)

    def test_classify_risk(self):
        self.assertEqual(classify_risk(10.0, 15.0), RiskLevel.LOW)
        self.assertEqual(classify_risk(15.0, 15.0), RiskLevel.LOW)
        self.assertEqual(classify_risk(22.5, 15.0), RiskLevel.MEDIUM)
        self.assertEqual(classify_risk(22.6, 15.0), RiskLevel.HIGH)


if __name__ == "__main__":
    unittest.main()
