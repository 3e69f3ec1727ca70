import unittest

import numpy as np

from headcount_plan_internal.mvo.governance import apply_governance, governed_headcount
from headcount_plan_internal.mvo.models import DEFAULT_WORKLOAD_SPEC
from headcount_plan_internal.mvo.policies import OPERATION_SIZES, PLANNING_TYPES, PlanningTypePolicy
from headcount_plan_internal.mvo.selector import select_mvo


class TestGovernedHeadcount(unittest.TestCase):
    def test_work_type_floor(self):
        self.assertEqual(governed_headcount(2, work_type_minimum=5), 5)
        self.assertEqual(governed_headcount(6, work_type_minimum=5), 6)

    def test_overhead_without_size_policy(self):
        # ceil(9 * 1.1) = 10
        self.assertEqual(governed_headcount(9, planning_policy=PLANNING_TYPES["NEW_BUSINESS_UNIT"]), 10)

    def test_reduction_without_size_policy(self):
        self.assertEqual(
            governed_headcount(5, planning_policy=PLANNING_TYPES["RESTRUCTURING"], existing_headcount=20),
            14,
        )

    def test_governed_floor_needs_size_policy(self):
        self.assertEqual(governed_headcount(1, planning_policy=PLANNING_TYPES["NEW_FUNCTION"]), 1)

    def test_overhead_factor(self):
        # ceil(5 * 1.1) = 6
        self.assertEqual(
            governed_headcount(
                5,
                planning_policy=PLANNING_TYPES["NEW_BUSINESS_UNIT"],
                size_policy=OPERATION_SIZES["SMALL_LEAN"],
            ),
            6,
        )

    def test_overhead_applies_after_work_type_floor(self):
        # max(2, 10) = 10, ceil(10 * 1.1) = 11
        self.assertEqual(
            governed_headcount(
                2,
                work_type_minimum=10,
                planning_policy=PLANNING_TYPES["NEW_BUSINESS_UNIT"],
                size_policy=OPERATION_SIZES["SMALL_LEAN"],
            ),
            11,
        )

    def test_reduction_cap(self):
        # ceil(20 * 0.7) = 14
        self.assertEqual(
            governed_headcount(
                5,
                planning_policy=PLANNING_TYPES["RESTRUCTURING"],
                size_policy=OPERATION_SIZES["MEDIUM_STANDARD"],
                existing_headcount=20,
            ),
            14,
        )

    def test_reduction_without_existing_headcount_keeps_pick(self):
        self.assertEqual(
            governed_headcount(
                5,
                planning_policy=PLANNING_TYPES["RESTRUCTURING"],
                size_policy=OPERATION_SIZES["MEDIUM_STANDARD"],
            ),
            5,
        )

    def test_governed_floor(self):
        self.assertEqual(
            governed_headcount(
                1,
                planning_policy=PLANNING_TYPES["NEW_FUNCTION"],
                size_policy=OPERATION_SIZES["LARGE_EXTENDED"],
            ),
            3,
        )

    def test_lean_has_no_floor(self):
        self.assertEqual(
            governed_headcount(
                1,
                planning_policy=PLANNING_TYPES["NEW_PROJECT"],
                size_policy=OPERATION_SIZES["LARGE_EXTENDED"],
            ),
            1,
        )

    def test_invalid_overhead_factor(self):
        policy = PlanningTypePolicy(
            label="Broken", description="", horizon_months=1, variance_multiplier=1.0,
            min_headcount_mode="lean", overhead_factor=-1.0,
        )
        with self.assertRaises(ValueError):
            governed_headcount(3, planning_policy=policy, size_policy=OPERATION_SIZES["SMALL_LEAN"])


class TestApplyGovernance(unittest.TestCase):
    def setUp(self):
        self.outcome = select_mvo(DEFAULT_WORKLOAD_SPEC, iterations=500, random_state=42)

    def test_no_change_returns_same_selection(self):
        governed = apply_governance(
            self.outcome.selected, self.outcome.test_results, DEFAULT_WORKLOAD_SPEC, iterations=500,
        )
        self.assertEqual(governed.adjusted_headcount, self.outcome.selected.headcount)
        self.assertIs(governed.selected, self.outcome.selected)
        self.assertFalse(governed.selected.min_headcount_applied)

    def test_floor_outside_window_is_simulated(self):
        governed = apply_governance(
            self.outcome.selected,
            self.outcome.test_results,
            DEFAULT_WORKLOAD_SPEC,
            work_type_minimum=10,
            iterations=500,
            seed_sequence=np.random.SeedSequence(1),
        )
        self.assertEqual(governed.adjusted_headcount, 10)
        self.assertEqual(governed.selected.headcount, 10)
        self.assertTrue(governed.selected.min_headcount_applied)
        self.assertEqual(governed.selected.min_headcount_value, 10)
        self.assertEqual(len(governed.test_results), len(self.outcome.test_results) + 1)
        self.assertEqual(governed.test_results[-1].headcount, 10)

    def test_floor_inside_window_reuses_result(self):
        governed = apply_governance(
            self.outcome.selected,
            self.outcome.test_results,
            DEFAULT_WORKLOAD_SPEC,
            work_type_minimum=6,
            iterations=500,
        )
        tested = next(r for r in self.outcome.test_results if r.headcount == 6)
        self.assertEqual(governed.selected.headcount, 6)
        self.assertTrue(governed.selected.min_headcount_applied)
        self.assertEqual(governed.selected.avg_cost, tested.avg_cost)
        self.assertEqual(len(governed.test_results), len(self.outcome.test_results))
        # The tested value itself is left untouched.
        self.assertFalse(tested.min_headcount_applied)
        self.assertIn(governed.selected, governed.test_results)

    def test_min_headcount_value_is_work_type_floor(self):
        smallest = self.outcome.test_results[0]
        self.assertEqual(smallest.headcount, 1)
        governed = apply_governance(
            smallest,
            self.outcome.test_results,
            DEFAULT_WORKLOAD_SPEC,
            planning_policy=PLANNING_TYPES["NEW_BUSINESS_UNIT"],
            size_policy=OPERATION_SIZES["SMALL_LEAN"],
            work_type_minimum=5,
            iterations=500,
        )
        # max(1, 5) = 5, ceil(5 * 1.1) = 6
        self.assertEqual(governed.adjusted_headcount, 6)
        self.assertEqual(governed.selected.headcount, 6)
        self.assertTrue(governed.selected.min_headcount_applied)
        self.assertEqual(governed.selected.min_headcount_value, 5)
        self.assertEqual(governed.selected.to_dict()["min_headcount_value"], 5)


if __name__ == "__main__":
    unittest.main()
