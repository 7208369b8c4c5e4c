# tests/test_value_space.py
import math
import unittest

from sched_core.value_space import (
    ValueSpace,
    build_exact_values,
    build_values,
    build_values_via_exp,
    build_values_via_log,
)


class TestBuildValues(unittest.TestCase):
    def assert_well_formed(self, vs, bound, gamma):
        self.assertEqual(vs, sorted(set(vs)))
        self.assertEqual(vs[0], 0)
        self.assertEqual(vs[-1], bound)
        if bound >= 1:
            self.assertIn(1, vs)
        self.assertTrue(all(0 <= v <= bound for v in vs))
        # geometric spacing up to integer rounding on both ends
        for a, b in zip(vs[1:], vs[2:]):
            self.assertLessEqual(b, gamma * (a + 1) + 1, msg=f"gap {a} -> {b} too wide for gamma={gamma}")

    def test_powers_of_two(self):
        self.assertEqual(build_values(64, 2.0), [0, 1, 2, 4, 8, 16, 32, 64])
        self.assertEqual(build_values(64, 4.0), [0, 1, 4, 16, 64])

    def test_bound_not_a_power_is_included(self):
        vs = build_values(20, 2.0)
        self.assertEqual(vs, [0, 1, 2, 4, 8, 16, 20])

    def test_bound_zero_and_one(self):
        self.assertEqual(build_values(0, 1.1), [0])
        self.assertEqual(build_values(1, 1.1), [0, 1])
        self.assertEqual(build_values_via_log(0, 1.5), [0])
        self.assertEqual(build_values_via_exp(0, 1.5), [0])

    def test_well_formed_for_various_gammas(self):
        for bound in (2, 7, 20, 38, 50, 200, 1000):
            for gamma in (1.05, 1.1, 1.5, 2.0, 3.0):
                self.assert_well_formed(build_values(bound, gamma), bound, gamma)

    def test_both_strategies_are_well_formed(self):
        for bound in (5, 30, 100):
            for gamma in (1.1, 1.3, 2.0):
                self.assert_well_formed(build_values_via_exp(bound, gamma), bound, gamma)
                self.assert_well_formed(build_values_via_log(bound, gamma), bound, gamma)

    def test_gamma_close_to_one_is_exact(self):
        self.assertEqual(build_values(8, 1.01), build_exact_values(8))

    def test_large_bound_does_not_overflow(self):
        # 1.1 ** 10**6 is not representable as a float
        vs = build_values(10 ** 6, 1.1)
        self.assertEqual(vs[-1], 10 ** 6)
        self.assertLess(len(vs), 2 * int(math.log(10 ** 6, 1.1)) + 20)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            build_values(10, 1.0)
        with self.assertRaises(ValueError):
            build_values(10, 0.5)
        with self.assertRaises(ValueError):
            build_values(-1, 1.5)


class TestValueSpace(unittest.TestCase):
    def test_exact(self):
        space = ValueSpace.exact([2, 1])
        self.assertEqual(space.values, ((0, 1, 2), (0, 1)))
        self.assertEqual(space.num_configs(), 6)
        self.assertEqual(list(space.configs()),
                         [(0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)])

    def test_neighbours(self):
        space = ValueSpace.approximate([64], 2.0)
        self.assertEqual(space.next_up(0, 4), 8)
        self.assertEqual(space.next_down(0, 4), 2)
        self.assertIsNone(space.next_up(0, 64))
        self.assertIsNone(space.next_down(0, 0))
        with self.assertRaises(ValueError):
            space.next_up(0, 3)

    def test_contains(self):
        space = ValueSpace.approximate([16, 3], 2.0)
        self.assertTrue(space.contains((8, 3)))
        self.assertFalse(space.contains((6, 3)))
        self.assertFalse(space.contains((8,)))

    def test_smaller_gamma_refines(self):
        """gamma -> sqrt(gamma) keeps every candidate of the coarser set."""
        bounds = [64, 16]
        coarse = ValueSpace.approximate(bounds, 4.0)
        mid = ValueSpace.approximate(bounds, 2.0)
        fine = ValueSpace.approximate(bounds, math.sqrt(2.0))
        self.assertTrue(mid.is_refinement_of(coarse))
        self.assertTrue(fine.is_refinement_of(mid))
        self.assertTrue(ValueSpace.exact(bounds).is_refinement_of(fine))
        self.assertFalse(coarse.is_refinement_of(mid))

    def test_default_gamma(self):
        self.assertEqual(ValueSpace.approximate([50]).values[0], tuple(build_values(50, 1.1)))


if __name__ == "__main__":
    unittest.main()
