"""Tests for hyperperiod computation."""

import unittest

from rtsim.errors import HorizonOverflowError, InvalidTaskError
from rtsim.horizon import compute_horizon


class TestHorizon(unittest.TestCase):

    def test_lcm_of_example_periods(self):
        self.assertEqual(compute_horizon([5, 8]), 40)

    def test_repeated_calls_agree(self):
        results = {compute_horizon([5, 8]) for _ in range(5)}
        self.assertEqual(results, {40})

    def test_empty_collection_is_one(self):
        self.assertEqual(compute_horizon([]), 1)

    def test_harmonic_periods(self):
        self.assertEqual(compute_horizon([2, 4, 8, 16]), 16)

    def test_non_positive_period_rejected(self):
        with self.assertRaises(InvalidTaskError):
            compute_horizon([5, 0])

    def test_overflow_reported(self):
        # Pairwise coprime periods: lcm = 7 * 11 * 13 * 17 * 19 = 323323
        with self.assertRaises(HorizonOverflowError):
            compute_horizon([7, 11, 13, 17, 19], max_horizon=100_000)

    def test_bound_is_inclusive(self):
        self.assertEqual(compute_horizon([5, 8], max_horizon=40), 40)

    def test_unbounded_by_default(self):
        self.assertEqual(compute_horizon([7, 11, 13, 17, 19]), 323323)


if __name__ == "__main__":
    unittest.main()
