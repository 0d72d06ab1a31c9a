"""Tests for reward point calculation."""
import unittest
from datetime import date
from decimal import Decimal

from rewardflow.rewards.calculator import (
    calculate_reward_points,
    evaluate_reward_points,
    attach_reward_points
)
from rewardflow.rewards.models import Transaction


class TestCalculateRewardPoints(unittest.TestCase):
    """Test tiered reward point calculation."""

    def test_tier_boundaries(self):
        """Test points at and around each tier boundary."""
        cases = [
            (0, 0),
            (50, 0),
            (50.99, 0),
            (51, 1),
            (75, 25),
            (100, 50),
            (100.5, 50),
            (100.9, 50),
            (101, 52),
            (120, 90),
        ]
        for price, expected in cases:
            with self.subTest(price=price):
                self.assertEqual(calculate_reward_points(price), expected)

    def test_numeric_strings_and_decimals(self):
        """Test that numeric strings and Decimals are accepted."""
        self.assertEqual(calculate_reward_points("120"), 90)
        self.assertEqual(calculate_reward_points(" 75.40 "), 25)
        self.assertEqual(calculate_reward_points(Decimal("150.75")), 150)

    def test_negative_price_earns_nothing(self):
        """Test that refunds and negative amounts earn no points."""
        result = evaluate_reward_points(-20)
        self.assertEqual(result.points, 0)
        self.assertTrue(result.is_valid)

    def test_invalid_price_returns_zero(self):
        """Test silent zero fallback for values that are not numbers."""
        for price in [float("nan"), float("inf"), "abc", "", None, True, [100], Decimal("NaN")]:
            with self.subTest(price=price):
                self.assertEqual(calculate_reward_points(price), 0)

    def test_invalid_price_is_flagged(self):
        """Test that the diagnostic result separates invalid input from zero points."""
        invalid = evaluate_reward_points("twelve")
        genuine_zero = evaluate_reward_points(30)

        self.assertEqual(invalid.points, genuine_zero.points)
        self.assertFalse(invalid.is_valid)
        self.assertTrue(genuine_zero.is_valid)

    def test_invalid_price_is_logged(self):
        """Test that invalid prices are reported in the log."""
        with self.assertLogs("rewardflow", level="ERROR") as captured:
            calculate_reward_points("n/a")
        self.assertIn("Invalid price", captured.output[0])

    def test_oversized_price_is_invalid(self):
        """Test that huge exponents are rejected instead of expanded."""
        for price in ["1e5000", "1e2000000", "-1e5000", Decimal("1e400"), 10 ** 20, 1e300]:
            with self.subTest(price=price):
                result = evaluate_reward_points(price)
                self.assertEqual(result.points, 0)
                self.assertFalse(result.is_valid)

    def test_large_valid_price(self):
        """Test a price just below the accepted ceiling."""
        self.assertEqual(calculate_reward_points(10 ** 15 - 1), (10 ** 15 - 101) * 2 + 50)

    def test_monotonic_in_price(self):
        """Test that points never decrease as price increases."""
        prices = [cents / 100 for cents in range(0, 30000, 37)]
        points = [calculate_reward_points(price) for price in prices]
        for lower, higher in zip(points, points[1:]):
            self.assertLessEqual(lower, higher)

    def test_deterministic(self):
        """Test that the same price always yields the same points."""
        self.assertEqual(calculate_reward_points(133.7), calculate_reward_points(133.7))


class TestAttachRewardPoints(unittest.TestCase):
    """Test attaching points to transactions."""

    def test_attach_returns_new_transactions(self):
        """Test that points are attached without mutating the input."""
        transactions = [
            Transaction(1, "Alice", date(2024, 1, 5), 120),
            Transaction(2, "Bob", date(2024, 1, 6), "bad"),
        ]

        result = attach_reward_points(transactions)

        self.assertEqual([txn.reward_points for txn in result], [90, 0])
        self.assertEqual([txn.reward_points for txn in transactions], [0, 0])
        self.assertEqual(result[0].name, "Alice")
        self.assertEqual(result[1].price, "bad")


if __name__ == "__main__":
    unittest.main()
