"""
Unit tests for the students statistics reduction.
"""

import math
import unittest

from proftafla.stats import format_average, summarize_students, to_number


class TestToNumber(unittest.TestCase):
    def test_integers_and_decimals(self) -> None:
        self.assertEqual(to_number("12"), 12)
        self.assertIsInstance(to_number("12"), int)
        self.assertEqual(to_number(" 1.5 "), 1.5)

    def test_blank_is_zero(self) -> None:
        self.assertEqual(to_number(""), 0)
        self.assertEqual(to_number("   "), 0)

    def test_text_is_nan(self) -> None:
        self.assertTrue(math.isnan(to_number("n/a")))
        self.assertTrue(math.isnan(to_number("1,5")))
        self.assertTrue(math.isnan(to_number("1_000")))


class TestSummarizeStudents(unittest.TestCase):
    def test_basic_reduction(self) -> None:
        stats = summarize_students(["10", "20", "30"])

        self.assertEqual(stats.min, 10)
        self.assertEqual(stats.max, 30)
        self.assertEqual(stats.num_tests, 3)
        self.assertEqual(stats.num_students, 60)
        self.assertEqual(stats.average_students, "20.00")

    def test_average_is_rounded_to_two_decimals(self) -> None:
        stats = summarize_students(["1", "2", "2"])
        self.assertEqual(stats.average_students, "1.67")

    def test_no_rows(self) -> None:
        stats = summarize_students([])

        self.assertEqual(stats.to_dict(), {
            "min": 0,
            "max": 0,
            "numTests": 0,
            "numStudents": 0,
            "averageStudents": "0.00",
        })

    def test_non_numeric_cell_propagates_nan_into_sum(self) -> None:
        stats = summarize_students(["10", "abc", "30"])

        self.assertEqual(stats.min, 10)
        self.assertEqual(stats.max, 30)
        self.assertEqual(stats.num_tests, 3)
        self.assertTrue(math.isnan(stats.num_students))
        self.assertEqual(stats.average_students, "NaN")

    def test_blank_cell_counts_as_zero(self) -> None:
        stats = summarize_students(["", "4"])

        self.assertEqual(stats.min, 0)
        self.assertEqual(stats.num_students, 4)
        self.assertEqual(stats.average_students, "2.00")

    def test_format_average(self) -> None:
        self.assertEqual(format_average(60, 3), "20.00")
        self.assertEqual(format_average(0, 0), "0.00")
        self.assertEqual(format_average(math.nan, 2), "NaN")


if __name__ == "__main__":
    unittest.main()
