import dataclasses
import datetime as dt
import unittest

from hypothesis import given
from hypothesis import strategies as st
from returns.pipeline import is_successful
from returns.result import Failure

from .errors import ValidationError
from .summary import WeatherSummary
from .weather import Category, CategoryEntry, WeatherRecord


def _record(n: int, **entries: CategoryEntry) -> WeatherRecord:
    """Build a record with empty entries for any category not given."""
    return WeatherRecord(
        id=n,
        city_id=1,
        center_id=1,
        date=dt.date(2024, 1, 1) + dt.timedelta(days=n),
        **{c.value: entries.get(c.value, CategoryEntry()) for c in Category},
    )


class TestWeatherSummary(unittest.TestCase):
    """Test the business methods of the WeatherSummary class."""

    def test_from_records_rejects_empty(self) -> None:
        """Test that summarising nothing fails."""
        for records in ([], None):
            with self.subTest(records=records):
                result = WeatherSummary.from_records(records)
                self.assertIsInstance(result, Failure)
                self.assertIsInstance(result.failure(), ValidationError)

    def test_avg_score(self) -> None:
        """Test the avg_score and record_count methods."""

        @dataclasses.dataclass
        class TestCase:
            name: str
            scores: list[int | None]
            expected_avg: int | None
            expected_count: int

        tests = [
            TestCase(
                name="ignores_unscored_records",
                scores=[2, 4, None],
                expected_avg=3,
                expected_count=2,
            ),
            TestCase(
                name="rounds_half_up",
                scores=[2, 3],
                expected_avg=3,
                expected_count=2,
            ),
            TestCase(
                name="rounds_down_below_half",
                scores=[1, 1, 2],
                expected_avg=1,
                expected_count=3,
            ),
            TestCase(
                name="absent_when_nothing_scored",
                scores=[None, None],
                expected_avg=None,
                expected_count=0,
            ),
        ]

        for test in tests:
            with self.subTest(name=test.name):
                records = [
                    _record(n, wind=CategoryEntry(score=s))
                    for n, s in enumerate(test.scores)
                ]
                summary = WeatherSummary.from_records(records).unwrap()
                self.assertEqual(test.expected_avg, summary.avg_score("wind"))
                self.assertEqual(test.expected_count, summary.record_count(Category.WIND))

    def test_comments_keep_record_order(self) -> None:
        """Test that comments are kept verbatim and in order."""
        records = [
            _record(0, wind=CategoryEntry(score=2, comment="calm")),
            _record(1, wind=CategoryEntry(score=3)),
            _record(2, wind=CategoryEntry(comment="gusty")),
            _record(3, wind=CategoryEntry(comment="calm")),
        ]
        summary = WeatherSummary.from_records(records).unwrap()

        self.assertEqual(["calm", "gusty", "calm"], summary.comments("wind"))
        self.assertEqual([], summary.comments("humidity"))

    def test_categories_are_independent(self) -> None:
        """Test that each category only counts its own scores."""
        records = [
            _record(0, wind=CategoryEntry(score=5), glacier_mass=CategoryEntry(score=1)),
            _record(1, pressure=CategoryEntry(score=4)),
        ]
        summary = WeatherSummary.from_records(records).unwrap()
        rows = {row.category: row for row in summary.categories()}

        self.assertEqual(list(Category), list(rows))
        self.assertEqual(5, rows[Category.WIND].avg_score)
        self.assertEqual(1, rows[Category.GLACIER_MASS].record_count)
        self.assertEqual(4, rows[Category.PRESSURE].avg_score)
        self.assertIsNone(rows[Category.HUMIDITY].avg_score)
        self.assertEqual(0, rows[Category.HUMIDITY].record_count)

    def test_from_records_does_not_mutate_input(self) -> None:
        """Test that the input records are left untouched."""
        records = [_record(0, wind=CategoryEntry(score=2, comment="calm"))]
        before = list(records)
        summary = WeatherSummary.from_records(records)
        self.assertTrue(is_successful(summary))
        self.assertEqual(before, records)

    @given(st.lists(st.integers(min_value=1, max_value=5), min_size=1, max_size=50))
    def test_avg_score_within_score_bounds(self, scores: list[int]) -> None:
        """Test that averages stay within the score range and match a float mean."""
        records = [_record(n, humidity=CategoryEntry(score=s)) for n, s in enumerate(scores)]
        summary = WeatherSummary.from_records(records).unwrap()
        avg = summary.avg_score(Category.HUMIDITY)

        self.assertIsNotNone(avg)
        self.assertTrue(min(scores) <= avg <= max(scores))
        self.assertLessEqual(abs(avg - sum(scores) / len(scores)), 0.5)
        self.assertEqual(len(scores), summary.record_count(Category.HUMIDITY))


if __name__ == "__main__":
    unittest.main()
