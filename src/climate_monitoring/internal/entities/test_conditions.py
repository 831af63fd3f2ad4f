import dataclasses
import datetime as dt
import unittest

from .conditions import Condition


class TestCondition(unittest.TestCase):
    """Test the business methods of the Condition class."""

    def test_rejects_empty_key(self) -> None:
        with self.assertRaises(ValueError):
            Condition(key="", value=1)

    def test_is_immutable(self) -> None:
        c = Condition(key="username", value="mrossi")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            c.value = "other"  # type: ignore[misc]

    def test_day(self) -> None:
        """Test the is_date property and day method."""

        @dataclasses.dataclass
        class TestCase:
            name: str
            value: object
            is_date: bool
            expected: dt.date | None

        tests = [
            TestCase(
                name="datetime_truncates_time",
                value=dt.datetime(2024, 1, 1, 15, 30),
                is_date=True,
                expected=dt.date(2024, 1, 1),
            ),
            TestCase(
                name="date_passes_through",
                value=dt.date(2024, 2, 29),
                is_date=True,
                expected=dt.date(2024, 2, 29),
            ),
            TestCase(name="string_is_not_date", value="01/01/2024", is_date=False, expected=None),
            TestCase(name="none_is_not_date", value=None, is_date=False, expected=None),
        ]

        for test in tests:
            with self.subTest(name=test.name):
                c = Condition(key="date", value=test.value)  # type: ignore[arg-type]
                self.assertEqual(test.is_date, c.is_date)
                if test.expected is None:
                    with self.assertRaises(TypeError):
                        c.day()
                else:
                    self.assertEqual(test.expected, c.day())


if __name__ == "__main__":
    unittest.main()
