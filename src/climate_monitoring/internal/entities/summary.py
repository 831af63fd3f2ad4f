"""Aggregation of weather observations for display.

Viewing the conditions of a city means folding every observation
recorded for it into a single summary per category: how many scored
observations there are, what their rounded average score is, and what
the operators commented.

Each category is aggregated independently, so a record that scores
only the wind still counts towards the wind statistics and nothing
else. Comments are kept regardless of whether their entry was scored.
"""

import dataclasses
from collections.abc import Iterator, Sequence

from returns.result import Failure, ResultE, Success

from .errors import ValidationError
from .weather import Category, WeatherRecord


def _round_half_up(total: int, count: int) -> int:
    """Divide two non-negative integers, rounding halves upwards.

    Integer arithmetic avoids the float representation error that
    would otherwise creep into averages such as 2.5.
    """
    return (2 * total + count) // (2 * count)


@dataclasses.dataclass(slots=True, frozen=True)
class CategorySummary:
    """Aggregated observations for one category."""

    category: Category

    avg_score: int | None
    """The rounded mean of the scores, or None when nothing was scored."""

    record_count: int
    """The number of records that scored the category."""

    comments: tuple[str, ...]
    """Every comment made on the category, in record order."""


@dataclasses.dataclass(slots=True, frozen=True)
class WeatherSummary:
    """Per-category statistics over a set of weather records."""

    _totals: dict[Category, int]
    _counts: dict[Category, int]
    _comments: dict[Category, tuple[str, ...]]

    @classmethod
    def from_records(cls, records: Sequence[WeatherRecord] | None) -> ResultE["WeatherSummary"]:
        """Fold weather records into a summary.

        Args:
            records: The records to aggregate. Must not be empty.

        Returns:
            The summary, or a `ValidationError` if no records were given.
        """
        if not records:
            return Failure(ValidationError(
                field="records",
                reason="at least one weather record is required to build a summary",
            ))

        totals: dict[Category, int] = dict.fromkeys(Category, 0)
        counts: dict[Category, int] = dict.fromkeys(Category, 0)
        comments: dict[Category, list[str]] = {c: [] for c in Category}
        for record in records:
            for category, entry in record.entries():
                if entry.score is not None:
                    totals[category] += entry.score
                    counts[category] += 1
                if entry.comment is not None:
                    comments[category].append(entry.comment)

        return Success(cls(
            _totals=totals,
            _counts=counts,
            _comments={c: tuple(v) for c, v in comments.items()},
        ))

    def avg_score(self, category: Category | str) -> int | None:
        """Get the rounded average score for a category.

        Returns None when no record scored the category, in which
        case it should be rendered as not available.
        """
        c = Category(category)
        if self._counts[c] == 0:
            return None
        return _round_half_up(self._totals[c], self._counts[c])

    def record_count(self, category: Category | str) -> int:
        """Get the number of records that scored a category."""
        return self._counts[Category(category)]

    def comments(self, category: Category | str) -> list[str]:
        """Get the comments on a category in record order."""
        return list(self._comments[Category(category)])

    def categories(self) -> Iterator[CategorySummary]:
        """Iterate over the category summaries in canonical order."""
        for c in Category:
            yield CategorySummary(
                category=c,
                avg_score=self.avg_score(c),
                record_count=self.record_count(c),
                comments=self._comments[c],
            )
