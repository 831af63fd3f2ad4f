"""Domain entities for weather observations.

An observation made by an operator on a given day for a given city
is stored as a single `WeatherRecord`. Each record holds an entry for
every one of the seven observation categories. An entry pairs an
optional integer score, rating the observed conditions between 1 and
5, with an optional free-text comment.

Not every category need be observed on every visit, but a record with
no scores at all carries no information and is rejected upstream.

Records are append-only: corrections are made by adding new records.
"""

import dataclasses
import datetime as dt
from collections.abc import Iterator
from enum import StrEnum, auto

MIN_SCORE: int = 1
"""The lowest valid category score."""

MAX_SCORE: int = 5
"""The highest valid category score."""

MAX_COMMENT_LENGTH: int = 256
"""The soft cap on the length of a category comment."""

DISPLAY_DATE_FORMAT: str = "%d/%m/%Y"
"""The day/month/year format used for dates at the boundary."""


class Category(StrEnum):
    """Observation categories, in their fixed canonical order.

    Inheriting from StrEnum and using ``auto()`` makes the values
    of the enums equal to the lowercased enum name, which are also
    the names of the corresponding `WeatherRecord` fields.
    """

    WIND = auto()
    HUMIDITY = auto()
    PRESSURE = auto()
    TEMPERATURE = auto()
    PRECIPITATION = auto()
    GLACIER_ELEVATION = auto()
    GLACIER_MASS = auto()

    @property
    def label(self) -> str:
        """A human readable name for the category."""
        return self.value.replace("_", " ").capitalize()


@dataclasses.dataclass(slots=True, frozen=True)
class CategoryEntry:
    """The observation for a single category."""

    score: int | None = None
    """Rating of the observed conditions, or None if not observed."""

    comment: str | None = None
    """Free-text notes on the observation."""

    @property
    def is_observed(self) -> bool:
        """Whether the entry carries a score."""
        return self.score is not None


@dataclasses.dataclass(slots=True, frozen=True)
class WeatherRecord:
    """An operator's observations for one city on one day."""

    id: int
    city_id: int
    center_id: int
    date: dt.date
    """The day of the observation."""

    wind: CategoryEntry
    humidity: CategoryEntry
    pressure: CategoryEntry
    temperature: CategoryEntry
    precipitation: CategoryEntry
    glacier_elevation: CategoryEntry
    glacier_mass: CategoryEntry

    def entry(self, category: Category | str) -> CategoryEntry:
        """Get the entry for the given category."""
        entry: CategoryEntry = getattr(self, Category(category).value)
        return entry

    def entries(self) -> Iterator[tuple[Category, CategoryEntry]]:
        """Iterate over the entries in canonical category order."""
        for category in Category:
            yield category, self.entry(category)

    @property
    def display_date(self) -> str:
        """The date of the observation in day/month/year form."""
        return self.date.strftime(DISPLAY_DATE_FORMAT)
