"""Domain entities for record lookups.

Records in the store are looked up by equality on one or more of their
fields. Rather than exposing storage specifics to the services, a lookup
is described as an ordered list of `Condition` objects, each of which
pairs a field key with the value it must equal.

Conditions carrying a date (or datetime) value are special: they match
on the calendar day only, ignoring any time-of-day component on either
side of the comparison.
"""

import dataclasses
import datetime as dt

type ConditionValue = str | int | float | bool | dt.date | None
"""The scalar types a condition can carry."""


@dataclasses.dataclass(slots=True, frozen=True)
class Condition:
    """An equality filter on a single record field."""

    key: str
    """The name of the field to filter on."""

    value: ConditionValue
    """The value the field must equal."""

    def __post_init__(self) -> None:
        """Reject conditions without a usable key."""
        if not self.key:
            raise ValueError("Condition key cannot be empty")

    @property
    def is_date(self) -> bool:
        """Whether the condition compares calendar days."""
        return isinstance(self.value, dt.date)

    def day(self) -> dt.date:
        """Get the calendar day of a date-typed condition value.

        Raises:
            TypeError: If the condition value is not date-typed.
        """
        match self.value:
            case dt.datetime() as value:
                return value.date()
            case dt.date() as value:
                return value
            case _:
                raise TypeError(f"Condition on '{self.key}' does not carry a date")
