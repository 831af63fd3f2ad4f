"""Domain entity for monitoring centers."""

import dataclasses


@dataclasses.dataclass(slots=True, frozen=True)
class Center:
    """A physical monitoring office covering a set of cities."""

    id: int
    center_name: str
    street: str
    street_number: str
    postal_code: str
    town: str
    district: str
    city_ids: tuple[int, ...]
    """The cities monitored by the center, in the order they were given."""

    @property
    def address_key(self) -> tuple[str, str, str, str, str, str]:
        """The tuple that identifies a center uniquely."""
        return (
            self.center_name,
            self.street,
            self.street_number,
            self.postal_code,
            self.town,
            self.district,
        )

    def __str__(self) -> str:
        """Return a one-line description of the center."""
        return (
            f"{self.center_name}: {self.street} {self.street_number}, "
            f"{self.postal_code} {self.town} ({self.district})"
        )
