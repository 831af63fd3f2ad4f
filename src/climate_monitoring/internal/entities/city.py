"""Domain entity for monitored cities.

Cities are seeded into the store from a bootstrap dataset and are
only ever read by the core.
"""

import dataclasses


@dataclasses.dataclass(slots=True, frozen=True)
class City:
    """A monitored city."""

    id: int
    name: str
    ascii_name: str
    country_code: str
    country_name: str
    latitude: float
    longitude: float

    def __str__(self) -> str:
        """Return a one-line description of the city."""
        return (
            f"{self.name} ({self.country_code}, {self.country_name}) "
            f"[{self.latitude:.4f}, {self.longitude:.4f}]"
        )
