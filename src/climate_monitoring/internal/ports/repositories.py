"""Repository interfaces for the record store.

These interfaces define the signatures that *driven* actors must conform to
in order to interact with the core.
Also sometimes referred to as *secondary ports*.

Each entity type has its own repository interface, exposing a lookup by id
and a lookup by an ordered list of `entities.Condition` objects. The services
depend only on the narrow interfaces they need, whilst a concrete store will
usually implement all of them at once via `RecordStore`.

Lookups by condition never fail simply because nothing matched: they return
an empty list. A failure from any method means the store itself could not
service the request, and carries an `entities.StorageUnavailableError`,
except where documented otherwise.

Uniqueness of operator usernames and of center addresses is checked by the
services, but a store must also enforce both as constraints, since the
services' check-then-insert sequence is not atomic.
"""

import abc
import datetime as dt
from collections.abc import Sequence

from returns.result import ResultE

from climate_monitoring.internal import entities


class CityRepository(abc.ABC):
    """Interface for a repository of monitored cities."""

    @abc.abstractmethod
    def get_city(self, city_id: int) -> ResultE[entities.City]:
        """Get a city by its id.

        Returns:
            The city, or a failure carrying `entities.NotFoundError`.
        """
        pass

    @abc.abstractmethod
    def find_cities(self, conditions: Sequence[entities.Condition]) -> ResultE[list[entities.City]]:
        """Get all cities matching every one of the given conditions."""
        pass


class OperatorRepository(abc.ABC):
    """Interface for a repository of registered operators."""

    @abc.abstractmethod
    def get_operator(self, operator_id: int) -> ResultE[entities.Operator]:
        """Get an operator by their id.

        Returns:
            The operator, or a failure carrying `entities.NotFoundError`.
        """
        pass

    @abc.abstractmethod
    def find_operators(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.Operator]]:
        """Get all operators matching every one of the given conditions."""
        pass

    @abc.abstractmethod
    def add_operator(
        self,
        name_surname: str,
        tax_code: str,
        email: str,
        username: str,
        password: str,
        center_id: int,
    ) -> ResultE[entities.Operator]:
        """Store a new operator, assigning it an id.

        The password must already be hashed.

        Returns:
            The stored operator, or a failure carrying
            `entities.DuplicateUsernameError` if the username is taken.
        """
        pass

    @abc.abstractmethod
    def update_operator(self, operator: entities.Operator) -> ResultE[entities.Operator]:
        """Overwrite the stored operator sharing the given operator's id.

        Returns:
            The operator as stored, or a failure carrying
            `entities.NotFoundError` if no such operator exists.
        """
        pass


class CenterRepository(abc.ABC):
    """Interface for a repository of monitoring centers."""

    @abc.abstractmethod
    def get_center(self, center_id: int) -> ResultE[entities.Center | None]:
        """Get a center by its id.

        Unlike the other repositories, an unknown id is not a failure:
        it yields ``None``, since an operator without a center is a
        valid state that callers routinely need to represent.
        """
        pass

    @abc.abstractmethod
    def find_centers(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.Center]]:
        """Get all centers matching every one of the given conditions."""
        pass

    @abc.abstractmethod
    def list_centers(self) -> ResultE[list[entities.Center]]:
        """Get every center in the store."""
        pass

    @abc.abstractmethod
    def add_center(
        self,
        center_name: str,
        street: str,
        street_number: str,
        postal_code: str,
        town: str,
        district: str,
        city_ids: Sequence[int],
    ) -> ResultE[entities.Center]:
        """Store a new center, assigning it an id.

        Returns:
            The stored center, or a failure carrying
            `entities.DuplicateCenterError` if its address key is taken.
        """
        pass

    @abc.abstractmethod
    def update_center(self, center: entities.Center) -> ResultE[entities.Center]:
        """Overwrite the stored center sharing the given center's id."""
        pass

    @abc.abstractmethod
    def delete_center(self, center_id: int) -> ResultE[int]:
        """Remove a center from the store.

        Only used to compensate for a center creation that could not be
        completed. Deleting an unknown id is not an error.

        Returns:
            The number of centers removed.
        """
        pass


class WeatherRepository(abc.ABC):
    """Interface for a repository of weather observations."""

    @abc.abstractmethod
    def get_weather(self, weather_id: int) -> ResultE[entities.WeatherRecord]:
        """Get a weather record by its id.

        Returns:
            The record, or a failure carrying `entities.NotFoundError`.
        """
        pass

    @abc.abstractmethod
    def find_weather(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.WeatherRecord]]:
        """Get all weather records matching every one of the given conditions."""
        pass

    @abc.abstractmethod
    def add_weather(
        self,
        city_id: int,
        center_id: int,
        date: dt.date,
        entries: Sequence[entities.CategoryEntry],
    ) -> ResultE[entities.WeatherRecord]:
        """Append a new weather record, assigning it an id.

        Args:
            city_id: The city the observations were made for.
            center_id: The center of the observing operator.
            date: The day of the observations.
            entries: One entry per `entities.Category`, in canonical order.
        """
        pass


class RecordStore(CityRepository, OperatorRepository, CenterRepository, WeatherRepository):
    """Interface for a single store holding every kind of record."""

    @classmethod
    @abc.abstractmethod
    def connect(cls) -> ResultE["RecordStore"]:
        """Create a new connected instance of the class from the environment."""
        pass
