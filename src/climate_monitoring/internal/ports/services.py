"""Service interfaces for the monitoring use cases.

These interfaces define the signatures that *driving* actors must conform to
in order to interact with the core.

Sometimes referred to as *primary ports*.
"""

import abc
from collections.abc import Sequence

from returns.result import ResultE

from climate_monitoring.internal import entities

type CategoryRow = tuple[int | None, str | None]
"""An (optional score, optional comment) pair as entered at the boundary."""


class OperatorUseCase(abc.ABC):
    """Interface for the operator use case.

    Defines the business-critical methods for the following use cases:

    - 'A new operator should be able to register with validated details.'
    - 'A registered operator should be able to log in with their credentials.'
    - 'An operator should be able to join a monitoring center, once.'
    """

    @abc.abstractmethod
    def perform_login(self, username: str, password: str) -> ResultE[entities.Operator | None]:
        """Look up the operator matching the given credentials.

        Args:
            username: The operator's username.
            password: The operator's plaintext password.

        Returns:
            The matching operator, or ``None`` if the credentials match no one.
            Wrong credentials are not a failure.
        """
        pass

    @abc.abstractmethod
    def perform_registration(
        self,
        name_surname: str,
        tax_code: str,
        email: str,
        username: str,
        password: str,
        center_id: int | None = None,
    ) -> ResultE[entities.Operator]:
        """Validate and store a new operator.

        Fails on the first invalid field, in argument order.

        Returns:
            The stored operator.
        """
        pass

    @abc.abstractmethod
    def associate_center(self, operator_id: int, center_id: int) -> ResultE[entities.Operator]:
        """Link an operator without a center to the given center.

        Returns:
            The updated operator.
        """
        pass


class CenterUseCase(abc.ABC):
    """Interface for the monitoring center use case.

    Defines the business-critical methods for the following use cases:

    - 'An operator without a center should be able to open a new one.'
    - 'An operator with a center should be able to record observations.'
    """

    @abc.abstractmethod
    def init_new_center(
        self,
        center_name: str,
        street: str,
        street_number: str,
        postal_code: str,
        town: str,
        district: str,
        city_ids: Sequence[int | None],
        operator_id: int,
    ) -> ResultE[entities.Center]:
        """Create a center and link the requesting operator to it.

        Returns:
            The created center.
        """
        pass

    @abc.abstractmethod
    def add_data_to_center(
        self,
        city_id: int,
        operator_id: int,
        date: str,
        category_rows: Sequence[CategoryRow],
    ) -> ResultE[entities.WeatherRecord]:
        """Record an operator's observations for a city.

        Args:
            city_id: The city observed.
            operator_id: The observing operator.
            date: The day of the observations, as day/month/year.
            category_rows: One row per `entities.Category`, in canonical order.

        Returns:
            The stored weather record.
        """
        pass

    @abc.abstractmethod
    def list_centers(self) -> ResultE[list[entities.Center]]:
        """List every center an operator could join."""
        pass


class CityUseCase(abc.ABC):
    """Interface for the city lookup use case.

    Defines the business-critical methods for the following use cases:

    - 'Anyone should be able to find a monitored city.'
    - 'Anyone should be able to view the observed conditions of a city.'
    """

    @abc.abstractmethod
    def get_city(self, city_id: int) -> ResultE[entities.City]:
        """Get a city by its id."""
        pass

    @abc.abstractmethod
    def search_by_name(self, name: str) -> ResultE[list[entities.City]]:
        """Find cities with the given name, ignoring case and surrounding spaces."""
        pass

    @abc.abstractmethod
    def search_by_country(self, country_code: str) -> ResultE[list[entities.City]]:
        """Find cities in the country with the given code."""
        pass

    @abc.abstractmethod
    def search_by_coordinates(
        self, latitude: float, longitude: float,
    ) -> ResultE[list[entities.City]]:
        """Find cities at exactly the given coordinates."""
        pass

    @abc.abstractmethod
    def weather_summary(self, city_id: int) -> ResultE[entities.WeatherSummary]:
        """Summarise every observation recorded for a city."""
        pass
