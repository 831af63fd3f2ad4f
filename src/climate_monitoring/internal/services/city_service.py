"""Implementation of the city lookup service."""

import logging
from typing import override

from returns.result import Failure, ResultE

from climate_monitoring.internal import entities, ports

log = logging.getLogger("climate-monitoring")


class CityService(ports.CityUseCase):
    """Service implementation for finding cities and viewing their conditions."""

    tr: ports.CityRepository
    wr: ports.WeatherRepository

    def __init__(
        self,
        city_repository: ports.CityRepository,
        weather_repository: ports.WeatherRepository,
    ) -> None:
        """Create a new instance of the service."""
        self.tr = city_repository
        self.wr = weather_repository

    @classmethod
    def from_store(cls, store: ports.RecordStore) -> "CityService":
        """Create a new instance of the service backed by a single store."""
        return cls(city_repository=store, weather_repository=store)

    @classmethod
    def from_adaptors(
        cls,
        store_adaptor: type[ports.RecordStore],
    ) -> ResultE["CityService"]:
        """Create a new instance of the service from adaptors."""
        return store_adaptor.connect().map(cls.from_store)

    @override
    def get_city(self, city_id: int) -> ResultE[entities.City]:
        return self.tr.get_city(city_id)

    @override
    def search_by_name(self, name: str) -> ResultE[list[entities.City]]:
        # Stored names start with a capital and continue in lower case
        return self.tr.find_cities([entities.Condition("name", name.strip().capitalize())])

    @override
    def search_by_country(self, country_code: str) -> ResultE[list[entities.City]]:
        return self.tr.find_cities([entities.Condition("country_code", country_code.upper())])

    @override
    def search_by_coordinates(
        self, latitude: float, longitude: float,
    ) -> ResultE[list[entities.City]]:
        return self.tr.find_cities([
            entities.Condition("latitude", latitude),
            entities.Condition("longitude", longitude),
        ])

    @override
    def weather_summary(self, city_id: int) -> ResultE[entities.WeatherSummary]:
        """Summarise every observation recorded for a city.

        Returns:
            The summary, or a failure carrying `entities.NotFoundError`
            if the city is unknown or has no observations yet.
        """
        city_result = self.tr.get_city(city_id)
        if isinstance(city_result, Failure):
            return city_result

        records_result = self.wr.find_weather([entities.Condition("city_id", city_id)])
        if isinstance(records_result, Failure):
            return records_result
        records = records_result.unwrap()
        if len(records) == 0:
            return Failure(entities.NotFoundError("weather record for city", city_id))

        log.debug(f"Summarising {len(records)} weather records for city {city_id}")
        return entities.WeatherSummary.from_records(records)
