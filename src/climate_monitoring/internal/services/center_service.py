"""Implementation of the monitoring center service.

Creating a center takes two writes: storing the center itself, then
linking the requesting operator to it. The store offers no transaction
spanning both, so when the second write fails the first is undone by
deleting the new center again. Should that also fail, the orphaned
center is logged at error level for manual cleanup.
"""

import datetime as dt
import logging
from collections.abc import Sequence
from typing import override

from returns.result import Failure, ResultE, Success

from climate_monitoring.internal import entities, ports

log = logging.getLogger("climate-monitoring")


class CenterService(ports.CenterUseCase):
    """Service implementation for monitoring centers.

    Defines the business-critical methods and logic.
    """

    cr: ports.CenterRepository
    tr: ports.CityRepository
    opr: ports.OperatorRepository
    wr: ports.WeatherRepository

    def __init__(
        self,
        center_repository: ports.CenterRepository,
        city_repository: ports.CityRepository,
        operator_repository: ports.OperatorRepository,
        weather_repository: ports.WeatherRepository,
    ) -> None:
        """Create a new instance of the service."""
        self.cr = center_repository
        self.tr = city_repository
        self.opr = operator_repository
        self.wr = weather_repository

    @classmethod
    def from_store(cls, store: ports.RecordStore) -> "CenterService":
        """Create a new instance of the service backed by a single store."""
        return cls(
            center_repository=store,
            city_repository=store,
            operator_repository=store,
            weather_repository=store,
        )

    @classmethod
    def from_adaptors(
        cls,
        store_adaptor: type[ports.RecordStore],
    ) -> ResultE["CenterService"]:
        """Create a new instance of the service from adaptors."""
        return store_adaptor.connect().map(cls.from_store)

    def _validate_cities(self, city_ids: Sequence[int | None]) -> ResultE[list[int]]:
        """Check that every city id refers to a stored city."""
        if len(city_ids) == 0:
            return Failure(entities.ValidationError(
                field="city",
                reason="a center must monitor at least one city",
            ))
        resolved: list[int] = []
        for city_id in city_ids:
            if city_id is None:
                return Failure(entities.ValidationError(field="city", reason="None"))
            city_result = self.tr.get_city(city_id)
            if isinstance(city_result, Failure):
                if isinstance(city_result.failure(), entities.NotFoundError):
                    return Failure(entities.ValidationError(field="city", reason=str(city_id)))
                return city_result
            resolved.append(city_id)
        return Success(resolved)

    @override
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
        fields: dict[str, str] = {
            "center_name": center_name,
            "street": street,
            "street_number": street_number,
            "postal_code": postal_code,
            "town": town,
            "district": district,
        }
        for field, value in fields.items():
            if value is None or value.strip() == "":
                return Failure(entities.ValidationError(field=field, reason="must not be blank"))

        cities_result = self._validate_cities(city_ids)
        if isinstance(cities_result, Failure):
            return cities_result

        # Check the operator before writing anything
        operator_result = self.opr.get_operator(operator_id)
        if isinstance(operator_result, Failure):
            return operator_result
        operator = operator_result.unwrap()
        if operator.has_center:
            return Failure(entities.AlreadyAssociatedError(operator.id, operator.center_id))

        center_result = self.cr.add_center(
            center_name=center_name,
            street=street,
            street_number=street_number,
            postal_code=postal_code,
            town=town,
            district=district,
            city_ids=cities_result.unwrap(),
        )
        if isinstance(center_result, Failure):
            return center_result
        center = center_result.unwrap()

        update_result = self.opr.update_operator(operator.with_center(center.id))
        if isinstance(update_result, Failure):
            log.warning(
                f"Failed to link operator {operator.id} to new center {center.id}, "
                f"removing center: {update_result.failure()}",
            )
            delete_result = self.cr.delete_center(center.id)
            if isinstance(delete_result, Failure):
                log.error(
                    f"Center {center.id} ('{center.center_name}') is orphaned; "
                    f"failed to delete it after error: {delete_result.failure()}",
                )
            return update_result

        log.info(
            f"Created center {center.id} ('{center.center_name}') "
            f"for operator {operator.id}, monitoring cities {list(center.city_ids)}",
        )
        return Success(center)

    @staticmethod
    def _parse_date(date: str) -> ResultE[dt.date]:
        """Parse a day/month/year date as entered at the boundary."""
        if date is None or date.strip() == "":
            return Failure(entities.ValidationError(field="date", reason="must not be blank"))
        try:
            return Success(dt.datetime.strptime(date.strip(), entities.DISPLAY_DATE_FORMAT).date())
        except ValueError:
            return Failure(entities.ValidationError(
                field="date",
                reason=f"'{date}' is not a valid day/month/year date",
            ))

    @staticmethod
    def _build_entries(
        category_rows: Sequence[ports.CategoryRow],
    ) -> ResultE[list[entities.CategoryEntry]]:
        """Check the per-category rows and convert them to entries."""
        if category_rows is None or len(category_rows) != len(entities.Category):
            return Failure(entities.ValidationError(
                field="data",
                reason=f"expected exactly {len(entities.Category)} category rows",
            ))
        if all(score is None for score, _ in category_rows):
            return Failure(entities.ValidationError(
                field="data",
                reason="at least one category must be scored",
            ))

        entries: list[entities.CategoryEntry] = []
        for category, (score, comment) in zip(entities.Category, category_rows, strict=True):
            if score is not None and not entities.MIN_SCORE <= score <= entities.MAX_SCORE:
                return Failure(entities.ValidationError(
                    field=category.value,
                    reason=f"score must be between {entities.MIN_SCORE} "
                    f"and {entities.MAX_SCORE}, got {score}",
                ))
            if comment is not None and len(comment) > entities.MAX_COMMENT_LENGTH:
                return Failure(entities.ValidationError(
                    field=category.value,
                    reason=f"comment exceeds {entities.MAX_COMMENT_LENGTH} characters",
                ))
            if comment is not None and comment.strip() == "":
                comment = None
            entries.append(entities.CategoryEntry(score=score, comment=comment))
        return Success(entries)

    @override
    def add_data_to_center(
        self,
        city_id: int,
        operator_id: int,
        date: str,
        category_rows: Sequence[ports.CategoryRow],
    ) -> ResultE[entities.WeatherRecord]:
        operator_result = self.opr.get_operator(operator_id)
        if isinstance(operator_result, Failure):
            return operator_result
        operator = operator_result.unwrap()
        if not operator.has_center:
            return Failure(entities.NotAssociatedError(operator.id))

        city_result = self.tr.get_city(city_id)
        if isinstance(city_result, Failure):
            return city_result

        date_result = self._parse_date(date)
        if isinstance(date_result, Failure):
            return date_result

        entries_result = self._build_entries(category_rows)
        if isinstance(entries_result, Failure):
            return entries_result

        record_result = self.wr.add_weather(
            city_id=city_id,
            center_id=operator.center_id,
            date=date_result.unwrap(),
            entries=entries_result.unwrap(),
        )
        if isinstance(record_result, Success):
            record = record_result.unwrap()
            log.info(
                f"Stored weather record {record.id} for city {city_id} "
                f"on {record.display_date} from center {operator.center_id}",
            )
        return record_result

    @override
    def list_centers(self) -> ResultE[list[entities.Center]]:
        return self.cr.list_centers()
