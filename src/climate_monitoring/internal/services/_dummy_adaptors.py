import dataclasses
import datetime as dt
from collections.abc import Callable, Sequence
from typing import Any, override

from returns.result import Failure, ResultE, Success

from climate_monitoring.internal import entities, ports

DUMMY_CITIES: list[entities.City] = [
    entities.City(1, "Como", "Como", "IT", "Italy", 45.8081, 9.0852),
    entities.City(2, "Varese", "Varese", "IT", "Italy", 45.8206, 8.8251),
    entities.City(3, "Lugano", "Lugano", "CH", "Switzerland", 46.0101, 8.96),
]


def _normalise(key: str) -> str:
    return key.replace("_", "").lower()


def _matches(record: Any, conditions: Sequence[entities.Condition]) -> ResultE[bool]:
    """Match a record's fields against conditions the way the SQL store does."""
    if len(conditions) == 0:
        return Failure(ValueError("At least one condition is required"))
    fields = {_normalise(f.name): f.name for f in dataclasses.fields(record)}
    for condition in conditions:
        name = fields.get(_normalise(condition.key))
        if name is None:
            return Failure(ValueError(f"Unknown field '{condition.key}'"))
        value = getattr(record, name)
        if condition.is_date:
            if isinstance(value, dt.datetime):
                value = value.date()
            if value != condition.day():
                return Success(False)
        elif value != condition.value:
            return Success(False)
    return Success(True)


def _filter[T](records: list[T], conditions: Sequence[entities.Condition]) -> ResultE[list[T]]:
    found: list[T] = []
    for record in records:
        match_result = _matches(record, conditions)
        if isinstance(match_result, Failure):
            return match_result
        if match_result.unwrap():
            found.append(record)
    return Success(found)


class DummyRecordStore(ports.RecordStore):
    """In-memory record store seeded with a handful of cities."""

    def __init__(self) -> None:
        self.cities: dict[int, entities.City] = {c.id: c for c in DUMMY_CITIES}
        self.operators: dict[int, entities.Operator] = {}
        self.centers: dict[int, entities.Center] = {}
        self.weather: dict[int, entities.WeatherRecord] = {}
        self._next_id = 1

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    @classmethod
    @override
    def connect(cls) -> ResultE["DummyRecordStore"]:
        return Success(cls())

    @override
    def get_city(self, city_id: int) -> ResultE[entities.City]:
        if city_id not in self.cities:
            return Failure(entities.NotFoundError("city", city_id))
        return Success(self.cities[city_id])

    @override
    def find_cities(self, conditions: Sequence[entities.Condition]) -> ResultE[list[entities.City]]:
        return _filter(list(self.cities.values()), conditions)

    @override
    def get_operator(self, operator_id: int) -> ResultE[entities.Operator]:
        if operator_id not in self.operators:
            return Failure(entities.NotFoundError("operator", operator_id))
        return Success(self.operators[operator_id])

    @override
    def find_operators(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.Operator]]:
        return _filter(list(self.operators.values()), conditions)

    @override
    def add_operator(
        self,
        name_surname: str,
        tax_code: str,
        email: str,
        username: str,
        password: str,
        center_id: int,
    ) -> ResultE[entities.Operator]:
        if any(o.username == username for o in self.operators.values()):
            return Failure(entities.DuplicateUsernameError(username))
        operator = entities.Operator(
            id=self._new_id(),
            name_surname=name_surname,
            tax_code=tax_code,
            email=email,
            username=username,
            password=password,
            center_id=center_id,
        )
        self.operators[operator.id] = operator
        return Success(operator)

    @override
    def update_operator(self, operator: entities.Operator) -> ResultE[entities.Operator]:
        if operator.id not in self.operators:
            return Failure(entities.NotFoundError("operator", operator.id))
        self.operators[operator.id] = operator
        return Success(operator)

    @override
    def get_center(self, center_id: int) -> ResultE[entities.Center | None]:
        return Success(self.centers.get(center_id))

    @override
    def find_centers(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.Center]]:
        return _filter(list(self.centers.values()), conditions)

    @override
    def list_centers(self) -> ResultE[list[entities.Center]]:
        return Success(list(self.centers.values()))

    @override
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
        center = entities.Center(
            id=self._new_id(),
            center_name=center_name,
            street=street,
            street_number=street_number,
            postal_code=postal_code,
            town=town,
            district=district,
            city_ids=tuple(city_ids),
        )
        if any(c.address_key == center.address_key for c in self.centers.values()):
            return Failure(entities.DuplicateCenterError(center_name))
        self.centers[center.id] = center
        return Success(center)

    @override
    def update_center(self, center: entities.Center) -> ResultE[entities.Center]:
        if center.id not in self.centers:
            return Failure(entities.NotFoundError("center", center.id))
        self.centers[center.id] = center
        return Success(center)

    @override
    def delete_center(self, center_id: int) -> ResultE[int]:
        return Success(0 if self.centers.pop(center_id, None) is None else 1)

    @override
    def get_weather(self, weather_id: int) -> ResultE[entities.WeatherRecord]:
        if weather_id not in self.weather:
            return Failure(entities.NotFoundError("weather record", weather_id))
        return Success(self.weather[weather_id])

    @override
    def find_weather(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.WeatherRecord]]:
        return _filter(list(self.weather.values()), conditions)

    @override
    def add_weather(
        self,
        city_id: int,
        center_id: int,
        date: dt.date,
        entries: Sequence[entities.CategoryEntry],
    ) -> ResultE[entities.WeatherRecord]:
        if len(entries) != len(entities.Category):
            return Failure(ValueError(
                f"Expected {len(entities.Category)} category entries, got {len(entries)}",
            ))
        record = entities.WeatherRecord(
            id=self._new_id(),
            city_id=city_id,
            center_id=center_id,
            date=date,
            **{c.value: e for c, e in zip(entities.Category, entries, strict=True)},
        )
        self.weather[record.id] = record
        return Success(record)


class FailingRecordStore(DummyRecordStore):
    """Dummy store whose chosen methods fail as if storage were down."""

    def __init__(self, failing: Sequence[str] = ()) -> None:
        super().__init__()
        self.failing = set(failing)

    def _fail_or[T](self, name: str, call: Callable[[], ResultE[T]]) -> ResultE[T]:
        if name in self.failing:
            return Failure(entities.StorageUnavailableError(f"{name} is unavailable"))
        return call()

    @override
    def update_operator(self, operator: entities.Operator) -> ResultE[entities.Operator]:
        return self._fail_or(
            "update_operator", lambda: super(FailingRecordStore, self).update_operator(operator),
        )

    @override
    def delete_center(self, center_id: int) -> ResultE[int]:
        return self._fail_or(
            "delete_center", lambda: super(FailingRecordStore, self).delete_center(center_id),
        )

    @override
    def find_operators(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.Operator]]:
        return self._fail_or(
            "find_operators", lambda: super(FailingRecordStore, self).find_operators(conditions),
        )
