"""Record store backed by a relational database.

Storage is accessed through SQLAlchemy Core, so any database with a
SQLAlchemy dialect can back the store. PostgreSQL is the usual choice in
deployment; SQLite is convenient for local use and testing.

The database is chosen via the ``DATABASE_URL`` environment variable.
Set ``DATABASE_ECHO=true`` to log every statement issued.

Each entity has its own pair of functions mapping between domain records
and table rows. Writes select the right one statically by entity type,
rather than inspecting the type of a generic record at runtime.

Tables are created on connection if they do not already exist. Schema
migrations are not handled.
"""

import dataclasses
import datetime as dt
import logging
from collections.abc import Callable, Sequence
from typing import Any, override

import sqlalchemy as sa
from returns.result import Failure, ResultE, Success
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from climate_monitoring.internal import config, entities, ports

from . import _schema
from ._translate import build_filter

log = logging.getLogger("climate-monitoring")


# --- Row mapping --- #


def _city_values(city: entities.City) -> dict[str, Any]:
    return {
        "id": city.id,
        "name": city.name,
        "ascii_name": city.ascii_name,
        "country_code": city.country_code,
        "country_name": city.country_name,
        "latitude": city.latitude,
        "longitude": city.longitude,
    }


def _to_city(row: sa.Row[Any]) -> entities.City:
    return entities.City(
        id=row.id,
        name=row.name,
        ascii_name=row.ascii_name,
        country_code=row.country_code,
        country_name=row.country_name,
        latitude=row.latitude,
        longitude=row.longitude,
    )


def _operator_values(operator: entities.Operator) -> dict[str, Any]:
    return {
        "name_surname": operator.name_surname,
        "tax_code": operator.tax_code,
        "email": operator.email,
        "username": operator.username,
        "password": operator.password,
        "center_id": operator.center_id,
    }


def _to_operator(row: sa.Row[Any]) -> entities.Operator:
    return entities.Operator(
        id=row.id,
        name_surname=row.name_surname,
        tax_code=row.tax_code,
        email=row.email,
        username=row.username,
        password=row.password,
        center_id=row.center_id or entities.NO_CENTER,
    )


def _center_values(center: entities.Center) -> dict[str, Any]:
    return {
        "center_name": center.center_name,
        "street": center.street,
        "street_number": center.street_number,
        "postal_code": center.postal_code,
        "town": center.town,
        "district": center.district,
        "city_ids": list(center.city_ids),
    }


def _to_center(row: sa.Row[Any]) -> entities.Center:
    return entities.Center(
        id=row.id,
        center_name=row.center_name,
        street=row.street,
        street_number=row.street_number,
        postal_code=row.postal_code,
        town=row.town,
        district=row.district,
        city_ids=tuple(int(i) for i in row.city_ids),
    )


def _weather_values(
    city_id: int,
    center_id: int,
    date: dt.date,
    entries: Sequence[entities.CategoryEntry],
) -> dict[str, Any]:
    values: dict[str, Any] = {"city_id": city_id, "center_id": center_id, "date": date}
    for category, entry in zip(entities.Category, entries, strict=True):
        values[f"{category}_score"] = entry.score
        values[f"{category}_comment"] = entry.comment
    return values


def _to_weather(row: sa.Row[Any]) -> entities.WeatherRecord:
    mapping = row._mapping
    return entities.WeatherRecord(
        id=row.id,
        city_id=row.city_id,
        center_id=row.center_id,
        date=row.date,
        **{
            # Rows written by older clients hold zero for unobserved scores
            category.value: entities.CategoryEntry(
                score=mapping[f"{category}_score"] or None,
                comment=mapping[f"{category}_comment"],
            )
            for category in entities.Category
        },
    )


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# --- Store implementation --- #


class SQLRecordStore(ports.RecordStore):
    """Record store persisting to a SQL database."""

    engine: sa.Engine

    def __init__(self, engine: sa.Engine) -> None:
        """Create a new instance."""
        self.engine = engine
        if engine.dialect.name == "sqlite":
            # SQLite leaves foreign keys unchecked unless asked per connection
            sa.event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    @classmethod
    @override
    def connect(cls) -> ResultE["SQLRecordStore"]:
        try:
            env = config.StoreEnv()
            engine = sa.create_engine(env.DATABASE_URL, echo=env.DATABASE_ECHO)
        except (OSError, ImportError, ValueError, SQLAlchemyError) as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to configure record store: {e}",
            ))
        store = cls(engine=engine)
        log.debug(f"Connecting to record store at '{engine.url!r}'")
        return store.create_schema().map(lambda _: store)

    def create_schema(self) -> ResultE[None]:
        """Create any missing tables."""
        try:
            _schema.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to create record store schema: {e}",
            ))
        return Success(None)

    def _fetch_one[T](
        self,
        table: sa.Table,
        identifier: int,
        mapper: Callable[[sa.Row[Any]], T],
    ) -> ResultE[T | None]:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    sa.select(table).where(table.c.id == identifier),
                ).one_or_none()
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to read id {identifier} from '{table.name}': {e}",
            ))
        return Success(None if row is None else mapper(row))

    def _fetch_many[T](
        self,
        table: sa.Table,
        conditions: Sequence[entities.Condition] | None,
        mapper: Callable[[sa.Row[Any]], T],
    ) -> ResultE[list[T]]:
        stmt = sa.select(table).order_by(table.c.id)
        if conditions is not None:
            filter_result = build_filter(table, conditions)
            if isinstance(filter_result, Failure):
                return filter_result
            stmt = stmt.where(filter_result.unwrap())
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to query '{table.name}': {e}",
            ))
        return Success([mapper(row) for row in rows])

    @staticmethod
    def _require[T](result: ResultE[T | None], entity: str, identifier: int) -> ResultE[T]:
        return result.bind(
            lambda found: Failure(entities.NotFoundError(entity, identifier))
            if found is None else Success(found),
        )

    # --- Cities --- #

    @override
    def get_city(self, city_id: int) -> ResultE[entities.City]:
        return self._require(
            self._fetch_one(_schema.cities, city_id, _to_city), "city", city_id,
        )

    @override
    def find_cities(self, conditions: Sequence[entities.Condition]) -> ResultE[list[entities.City]]:
        return self._fetch_many(_schema.cities, conditions, _to_city)

    def add_city(self, city: entities.City) -> ResultE[entities.City]:
        """Store a city with its own id, for seeding the store."""
        try:
            with self.engine.begin() as conn:
                conn.execute(sa.insert(_schema.cities).values(**_city_values(city)))
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to store city {city.id}: {e}",
            ))
        return Success(city)

    # --- Operators --- #

    @override
    def get_operator(self, operator_id: int) -> ResultE[entities.Operator]:
        return self._require(
            self._fetch_one(_schema.operators, operator_id, _to_operator),
            "operator",
            operator_id,
        )

    @override
    def find_operators(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.Operator]]:
        return self._fetch_many(_schema.operators, conditions, _to_operator)

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
        operator = entities.Operator(
            id=0,
            name_surname=name_surname,
            tax_code=tax_code,
            email=email,
            username=username,
            password=password,
            center_id=center_id,
        )
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    sa.insert(_schema.operators).values(**_operator_values(operator)),
                )
                new_id: int = result.inserted_primary_key[0]  # type: ignore[index]
        except IntegrityError:
            return Failure(entities.DuplicateUsernameError(username))
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to store operator '{username}': {e}",
            ))
        log.debug(f"Stored operator '{username}' with id {new_id}")
        return Success(dataclasses.replace(operator, id=new_id))

    @override
    def update_operator(self, operator: entities.Operator) -> ResultE[entities.Operator]:
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    sa.update(_schema.operators)
                    .where(_schema.operators.c.id == operator.id)
                    .values(**_operator_values(operator)),
                )
        except IntegrityError:
            return Failure(entities.DuplicateUsernameError(operator.username))
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to update operator {operator.id}: {e}",
            ))
        if result.rowcount == 0:
            return Failure(entities.NotFoundError("operator", operator.id))
        return Success(operator)

    # --- Centers --- #

    @override
    def get_center(self, center_id: int) -> ResultE[entities.Center | None]:
        return self._fetch_one(_schema.centers, center_id, _to_center)

    @override
    def find_centers(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.Center]]:
        return self._fetch_many(_schema.centers, conditions, _to_center)

    @override
    def list_centers(self) -> ResultE[list[entities.Center]]:
        return self._fetch_many(_schema.centers, None, _to_center)

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
            id=0,
            center_name=center_name,
            street=street,
            street_number=street_number,
            postal_code=postal_code,
            town=town,
            district=district,
            city_ids=tuple(city_ids),
        )
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    sa.insert(_schema.centers).values(**_center_values(center)),
                )
                new_id: int = result.inserted_primary_key[0]  # type: ignore[index]
        except IntegrityError:
            return Failure(entities.DuplicateCenterError(center_name))
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to store center '{center_name}': {e}",
            ))
        log.debug(f"Stored center '{center_name}' with id {new_id}")
        return Success(dataclasses.replace(center, id=new_id))

    @override
    def update_center(self, center: entities.Center) -> ResultE[entities.Center]:
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    sa.update(_schema.centers)
                    .where(_schema.centers.c.id == center.id)
                    .values(**_center_values(center)),
                )
        except IntegrityError:
            return Failure(entities.DuplicateCenterError(center.center_name))
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to update center {center.id}: {e}",
            ))
        if result.rowcount == 0:
            return Failure(entities.NotFoundError("center", center.id))
        return Success(center)

    @override
    def delete_center(self, center_id: int) -> ResultE[int]:
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    sa.delete(_schema.centers).where(_schema.centers.c.id == center_id),
                )
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to delete center {center_id}: {e}",
            ))
        return Success(result.rowcount)

    # --- Weather --- #

    @override
    def get_weather(self, weather_id: int) -> ResultE[entities.WeatherRecord]:
        return self._require(
            self._fetch_one(_schema.weather, weather_id, _to_weather),
            "weather record",
            weather_id,
        )

    @override
    def find_weather(
        self, conditions: Sequence[entities.Condition],
    ) -> ResultE[list[entities.WeatherRecord]]:
        return self._fetch_many(_schema.weather, conditions, _to_weather)

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
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    sa.insert(_schema.weather).values(
                        **_weather_values(city_id, center_id, date, entries),
                    ),
                )
                new_id: int = result.inserted_primary_key[0]  # type: ignore[index]
        except IntegrityError:
            # Either the city or the center row is missing
            city_result = self.get_city(city_id)
            if isinstance(city_result, Failure):
                return city_result
            return Failure(entities.NotFoundError("center", center_id))
        except SQLAlchemyError as e:
            return Failure(entities.StorageUnavailableError(
                f"Failed to store weather record for city {city_id}: {e}",
            ))
        return Success(entities.WeatherRecord(
            id=new_id,
            city_id=city_id,
            center_id=center_id,
            date=date,
            **{c.value: e for c, e in zip(entities.Category, entries, strict=True)},
        ))
