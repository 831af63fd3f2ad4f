"""Translation of record conditions into SQL filters.

The services describe lookups as ordered lists of `entities.Condition`
objects. This module turns such a list into a SQLAlchemy boolean clause
for a given table, equivalent to a ``WHERE`` of ANDed equalities.

Values are always bound as parameters, and condition keys are resolved
against the table's real columns, so no caller-supplied text ever reaches
the SQL statement itself.

Date-typed values compare on the calendar day alone: both the column and
the value are truncated to a date, as with ``CAST(column AS DATE) = ?``.
The ``DATE()`` function is used for this rather than a cast, since it
behaves the same way across PostgreSQL, MySQL and SQLite, whereas casting
to a date in SQLite yields a number.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from returns.result import Failure, ResultE, Success

from climate_monitoring.internal import entities


def _normalise(key: str) -> str:
    return key.replace("_", "").lower()


def resolve_column(table: sa.Table, key: str) -> ResultE[sa.Column]:  # type: ignore[type-arg]
    """Find the column of a table that a condition key refers to.

    Keys match column names case-insensitively and regardless of
    underscores, so ``cityID``, ``cityid`` and ``city_id`` are equivalent.
    """
    wanted = _normalise(key)
    for column in table.columns:
        if _normalise(column.name) == wanted:
            return Success(column)
    return Failure(ValueError(
        f"Unknown field '{key}' for table '{table.name}'. "
        f"Expected one of {[c.name for c in table.columns]}",
    ))


def build_filter(
    table: sa.Table,
    conditions: Sequence[entities.Condition],
) -> ResultE[sa.ColumnElement[bool]]:
    """Build a filter clause matching every one of the given conditions.

    Args:
        table: The table the conditions apply to.
        conditions: The conditions to AND together, in binding order.

    Returns:
        The clause, or a failure carrying a ValueError if there are no
        conditions or a condition names an unknown field.
    """
    if len(conditions) == 0:
        return Failure(ValueError(
            f"At least one condition is required to query table '{table.name}'",
        ))

    clauses: list[sa.ColumnElement[bool]] = []
    for condition in conditions:
        column_result = resolve_column(table, condition.key)
        if isinstance(column_result, Failure):
            return column_result
        column = column_result.unwrap()

        if condition.is_date:
            clauses.append(sa.func.date(column, type_=sa.Date) == condition.day())
        elif condition.value is None:
            clauses.append(column.is_(None))
        else:
            clauses.append(column == condition.value)

    return Success(sa.and_(*clauses))
