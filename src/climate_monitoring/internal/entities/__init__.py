"""Struct definitions for domain entities.

These define data objects and behaviours that are used in the services core.

Domain Entities
---------------

Entities are the core building blocks of the domain layer. They are the
representations of the business objects that are manipulated by the application:
the cities under monitoring, the operators who record observations, the centers
they work from, and the observations themselves.

By using domain entities in the core, it is ensured that the business logic is
separated from the technical details of the application.

A domain entity may have associated methods that define its behaviour, but it
should not contain any logic that is specific to a particular implementation.
"""

from .city import City
from .center import Center
from .conditions import Condition, ConditionValue
from .errors import (
    AlreadyAssociatedError,
    AssociationError,
    DuplicateCenterError,
    DuplicateUsernameError,
    InternalInconsistencyError,
    InvalidInputError,
    NotAssociatedError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from .operator import NO_CENTER, Operator, hash_credentials
from .session import Session
from .summary import CategorySummary, WeatherSummary
from .weather import (
    DISPLAY_DATE_FORMAT,
    MAX_COMMENT_LENGTH,
    MAX_SCORE,
    MIN_SCORE,
    Category,
    CategoryEntry,
    WeatherRecord,
)

__all__ = [
    "City",
    "Center",
    "Condition",
    "ConditionValue",
    "AlreadyAssociatedError",
    "AssociationError",
    "DuplicateCenterError",
    "DuplicateUsernameError",
    "InternalInconsistencyError",
    "InvalidInputError",
    "NotAssociatedError",
    "NotFoundError",
    "StorageUnavailableError",
    "ValidationError",
    "NO_CENTER",
    "Operator",
    "hash_credentials",
    "Session",
    "CategorySummary",
    "WeatherSummary",
    "DISPLAY_DATE_FORMAT",
    "MAX_COMMENT_LENGTH",
    "MAX_SCORE",
    "MIN_SCORE",
    "Category",
    "CategoryEntry",
    "WeatherRecord",
]
