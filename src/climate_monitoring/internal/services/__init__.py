"""Implementations of the core services.

The services module holds the concrete implementations of the use case
interfaces defined in `ports.services`. They contain the business logic
of the application, and reach storage only through the repository
interfaces defined in `ports.repositories`.
"""

from .center_service import CenterService
from .city_service import CityService
from .operator_service import OperatorService

__all__ = [
    "CenterService",
    "CityService",
    "OperatorService",
]
