"""Interfaces for actor-core communication.

The ports module defines abstract interfaces that specify the signatures
any actors (driving and driven) must obey in order to interact with the core.

*Driving* actors are found in the `handlers` module, and *driven* actors are found
in the `repositories` module.
"""

from .services import CategoryRow, CenterUseCase, CityUseCase, OperatorUseCase
from .repositories import (
    CenterRepository,
    CityRepository,
    OperatorRepository,
    RecordStore,
    WeatherRepository,
)

__all__ = [
    "CategoryRow",
    "CenterUseCase",
    "CityUseCase",
    "OperatorUseCase",
    "CenterRepository",
    "CityRepository",
    "OperatorRepository",
    "RecordStore",
    "WeatherRepository",
]
