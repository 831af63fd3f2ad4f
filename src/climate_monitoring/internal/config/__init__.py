"""Configuration for the service."""

__all__ = [
    "EnvParser",
    "StoreEnv",
]

from .env import EnvParser, StoreEnv
