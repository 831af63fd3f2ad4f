"""Config struct for application running."""
import os
from typing import get_type_hints

import structlog

log = structlog.getLogger()

_TRUTHY: frozenset[str] = frozenset({"y", "yes", "t", "true", "on", "1"})
_FALSY: frozenset[str] = frozenset({"n", "no", "f", "false", "off", "0"})


def _parse_bool(value: str) -> bool:
    """Convert a string representation of truth to a bool.

    Raises:
        ValueError: If the string is not a recognised truth value.
    """
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Invalid truth value {value!r}")


class EnvParser:
    """Mixin to parse environment variables into class fields.

    Whilst this could be done with Pydantic, it's nice to avoid the
    extra dependency if possible, and pydantic would be overkill for
    this small use case.
    """

    def __init__(self) -> None:
        """Parse environment variables into class fields.

        If the class field is upper case, parse it into the indicated
        type from the environment. Required fields are those set in
        the child class without a default value.

        Examples:
        >>> MyEnv(EnvParser):
        >>>     REQUIRED_ENV_VAR: str
        >>>     OPTIONAL_ENV_VAR: str = "default value"
        >>>     ignored_var: str = "ignored"
        """
        for field, t in get_type_hints(type(self)).items():
            # Skip item if not upper case
            if not field.isupper():
                continue

            default_value = getattr(self, field, None)
            match (default_value, os.environ.get(field)):
                case (None, None):
                    # No default value, and field not in env
                    raise OSError(f"Required field {field} not supplied")
                case (_, None):
                    # A default value is set and field not in env
                    pass
                case (_, _):
                    # Field is in env
                    env_value: str | bool = os.environ[field]
                    # Handle bools seperately as bool("False") == True
                    if t is bool:
                        env_value = _parse_bool(os.environ[field])
                    # Cast to desired type
                    self.__setattr__(field, t(env_value))

    @classmethod
    def print_env(cls) -> None:
        """Log the environment variables the class reads."""
        message: str = f"Environment variables for {cls.__name__}:\n"
        for field, _ in get_type_hints(cls).items():
            if not field.isupper():
                continue
            default_value = getattr(cls, field, None)
            default = f" (default: {default_value})" if default_value is not None else ""
            message += f"\t{field}{default}\n"
        log.info(message)


# --- Record store environment variables --- #


class StoreEnv(EnvParser):
    """Config for the SQL record store."""

    DATABASE_URL: str = "sqlite:///climate_monitoring.db"
    DATABASE_ECHO: bool = False
