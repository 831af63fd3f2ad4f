"""Domain entity for registered operators.

Operators are the field staff who record observations. Each one may be
associated with at most one monitoring center, and that association can
only be made once: the `center_id` field moves from the `NO_CENTER`
sentinel to a concrete center id, and never changes thereafter.

The sentinel is the integer zero rather than ``None``. Zero means
"no center", not "the center with id zero".
"""

import dataclasses
import hashlib

NO_CENTER: int = 0
"""Sentinel center id for operators not yet linked to a center."""


def hash_credentials(username: str, password: str) -> str:
    """Hash an operator's credentials for storage.

    The digest is the hex-encoded SHA-256 of the username followed
    by the password. There is no per-user salt, matching the format
    already held in existing stores.

    Args:
        username: The operator's username.
        password: The operator's plaintext password.

    Returns:
        The 64 character lowercase hex digest.
    """
    return hashlib.sha256((username + password).encode("utf-8")).hexdigest()


@dataclasses.dataclass(slots=True, frozen=True)
class Operator:
    """A registered operator."""

    id: int
    name_surname: str
    tax_code: str
    email: str
    username: str
    password: str
    """The hashed credentials, never the plaintext password."""

    center_id: int = NO_CENTER
    """The id of the operator's center, or `NO_CENTER`."""

    @property
    def has_center(self) -> bool:
        """Whether the operator is linked to a center."""
        return self.center_id != NO_CENTER

    def with_center(self, center_id: int) -> "Operator":
        """Return a copy of the operator linked to the given center."""
        return dataclasses.replace(self, center_id=center_id)

    def __str__(self) -> str:
        """Return a description of the operator without credentials."""
        center = f"center {self.center_id}" if self.has_center else "no center"
        return f"{self.name_surname} <{self.email}> as '{self.username}' ({center})"
