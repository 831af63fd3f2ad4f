"""Domain errors raised through the core.

Fallible operations in the core return ``ResultE`` containers, and
the failures they carry are instances of the classes defined here.
Each class subclasses the builtin exception closest in meaning, so
callers that only care about broad categories (e.g. ``ValueError``
for anything the user can correct) can match on those instead.

Only `StorageUnavailableError` is considered potentially transient.
The core never retries: that is left to the caller or to the
storage collaborator itself.
"""


class ValidationError(ValueError):
    """Caller-supplied data failed a format or business rule."""

    field: str
    """The name of the offending input field."""

    reason: str
    """A human-readable explanation of the failure."""

    def __init__(self, field: str, reason: str) -> None:
        """Create a new instance."""
        super().__init__(f"Invalid {field}: {reason}")
        self.field = field
        self.reason = reason


class InvalidInputError(ValidationError):
    """Required input was missing entirely."""


class DuplicateUsernameError(ValidationError):
    """A registration attempted to reuse an existing username."""

    def __init__(self, username: str) -> None:
        """Create a new instance."""
        super().__init__(field="username", reason=f"'{username}' is already taken")


class DuplicateCenterError(ValidationError):
    """A center with identical name and address already exists."""

    def __init__(self, center_name: str) -> None:
        """Create a new instance."""
        super().__init__(
            field="center",
            reason=f"a center named '{center_name}' already exists at this address",
        )


class NotFoundError(LookupError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        """Create a new instance."""
        super().__init__(f"No {entity} found with id {identifier}")
        self.entity = entity
        self.identifier = identifier


class AssociationError(RuntimeError):
    """Base for operator/center relationship state violations."""


class AlreadyAssociatedError(AssociationError):
    """The operator is already bound to a monitoring center."""

    def __init__(self, operator_id: int, center_id: int) -> None:
        """Create a new instance."""
        super().__init__(
            f"Operator {operator_id} is already associated with center {center_id}",
        )
        self.operator_id = operator_id
        self.center_id = center_id


class NotAssociatedError(AssociationError):
    """The operator is not bound to any monitoring center."""

    def __init__(self, operator_id: int) -> None:
        """Create a new instance."""
        super().__init__(f"Operator {operator_id} is not associated with any center")
        self.operator_id = operator_id


class StorageUnavailableError(OSError):
    """The record store failed to service a request."""


class InternalInconsistencyError(RuntimeError):
    """Stored data violates an invariant the core relies upon."""
