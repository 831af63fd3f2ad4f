"""Domain entity for an operator's working session.

A session records which operator, if any, is currently logged in at a
boundary (a terminal, a remote client). It is created and owned by the
driving actor and passed explicitly to wherever it is needed: the core
itself keeps no global notion of a current user.
"""

import dataclasses

from returns.result import Failure, ResultE, Success

from .errors import InvalidInputError
from .operator import Operator


@dataclasses.dataclass(slots=True)
class Session:
    """The login state at a single boundary."""

    operator: Operator | None = None
    """The logged in operator, or None before login."""

    def login(self, operator: Operator) -> None:
        """Start the session for an operator."""
        self.operator = operator

    def refresh(self, operator: Operator) -> None:
        """Replace the logged in operator with an updated copy.

        Raises:
            ValueError: If the given operator is not the one logged in.
        """
        if self.operator is None or self.operator.id != operator.id:
            raise ValueError(f"Operator {operator.id} does not own this session")
        self.operator = operator

    def require_operator(self) -> ResultE[Operator]:
        """Get the logged in operator, failing if there is none."""
        if self.operator is None:
            return Failure(InvalidInputError(
                field="session",
                reason="an operator must be logged in",
            ))
        return Success(self.operator)
