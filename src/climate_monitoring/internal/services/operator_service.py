"""Implementation of the operator service."""

import logging
import re
from typing import override

from returns.result import Failure, ResultE, Success

from climate_monitoring.internal import entities, ports

log = logging.getLogger("climate-monitoring")

NAME_PATTERN = re.compile(r"[A-Za-z\s]+", re.ASCII)
TAX_CODE_PATTERN = re.compile(r"[A-Z]{6}\d{2}[A-Z]\d{2}[A-Z]\d{3}[A-Z]", re.ASCII)
EMAIL_PATTERN = re.compile(r"[\w.-]+@([\w-]+\.)+[\w-]{2,4}", re.ASCII)
USERNAME_PATTERN = re.compile(r"[A-Za-z0-9._-]{3,}", re.ASCII)
PASSWORD_PATTERN = re.compile(r"(?=.*[A-Z])(?=.*[@#$%^&+=!.]).{8,}", re.ASCII)


class OperatorService(ports.OperatorUseCase):
    """Service implementation for operator registration and login.

    Defines the business-critical methods and logic.
    """

    repository: ports.OperatorRepository

    def __init__(self, operator_repository: ports.OperatorRepository) -> None:
        """Create a new instance of the service."""
        self.repository = operator_repository

    @classmethod
    def from_adaptors(
        cls,
        store_adaptor: type[ports.RecordStore],
    ) -> ResultE["OperatorService"]:
        """Create a new instance of the service from adaptors."""
        return store_adaptor.connect().map(
            lambda store: cls(operator_repository=store),
        )

    def _validate_registration(
        self,
        name_surname: str,
        tax_code: str,
        email: str,
        username: str,
        password: str,
    ) -> ResultE[None]:
        """Check the registration fields, stopping at the first invalid one."""
        if not NAME_PATTERN.fullmatch(name_surname):
            return Failure(entities.ValidationError(
                field="name_surname",
                reason="must contain only letters and spaces",
            ))
        if not TAX_CODE_PATTERN.fullmatch(tax_code):
            return Failure(entities.ValidationError(
                field="tax_code",
                reason="must be a 16 character fiscal code, e.g. RSSMRA80A01H501T",
            ))
        if not EMAIL_PATTERN.fullmatch(email):
            return Failure(entities.ValidationError(
                field="email",
                reason="must be of the form local@domain.tld",
            ))
        if not USERNAME_PATTERN.fullmatch(username):
            return Failure(entities.ValidationError(
                field="username",
                reason="must be at least 3 letters, digits, dots, underscores or hyphens",
            ))
        existing_result = self.repository.find_operators(
            [entities.Condition("username", username)],
        )
        if isinstance(existing_result, Failure):
            return existing_result
        if len(existing_result.unwrap()) > 0:
            return Failure(entities.DuplicateUsernameError(username))
        if not PASSWORD_PATTERN.fullmatch(password):
            return Failure(entities.ValidationError(
                field="password",
                reason="must be at least 8 characters with an uppercase letter "
                "and one of @#$%^&+=!.",
            ))
        return Success(None)

    @override
    def perform_login(self, username: str, password: str) -> ResultE[entities.Operator | None]:
        if not username or not password:
            return Failure(entities.InvalidInputError(
                field="credentials",
                reason="username and password are both required",
            ))

        matches_result = self.repository.find_operators([
            entities.Condition("username", username),
            entities.Condition("password", entities.hash_credentials(username, password)),
        ])
        if isinstance(matches_result, Failure):
            return matches_result

        matches = matches_result.unwrap()
        match len(matches):
            case 0:
                log.info(f"Rejected login attempt for '{username}'")
                return Success(None)
            case 1:
                log.info(f"Operator '{username}' logged in")
                return Success(matches[0])
            case n:
                log.error(
                    f"Found {n} operators with username '{username}'; "
                    "the record store is not enforcing unique usernames",
                )
                return Failure(entities.InternalInconsistencyError(
                    f"Multiple operators share the username '{username}'",
                ))

    @override
    def perform_registration(
        self,
        name_surname: str,
        tax_code: str,
        email: str,
        username: str,
        password: str,
        center_id: int | None = None,
    ) -> ResultE[entities.Operator]:
        validation_result = self._validate_registration(
            name_surname=name_surname,
            tax_code=tax_code,
            email=email,
            username=username,
            password=password,
        )
        if isinstance(validation_result, Failure):
            log.debug(f"Rejected registration of '{username}': {validation_result.failure()}")
            return validation_result
        if center_id is not None and center_id < entities.NO_CENTER:
            return Failure(entities.ValidationError(
                field="center",
                reason=f"{center_id} is not a valid center id",
            ))

        add_result = self.repository.add_operator(
            name_surname=name_surname,
            tax_code=tax_code,
            email=email,
            username=username,
            password=entities.hash_credentials(username, password),
            center_id=entities.NO_CENTER if center_id is None else center_id,
        )
        if isinstance(add_result, Success):
            log.info(f"Registered operator '{username}' with id {add_result.unwrap().id}")
        return add_result

    @override
    def associate_center(self, operator_id: int, center_id: int) -> ResultE[entities.Operator]:
        if center_id <= entities.NO_CENTER:
            return Failure(entities.ValidationError(
                field="center",
                reason=f"{center_id} is not a valid center id",
            ))

        operator_result = self.repository.get_operator(operator_id)
        if isinstance(operator_result, Failure):
            return operator_result
        operator = operator_result.unwrap()

        if operator.has_center:
            return Failure(entities.AlreadyAssociatedError(operator.id, operator.center_id))

        update_result = self.repository.update_operator(operator.with_center(center_id))
        if isinstance(update_result, Success):
            log.info(f"Associated operator {operator_id} with center {center_id}")
        return update_result
