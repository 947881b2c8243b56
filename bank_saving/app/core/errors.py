from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    CONFLICT = "conflict"
    STORAGE_FAILURE = "storage_failure"


class ServiceError(Exception):
    """Base class for failures raised by the service layer.

    Every error carries a human-readable message and a kind; the HTTP layer
    maps the kind to a status code.
    """

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(ServiceError):
    """Raised when input passes schema validation but is still unusable."""

    kind = ErrorKind.VALIDATION


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class AccountNotFoundError(NotFoundError):
    """Raised when an account id is missing from the store."""


class CustomerNotFoundError(NotFoundError):
    """Raised when a customer id is missing from the store."""


class DepositoTypeNotFoundError(NotFoundError):
    """Raised when a deposito type cannot be resolved."""


class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction id is missing from the store."""


class InsufficientBalanceError(ServiceError):
    """Raised when a withdrawal would drop the post-interest balance below zero."""

    kind = ErrorKind.INSUFFICIENT_BALANCE


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT


class ConcurrentUpdateError(ConflictError):
    """Raised when the account changed between the balance read and the write."""


class ResourceInUseError(ConflictError):
    """Raised when a delete would orphan dependent records."""


class StorageFailureError(ServiceError):
    """Raised when the underlying persistence operation errored."""

    kind = ErrorKind.STORAGE_FAILURE
