"""Structured error types for the DynamoDB storage adapter."""

from __future__ import annotations


class GrafeasStorageError(Exception):
    """Base error for all storage adapter errors."""


class ConditionFailedError(GrafeasStorageError):
    """Raised when a conditional write precondition does not hold."""


class NotFoundError(ConditionFailedError):
    """Raised when no row matches the requested key."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} with name {name!r} does not exist")


class AlreadyExistsError(ConditionFailedError):
    """Raised when a create loses the race against an existing row."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} with name {name!r} already exists")


class InvalidArgumentError(GrafeasStorageError):
    """Raised when caller-supplied input cannot be used."""


class InvalidNameError(InvalidArgumentError):
    """Raised when a resource name does not follow the expected format."""

    def __init__(self, name: str, expected: str) -> None:
        self.name = name
        self.expected = expected
        super().__init__(f"Invalid name {name!r}, expected {expected!r}")


class InvalidPageTokenError(InvalidArgumentError):
    """Raised when a continuation token cannot be decoded."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid page token {token!r}")


class InternalError(GrafeasStorageError):
    """Raised for conditions that indicate a bug or corrupted stored data."""


class SerializationError(InternalError):
    """Raised when an entity cannot be encoded for storage."""

    def __init__(self, kind: str, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"Unable to encode {kind}: {detail}")


class DeserializationError(InternalError):
    """Raised when a stored row or payload cannot be decoded."""

    def __init__(self, kind: str, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"Unable to decode stored {kind}: {detail}")


class UnavailableError(GrafeasStorageError):
    """Raised for transient backend failures (throttling, connectivity, timeouts)."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage backend unavailable during {operation}: {detail}")


class StorageBackendError(GrafeasStorageError):
    """Raised when backend storage operations fail."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage backend error during {operation}: {detail}")
