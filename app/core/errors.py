"""Domain errors shared by the repository, the services and the importer."""

from __future__ import annotations


class ServiceError(Exception):
    """Base class carrying a machine-readable code and its HTTP status."""

    status_code = 400

    def __init__(self, code: str, status_code: int | None = None):
        super().__init__(code)
        self.code = code
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:  # pragma: no cover - human readable message
        return self.code


class InvalidInputError(ServiceError):
    """Missing or malformed required input."""

    status_code = 400


class NotFoundError(ServiceError):
    """The referenced id does not exist."""

    status_code = 404


class StorageFailure(ServiceError):
    """The underlying store rejected the operation. Never retried."""

    status_code = 500
