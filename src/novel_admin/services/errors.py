"""Exception types raised by the service layer.

The API layer translates these into HTTP responses; services never raise
``HTTPException`` themselves.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for service-layer failures."""


class DataAccessError(ServiceError):
    """The data store rejected an operation or could not be reached."""


class ConflictError(DataAccessError):
    """A write violated a uniqueness or integrity constraint."""


class RecordNotFoundError(ServiceError):
    """No row matched the requested identifier."""

    def __init__(self, collection: str, record_id: str) -> None:
        super().__init__(f"{collection} record {record_id!r} not found")
        self.collection = collection
        self.record_id = record_id


class ValidationFailure(ServiceError):
    """Client input failed validation before any write was attempted."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidRangeError(ServiceError, ValueError):
    """A time range whose start lies after its end."""


class ProcedureError(ServiceError):
    """Unknown stored procedure or arguments it refuses."""


class AuthenticationError(ServiceError):
    """Credentials or bearer token could not be verified."""


class AuthorizationError(ServiceError):
    """The actor is authenticated but lacks the admin role."""
