"""
Domain exceptions raised by the service layer.

Services never raise ``HTTPException`` directly; they raise one of the
classes below and the application's exception handlers (see
``main.py``) turn them into JSON responses.  Each class carries the
HTTP status it maps to and a message that is safe to show to clients.
"""

from typing import Optional, Sequence


class ServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Required input is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(ServiceError):
    """Bad credentials, or a missing/invalid/expired token or session."""

    status_code = 401
    default_message = "Not authenticated"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Already exists"


class StoreError(ServiceError):
    """The database failed.  The public message never carries the cause."""

    status_code = 500


class PartialReorderError(StoreError):
    """Some records named in a reorder batch did not exist.

    Updates for the records that did exist have already been committed;
    ``missing_ids`` is kept for server-side logging only.
    """

    default_message = "Failed to save order"

    def __init__(self, missing_ids: Sequence[str]) -> None:
        self.missing_ids = list(missing_ids)
        super().__init__()
