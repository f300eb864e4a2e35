"""
Domain Exceptions

Typed errors raised by services and repositories. Each error carries a
human readable message, a stable machine readable code and optional
details. The API layer maps every class to a fixed HTTP status
(see shared.api.exception_handler).
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for all domain errors"""

    status_code = 500
    default_code = "domain_error"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationFailed(DomainError):
    """Malformed or out-of-range input (bad date, party size, bucket size)"""

    status_code = 400
    default_code = "validation_error"


class NotFound(DomainError):
    """Referenced course, booking or user does not exist"""

    status_code = 404
    default_code = "not_found"


class Forbidden(DomainError):
    """Role or ownership mismatch"""

    status_code = 403
    default_code = "forbidden"


class Conflict(DomainError):
    """The request collides with existing state"""

    status_code = 409
    default_code = "conflict"


class SlotTaken(Conflict):
    """Tee-time slot is already held by another booking"""

    default_code = "slot_taken"


class ActiveSessionExists(Conflict):
    """User already has an active driving-range session"""

    default_code = "active_session_exists"


class DuplicateEmail(Conflict):
    default_code = "duplicate_email"


class PreconditionFailed(DomainError):
    """
    Business rule refuses the operation in the current state

    Examples: cancellation inside the lead-time window, bucket usage
    above the booked count. Not retryable.
    """

    status_code = 422
    default_code = "precondition_failed"


class StorageError(DomainError):
    """Entity store unavailable or an unclassified constraint violation"""

    status_code = 503
    default_code = "storage_error"
