"""
Domain-specific exception hierarchy for the tutorslots application.
"""

from typing import Any, Optional


class TutorSlotsError(Exception):
    """Base class for all application-level errors."""


class TutorAPIError(TutorSlotsError):
    """Raised when the tutoring API rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthenticationError(TutorAPIError):
    """Raised when the API token is missing, expired or invalid."""


class AvailabilityValidationError(TutorSlotsError):
    """Raised when a tutor's availability edit cannot be accepted."""


class BookingValidationError(TutorSlotsError):
    """Raised when a booking request is malformed before it is sent."""
