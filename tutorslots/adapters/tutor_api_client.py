"""
REST client for the tutoring marketplace API.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..domain.exceptions import AuthenticationError, TutorAPIError
from ..domain.models import BookingRequest

logger = logging.getLogger(__name__)

# Fallback messages when the API does not send its own
STATUS_MESSAGES: Dict[int, str] = {
    400: "Invalid request. Please check your input.",
    401: "Session expired. Please login again.",
    403: "You do not have permission to perform this action.",
    404: "The requested resource was not found.",
    409: "This resource already exists.",
    422: "Validation failed. Please check your input.",
    429: "Too many requests. Please try again later.",
    500: "Server error. Please try again later.",
    503: "Service temporarily unavailable. Please try again later.",
}
DEFAULT_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def extract_availability(tutor_data: Dict[str, Any]) -> List[str]:
    """
    Pull the availability strings out of a tutor or profile response.

    Accepts both ``{"tutorProfile": {"availability": [...]}}`` and a bare
    profile with a top-level ``availability`` key.
    """
    profile = tutor_data.get("tutorProfile") or tutor_data
    availability = profile.get("availability") if isinstance(profile, dict) else None

    if not isinstance(availability, list):
        return []

    return [value for value in availability if isinstance(value, str)]


class TutorAPIClient:
    """
    Client for the tutor, availability and booking endpoints.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: int = 30):
        """
        Initialize the API client.
        
        Args:
            base_url: API root, e.g. http://localhost:5000/api
            token: Optional bearer token of the logged-in user
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def get_tutor(self, tutor_id: str) -> Dict[str, Any]:
        """Fetch a tutor with profile details (``GET /tutors/{id}``)."""
        return self._request("GET", f"/tutors/{tutor_id}")

    def get_own_profile(self) -> Dict[str, Any]:
        """Fetch the logged-in tutor's profile (``GET /tutors/profile``)."""
        return self._request("GET", "/tutors/profile")

    def get_tutor_availability(self, tutor_id: str) -> List[str]:
        """Fetch a tutor and return their raw availability strings."""
        return extract_availability(self.get_tutor(tutor_id))

    def update_availability(self, availability: List[str]) -> Dict[str, Any]:
        """Replace the logged-in tutor's weekly availability."""
        return self._request("PUT", "/tutors/availability", json={"availability": availability})

    def create_booking(self, booking: BookingRequest) -> Dict[str, Any]:
        """Submit a booking (``POST /bookings``)."""
        return self._request("POST", "/bookings", json=booking.to_payload())

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            response = requests.request(
                method,
                url,
                headers=self.headers,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TutorAPIError(
                f"Network error. Please check your internet connection. ({e})"
            ) from e

        if not response.ok:
            raise self._build_error(response)

        if not response.content:
            return {}

        try:
            data = response.json()
        except ValueError as e:
            raise TutorAPIError(
                f"Invalid JSON in response from {url}",
                status_code=response.status_code,
            ) from e

        return data if isinstance(data, dict) else {"data": data}

    @staticmethod
    def _build_error(response: requests.Response) -> TutorAPIError:
        """
        Normalize an error response into a TutorAPIError.

        Error bodies look like ``{"error": ..., "message": ..., "details": ...}``.
        """
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            body = {}

        message = body.get("message") or STATUS_MESSAGES.get(status, DEFAULT_ERROR_MESSAGE)
        details = body.get("details")

        logger.warning("API request failed with status %s: %s", status, message)

        if status == 401:
            return AuthenticationError(message, status_code=status, details=details)
        return TutorAPIError(message, status_code=status, details=details)
