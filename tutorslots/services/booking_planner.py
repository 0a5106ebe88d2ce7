"""
Application service for planning and submitting tutoring sessions.

The service fetches a tutor's raw availability through a client adapter and
delegates slot generation, grouping and the custom-request check to the
domain layer. The client dependency is expressed as a protocol so the real
REST client and the mock client are interchangeable.
"""

from __future__ import annotations

import logging
from datetime import date as Date
from typing import Any, Dict, List, Optional, Protocol, Tuple

import pendulum
from pendulum import DateTime

from ..domain.availability_parser import TIME_PATTERN, validate_availability
from ..domain.exceptions import BookingValidationError
from ..domain.models import AvailabilitySlot, BookingOutcome, BookingRequest
from ..domain.slot_generator import DEFAULT_HORIZON_DAYS, SlotGenerator
from ..domain.slot_grouper import (
    DEFAULT_DISPLAY_DAYS,
    group_slots_by_date,
    is_time_available,
    select_display_dates,
)

logger = logging.getLogger(__name__)


def parse_session_time(time: str) -> Tuple[int, int]:
    """
    Split a requested HH:MM start time into hour and minute.

    Raises:
        BookingValidationError: If the time is malformed or out of range
    """
    if not isinstance(time, str) or not TIME_PATTERN.fullmatch(time):
        raise BookingValidationError(f"Time must use the HH:MM format, got '{time}'")

    hour, minute = (int(part) for part in time.split(":"))
    if hour > 23 or minute > 59:
        raise BookingValidationError(f"Time out of range: '{time}'")
    return hour, minute


class TutorClientProtocol(Protocol):
    """Protocol describing the API client behaviour needed by the service."""

    def get_tutor_availability(self, tutor_id: str) -> List[str]:
        """Return the tutor's raw availability strings."""

    def update_availability(self, availability: List[str]) -> Dict[str, Any]:
        """Replace the logged-in tutor's availability."""

    def create_booking(self, booking: BookingRequest) -> Dict[str, Any]:
        """Submit a booking and return the created record."""


class BookingPlannerService:
    """
    Orchestrates availability retrieval, slot resolution and booking.
    """

    def __init__(
        self,
        tutor_client: TutorClientProtocol,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        display_days: int = DEFAULT_DISPLAY_DAYS,
        timezone: Optional[str] = None,
    ) -> None:
        self._tutor_client = tutor_client
        self._generator = SlotGenerator(timezone=timezone)
        self.horizon_days = horizon_days
        self.display_days = display_days
        self.timezone = timezone

    def available_slots(self, tutor_id: str, now: Optional[DateTime] = None) -> List[AvailabilitySlot]:
        """Generate the tutor's bookable slots over the configured horizon."""
        availability = self._tutor_client.get_tutor_availability(tutor_id)
        slots = self._generator.generate(availability, horizon_days=self.horizon_days, now=now)
        logger.debug("Generated %d slots for tutor %s", len(slots), tutor_id)
        return slots

    def display_schedule(
        self,
        tutor_id: str,
        now: Optional[DateTime] = None,
    ) -> Dict[str, List[AvailabilitySlot]]:
        """
        Slots grouped by date, limited to the first ``display_days`` dates
        that have availability.
        """
        grouped = group_slots_by_date(self.available_slots(tutor_id, now=now))
        return select_display_dates(grouped, limit=self.display_days)

    def is_custom_time_available(self, tutor_id: str, date: Date, time: str) -> bool:
        """
        Check a custom date/time against the tutor's weekly availability.

        Raises:
            BookingValidationError: If the time is malformed or out of range
        """
        parse_session_time(time)
        availability = self._tutor_client.get_tutor_availability(tutor_id)
        return is_time_available(date, time, availability)

    def book_slot(
        self,
        tutor_id: str,
        slot: AvailabilitySlot,
        duration_minutes: int = 60,
        subject: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> BookingOutcome:
        """Book one of the generated slots."""
        request = self._build_request(tutor_id, slot.instant, duration_minutes, subject, notes)
        booking = self._tutor_client.create_booking(request)
        logger.info("Booked slot %s with tutor %s", slot.instant.to_datetime_string(), tutor_id)
        return BookingOutcome(booking=booking, within_availability=True)

    def request_custom_booking(
        self,
        tutor_id: str,
        date: Date,
        time: str,
        duration_minutes: int = 60,
        subject: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> BookingOutcome:
        """
        Submit a booking for a date/time of the student's choosing.

        The availability check is soft: a request outside the tutor's weekly
        windows is still sent, and the outcome is flagged accordingly.

        Raises:
            BookingValidationError: If the time or duration is malformed
        """
        hour, minute = parse_session_time(time)
        if duration_minutes <= 0:
            raise BookingValidationError("Duration must be greater than zero")

        availability = self._tutor_client.get_tutor_availability(tutor_id)
        within = is_time_available(date, time, availability)
        if not within:
            logger.info(
                "Custom request %s %s is outside tutor %s availability",
                date.isoformat(),
                time,
                tutor_id,
            )

        start = pendulum.datetime(
            date.year,
            date.month,
            date.day,
            hour,
            minute,
            tz=self.timezone or pendulum.local_timezone(),
        )
        request = self._build_request(tutor_id, start, duration_minutes, subject, notes)
        booking = self._tutor_client.create_booking(request)
        return BookingOutcome(booking=booking, within_availability=within)

    def update_own_availability(self, availability: List[str]) -> Dict[str, Any]:
        """Validate and save the logged-in tutor's weekly availability."""
        validated = validate_availability(availability)
        return self._tutor_client.update_availability(validated)

    @staticmethod
    def _build_request(
        tutor_id: str,
        start: DateTime,
        duration_minutes: int,
        subject: Optional[str],
        notes: Optional[str],
    ) -> BookingRequest:
        if duration_minutes <= 0:
            raise BookingValidationError("Duration must be greater than zero")
        return BookingRequest(
            tutor_id=tutor_id,
            date_time=start,
            duration_minutes=duration_minutes,
            subject=subject,
            notes=notes,
        )
