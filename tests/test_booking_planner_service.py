"""
Tests for the BookingPlannerService orchestration layer.
"""

from typing import Any, Dict, List

import pendulum
import pytest

from tutorslots.adapters.mock_tutor_client import MockTutorClient
from tutorslots.domain.exceptions import AvailabilityValidationError, BookingValidationError, TutorAPIError
from tutorslots.domain.models import BookingRequest
from tutorslots.services.booking_planner import BookingPlannerService

TZ = "Europe/Berlin"
ANCHOR = pendulum.datetime(2024, 11, 24, 8, 0, tz=TZ)  # Sunday


class StubTutorClient:
    """Minimal stub matching TutorClientProtocol."""

    def __init__(self, availability: Dict[str, List[str]]):
        self._availability = availability
        self.bookings: List[BookingRequest] = []
        self.saved: List[List[str]] = []
        self.calls: List[str] = []

    def get_tutor_availability(self, tutor_id: str) -> List[str]:
        self.calls.append(tutor_id)
        return self._availability.get(tutor_id, [])

    def update_availability(self, availability: List[str]) -> Dict[str, Any]:
        self.saved.append(availability)
        return {"availability": availability}

    def create_booking(self, booking: BookingRequest) -> Dict[str, Any]:
        self.bookings.append(booking)
        return {"id": "booking-1", "status": "CONFIRMED", **booking.to_payload()}


def _build_service(availability: Dict[str, List[str]], **kwargs) -> BookingPlannerService:
    client = StubTutorClient(availability)
    return BookingPlannerService(tutor_client=client, timezone=TZ, **kwargs)


def test_available_slots_use_client_availability():
    """Slots should be generated from the tutor's fetched availability."""
    service = _build_service({"t1": ["Monday 09:00-12:00"]})

    slots = service.available_slots("t1", now=ANCHOR)

    assert len(slots) == 6
    assert slots[0].instant == pendulum.datetime(2024, 11, 25, 9, tz=TZ)


def test_tutor_without_availability_has_no_slots():
    """An unconfigured tutor is an empty state, not an error."""
    service = _build_service({})

    assert service.available_slots("nobody", now=ANCHOR) == []
    assert service.display_schedule("nobody", now=ANCHOR) == {}


def test_display_schedule_limits_dates():
    """Only the first display_days dates with slots are shown."""
    everyday = [
        f"{day} 10:00-11:00"
        for day in ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
    ]
    service = _build_service({"t1": everyday}, horizon_days=14, display_days=3)

    schedule = service.display_schedule("t1", now=ANCHOR)

    assert list(schedule.keys()) == ["2024-11-24", "2024-11-25", "2024-11-26"]


def test_book_slot_submits_slot_instant():
    """Booking a generated slot sends its instant to the API."""
    service = _build_service({"t1": ["Monday 09:00-12:00"]})
    slot = service.available_slots("t1", now=ANCHOR)[1]

    outcome = service.book_slot("t1", slot, duration_minutes=90, subject="Algebra")

    assert outcome.within_availability
    assert outcome.booking["status"] == "CONFIRMED"
    request = service._tutor_client.bookings[0]
    assert request.date_time == pendulum.datetime(2024, 11, 25, 10, tz=TZ)
    assert request.duration_minutes == 90
    assert request.to_payload()["dateTime"] == "2024-11-25T09:00:00Z"
    assert request.to_payload()["subject"] == "Algebra"


def test_custom_booking_inside_availability():
    """A custom request inside the window is flagged as such."""
    service = _build_service({"t1": ["Monday 09:00-12:00"]})

    outcome = service.request_custom_booking("t1", pendulum.date(2024, 11, 25), "10:30")

    assert outcome.within_availability
    request = service._tutor_client.bookings[0]
    assert request.date_time == pendulum.datetime(2024, 11, 25, 10, 30, tz=TZ)


def test_custom_booking_outside_availability_is_still_sent():
    """The availability check is soft; the request goes out anyway."""
    service = _build_service({"t1": ["Monday 09:00-12:00"]})

    outcome = service.request_custom_booking(
        "t1",
        pendulum.date(2024, 11, 26),
        "19:00",
        notes="Exam on Wednesday, could you fit me in?",
    )

    assert not outcome.within_availability
    assert len(service._tutor_client.bookings) == 1
    assert outcome.booking["notes"] == "Exam on Wednesday, could you fit me in?"


@pytest.mark.parametrize(
    "time, duration",
    [("9:00", 60), ("24:00", 60), ("10:60", 60), ("10:00", 0)],
)
def test_custom_booking_validation_happens_before_any_request(time, duration):
    """Malformed requests are rejected without touching the API."""
    service = _build_service({"t1": ["Monday 09:00-12:00"]})

    with pytest.raises(BookingValidationError):
        service.request_custom_booking("t1", pendulum.date(2024, 11, 25), time, duration_minutes=duration)

    assert service._tutor_client.calls == []
    assert service._tutor_client.bookings == []


def test_is_custom_time_available():
    """The predicate is evaluated against fetched availability."""
    service = _build_service({"t1": ["Friday 09:00-11:00", "Friday 14:00-16:00"]})

    assert service.is_custom_time_available("t1", pendulum.date(2024, 11, 29), "10:00")
    assert not service.is_custom_time_available("t1", pendulum.date(2024, 11, 29), "15:00")


@pytest.mark.parametrize("time", ["9am", "9:00", "24:00", "10:75"])
def test_is_custom_time_available_rejects_malformed_time(time):
    """A malformed time is a validation error, not an unavailable slot."""
    service = _build_service({"t1": ["Friday 09:00-11:00"]})

    with pytest.raises(BookingValidationError):
        service.is_custom_time_available("t1", pendulum.date(2024, 11, 29), time)

    assert service._tutor_client.calls == []


def test_update_own_availability_validates_first():
    """Invalid availability is never saved."""
    service = _build_service({})

    with pytest.raises(AvailabilityValidationError):
        service.update_own_availability([])

    result = service.update_own_availability(["Monday 09:00-10:00"])

    assert result == {"availability": ["Monday 09:00-10:00"]}
    assert service._tutor_client.saved == [["Monday 09:00-10:00"]]


class TestWithMockClient:
    """Tests running the service against the bundled mock data."""

    def test_mock_tutor_slots(self):
        """The first mock tutor teaches Monday, Wednesday and Friday."""
        service = BookingPlannerService(tutor_client=MockTutorClient(), timezone=TZ)

        schedule = service.display_schedule("tutor-1", now=ANCHOR)

        assert list(schedule.keys())[:3] == ["2024-11-25", "2024-11-27", "2024-11-29"]

    def test_mock_booking_is_recorded(self):
        """Bookings are kept in memory and confirmed."""
        client = MockTutorClient()
        service = BookingPlannerService(tutor_client=client, timezone=TZ)

        outcome = service.request_custom_booking("tutor-2", pendulum.date(2024, 11, 26), "09:00")

        assert outcome.within_availability
        assert outcome.booking["status"] == "CONFIRMED"
        assert client.bookings[0]["tutorId"] == "tutor-2"

    def test_mock_unknown_tutor(self):
        """Unknown tutors behave like a 404 from the API."""
        service = BookingPlannerService(tutor_client=MockTutorClient(), timezone=TZ)

        with pytest.raises(TutorAPIError) as exc_info:
            service.available_slots("missing")

        assert exc_info.value.status_code == 404

    def test_mock_update_availability(self):
        """Saving availability updates the logged-in tutor's profile."""
        client = MockTutorClient()
        service = BookingPlannerService(tutor_client=client, timezone=TZ)

        service.update_own_availability(["Sunday 10:00-12:00"])

        assert client.get_tutor_availability("tutor-1") == ["Sunday 10:00-12:00"]
        assert client.get_own_profile()["availability"] == ["Sunday 10:00-12:00"]
