"""
Domain models for recurring availability and bookable slots.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pendulum import DateTime

# Index matches datetime.weekday(): 0=Monday, 6=Sunday
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Hours past the end of the day cannot be placed on a calendar date
HOURS_PER_DAY = 24


@dataclass(frozen=True)
class RecurrenceRule:
    """
    One weekly availability window, e.g. ``Monday 09:00-17:00``.

    The parser only guarantees the wire shape, so ``day_of_week`` may be any
    word and the range may be inverted.
    """
    day_of_week: str
    start_time: str
    end_time: str

    @property
    def start_hour(self) -> int:
        return int(self.start_time.split(":")[0])

    @property
    def end_hour(self) -> int:
        return int(self.end_time.split(":")[0])

    def is_known_weekday(self) -> bool:
        """Check if the day token is one of the seven canonical names."""
        return self.day_of_week in WEEKDAY_NAMES

    def __str__(self) -> str:
        return f"{self.day_of_week} {self.start_time}-{self.end_time}"


@dataclass(frozen=True)
class ParsedAvailability:
    """
    Result of parsing a batch of recurrence strings.

    ``rules`` keeps input order; ``skipped`` holds the raw strings that were
    unparseable or named an unknown weekday.
    """
    rules: Tuple[RecurrenceRule, ...] = ()
    skipped: Tuple[str, ...] = ()

    def rules_by_weekday(self) -> Dict[str, RecurrenceRule]:
        """
        Build the weekday lookup. A later rule for the same weekday
        replaces an earlier one.
        """
        lookup: Dict[str, RecurrenceRule] = {}
        for rule in self.rules:
            lookup[rule.day_of_week] = rule
        return lookup


@dataclass(frozen=True)
class AvailabilitySlot:
    """
    One concrete, hour-long bookable instant.
    """
    instant: DateTime
    time_of_day: str  # "09:00"
    day_of_week: str  # "Monday"
    display_time: str  # "9:00 AM"
    display_date: str  # "Mon, Feb 5"

    @property
    def date_key(self) -> str:
        """Calendar date of the slot as YYYY-MM-DD."""
        return self.instant.format("YYYY-MM-DD")

    def format_display(self) -> str:
        return f"{self.display_date} | {self.display_time}"


@dataclass
class BookingRequest:
    """
    Payload for ``POST /bookings``.
    """
    tutor_id: str
    date_time: DateTime
    duration_minutes: int = 60
    subject: Optional[str] = None
    notes: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "tutorId": self.tutor_id,
            "dateTime": self.date_time.in_timezone("UTC").to_iso8601_string(),
            "duration": self.duration_minutes,
        }
        if self.subject:
            payload["subject"] = self.subject
        if self.notes:
            payload["notes"] = self.notes
        return payload


@dataclass
class BookingOutcome:
    """
    A submitted booking together with the result of the soft availability check.
    """
    booking: Dict[str, Any] = field(default_factory=dict)
    within_availability: bool = True
