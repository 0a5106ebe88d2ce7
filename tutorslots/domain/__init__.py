"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability_parser import (
    add_availability_rule,
    parse_availability,
    parse_recurrence_string,
    validate_availability,
)
from .models import AvailabilitySlot, BookingOutcome, BookingRequest, ParsedAvailability, RecurrenceRule
from .slot_generator import SlotGenerator, generate_available_slots
from .slot_grouper import group_slots_by_date, is_time_available, select_display_dates

__all__ = [
    "AvailabilitySlot",
    "BookingOutcome",
    "BookingRequest",
    "ParsedAvailability",
    "RecurrenceRule",
    "SlotGenerator",
    "add_availability_rule",
    "generate_available_slots",
    "group_slots_by_date",
    "is_time_available",
    "parse_availability",
    "parse_recurrence_string",
    "select_display_dates",
    "validate_availability",
]
