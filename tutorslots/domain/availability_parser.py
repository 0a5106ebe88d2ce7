"""
Parsing and editing of recurrence strings such as ``Monday 09:00-17:00``.

Parsing never raises: an entry that does not match the wire shape is simply
skipped so one bad string cannot blank out a tutor's whole calendar. The
editing helpers used by the tutor availability screen are stricter and raise
``AvailabilityValidationError``.
"""

import logging
import re
from typing import Iterable, List, Optional

from .exceptions import AvailabilityValidationError
from .models import WEEKDAY_NAMES, ParsedAvailability, RecurrenceRule

logger = logging.getLogger(__name__)

RECURRENCE_PATTERN = re.compile(r"(\w+)\s+(\d{2}:\d{2})-(\d{2}:\d{2})", re.ASCII)
TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)


def parse_recurrence_string(value: str) -> Optional[RecurrenceRule]:
    """
    Parse a single recurrence string.

    Only the shape ``<Word> HH:MM-HH:MM`` is checked; the day token is not
    validated against real weekday names.

    Returns:
        RecurrenceRule, or None if the string is malformed
    """
    if not isinstance(value, str):
        return None

    match = RECURRENCE_PATTERN.fullmatch(value)
    if not match:
        return None

    return RecurrenceRule(
        day_of_week=match.group(1),
        start_time=match.group(2),
        end_time=match.group(3),
    )


def parse_availability(values: Optional[Iterable[str]]) -> ParsedAvailability:
    """
    Parse a batch of recurrence strings, separating usable rules from entries
    that are unparseable or name an unknown weekday.
    """
    if not values:
        return ParsedAvailability()

    rules: List[RecurrenceRule] = []
    skipped: List[str] = []

    for value in values:
        rule = parse_recurrence_string(value)
        if rule is None or not rule.is_known_weekday():
            skipped.append(value)
            continue
        rules.append(rule)

    if skipped:
        logger.warning("Skipping %d invalid availability entries: %s", len(skipped), skipped)

    return ParsedAvailability(rules=tuple(rules), skipped=tuple(skipped))


def format_recurrence_rule(day: str, start_time: str, end_time: str) -> str:
    """Render a weekly window in the wire format."""
    return f"{day} {start_time}-{end_time}"


def add_availability_rule(
    existing: List[str],
    day: str,
    start_time: str,
    end_time: str,
) -> List[str]:
    """
    Append a new weekly window to a tutor's availability list.

    Args:
        existing: Current availability strings (not modified)
        day: Weekday name, e.g. "Monday"
        start_time: Window start as HH:MM
        end_time: Window end as HH:MM

    Returns:
        New list with the formatted rule appended

    Raises:
        AvailabilityValidationError: If the day or times are invalid, the
            range is empty, or the rule already exists
    """
    if day not in WEEKDAY_NAMES:
        raise AvailabilityValidationError(f"Unknown weekday: '{day}'")

    for value in (start_time, end_time):
        if not TIME_PATTERN.fullmatch(value):
            raise AvailabilityValidationError(f"Time must use the HH:MM format, got '{value}'")

    # Zero-padded HH:MM compares correctly as text
    if start_time >= end_time:
        raise AvailabilityValidationError("End time must be after start time")

    formatted = format_recurrence_rule(day, start_time, end_time)
    if formatted in existing:
        raise AvailabilityValidationError("This time slot already exists")

    return [*existing, formatted]


def remove_availability_rule(existing: List[str], index: int) -> List[str]:
    """Return a copy of the list without the entry at ``index``."""
    if not 0 <= index < len(existing):
        raise AvailabilityValidationError(f"No availability entry at position {index}")
    return [value for position, value in enumerate(existing) if position != index]


def validate_availability(values: List[str]) -> List[str]:
    """
    Check a full availability list before it is saved.

    Raises:
        AvailabilityValidationError: If the list is empty or any entry is invalid
    """
    if not values:
        raise AvailabilityValidationError("Please add at least one time slot")

    parsed = parse_availability(values)
    if parsed.skipped:
        invalid = ", ".join(f"'{value}'" for value in parsed.skipped)
        raise AvailabilityValidationError(f"Invalid availability entries: {invalid}")

    return list(values)
