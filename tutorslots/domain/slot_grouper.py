"""
Grouping of generated slots for calendar display, plus the availability
check used for custom booking requests.
"""

from datetime import date as Date
from typing import Dict, Iterable, List, Sequence

from .availability_parser import parse_recurrence_string
from .models import HOURS_PER_DAY, WEEKDAY_NAMES, AvailabilitySlot

DEFAULT_DISPLAY_DAYS = 7


def group_slots_by_date(slots: Iterable[AvailabilitySlot]) -> Dict[str, List[AvailabilitySlot]]:
    """
    Bucket slots by their YYYY-MM-DD date.

    Slots keep their input order inside each bucket. Keys are in order of
    first appearance and are not sorted here.
    """
    grouped: Dict[str, List[AvailabilitySlot]] = {}

    for slot in slots:
        grouped.setdefault(slot.date_key, []).append(slot)

    return grouped


def select_display_dates(
    grouped: Dict[str, List[AvailabilitySlot]],
    limit: int = DEFAULT_DISPLAY_DAYS,
) -> Dict[str, List[AvailabilitySlot]]:
    """
    Keep the first ``limit`` dates, in chronological order, that have at
    least one slot.
    """
    dates = sorted(key for key, day_slots in grouped.items() if day_slots)
    return {key: grouped[key] for key in dates[:limit]}


def is_time_available(date: Date, time: str, recurrence_strings: Sequence[str]) -> bool:
    """
    Check whether a date and HH:MM time fall inside a tutor's availability.

    The first entry for the date's weekday decides, even if the same weekday
    appears again later in the list. Only the hour of ``time`` is compared,
    against ``[start_hour, end_hour)``.
    """
    if not recurrence_strings:
        return False

    try:
        hour = int(time.split(":")[0])
    except (AttributeError, ValueError):
        return False

    if not 0 <= hour < HOURS_PER_DAY:
        return False

    day_name = WEEKDAY_NAMES[date.weekday()]

    for value in recurrence_strings:
        rule = parse_recurrence_string(value)
        if rule is not None and rule.day_of_week == day_name:
            return rule.start_hour <= hour < rule.end_hour

    return False
