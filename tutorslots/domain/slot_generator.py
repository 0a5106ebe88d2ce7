"""
Expansion of weekly recurrence rules into concrete hourly slots.

This is pure domain logic: no API calls and no shared state. The only ambient
input is "now", which is read on every call unless the caller passes it in.
"""

from typing import List, Optional, Sequence

import pendulum
from pendulum import DateTime

from .availability_parser import parse_availability
from .models import HOURS_PER_DAY, WEEKDAY_NAMES, AvailabilitySlot, RecurrenceRule

DEFAULT_HORIZON_DAYS = 14


class SlotGenerator:
    """
    Generates bookable hourly slots from a tutor's weekly availability.

    Algorithm:
    1. Parse the recurrence strings into a weekday lookup (last entry wins)
    2. Walk ``horizon_days`` calendar days starting at today's midnight
    3. For each day with a rule, emit one slot per whole hour in
       ``[start_hour, end_hour)``; an hour skipped by a DST change gets no slot
    """

    def __init__(self, timezone: Optional[str] = None):
        self.timezone = timezone

    def generate(
        self,
        recurrence_strings: Optional[Sequence[str]],
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        now: Optional[DateTime] = None,
    ) -> List[AvailabilitySlot]:
        """
        Generate available slots for the next ``horizon_days`` days.

        Args:
            recurrence_strings: Strings like ["Monday 09:00-17:00"]
            horizon_days: Number of calendar days to cover, today included
            now: Anchor for "today"; defaults to the current time

        Returns:
            Slots ordered by date, then hour
        """
        if not recurrence_strings or horizon_days <= 0:
            return []

        rules_by_day = parse_availability(recurrence_strings).rules_by_weekday()
        if not rules_by_day:
            return []

        today = self._anchor(now)
        slots: List[AvailabilitySlot] = []

        for offset in range(horizon_days):
            day = today.add(days=offset)
            day_name = WEEKDAY_NAMES[day.weekday()]

            rule = rules_by_day.get(day_name)
            if rule is None:
                continue

            for hour in self._hours_for_rule(rule):
                instant = day.set(hour=hour, minute=0, second=0, microsecond=0)
                # Wall-clock hour skipped by a DST transition
                if instant.hour != hour:
                    continue
                slots.append(self._build_slot(instant, day_name))

        return slots

    def _anchor(self, now: Optional[DateTime]) -> DateTime:
        if now is None:
            now = pendulum.now(self.timezone)
        return now.start_of("day")

    @staticmethod
    def _hours_for_rule(rule: RecurrenceRule) -> range:
        """
        Whole hours covered by a rule. Minutes are ignored, so 09:30-17:00
        still starts at 09:00; an inverted or zero-width range is empty.
        """
        return range(rule.start_hour, min(rule.end_hour, HOURS_PER_DAY))

    @staticmethod
    def _build_slot(instant: DateTime, day_name: str) -> AvailabilitySlot:
        return AvailabilitySlot(
            instant=instant,
            time_of_day=f"{instant.hour:02d}:00",
            day_of_week=day_name,
            display_time=instant.format("h:mm A", locale="en"),
            display_date=instant.format("ddd, MMM D", locale="en"),
        )


def generate_available_slots(
    recurrence_strings: Optional[Sequence[str]],
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    now: Optional[DateTime] = None,
    timezone: Optional[str] = None,
) -> List[AvailabilitySlot]:
    """Shortcut for ``SlotGenerator(timezone).generate(...)``."""
    return SlotGenerator(timezone=timezone).generate(
        recurrence_strings,
        horizon_days=horizon_days,
        now=now,
    )
