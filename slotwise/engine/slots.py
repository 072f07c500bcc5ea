"""Candidate slot enumeration for the suggestion engine.

Slots are generated without looking at the calendar; callers filter them with
`has_conflict` afterwards.
"""

from datetime import datetime, timedelta
from typing import List, Optional, NamedTuple

from slotwise.models.constants import SLOT_GRANULARITY_MINUTES
from slotwise.models.settings import AutoScheduleSettings
from slotwise.engine.intervals import add_minutes, start_of_day


class Slot(NamedTuple):
    """A candidate [start, end) interval."""
    start: datetime
    end: datetime


def generate_slots(
    days_ahead: int,
    settings: AutoScheduleSettings,
    duration_minutes: int,
    now: Optional[datetime] = None,
) -> List[Slot]:
    """Enumerate candidate slots over the next `days_ahead` days.
    
    - Candidate starts fall on the half hour within work hours
    - Today starts at the hour after `now` once work hours have begun,
      so no slot is proposed in the past
    - Slots ending after the day's work-hour end are dropped
    
    Args:
        days_ahead: Number of days to cover, today included
        settings: User's auto-schedule settings (work hours)
        duration_minutes: Length of each slot
        now: Reference time (defaults to now)
        
    Returns:
        Slots in chronological order
    """
    if now is None:
        now = datetime.utcnow()

    slots: List[Slot] = []
    today = start_of_day(now)

    for day in range(days_ahead):
        day_start = today + timedelta(days=day)
        work_end = day_start + timedelta(hours=settings.work_hour_end)

        if day == 0 and now.hour >= settings.work_hour_start:
            first_hour = now.hour + 1
        else:
            first_hour = settings.work_hour_start

        for hour in range(first_hour, settings.work_hour_end):
            for minute in range(0, 60, SLOT_GRANULARITY_MINUTES):
                slot_start = day_start + timedelta(hours=hour, minutes=minute)
                slot_end = add_minutes(slot_start, duration_minutes)
                if slot_end <= work_end:
                    slots.append(Slot(slot_start, slot_end))

    return slots
