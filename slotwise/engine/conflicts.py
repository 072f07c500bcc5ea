"""Conflict detection against fixed calendar events and other scheduled tasks."""

from datetime import datetime
from typing import Iterable

from slotwise.models.calendar_event import CalendarEvent
from slotwise.models.task import Task
from slotwise.engine.intervals import overlaps


def has_conflict(
    start: datetime,
    end: datetime,
    calendar_events: Iterable[CalendarEvent],
    other_tasks: Iterable[Task],
) -> bool:
    """Return True if [start, end) overlaps any event or any other task's scheduled interval.

    Tasks without both a scheduled start and end are ignored.
    """
    for event in calendar_events:
        if overlaps(start, end, event.start, event.end):
            return True

    for task in other_tasks:
        if task.scheduled_start is None or task.scheduled_end is None:
            continue
        if overlaps(start, end, task.scheduled_start, task.scheduled_end):
            return True

    return False
