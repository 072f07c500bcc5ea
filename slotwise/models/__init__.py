"""Data models for slotwise."""

from slotwise.models.task import Task, TaskStatus, EnergyLevel
from slotwise.models.calendar_event import CalendarEvent, CalendarFeed
from slotwise.models.settings import AutoScheduleSettings, AutoScheduleSettingsUpdate, SettingsLookup
from slotwise.models.suggestion import (
    ScheduleSuggestion,
    SuggestionCandidate,
    SuggestionStatus,
    SuggestionType,
)
from slotwise.models.user import User

__all__ = [
    "Task",
    "TaskStatus",
    "EnergyLevel",
    "CalendarEvent",
    "CalendarFeed",
    "AutoScheduleSettings",
    "AutoScheduleSettingsUpdate",
    "SettingsLookup",
    "ScheduleSuggestion",
    "SuggestionCandidate",
    "SuggestionStatus",
    "SuggestionType",
    "User",
]
