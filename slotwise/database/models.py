"""SQLAlchemy database models for slotwise."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, JSON, ForeignKey

from typing import Union, TypeVar, Type
from slotwise.database.database import Base
from slotwise.models.task import TaskStatus, EnergyLevel
from slotwise.models.suggestion import SuggestionStatus, SuggestionType

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string)."""
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.
    
    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails
        
    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


class UserDB(Base):
    """Database model for User."""
    
    __tablename__ = "users"
    
    id = Column(String, primary_key=True)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=True)
    
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from slotwise.models.user import User
        return User(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class TaskDB(Base):
    """Database model for Task."""
    
    __tablename__ = "tasks"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, default=TaskStatus.TODO.value, index=True)
    
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Time management
    due_date = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=True)
    energy_level = Column(String, nullable=True)
    
    # Auto-scheduling
    scheduled_start = Column(DateTime, nullable=True, index=True)
    scheduled_end = Column(DateTime, nullable=True)
    is_auto_scheduled = Column(Boolean, nullable=False, default=False)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from slotwise.models.task import Task
        
        return Task(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            description=self.description,
            status=value_to_enum(self.status, TaskStatus, TaskStatus.TODO),
            created_at=self.created_at,
            updated_at=self.updated_at,
            due_date=self.due_date,
            duration=self.duration,
            energy_level=value_to_enum(self.energy_level, EnergyLevel, None),
            scheduled_start=self.scheduled_start,
            scheduled_end=self.scheduled_end,
            is_auto_scheduled=self.is_auto_scheduled,
        )
    
    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        # Pydantic with use_enum_values=True returns strings
        return cls(
            id=task.id,
            user_id=task.user_id,
            title=task.title,
            description=task.description,
            status=enum_to_value(task.status),
            created_at=task.created_at,
            updated_at=task.updated_at,
            due_date=task.due_date,
            duration=task.duration,
            energy_level=enum_to_value(task.energy_level) if task.energy_level else None,
            scheduled_start=task.scheduled_start,
            scheduled_end=task.scheduled_end,
            is_auto_scheduled=task.is_auto_scheduled,
        )


class CalendarFeedDB(Base):
    """Database model for a connected calendar (populated by the sync subsystem)."""

    __tablename__ = "calendar_feeds"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from slotwise.models.calendar_event import CalendarFeed
        return CalendarFeed(id=self.id, user_id=self.user_id, name=self.name)


class CalendarEventDB(Base):
    """Database model for CalendarEvent."""

    __tablename__ = "calendar_events"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    feed_id = Column(String, ForeignKey("calendar_feeds.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False, default="")
    start = Column(DateTime, nullable=False, index=True)
    end = Column(DateTime, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from slotwise.models.calendar_event import CalendarEvent
        return CalendarEvent(
            id=self.id,
            feed_id=self.feed_id,
            title=self.title,
            start=self.start,
            end=self.end,
        )

    @classmethod
    def from_pydantic(cls, event):
        """Create database model from Pydantic model."""
        return cls(
            id=event.id,
            feed_id=event.feed_id,
            title=event.title,
            start=event.start,
            end=event.end,
        )


class AutoScheduleSettingsDB(Base):
    """Database model for per-user AutoScheduleSettings (one row per user)."""

    __tablename__ = "auto_schedule_settings"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    # Stored as JSON arrays
    work_days = Column(JSON, nullable=False, default=list)
    selected_calendars = Column(JSON, nullable=False, default=list)

    work_hour_start = Column(Integer, nullable=False)
    work_hour_end = Column(Integer, nullable=False)
    buffer_minutes = Column(Integer, nullable=False, default=15)

    high_energy_start = Column(Integer, nullable=True)
    high_energy_end = Column(Integer, nullable=True)
    medium_energy_start = Column(Integer, nullable=True)
    medium_energy_end = Column(Integer, nullable=True)
    low_energy_start = Column(Integer, nullable=True)
    low_energy_end = Column(Integer, nullable=True)

    enforce_breaks = Column(Boolean, nullable=False, default=True)
    min_break_duration = Column(Integer, nullable=False, default=15)
    max_consecutive_hours = Column(Integer, nullable=False, default=3)
    enable_suggestions = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from slotwise.models.settings import AutoScheduleSettings
        return AutoScheduleSettings(
            user_id=self.user_id,
            work_days=[int(d) for d in (self.work_days or [])],
            work_hour_start=self.work_hour_start,
            work_hour_end=self.work_hour_end,
            buffer_minutes=self.buffer_minutes,
            high_energy_start=self.high_energy_start,
            high_energy_end=self.high_energy_end,
            medium_energy_start=self.medium_energy_start,
            medium_energy_end=self.medium_energy_end,
            low_energy_start=self.low_energy_start,
            low_energy_end=self.low_energy_end,
            enforce_breaks=self.enforce_breaks,
            min_break_duration=self.min_break_duration,
            max_consecutive_hours=self.max_consecutive_hours,
            enable_suggestions=self.enable_suggestions,
            selected_calendars=[str(c) for c in (self.selected_calendars or [])],
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, settings):
        """Create database model from Pydantic model."""
        return cls(
            user_id=settings.user_id,
            work_days=list(settings.work_days),
            work_hour_start=settings.work_hour_start,
            work_hour_end=settings.work_hour_end,
            buffer_minutes=settings.buffer_minutes,
            high_energy_start=settings.high_energy_start,
            high_energy_end=settings.high_energy_end,
            medium_energy_start=settings.medium_energy_start,
            medium_energy_end=settings.medium_energy_end,
            low_energy_start=settings.low_energy_start,
            low_energy_end=settings.low_energy_end,
            enforce_breaks=settings.enforce_breaks,
            min_break_duration=settings.min_break_duration,
            max_consecutive_hours=settings.max_consecutive_hours,
            enable_suggestions=settings.enable_suggestions,
            selected_calendars=list(settings.selected_calendars),
        )


class ScheduleSuggestionDB(Base):
    """Database model for ScheduleSuggestion."""

    __tablename__ = "schedule_suggestions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    task_id = Column(String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)

    suggestion_type = Column(String, nullable=False)
    reason = Column(String, nullable=False)
    confidence = Column(Float, nullable=False)

    current_start = Column(DateTime, nullable=True)
    current_end = Column(DateTime, nullable=True)
    suggested_start = Column(DateTime, nullable=True)
    suggested_end = Column(DateTime, nullable=True)

    status = Column(String, nullable=False, default=SuggestionStatus.PENDING.value, index=True)
    responded_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    expires_at = Column(DateTime, nullable=False, index=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from slotwise.models.suggestion import ScheduleSuggestion
        return ScheduleSuggestion(
            id=self.id,
            user_id=self.user_id,
            task_id=self.task_id,
            suggestion_type=value_to_enum(self.suggestion_type, SuggestionType, SuggestionType.CONFLICT),
            reason=self.reason,
            confidence=self.confidence,
            current_start=self.current_start,
            current_end=self.current_end,
            suggested_start=self.suggested_start,
            suggested_end=self.suggested_end,
            status=value_to_enum(self.status, SuggestionStatus, SuggestionStatus.PENDING),
            created_at=self.created_at,
            expires_at=self.expires_at,
            responded_at=self.responded_at,
        )

    @classmethod
    def from_pydantic(cls, suggestion):
        """Create database model from Pydantic model."""
        return cls(
            id=suggestion.id,
            user_id=suggestion.user_id,
            task_id=suggestion.task_id,
            suggestion_type=enum_to_value(suggestion.suggestion_type),
            reason=suggestion.reason,
            confidence=suggestion.confidence,
            current_start=suggestion.current_start,
            current_end=suggestion.current_end,
            suggested_start=suggestion.suggested_start,
            suggested_end=suggestion.suggested_end,
            status=enum_to_value(suggestion.status),
            created_at=suggestion.created_at,
            expires_at=suggestion.expires_at,
            responded_at=suggestion.responded_at,
        )
