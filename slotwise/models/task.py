"""Task data model for slotwise."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field

from slotwise.models.constants import DEFAULT_TASK_DURATION_MINUTES


class TaskStatus(str, Enum):
    """Task status enumeration."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class EnergyLevel(str, Enum):
    """Energy level enumeration (task requirement or window label)."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Task(BaseModel):
    """Canonical Task model."""
    
    id: str = Field(..., description="Unique task identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this task")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    status: TaskStatus = Field(TaskStatus.TODO, description="Task status")
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task last update timestamp")
    due_date: Optional[datetime] = Field(None, description="Task due date")
    duration: Optional[int] = Field(None, ge=0, description="Duration in minutes (60 when unset)")
    energy_level: Optional[EnergyLevel] = Field(None, description="Energy level the task requires")
    scheduled_start: Optional[datetime] = Field(None, description="Scheduled start time")
    scheduled_end: Optional[datetime] = Field(None, description="Scheduled end time")
    is_auto_scheduled: bool = Field(False, description="Whether the current placement came from an accepted suggestion")

    @property
    def effective_duration(self) -> int:
        """Duration in minutes, falling back to the default for unset or zero values."""
        return self.duration or DEFAULT_TASK_DURATION_MINUTES

    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_start is not None and self.scheduled_end is not None
    
    class Config:
        """Pydantic configuration."""
        use_enum_values = True
