"""ScheduleSuggestion data model for slotwise."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class SuggestionType(str, Enum):
    """Heuristic that produced a suggestion."""
    CONFLICT = "conflict"
    DEADLINE_PROXIMITY = "deadline_proximity"
    ENERGY_MISMATCH = "energy_mismatch"
    OVERLOAD = "overload"
    BREAK_VIOLATION = "break_violation"


class SuggestionStatus(str, Enum):
    """Suggestion lifecycle state. Everything except PENDING is terminal."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    DISMISSED = "dismissed"


class SuggestionCandidate(BaseModel):
    """An evaluator's proposal for one task, before it is persisted."""

    task_id: str
    suggestion_type: SuggestionType
    reason: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    suggested_start: Optional[datetime] = None
    suggested_end: Optional[datetime] = None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class ScheduleSuggestion(BaseModel):
    """A persisted, time-boxed recommendation to change or flag a task's schedule."""

    id: str = Field(..., description="Unique suggestion identifier")
    user_id: str = Field(..., description="User ID who owns this suggestion")
    task_id: str = Field(..., description="Task the suggestion refers to")
    suggestion_type: SuggestionType = Field(..., description="Heuristic that produced the suggestion")
    reason: str = Field(..., description="Human-readable explanation")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence in [0, 1]")
    current_start: Optional[datetime] = Field(None, description="Task start when the suggestion was generated")
    current_end: Optional[datetime] = Field(None, description="Task end when the suggestion was generated")
    suggested_start: Optional[datetime] = Field(None, description="Proposed start (reason-only suggestions have none)")
    suggested_end: Optional[datetime] = Field(None, description="Proposed end")
    status: SuggestionStatus = Field(SuggestionStatus.PENDING, description="Lifecycle state")
    created_at: datetime = Field(..., description="Creation timestamp")
    expires_at: datetime = Field(..., description="Pending suggestions are dismissed after this time")
    responded_at: Optional[datetime] = Field(None, description="When the user accepted, rejected or dismissed it")

    @property
    def is_pending(self) -> bool:
        return self.status == SuggestionStatus.PENDING

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
