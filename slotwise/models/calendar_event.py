"""Calendar feed and event data models for slotwise."""

from datetime import datetime
from pydantic import BaseModel, Field


class CalendarFeed(BaseModel):
    """A calendar a user has connected (its id is a selectable calendar identifier)."""

    id: str = Field(..., description="Unique feed identifier")
    user_id: str = Field(..., description="User ID who owns this feed")
    name: str = Field(..., description="Display name")


class CalendarEvent(BaseModel):
    """A fixed calendar commitment. Never moved by the engine."""

    id: str = Field(..., description="Unique event identifier")
    feed_id: str = Field(..., description="Calendar feed this event belongs to")
    title: str = Field("", description="Event title")
    start: datetime = Field(..., description="Event start time")
    end: datetime = Field(..., description="Event end time")
