"""FastAPI web application for slotwise."""

import logging
from typing import List

from fastapi import FastAPI, HTTPException, Depends, status as http_status
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from slotwise.auth.dependencies import get_current_user
from slotwise.database.database import get_db
from slotwise.database.settings_repository import SettingsRepository
from slotwise.engine.errors import (
    SuggestionAlreadyRespondedError,
    SuggestionNotFoundError,
    TaskNotFoundError,
)
from slotwise.engine.suggestions import SuggestionService
from slotwise.models.settings import AutoScheduleSettings, AutoScheduleSettingsUpdate
from slotwise.models.suggestion import ScheduleSuggestion, SuggestionStatus
from slotwise.models.task import Task
from slotwise.models.user import User

logger = logging.getLogger(__name__)

app = FastAPI(
    title="slotwise API",
    description="Reschedule suggestions for tasks that clash with your calendar, energy and breaks",
    version="0.1.0"
)


class AcceptResponse(BaseModel):
    """Response for an accepted suggestion."""
    success: bool = True
    task: Task


class RespondResponse(BaseModel):
    """Response for a rejected or dismissed suggestion."""
    success: bool = True
    suggestion: ScheduleSuggestion


def _lifecycle_error(e: Exception) -> HTTPException:
    if isinstance(e, SuggestionAlreadyRespondedError):
        return HTTPException(status_code=http_status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(status_code=http_status.HTTP_404_NOT_FOUND, detail=str(e))


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/suggestions", response_model=List[ScheduleSuggestion])
def list_suggestions(
    status: SuggestionStatus = SuggestionStatus.PENDING,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's suggestions with the given status."""
    return SuggestionService(db).get_suggestions(current_user.id, status)


@app.post("/suggestions/generate", response_model=List[ScheduleSuggestion], status_code=http_status.HTTP_201_CREATED)
def generate_suggestions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Generate new suggestions for the current user."""
    try:
        suggestions = SuggestionService(db).generate_suggestions(current_user.id)
    except Exception as e:
        logger.error(f"Failed to generate suggestions for user {current_user.id}: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate suggestions")
    logger.info(f"Suggestions generated for user {current_user.id}: {len(suggestions)}")
    return suggestions


@app.post("/suggestions/{suggestion_id}/accept", response_model=AcceptResponse)
def accept_suggestion(
    suggestion_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Accept a suggestion and move its task to the suggested time."""
    try:
        task = SuggestionService(db).accept_suggestion(suggestion_id, current_user.id)
    except (SuggestionNotFoundError, SuggestionAlreadyRespondedError, TaskNotFoundError) as e:
        raise _lifecycle_error(e)
    return AcceptResponse(task=task)


@app.post("/suggestions/{suggestion_id}/reject", response_model=RespondResponse)
def reject_suggestion(
    suggestion_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Reject a suggestion."""
    try:
        suggestion = SuggestionService(db).reject_suggestion(suggestion_id, current_user.id)
    except (SuggestionNotFoundError, SuggestionAlreadyRespondedError) as e:
        raise _lifecycle_error(e)
    return RespondResponse(suggestion=suggestion)


@app.post("/suggestions/{suggestion_id}/dismiss", response_model=RespondResponse)
def dismiss_suggestion(
    suggestion_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Dismiss a suggestion."""
    try:
        suggestion = SuggestionService(db).dismiss_suggestion(suggestion_id, current_user.id)
    except (SuggestionNotFoundError, SuggestionAlreadyRespondedError) as e:
        raise _lifecycle_error(e)
    return RespondResponse(suggestion=suggestion)


@app.get("/auto-schedule-settings", response_model=AutoScheduleSettings)
def get_auto_schedule_settings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the current user's auto-schedule settings, creating defaults on first access."""
    return SettingsRepository(db).get_or_create(current_user.id).settings


@app.patch("/auto-schedule-settings", response_model=AutoScheduleSettings)
def update_auto_schedule_settings(
    changes: AutoScheduleSettingsUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially update the current user's auto-schedule settings."""
    try:
        return SettingsRepository(db).update(current_user.id, changes)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[err["msg"] for err in e.errors()],
        )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
