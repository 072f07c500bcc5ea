"""Suggestion orchestration for slotwise.

Runs every evaluator over a user's open tasks, keeps the confident candidates,
fills the remaining pending-queue capacity, and drives the
pending -> accepted / rejected / dismissed lifecycle.
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from slotwise.models.constants import (
    CALENDAR_LOOKAHEAD_DAYS,
    MAX_LISTED_SUGGESTIONS,
    MAX_PENDING_SUGGESTIONS,
    MIN_SUGGESTION_CONFIDENCE,
    SUGGESTION_TTL_HOURS,
)
from slotwise.models.suggestion import (
    ScheduleSuggestion,
    SuggestionCandidate,
    SuggestionStatus,
)
from slotwise.models.task import Task
from slotwise.database.repository import TaskRepository
from slotwise.database.calendar_event_repository import CalendarEventRepository
from slotwise.database.settings_repository import SettingsRepository
from slotwise.database.suggestion_repository import SuggestionRepository
from slotwise.engine.errors import SuggestionAlreadyRespondedError, SuggestionNotFoundError
from slotwise.engine.evaluators import EVALUATORS, EvaluationContext

logger = logging.getLogger(__name__)


def evaluate_task(task: Task, context: EvaluationContext) -> List[SuggestionCandidate]:
    """Run every evaluator for one task.

    An evaluator that raises is logged and skipped so one malformed task cannot
    block the rest of the run.
    """
    candidates: List[SuggestionCandidate] = []
    for evaluator in EVALUATORS:
        try:
            candidate = evaluator(task, context)
        except Exception:
            logger.exception(f"Evaluator {evaluator.__name__} failed for task {task.id}; skipping")
            continue
        if candidate is not None:
            candidates.append(candidate)
    return candidates


class SuggestionService:
    """Generates and manages reschedule suggestions for users."""

    def __init__(self, db: Session):
        self.db = db
        self.tasks = TaskRepository(db)
        self.calendar = CalendarEventRepository(db)
        self.settings = SettingsRepository(db)
        self.suggestions = SuggestionRepository(db)

    def generate_suggestions(self, user_id: str, now: Optional[datetime] = None) -> List[ScheduleSuggestion]:
        """Evaluate a user's open tasks and persist new suggestions.

        Safe to re-run: candidates duplicating a pending (task, type) pair are
        skipped and the pending queue never grows past MAX_PENDING_SUGGESTIONS.

        Args:
            user_id: User to generate for
            now: Reference time (defaults to now)

        Returns:
            Suggestions created by this run (possibly empty)
        """
        if now is None:
            now = datetime.utcnow()
        logger.info(f"Generating schedule suggestions for user {user_id}")

        lookup = self.settings.get_or_create(user_id)
        settings = lookup.settings
        if not settings.enable_suggestions:
            logger.info(f"Suggestions disabled for user {user_id}")
            return []

        tasks = self.tasks.get_open(user_id)
        events = self.calendar.get_events_in_range(
            user_id,
            settings.selected_calendars,
            now,
            now + timedelta(days=CALENDAR_LOOKAHEAD_DAYS),
        )
        context = EvaluationContext(settings, tasks, events, now)

        tasks_by_id = {task.id: task for task in tasks}
        candidates: List[SuggestionCandidate] = []
        for task in tasks:
            for candidate in evaluate_task(task, context):
                if candidate.confidence >= MIN_SUGGESTION_CONFIDENCE:
                    candidates.append(candidate)

        # The settings row lock is held from the count until the insert commits.
        self.settings.lock(user_id)
        capacity = MAX_PENDING_SUGGESTIONS - self.suggestions.count_pending(user_id)
        if capacity <= 0:
            self.db.rollback()
            logger.info(f"Pending queue full for user {user_id}; {len(candidates)} candidates dropped")
            return []

        seen = self.suggestions.pending_keys(user_id)
        new: List[ScheduleSuggestion] = []
        for candidate in candidates:
            if len(new) >= capacity:
                break
            key = (candidate.task_id, candidate.suggestion_type)
            if key in seen:
                continue
            seen.add(key)
            new.append(self._build(user_id, tasks_by_id[candidate.task_id], candidate, now))

        if new:
            created = self.suggestions.create_batch(new)
        else:
            self.db.rollback()
            created = []

        logger.info(f"Generated {len(created)} suggestions for user {user_id} ({len(candidates)} candidates)")
        return created

    def _build(
        self,
        user_id: str,
        task: Task,
        candidate: SuggestionCandidate,
        now: datetime,
    ) -> ScheduleSuggestion:
        return ScheduleSuggestion(
            id=str(uuid.uuid4()),
            user_id=user_id,
            task_id=task.id,
            suggestion_type=candidate.suggestion_type,
            reason=candidate.reason,
            confidence=candidate.confidence,
            current_start=task.scheduled_start,
            current_end=task.scheduled_end,
            suggested_start=candidate.suggested_start,
            suggested_end=candidate.suggested_end,
            status=SuggestionStatus.PENDING,
            created_at=now,
            expires_at=now + timedelta(hours=SUGGESTION_TTL_HOURS),
        )

    def _require_pending(self, user_id: str, suggestion_id: str) -> ScheduleSuggestion:
        suggestion = self.suggestions.get(user_id, suggestion_id)
        if suggestion is None:
            raise SuggestionNotFoundError(suggestion_id)
        if not suggestion.is_pending:
            raise SuggestionAlreadyRespondedError(suggestion_id, suggestion.status)
        return suggestion

    def accept_suggestion(self, suggestion_id: str, user_id: str, now: Optional[datetime] = None) -> Task:
        """Accept a suggestion and move the task to the suggested interval.

        Raises:
            SuggestionNotFoundError: If the suggestion is missing or not owned by the user
            SuggestionAlreadyRespondedError: If the suggestion is no longer pending
            TaskNotFoundError: If the referenced task no longer exists
        """
        logger.info(f"Accepting suggestion {suggestion_id} for user {user_id}")
        task = self.suggestions.accept(user_id, suggestion_id, now or datetime.utcnow())

        logger.info(f"Suggestion {suggestion_id} accepted; task {task.id} rescheduled")
        return task

    def _respond(
        self,
        suggestion_id: str,
        user_id: str,
        status: SuggestionStatus,
        now: Optional[datetime],
    ) -> ScheduleSuggestion:
        logger.info(f"Marking suggestion {suggestion_id} {status.value} for user {user_id}")
        self._require_pending(user_id, suggestion_id)

        updated = self.suggestions.mark_responded(user_id, suggestion_id, status, now or datetime.utcnow())
        if updated is None:
            current = self.suggestions.get(user_id, suggestion_id)
            if current is None:
                raise SuggestionNotFoundError(suggestion_id)
            raise SuggestionAlreadyRespondedError(suggestion_id, current.status)
        return updated

    def reject_suggestion(self, suggestion_id: str, user_id: str, now: Optional[datetime] = None) -> ScheduleSuggestion:
        """Reject a pending suggestion. The task is left untouched."""
        return self._respond(suggestion_id, user_id, SuggestionStatus.REJECTED, now)

    def dismiss_suggestion(self, suggestion_id: str, user_id: str, now: Optional[datetime] = None) -> ScheduleSuggestion:
        """Dismiss a pending suggestion. The task is left untouched."""
        return self._respond(suggestion_id, user_id, SuggestionStatus.DISMISSED, now)

    def get_suggestions(
        self,
        user_id: str,
        status: SuggestionStatus = SuggestionStatus.PENDING,
        now: Optional[datetime] = None,
    ) -> List[ScheduleSuggestion]:
        """List a user's suggestions by status, highest confidence first.

        Pending suggestions past their expiry are hidden even before the cleanup sweep runs.
        """
        status = SuggestionStatus(status)
        if status == SuggestionStatus.PENDING:
            return self.suggestions.list_by_status(
                user_id,
                status.value,
                limit=MAX_PENDING_SUGGESTIONS,
                not_expired_at=now or datetime.utcnow(),
            )
        return self.suggestions.list_by_status(user_id, status.value, limit=MAX_LISTED_SUGGESTIONS)

    def cleanup_expired_suggestions(self, now: Optional[datetime] = None) -> int:
        """Dismiss every pending suggestion (all users) whose expiry has passed."""
        logger.info("Cleaning up expired suggestions")
        count = self.suggestions.dismiss_expired(now or datetime.utcnow())
        logger.info(f"Cleaned up {count} expired suggestions")
        return count
