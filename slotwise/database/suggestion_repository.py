"""Repository for ScheduleSuggestion database operations."""

import logging
from datetime import datetime
from typing import List, Optional, Set, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import desc

from slotwise.models.suggestion import ScheduleSuggestion, SuggestionStatus
from slotwise.models.task import Task
from slotwise.database.models import ScheduleSuggestionDB, TaskDB
from slotwise.engine.errors import (
    SuggestionAlreadyRespondedError,
    SuggestionError,
    SuggestionNotFoundError,
    TaskNotFoundError,
)

logger = logging.getLogger(__name__)


class SuggestionRepository:
    """Repository for ScheduleSuggestion database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_batch(self, suggestions: List[ScheduleSuggestion]) -> List[ScheduleSuggestion]:
        """Create multiple suggestions in one commit (all or nothing)."""
        try:
            rows = [ScheduleSuggestionDB.from_pydantic(s) for s in suggestions]
            self.db.add_all(rows)
            self.db.commit()
            for row in rows:
                self.db.refresh(row)
            logger.debug(f"Created {len(rows)} suggestions")
            return [row.to_pydantic() for row in rows]
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create suggestions: {type(e).__name__}: {str(e)}")
            raise

    def get(self, user_id: str, suggestion_id: str) -> Optional[ScheduleSuggestion]:
        """Get a suggestion by ID (user-scoped)."""
        row = (
            self.db.query(ScheduleSuggestionDB)
            .filter(ScheduleSuggestionDB.id == suggestion_id, ScheduleSuggestionDB.user_id == user_id)
            .first()
        )
        return row.to_pydantic() if row else None

    def list_by_status(
        self,
        user_id: str,
        status: str,
        *,
        limit: int,
        not_expired_at: Optional[datetime] = None,
    ) -> List[ScheduleSuggestion]:
        """List a user's suggestions with the given status, highest confidence first.

        If `not_expired_at` is given, rows whose expires_at is at or before it are left out.
        """
        query = self.db.query(ScheduleSuggestionDB).filter(
            ScheduleSuggestionDB.user_id == user_id,
            ScheduleSuggestionDB.status == status,
        )
        if not_expired_at is not None:
            query = query.filter(ScheduleSuggestionDB.expires_at > not_expired_at)
        rows = (
            query.order_by(desc(ScheduleSuggestionDB.confidence), desc(ScheduleSuggestionDB.created_at))
            .limit(limit)
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def count_pending(self, user_id: str) -> int:
        """Count a user's pending suggestions (expired-but-not-yet-swept rows included)."""
        return (
            self.db.query(ScheduleSuggestionDB)
            .filter(
                ScheduleSuggestionDB.user_id == user_id,
                ScheduleSuggestionDB.status == SuggestionStatus.PENDING.value,
            )
            .count()
        )

    def pending_keys(self, user_id: str) -> Set[Tuple[str, str]]:
        """(task_id, suggestion_type) pairs that already have a pending suggestion."""
        rows = (
            self.db.query(ScheduleSuggestionDB.task_id, ScheduleSuggestionDB.suggestion_type)
            .filter(
                ScheduleSuggestionDB.user_id == user_id,
                ScheduleSuggestionDB.status == SuggestionStatus.PENDING.value,
            )
            .all()
        )
        return {(row[0], row[1]) for row in rows}

    def mark_responded(
        self,
        user_id: str,
        suggestion_id: str,
        status: SuggestionStatus,
        responded_at: datetime,
    ) -> Optional[ScheduleSuggestion]:
        """Move a pending suggestion to a terminal status.

        The update is conditional on the row still being pending; returns None when
        another request got there first.
        """
        try:
            affected = (
                self.db.query(ScheduleSuggestionDB)
                .filter(
                    ScheduleSuggestionDB.id == suggestion_id,
                    ScheduleSuggestionDB.user_id == user_id,
                    ScheduleSuggestionDB.status == SuggestionStatus.PENDING.value,
                )
                .update(
                    {
                        ScheduleSuggestionDB.status: status.value,
                        ScheduleSuggestionDB.responded_at: responded_at,
                    },
                    synchronize_session=False,
                )
            )
            if affected != 1:
                self.db.rollback()
                return None
            self.db.commit()
            logger.debug(f"Marked suggestion {suggestion_id} {status.value}")
            return self.get(user_id, suggestion_id)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to mark suggestion {suggestion_id} {status.value}: {type(e).__name__}: {str(e)}")
            raise

    def accept(self, user_id: str, suggestion_id: str, responded_at: datetime) -> Task:
        """Accept a pending suggestion and apply its suggested interval to the task.

        Both rows are written in one transaction: if either write fails the
        suggestion stays pending and the task keeps its old interval.

        Returns:
            The updated task

        Raises:
            SuggestionNotFoundError: If the suggestion is missing or owned by another user
            SuggestionAlreadyRespondedError: If the suggestion is no longer pending
            TaskNotFoundError: If the referenced task is gone
        """
        try:
            suggestion_db = (
                self.db.query(ScheduleSuggestionDB)
                .filter(
                    ScheduleSuggestionDB.id == suggestion_id,
                    ScheduleSuggestionDB.user_id == user_id,
                )
                .first()
            )
            if suggestion_db is None:
                raise SuggestionNotFoundError(suggestion_id)

            affected = (
                self.db.query(ScheduleSuggestionDB)
                .filter(
                    ScheduleSuggestionDB.id == suggestion_id,
                    ScheduleSuggestionDB.status == SuggestionStatus.PENDING.value,
                )
                .update(
                    {
                        ScheduleSuggestionDB.status: SuggestionStatus.ACCEPTED.value,
                        ScheduleSuggestionDB.responded_at: responded_at,
                    },
                    synchronize_session=False,
                )
            )
            if affected != 1:
                self.db.rollback()
                # Rollback expires the row, so this reads the status that won
                raise SuggestionAlreadyRespondedError(suggestion_id, suggestion_db.status)

            task_db = (
                self.db.query(TaskDB)
                .filter(TaskDB.id == suggestion_db.task_id, TaskDB.user_id == user_id)
                .first()
            )
            if task_db is None:
                raise TaskNotFoundError(suggestion_db.task_id)

            task_db.scheduled_start = suggestion_db.suggested_start
            task_db.scheduled_end = suggestion_db.suggested_end
            task_db.is_auto_scheduled = True
            task_db.updated_at = responded_at

            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Accepted suggestion {suggestion_id}; task {task_db.id} rescheduled")
            return task_db.to_pydantic()
        except SuggestionError:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to accept suggestion {suggestion_id}: {type(e).__name__}: {str(e)}")
            raise

    def dismiss_expired(self, now: datetime) -> int:
        """Mark every pending suggestion whose expiry has passed as dismissed.

        Returns:
            Number of suggestions dismissed
        """
        try:
            affected = (
                self.db.query(ScheduleSuggestionDB)
                .filter(
                    ScheduleSuggestionDB.status == SuggestionStatus.PENDING.value,
                    ScheduleSuggestionDB.expires_at < now,
                )
                .update(
                    {ScheduleSuggestionDB.status: SuggestionStatus.DISMISSED.value},
                    synchronize_session=False,
                )
            )
            self.db.commit()
            logger.debug(f"Dismissed {affected} expired suggestions")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to dismiss expired suggestions: {type(e).__name__}: {str(e)}")
            raise
