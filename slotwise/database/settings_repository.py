"""Repository for per-user AutoScheduleSettings."""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slotwise.models.settings import AutoScheduleSettings, AutoScheduleSettingsUpdate, SettingsLookup
from slotwise.database.models import AutoScheduleSettingsDB

logger = logging.getLogger(__name__)


class SettingsRepository:
    """Repository for AutoScheduleSettings database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, user_id: str) -> Optional[AutoScheduleSettingsDB]:
        return self.db.query(AutoScheduleSettingsDB).filter(AutoScheduleSettingsDB.user_id == user_id).first()

    def get(self, user_id: str) -> Optional[AutoScheduleSettings]:
        """Get settings for a user, or None if they were never created."""
        row = self._get_row(user_id)
        return row.to_pydantic() if row else None

    def get_or_create(self, user_id: str) -> SettingsLookup:
        """Get settings for a user, writing the defaults on first access.

        A concurrent first access (the API and the batch job racing) hits the
        unique user_id constraint; the loser re-reads the winner's row.
        """
        row = self._get_row(user_id)
        if row is not None:
            return SettingsLookup(row.to_pydantic(), created=False)

        try:
            row = AutoScheduleSettingsDB.from_pydantic(AutoScheduleSettings(user_id=user_id))
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.info(f"Created default auto-schedule settings for user {user_id}")
            return SettingsLookup(row.to_pydantic(), created=True)
        except IntegrityError:
            self.db.rollback()
            row = self._get_row(user_id)
            if row is None:
                raise
            return SettingsLookup(row.to_pydantic(), created=False)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create settings for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def lock(self, user_id: str) -> None:
        """Take a row lock on the user's settings until the current transaction ends.

        Serializes suggestion generation per user on databases with row locks
        (PostgreSQL). SQLite ignores FOR UPDATE.
        """
        self.db.query(AutoScheduleSettingsDB.id).filter(
            AutoScheduleSettingsDB.user_id == user_id
        ).with_for_update().first()

    def update(self, user_id: str, changes: AutoScheduleSettingsUpdate) -> AutoScheduleSettings:
        """Apply a partial update, creating default settings first if needed.

        The merged result is validated as a whole (e.g. start hour before end hour)
        before anything is written.

        Raises:
            pydantic.ValidationError: If the merged settings are invalid
        """
        current = self.get_or_create(user_id).settings
        patch = changes.model_dump(exclude_unset=True)
        merged = AutoScheduleSettings(**{**current.model_dump(), **patch, "user_id": user_id})

        row = self._get_row(user_id)
        try:
            for field_name in patch:
                setattr(row, field_name, getattr(merged, field_name))
            row.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Updated settings for user {user_id}: {sorted(patch)}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update settings for user {user_id}: {type(e).__name__}: {str(e)}")
            raise
