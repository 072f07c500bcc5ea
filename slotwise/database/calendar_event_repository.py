"""Repository for calendar feed and event database operations.

Events are written by the calendar sync subsystem; the suggestion engine only reads them.
"""

import logging
from datetime import datetime
from typing import List
from sqlalchemy.orm import Session

from slotwise.models.calendar_event import CalendarEvent, CalendarFeed
from slotwise.database.models import CalendarEventDB, CalendarFeedDB

logger = logging.getLogger(__name__)


class CalendarEventRepository:
    """Repository for CalendarFeed / CalendarEvent database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_feed(self, feed: CalendarFeed) -> CalendarFeed:
        """Create a calendar feed."""
        try:
            feed_db = CalendarFeedDB(id=feed.id, user_id=feed.user_id, name=feed.name)
            self.db.add(feed_db)
            self.db.commit()
            self.db.refresh(feed_db)
            logger.debug(f"Created calendar feed {feed.id}")
            return feed_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create calendar feed {feed.id}: {type(e).__name__}: {str(e)}")
            raise

    def create_batch(self, events: List[CalendarEvent]) -> List[CalendarEvent]:
        """Create multiple calendar events in a batch."""
        try:
            events_db = [CalendarEventDB.from_pydantic(event) for event in events]
            self.db.add_all(events_db)
            self.db.commit()
            for event_db in events_db:
                self.db.refresh(event_db)
            logger.debug(f"Created {len(events)} calendar events")
            return [event_db.to_pydantic() for event_db in events_db]
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create calendar events: {type(e).__name__}: {str(e)}")
            raise

    def get_events_in_range(
        self,
        user_id: str,
        calendar_ids: List[str],
        range_start: datetime,
        range_end: datetime,
    ) -> List[CalendarEvent]:
        """Get events from the given calendars that start within [range_start, range_end].

        Only feeds owned by the user are read, so a stale or foreign calendar ID in the
        settings yields nothing.
        """
        if not calendar_ids:
            return []
        events_db = (
            self.db.query(CalendarEventDB)
            .join(CalendarFeedDB, CalendarFeedDB.id == CalendarEventDB.feed_id)
            .filter(
                CalendarFeedDB.user_id == user_id,
                CalendarEventDB.feed_id.in_(list(calendar_ids)),
                CalendarEventDB.start >= range_start,
                CalendarEventDB.start <= range_end,
            )
            .order_by(CalendarEventDB.start)
            .all()
        )
        return [event_db.to_pydantic() for event_db in events_db]
