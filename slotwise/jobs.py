"""Batch jobs for slotwise.

Intended to run on a schedule (e.g. a daily cron or Cloud Run Job):

    python -m slotwise.jobs generate   # suggestions for every user
    python -m slotwise.jobs cleanup    # dismiss expired pending suggestions
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from slotwise.database.database import SessionLocal, init_db
from slotwise.database.user_repository import UserRepository
from slotwise.engine.suggestions import SuggestionService

logger = logging.getLogger(__name__)


def run_generation(
    session_factory: Callable[[], Session],
    now: Optional[datetime] = None,
) -> Dict[str, object]:
    """Generate suggestions for every user, one session per user.

    A failure for one user is logged and counted; the other users still run.

    Returns:
        {"users": int, "created": int, "failed_user_ids": [...]}
    """
    with session_factory() as db:
        user_ids = UserRepository(db).get_all_ids()

    created = 0
    failed: List[str] = []
    for user_id in user_ids:
        db = session_factory()
        try:
            created += len(SuggestionService(db).generate_suggestions(user_id, now=now))
        except Exception:
            db.rollback()
            logger.exception(f"Suggestion generation failed for user {user_id}")
            failed.append(user_id)
        finally:
            db.close()

    logger.info(f"Generation finished: {len(user_ids)} users, {created} suggestions, {len(failed)} failures")
    return {"users": len(user_ids), "created": created, "failed_user_ids": failed}


def run_cleanup(session_factory: Callable[[], Session], now: Optional[datetime] = None) -> int:
    """Dismiss expired pending suggestions for all users."""
    with session_factory() as db:
        return SuggestionService(db).cleanup_expired_suggestions(now=now)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="slotwise.jobs")
    parser.add_argument("job", choices=["generate", "cleanup"])
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()

    if args.job == "cleanup":
        run_cleanup(SessionLocal)
        return 0

    result = run_generation(SessionLocal)
    return 1 if result["failed_user_ids"] else 0


if __name__ == "__main__":
    sys.exit(main())
