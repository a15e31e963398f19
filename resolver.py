"""Due-reminder resolution for RemindMe.

A reminder is due today when its month and day match and its year is either
this year (one-off) or 0 (repeating). The two year cases are fetched by two
independent queries that run concurrently, each in its own thread with its
own session, and are merged once both have finished.
"""

import asyncio
from datetime import date
from typing import List

from sqlalchemy.orm import sessionmaker

import crud
from database import ReminderRecord, REPEATING_YEAR
from logger_config import setup_logger

logger = setup_logger(__name__, 'digest.log')


class ResolutionError(Exception):
    """One of the due-reminder queries failed; no result is returned."""

    def __init__(self, message: str, cause: Exception):
        super().__init__(message)
        self.cause = cause


def _query_day(session_factory: sessionmaker, month: int, day: int, year: int) -> List[ReminderRecord]:
    db = session_factory()
    try:
        return crud.get_reminders_for_day(db, month, day, year)
    finally:
        db.close()


async def resolve_due(session_factory: sessionmaker, today: date) -> List[ReminderRecord]:
    """Get every reminder due on the given day.

    Both queries always run to completion. If either fails the whole call
    fails and the other query's rows are dropped.

    Args:
        session_factory: Factory for independent database sessions
        today: The day to resolve

    Returns:
        List[ReminderRecord]: This year's reminders followed by the repeating
        ones, each group in store order. May be empty.

    Raises:
        ResolutionError: If either query failed
    """
    this_year, repeating = await asyncio.gather(
        asyncio.to_thread(_query_day, session_factory, today.month, today.day, today.year),
        asyncio.to_thread(_query_day, session_factory, today.month, today.day, REPEATING_YEAR),
        return_exceptions=True,
    )

    for label, result in (("this day's", this_year), ("repeating", repeating)):
        if isinstance(result, Exception):
            logger.error(f"Query for {label} reminders on {today.isoformat()} failed: {result}")
            raise ResolutionError(f"unable to query for {label} reminders: {result}", result) from result

    logger.info(
        f"Resolved {len(this_year)} one-off and {len(repeating)} repeating "
        f"reminder(s) for {today.isoformat()}"
    )
    return this_year + repeating
