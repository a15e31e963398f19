"""CRUD operations for RemindMe.

This module provides the record store operations: insert, lookup by id,
equality-filter scan by (month, day, year) and soft-delete.
"""

from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, timezone

from database import ReminderRecord, DELETED_YEAR
from date_codec import ParsedDate
from logger_config import setup_logger

logger = setup_logger(__name__, 'crud.log')


def create_reminder(db: Session, message: str, parsed: ParsedDate) -> ReminderRecord:
    """Create a new reminder in the database.

    Args:
        db: Database session
        message: Reminder text
        parsed: Year (0 for repeating), month and day from date_codec

    Returns:
        ReminderRecord: Created record with its store-assigned id

    Raises:
        SQLAlchemyError: On database errors
    """
    db_reminder = ReminderRecord(
        message=message,
        year=parsed.year,
        month=parsed.month,
        day=parsed.day,
        created=datetime.now(timezone.utc)
    )

    db.add(db_reminder)
    db.commit()
    db.refresh(db_reminder)
    return db_reminder


def get_reminder(db: Session, reminder_id: int) -> Optional[ReminderRecord]:
    """Get a specific reminder by ID.

    Returns:
        Optional[ReminderRecord]: Record if found, None otherwise
    """
    return db.get(ReminderRecord, reminder_id)


def get_reminders_for_day(db: Session, month: int, day: int, year: int) -> List[ReminderRecord]:
    """Get reminders whose month, day and year all equal the given values.

    Pass year=0 for the repeating reminders of that month/day.
    Results keep the store's natural (insertion) order.
    """
    return db.query(ReminderRecord).filter(
        ReminderRecord.month == month,
        ReminderRecord.day == day,
        ReminderRecord.year == year
    ).order_by(ReminderRecord.id).all()


def soft_delete_reminder(db: Session, reminder_id: int) -> Optional[ReminderRecord]:
    """Exclude a reminder from all future digests.

    The record is kept; its year is overwritten with DELETED_YEAR, which no
    digest query ever asks for. Lookup and update share one transaction.

    Args:
        db: Database session
        reminder_id: Reminder ID

    Returns:
        Optional[ReminderRecord]: The updated record, None if no such id exists

    Raises:
        SQLAlchemyError: On database errors
    """
    reminder = db.get(ReminderRecord, reminder_id, with_for_update=True)
    if reminder is None:
        return None

    reminder.year = DELETED_YEAR
    db.commit()
    db.refresh(reminder)

    logger.info(f"Soft-deleted reminder {reminder_id}: '{reminder.message}'")
    return reminder
