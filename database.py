"""Database module for RemindMe.

This module defines the SQLAlchemy model and session management.
The store is only ever queried by equality on (month, day, year).
"""

from sqlalchemy import create_engine, Column, Integer, String, DateTime, Index
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import declarative_base, sessionmaker
from fastapi import Request

# SQLAlchemy Base
Base = declarative_base()

REPEATING_YEAR = 0
"""Year value of a reminder that fires every year"""

DELETED_YEAR = 1991
"""Year written by a soft-delete; no digest ever asks for it"""


class ReminderRecord(Base):
    """Reminder model - one stored reminder.

    year == 0 marks a yearly repeating reminder, any other year a one-off.
    month and day are stored as given; Feb 30 is accepted and never matches.
    """

    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, autoincrement=True, doc="Store-assigned reminder ID")

    message = Column(String, nullable=False, doc="Reminder text")

    month = Column(Integer, nullable=False, doc="Month the reminder fires (1-12)")
    day = Column(Integer, nullable=False, doc="Day of month the reminder fires (1-31)")
    year = Column(Integer, nullable=False, default=REPEATING_YEAR, doc="Year it fires in, 0 for every year")

    created = Column(
        DateTime(timezone=True),
        nullable=False,
        doc="When the reminder was created (timezone-aware)"
    )

    __table_args__ = (
        Index('idx_month_day_year', 'month', 'day', 'year'),
    )

    @property
    def repeating(self) -> bool:
        return self.year == REPEATING_YEAR

    def __repr__(self):
        """String representation"""
        return (
            f"<ReminderRecord(id={self.id}, message={self.message!r}, "
            f"date={self.year:04d}-{self.month:02d}-{self.day:02d})>"
        )


def create_session_factory(database_url: str) -> sessionmaker:
    """Create the engine and tables and return a session factory.

    Args:
        database_url: SQLAlchemy connection URL

    Returns:
        sessionmaker: Factory producing independent sessions
    """
    url = make_url(database_url)
    options = {}
    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        # In-memory SQLite is per connection; share one across the resolver threads
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool

    engine = create_engine(
        url,
        echo=False,  # Set to True for SQL debugging
        **options
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """Database session dependency for FastAPI.

    The session factory lives on app.state, set by create_app().

    Yields:
        Session: SQLAlchemy database session
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
