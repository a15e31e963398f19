"""Shared fixtures for RemindMe tests."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

import database
from api_server import create_app
from config import Settings
from notifier import DeliveryError, DeliveryResult

SECRET = "s3cret"


class RecordingNotifier:
    """Stands in for SendGrid and remembers what it was asked to send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    async def send(self, from_email, to_email, subject, body, html=None):
        if self.fail:
            raise DeliveryError("email transport answered 500: boom")
        self.sent.append({
            "from_email": from_email,
            "to_email": to_email,
            "subject": subject,
            "body": body,
            "html": html,
        })
        return DeliveryResult(status_code=202, message_id="msg-1")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'reminders.db'}",
        SECRET=SECRET,
        TO_EMAIL="me@example.com",
        FROM_EMAIL="remindme@example.com",
        SENDGRID_API_KEY="test-key",
    )


@pytest.fixture
def session_factory(settings):
    return database.create_session_factory(settings.DATABASE_URL)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def today():
    return date(2025, 6, 15)


@pytest.fixture
def client(settings, session_factory, notifier, today):
    app = create_app(settings, session_factory=session_factory, notifier=notifier, clock=lambda: today)
    with TestClient(app) as c:
        yield c
