"""FastAPI REST API server for RemindMe.

Endpoints:
- POST /new          create a reminder from a JSON body
- POST /new-form     create a reminder from form fields
- GET  /remindme     email today's digest (called by the daily scheduler)
- DELETE /{id}       soft-delete a reminder
- GET  /health       liveness check

Every endpoint except /health needs the shared secret in the `sec` query
parameter.
"""

import secrets
from datetime import date
from typing import Callable, Optional

from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Query, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

import crud
import database
import logger_config
import schemas
from config import Settings, load_settings
from date_codec import InvalidDateError, describe_request_date, local_today, parse_date
from digest_worker import build_notifier, send_daily_digest
from logger_config import setup_logger
from notifier import DeliveryError
from resolver import ResolutionError

logger = setup_logger(__name__, 'api.log')

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_secret(
    request: Request,
    sec: str = Query("", description="Shared secret")
):
    """Reject the request unless `sec` matches the configured secret."""
    settings = get_settings(request)
    if not secrets.compare_digest(sec.encode(), settings.SECRET.encode()):
        logger.error(f"incorrect secret: '{sec}'")
        raise HTTPException(status_code=401, detail="no way josé")


def _create_reminder(db: Session, settings: Settings, reminder: schemas.ReminderCreate) -> schemas.MessageResponse:
    try:
        parsed = parse_date(reminder.date, reminder.repeat, strict=settings.STRICT_DATE_PARSING)
    except InvalidDateError as e:
        logger.error(f"unable to parse date of reminder {reminder.model_dump()}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    try:
        record = crud.create_reminder(db, reminder.message, parsed)
    except SQLAlchemyError as e:
        logger.error(f"unable to put reminder: {e}")
        raise HTTPException(status_code=500, detail=f"unable to put reminder: {e}")

    r_type = "repeating" if reminder.repeat else "instant"
    resp = (
        f"created {r_type} reminder '{reminder.message}' "
        f"for {describe_request_date(reminder.date)} [id={record.id}]"
    )
    logger.info(resp)
    return schemas.MessageResponse(message=resp, id=record.id)


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "remindme",
        "database": settings.DATABASE_URL.split("://")[0]
    }


@router.post(
    "/new",
    response_model=schemas.MessageResponse,
    status_code=201,
    dependencies=[Depends(require_secret)]
)
def new_reminder(
    reminder: schemas.ReminderCreate,
    db: Session = Depends(database.get_db),
    settings: Settings = Depends(get_settings)
):
    """Create a reminder.

    Request body example:
    ```json
    {"message": "Pay rent", "date": "2024-03-01", "repeat": true}
    ```
    """
    return _create_reminder(db, settings, reminder)


@router.post(
    "/new-form",
    response_model=schemas.MessageResponse,
    status_code=201,
    dependencies=[Depends(require_secret)]
)
def new_reminder_form(
    message: str = Form(""),
    date: str = Form(""),
    repeat: str = Form(""),
    db: Session = Depends(database.get_db),
    settings: Settings = Depends(get_settings)
):
    """Create a reminder from form fields; repeat is on only for the value "true"."""
    try:
        reminder = schemas.ReminderCreate(message=message, date=date, repeat=repeat == "true")
    except ValidationError as e:
        raise RequestValidationError(
            e.errors(include_url=False),
            body={"message": message, "date": date, "repeat": repeat}
        )
    return _create_reminder(db, settings, reminder)


@router.get(
    "/remindme",
    response_model=schemas.DigestResponse,
    dependencies=[Depends(require_secret)]
)
async def remind_me(request: Request):
    """Email the digest of today's reminders.

    Answers 200 whether or not anything was due.
    """
    state = request.app.state
    try:
        return await send_daily_digest(state.session_factory, state.notifier, state.settings, state.clock())
    except ResolutionError as e:
        raise HTTPException(status_code=500, detail=f"unable to get reminders: {e}")
    except DeliveryError as e:
        logger.error(f"unable to send email: {e}")
        raise HTTPException(status_code=500, detail=f"unable to send email: {e}")


@router.delete(
    "/{reminder_id}",
    response_model=schemas.MessageResponse,
    dependencies=[Depends(require_secret)]
)
def delete_reminder(
    reminder_id: int,
    db: Session = Depends(database.get_db)
):
    """Soft-delete a reminder so it never shows up in a digest again."""
    try:
        reminder = crud.soft_delete_reminder(db, reminder_id)
    except SQLAlchemyError as e:
        logger.error(f"unable to delete reminder {reminder_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if reminder is None:
        raise HTTPException(status_code=400, detail=f"no reminder with id={reminder_id} exists")
    return schemas.MessageResponse(message=f"reminder '{reminder.message}' deleted", id=reminder_id)


async def log_validation_error(request: Request, exc: RequestValidationError):
    """Log the rejected payload, then answer with FastAPI's default 422."""
    logger.error(f"unable to decode {request.method} {request.url.path}: {exc.errors()} payload={exc.body!r}")
    return await request_validation_exception_handler(request, exc)


def create_app(
    settings: Settings,
    session_factory: Optional[sessionmaker] = None,
    notifier=None,
    clock: Optional[Callable[[], date]] = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Loaded settings
        session_factory: Database session factory, built from settings.DATABASE_URL if omitted
        notifier: Email notifier, a SendGridNotifier from settings if omitted
        clock: Returns "today", defaults to today in settings.TIMEZONE
    """
    logger_config.set_level(settings.LOG_LEVEL)

    app = FastAPI(
        title="RemindMe API",
        description="Personal reminders with a daily email digest",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.session_factory = session_factory or database.create_session_factory(settings.DATABASE_URL)
    app.state.notifier = notifier or build_notifier(settings)
    app.state.clock = clock or (lambda: local_today(settings.TIMEZONE))

    app.add_exception_handler(RequestValidationError, log_validation_error)
    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn
    settings = load_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level="info"
    )
