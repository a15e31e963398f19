"""Daily digest runner for RemindMe.

Resolves the reminders due today, composes the digest and emails it.
The /remindme endpoint calls send_daily_digest(); running this module
directly does the same once, for use from cron:

    python digest_worker.py

Nothing due is a success. A failed query or a failed delivery is not
retried here; the scheduler re-runs the whole invocation, which recomputes
the same due set from the store.
"""

import asyncio
import sys
from datetime import date
from typing import Optional

from sqlalchemy.orm import sessionmaker

import database
import logger_config
from config import Settings, load_settings
from date_codec import local_today
from digest import compose_digest, plural
from logger_config import setup_logger
from notifier import SendGridNotifier
from resolver import resolve_due
from schemas import DigestResponse

logger = setup_logger(__name__, 'digest.log')


def build_notifier(settings: Settings) -> SendGridNotifier:
    """Notifier configured from settings."""
    return SendGridNotifier(
        api_key=settings.SENDGRID_API_KEY,
        api_url=settings.SENDGRID_API_URL,
        from_name=settings.FROM_NAME,
        timeout=settings.HTTP_TIMEOUT,
    )


async def send_daily_digest(
    session_factory: sessionmaker,
    notifier,
    settings: Settings,
    today: Optional[date] = None,
) -> DigestResponse:
    """Email the digest of everything due today.

    Args:
        session_factory: Factory for database sessions
        notifier: Object with an async send(from_email, to_email, subject, body, html)
        settings: Sender/recipient addresses and timezone
        today: Day to run for, defaults to today in settings.TIMEZONE

    Returns:
        DigestResponse: sent=False when nothing was due

    Raises:
        ResolutionError: If a store query failed
        DeliveryError: If the email was not accepted
    """
    if today is None:
        today = local_today(settings.TIMEZONE)

    records = await resolve_due(session_factory, today)

    digest = compose_digest(records, today)
    if digest is None:
        logger.info("no reminders today")
        return DigestResponse(sent=False, count=0, message="no reminders today")

    logger.info(f"found {len(records)} reminder(s) for {today.isoformat()}")
    for line in digest.body.splitlines():
        logger.info(line)

    result = await notifier.send(
        settings.FROM_EMAIL,
        settings.TO_EMAIL,
        digest.subject,
        digest.body,
        html=digest.html,
    )

    return DigestResponse(
        sent=True,
        count=len(records),
        subject=digest.subject,
        delivery_status=result.status_code,
        message=f"sent {len(records)} reminder{plural(len(records))}",
    )


def main():
    """Run one digest for today and exit."""
    logger.info("=" * 60)
    logger.info("RemindMe - Daily Digest")
    logger.info("=" * 60)

    try:
        settings = load_settings()
        logger_config.set_level(settings.LOG_LEVEL)
        session_factory = database.create_session_factory(settings.DATABASE_URL)
        outcome = asyncio.run(send_daily_digest(session_factory, build_notifier(settings), settings))
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Digest run failed: {str(e)}", exc_info=True)
        sys.exit(1)

    logger.info(f"Digest run finished: {outcome.message}")
    sys.exit(0)


if __name__ == "__main__":
    main()
