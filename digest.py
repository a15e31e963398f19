"""Digest composition for RemindMe.

Turns the reminders due on a day into one email: a counted subject line and
a numbered list of the messages, as plain text and as HTML.
"""

import html
from datetime import date
from typing import NamedTuple, Optional, Sequence

from database import ReminderRecord
from date_codec import format_human_date


class Digest(NamedTuple):
    subject: str
    body: str
    html: str


def plural(n: int) -> str:
    return "" if n == 1 else "s"


def compose_digest(records: Sequence[ReminderRecord], today: date) -> Optional[Digest]:
    """Compose the digest email for the due reminders.

    Every record goes into the one email, numbered from 1 in list order.

    Args:
        records: Due reminders, in the order they should be listed
        today: Day the digest is for

    Returns:
        Optional[Digest]: None when nothing is due
    """
    if not records:
        return None

    n = len(records)
    subject = f"You have {n} reminder{plural(n)} for {format_human_date(today)}"
    body = "\n".join(f"{i}. {r.message}" for i, r in enumerate(records, start=1))
    items = "".join(f"<li>{html.escape(r.message)}</li>" for r in records)
    return Digest(subject=subject, body=body, html=f'<ol type="1">{items}</ol>')
