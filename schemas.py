"""Pydantic schemas for RemindMe.

This module defines request and response schemas for API validation.
The reminder date stays a plain string here; date_codec splits it.
"""

from pydantic import BaseModel, Field
from typing import Optional


class ReminderCreate(BaseModel):
    """Schema for creating a new reminder.

    Both the JSON endpoint and the form endpoint decode into this model.
    """

    message: str = Field(
        ...,
        min_length=1,
        description="Reminder text",
        examples=["Pay rent", "Anniversary"]
    )

    date: str = Field(
        ...,
        description="Date the reminder fires, YYYY-MM-DD. The year is ignored when repeat is set",
        examples=["2024-03-01"]
    )

    repeat: bool = Field(
        default=False,
        description="Fire every year on this month/day instead of only once"
    )


class MessageResponse(BaseModel):
    """Confirmation returned by the create and delete endpoints."""

    message: str = Field(..., description="Human readable confirmation")
    id: int = Field(..., description="ID of the affected reminder")


class DigestResponse(BaseModel):
    """Outcome of one digest run.

    sent is False when nothing was due; that is still a success.
    """

    sent: bool = Field(..., description="Whether an email went out")
    count: int = Field(0, description="Number of reminders in the digest")
    subject: Optional[str] = Field(None, description="Subject of the email sent")
    delivery_status: Optional[int] = Field(None, description="Status code returned by the email transport")
    message: str = Field(..., description="Human readable summary")

    class Config:
        """Pydantic configuration"""
        json_schema_extra = {
            "example": {
                "sent": True,
                "count": 2,
                "subject": "You have 2 reminders for Saturday June 15, 2024",
                "delivery_status": 202,
                "message": "sent 2 reminders"
            }
        }
