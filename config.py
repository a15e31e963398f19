"""Configuration module for RemindMe.

This module provides configuration settings using Pydantic Settings.
Environment variables (or a .env file) provide the values.

There is no module-level settings instance: call load_settings() once at
startup and pass the result to create_app(), the digest worker and the
session factory.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings for RemindMe.

    All settings can be overridden via environment variables.
    Example: export SECRET="hunter2"
    """

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./reminders.db"
    """Database connection URL. Default: SQLite file in current directory"""

    # API Server Configuration
    API_HOST: str = "0.0.0.0"
    """API server host address"""

    API_PORT: int = 8080
    """API server port"""

    # Authentication
    SECRET: str = Field(..., min_length=1)
    """Shared secret expected in the `sec` query parameter of every endpoint"""

    # Digest delivery
    TO_EMAIL: str
    """Address that receives the daily digest"""

    FROM_EMAIL: str
    """Sender address of the daily digest"""

    FROM_NAME: str = "RemindMe"
    """Display name of the sender"""

    SENDGRID_API_KEY: str = ""
    """SendGrid API key used by the notifier"""

    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"
    """SendGrid v3 mail/send endpoint"""

    HTTP_TIMEOUT: float = 30.0
    """Timeout in seconds for outbound HTTP calls"""

    # General Configuration
    TIMEZONE: str = "America/New_York"
    """Timezone that decides what "today" is for the digest"""

    STRICT_DATE_PARSING: bool = False
    """Reject non-numeric date tokens instead of storing them as zero"""

    LOG_LEVEL: str = "INFO"
    """Log level for the service loggers"""

    class Config:
        """Pydantic config"""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


def load_settings() -> Settings:
    """Build the settings from the environment.

    Raises:
        pydantic.ValidationError: When a required variable is missing
    """
    return Settings()
