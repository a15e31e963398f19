"""Centralized logging configuration for RemindMe.

Rotating log files plus console output, one format for both.
"""

import logging
from logging.handlers import RotatingFileHandler
import os

# Log directory, overridable for deployments with a read-only source tree
LOG_DIR = os.environ.get('LOG_DIR', os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs'))
os.makedirs(LOG_DIR, exist_ok=True)


def setup_logger(name: str, log_file: str = 'service.log', level: str = 'INFO') -> logging.Logger:
    """Setup logger with rotation.

    Args:
        name: Logger name (usually __name__)
        log_file: Log file name (e.g., 'api.log', 'digest.log')
        level: Log level name

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File handler - 10MB max, keep 5 backups
    file_handler = RotatingFileHandler(
        os.path.join(LOG_DIR, log_file),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def set_level(level: str):
    """Apply a configured level to the service loggers created so far."""
    for name in ('api_server', 'crud', 'resolver', 'digest_worker', 'notifier'):
        logging.getLogger(name).setLevel(level)


def configure_root_logger():
    """Reduce third-party library noise."""
    logging.getLogger('uvicorn').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('fastapi').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)


# Auto-configure on import
configure_root_logger()
