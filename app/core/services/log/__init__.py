"""Logging service.

Importing the structlog provider configures stdlib logging and structlog once
for the whole process.
"""

import structlog


def get_log_service() -> structlog.stdlib.BoundLogger:
    """Get the configured application logger."""
    from app.core.services.log.providers.structlog.setup import logger

    return logger


__all__ = ['get_log_service']
