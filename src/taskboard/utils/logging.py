"""
Logging helpers for the Taskboard backend
"""
import logging
import sys
from typing import Optional


LOGGER_NAME = "taskboard"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the package logger with a single stderr handler.

    Safe to call more than once (e.g. from create_app in every test);
    the handler is only installed the first time.
    """
    logger.setLevel(level.upper())

    if any(getattr(h, "_taskboard", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    handler._taskboard = True
    logger.addHandler(handler)


def log_error(error: Exception, context: str, user_id: Optional[str] = None) -> None:
    """
    Record a failure raised inside a service call.

    Args:
        error: The exception being propagated
        context: Where it happened, e.g. "TaskService.create_task"
        user_id: The acting user, when known
    """
    logger.error(
        "%s failed (user_id=%s): %s: %s",
        context,
        user_id,
        type(error).__name__,
        error,
    )


__all__ = ["logger", "setup_logging", "log_error"]
