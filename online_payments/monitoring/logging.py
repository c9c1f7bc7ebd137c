"""
Structured logging configuration.

Uses structlog on top of the standard library so every domain event
(registration, login, payment outcome) is a queryable record.

Logs go to stderr: stdout belongs to the interactive menu.
"""
import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from online_payments.config import Settings, get_settings

SENSITIVE_KEYS = ("password", "card_number", "secret")


def add_app_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Add application context to log events.

    Args:
        logger: Logger instance
        method_name: Log method name
        event_dict: Event dictionary

    Returns:
        dict[str, Any]: Enhanced event dictionary
    """
    settings = get_settings()
    event_dict["app_name"] = settings.app_name
    event_dict["app_env"] = settings.app_env
    return event_dict


def scrub_sensitive_data(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Mask sensitive fields before rendering.

    Strings longer than four characters keep their last four characters,
    anything else is fully redacted.
    """
    for key in SENSITIVE_KEYS:
        if key in event_dict:
            value = event_dict[key]
            if isinstance(value, str) and len(value) > 4:
                event_dict[key] = f"***{value[-4:]}"
            else:
                event_dict[key] = "***REDACTED***"
    return event_dict


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure structured logging.

    Sets up:
    - structlog processors (context vars, level, timestamp, app context)
    - JSON or console rendering depending on ``log_format``
    - a single stderr handler on the root logger
    """
    settings = settings or get_settings()

    renderer: Any
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_app_context,
            scrub_sensitive_data,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_format == "json":
        handler.setFormatter(
            jsonlogger.JsonFormatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"levelname": "level", "name": "logger"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    logger = structlog.get_logger(__name__)
    logger.debug(
        "logging_configured",
        log_level=settings.log_level,
        log_format=settings.log_format,
    )
