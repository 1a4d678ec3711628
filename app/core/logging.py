"""Structured logging configuration."""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.processors import JSONRenderer, TimeStamper, add_log_level
from structlog.stdlib import add_logger_name

from app.core.config import Settings, settings as default_settings


def service_context(settings: Settings):
    """Processor stamping every event with the service name and environment."""

    def add_service(logger, method_name, event_dict):
        event_dict.setdefault("service", settings.SERVICE_NAME)
        event_dict.setdefault("environment", settings.ENVIRONMENT)
        return event_dict

    return add_service


def build_processors(settings: Settings) -> List:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        add_log_level,
        add_logger_name,
        service_context(settings),
        TimeStamper(fmt="iso", utc=True),
    ]

    if settings.LOG_FORMAT == "json":
        # Tracebacks as structured data for log shippers
        processors += [structlog.processors.dict_tracebacks, JSONRenderer()]
    else:
        # ConsoleRenderer formats exceptions itself
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def setup_logging(settings: Optional[Settings] = None):
    """Configure structlog on top of stdlib logging."""
    settings = settings or default_settings

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL),
    )

    structlog.configure(
        processors=build_processors(settings),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
