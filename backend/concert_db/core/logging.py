"""
Structured logging for the concert service, on structlog.

Every record carries the service name, version and environment, added by a
processor so the per-request contextvars cleared by the middleware never drop
them. Records from firebase_admin and its HTTP stack go through the same
formatter but are held at FIREBASE_LOG_LEVEL unless DEBUG is on.

Rendering: JSON in production, console otherwise. DEBUG forces console
output at DEBUG level whatever the environment.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from concert_db.core.config import Settings, get_settings

# Loggers that speak for Firebase calls made by the Admin SDK
FIREBASE_LOGGERS = ("firebase_admin", "google.auth", "urllib3", "cachecontrol")


def _service_context(settings: Settings) -> Processor:
    def add_service_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", settings.APP_NAME)
        event_dict.setdefault("version", settings.APP_VERSION)
        event_dict.setdefault("environment", settings.ENVIRONMENT)
        return event_dict

    return add_service_context


def _log_level(settings: Settings) -> int:
    if settings.DEBUG:
        return logging.DEBUG
    return getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)


def _renderer(settings: Settings) -> Processor:
    if settings.ENVIRONMENT == "production" and not settings.DEBUG:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(settings: Optional[Settings] = None) -> logging.Handler:
    """Configure structlog and the root logger. Returns the installed handler."""
    settings = settings or get_settings()

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _service_context(settings),
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.ENVIRONMENT == "production":
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=not settings.DEBUG,
    )

    # foreign_pre_chain stamps stdlib records from the Admin SDK the same way
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(settings),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(_log_level(settings))

    firebase_level = logging.DEBUG if settings.DEBUG else getattr(
        logging, settings.FIREBASE_LOG_LEVEL.upper(), logging.WARNING
    )
    for name in FIREBASE_LOGGERS:
        logging.getLogger(name).setLevel(firebase_level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return handler


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
