"""Structured logging for hosts embedding Auto Classifier.

The package never configures logging on import. Every module logs through
`structlog.get_logger(__name__)`, so events land on the `auto_classifier`
stdlib logger tree once structlog routes through the standard library.

A host opts in with one call at startup:

    from auto_classifier.config import settings
    from auto_classifier.logging_config import configure_logging

    configure_logging(settings)                  # stderr, level from LOG_LEVEL
    configure_logging(settings, stream=buffer)   # any file-like object
    configure_logging(settings, handler=my_handler)

Only the `auto_classifier` logger is touched: the root logger, third-party
loggers (httpx, asyncio) and their handlers stay as the host left them.
Raw backend bodies and parse errors are logged as event fields, never
interpolated into the message.
"""

import logging
import sys
from typing import IO, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from auto_classifier.config import Settings


PACKAGE_LOGGER = "auto_classifier"
_HANDLER_NAME = "auto_classifier.structlog"


class AppContext:
    """Processor stamping the application name onto every event."""

    def __init__(self, app_name: str):
        self.app_name = app_name

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", self.app_name)
        return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _ensure_structlog_routes_to_stdlib() -> None:
    # A host that configured structlog itself keeps its pipeline
    if structlog.is_configured():
        return
    structlog.configure(
        processors=_shared_processors()
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_formatter(settings: Settings, colors: bool = False) -> structlog.stdlib.ProcessorFormatter:
    """JSON renderer in production, console renderer otherwise."""
    is_production = settings.ENVIRONMENT.lower() == "production"
    processors: list[Processor] = [
        AppContext(settings.APP_NAME),
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if is_production:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    return structlog.stdlib.ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=_shared_processors(),
    )


def configure_logging(
    settings: Settings,
    stream: Optional[IO[str]] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Handler:
    """Attach a structlog-rendering handler to the `auto_classifier` logger.

    Args:
        settings: Supplies LOG_LEVEL, ENVIRONMENT and APP_NAME
        stream: Where the default StreamHandler writes (stderr if omitted)
        handler: Host-supplied handler; its formatter is replaced

    Returns:
        The installed handler. Calling again replaces it instead of stacking
        a second one.

    An unknown LOG_LEVEL falls back to INFO.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO

    if handler is None:
        target = stream if stream is not None else sys.stderr
        handler = logging.StreamHandler(target)
        colors = target.isatty() if hasattr(target, "isatty") else False
    else:
        colors = False

    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(build_formatter(settings, colors=colors))
    handler.setLevel(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    # Events are rendered here; the host's root handlers would print them twice
    package_logger.propagate = False

    _ensure_structlog_routes_to_stdlib()

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=settings.ENVIRONMENT,
    )
    return handler
