"""Structured logging for the battle simulation core.

Engine modules log through structlog loggers obtained from ``get_logger``.
``configure_logging`` wires structlog and the standard library root logger
from the application ``Settings``: level, console or JSON rendering, and
an optional log file. Game events (see ``battle_core.engine.events``)
carry enums and pydantic models; ``render_domain_values`` flattens them
so both renderers emit plain values.

The run controller binds ``run_seed`` (and clears it between runs) with
``bind_context``/``clear_context``, so every record of a run can be
correlated.

Example:
    >>> from battle_core.core.logging import configure_logging, get_logger
    >>> configure_logging()
    >>> logger = get_logger(__name__)
    >>> logger.info("Battle resolved", winner="player", turns=4)
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel
from structlog.types import Processor

from battle_core.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# =============================================================================
# Processors
# =============================================================================


class AppContext:
    """Processor stamping the application name and version on every record."""

    def __init__(self, app_name: str, app_version: str) -> None:
        self.app_name = app_name
        self.app_version = app_version

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", self.app_name)
        event_dict.setdefault("version", self.app_version)
        return event_dict


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, tuple | list):
        return [_plain(item) for item in value]
    return value


def render_domain_values(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace enum members and models in ``event_dict`` with plain values."""
    return {key: _plain(value) for key, value in event_dict.items()}


# =============================================================================
# Configuration
# =============================================================================


def resolve_log_level(settings: Settings) -> int:
    """Numeric level for ``settings``; debug mode always logs at DEBUG."""
    if settings.debug:
        return logging.DEBUG
    return logging.getLevelName(settings.log_level)


def build_processors(settings: Settings) -> list[Processor]:
    """Processor chain for ``settings``, ending in the chosen renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        AppContext(settings.app_name, settings.app_version),
        render_domain_values,
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        settings: Settings to configure from; the cached application
            settings when omitted.
    """
    settings = settings or get_settings()
    level = resolve_log_level(settings)

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format=STDLIB_FORMAT, level=level, stream=sys.stdout, force=True)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(STDLIB_FORMAT))
        logging.getLogger().addHandler(file_handler)

    get_logger(__name__).debug(
        "Logging configured",
        level=logging.getLevelName(level),
        json_logs=settings.json_logs,
        log_file=settings.log_file,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind key-value pairs onto every subsequent log record.

    Example:
        >>> bind_context(run_seed=12345)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "AppContext",
    "render_domain_values",
    "resolve_log_level",
    "build_processors",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
