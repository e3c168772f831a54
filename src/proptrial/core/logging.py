"""Structured logging for proptrial.

Library modules log through get_logger(__name__). Those loggers are
structlog wrappers around stdlib loggers under the "proptrial" namespace, so
the host application's logging setup decides what is shown. The package
installs a NullHandler on "proptrial": with no logging configured nothing is
written anywhere, and failure reports on stdout stay clean.

configure_logging() is the opt-in for a visible log stream. The CLI calls
it; host applications may. It installs one stderr handler on the root logger
whose ProcessorFormatter renders both proptrial events and foreign stdlib
records (console or JSON).
"""

import logging
import sys
from enum import StrEnum
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

LIBRARY_LOGGER = "proptrial"

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


class LogLevel(StrEnum):
    """Levels accepted by configure_logging and the CLI --log-level option."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def _shared_processors() -> list[Any]:
    """Processors applied to every event before rendering.

    Used both by library loggers and as the foreign pre-chain for plain
    stdlib records, so both carry the same fields.
    """
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop ProcessorFormatter bookkeeping (_record, _from_structlog) from output."""
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to the stdlib logger `name`.

    Events below the stdlib logger's effective level are dropped before any
    processor runs, so debug events in hot loops cost one level check.
    The processor chain is fixed here and does not depend on
    structlog.configure(), so a host's structlog setup cannot redirect
    library events to stdout.
    """
    logger: structlog.stdlib.BoundLogger = structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
    return logger


def configure_logging(
    *,
    json_output: bool = False,
    level: LogLevel | str = LogLevel.WARNING,
) -> None:
    """Send log events to stderr, rendered as console lines or JSON.

    Stderr keeps logs out of failure reports and JSON results printed on
    stdout. Replaces any handlers already on the root logger.

    Args:
        json_output: If True, output JSON. If False, human-readable.
        level: Log level name (DEBUG, INFO, WARNING, ERROR), any case.

    Raises:
        ValueError: If level is not one of the LogLevel names.
    """
    log_level = logging.getLevelNamesMapping()[LogLevel(str(level).upper())]

    if json_output:
        final_processors: list[Any] = [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _remove_internal_fields,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=_shared_processors(),
        )
    )

    root = logging.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(log_level)
