"""structlog configuration for pomoctl.

Log records from ``logging.getLogger(__name__)`` and structlog loggers
share one stderr handler, so state transitions, persistence warnings and
plugin failures never mix with the command's stdout payload.

Two output modes:
- Human (default): console renderer, colored when stderr is a TTY
- JSON (--log-json): one JSON object per line

Every record carries the invocation context bound by
:func:`bind_invocation` (command name, advance policy).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

ROOT_LOGGER = "pomoctl"

# Third-party loggers that stay at WARNING even with --verbose.
_QUIET_LOGGERS = ("sqlalchemy", "pluggy")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and route stdlib logging through them.

    Args:
        verbose: Show DEBUG records from ``pomoctl.*``. When False, only WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.
    """
    shared = _shared_processors()

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.contextvars.clear_contextvars()


def bind_invocation(**fields: Any) -> None:
    """Attach *fields* (e.g. ``command="tick"``) to every later log record.

    None values are dropped.
    """
    structlog.contextvars.bind_contextvars(
        **{k: str(v) for k, v in fields.items() if v is not None}
    )


def get_event_logger(name: str = ROOT_LOGGER) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger for key-value events (transitions, expiries)."""
    return structlog.get_logger(name)
