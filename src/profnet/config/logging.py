"""Log routing for the profnet CLI.

Everything goes to stderr so stdout stays reserved for command results.
Two families of records share one handler:

- ``profnet.*`` stdlib loggers (store and service debug lines, %-style)
- ``profnet.telemetry`` structlog events (``span.complete`` with fields)

``-v`` opens the ``profnet`` logger to DEBUG; otherwise only warnings
surface. ``sqlalchemy.engine`` stays at WARNING even when verbose, since
``[database] echo`` is the switch for SQL statements. ``--log-json``
swaps the console renderer for one JSON object per line.
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "profnet"
_PINNED_LOGGERS = ("sqlalchemy.engine",)


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to both structlog events and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set profnet's log levels.

    Calling it again replaces the previous handler.

    Args:
        verbose: Let ``profnet`` loggers emit DEBUG records.
        log_json: Render records as JSON lines.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _PINNED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
