"""structlog rendering for timetype's stdlib log records.

The codecs log through ``logging.getLogger(__name__)`` and attach their
details as ``extra`` fields (``value``, ``layouts``, ``shape``). This
module turns those records into console lines or JSON objects on stderr,
with the extra fields promoted to top-level keys.
"""

from __future__ import annotations

import logging
import sys

import structlog

CODEC_LOGGER = "timetype"


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to every stdlib record before rendering."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]


def build_handler(*, log_json: bool = False) -> logging.Handler:
    """Return a stderr handler rendering records as console text or JSON."""
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route codec records to stderr; DEBUG when *verbose*, else WARNING+.

    Safe to call repeatedly: the root handler is replaced, not stacked.
    """
    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers = [build_handler(log_json=log_json)]
    root.setLevel(logging.WARNING)

    logging.getLogger(CODEC_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
