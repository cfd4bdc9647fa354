"""
Argosy logging setup for the command-line entry point.

Scope
- Library modules log through the standard logging module
  (logging.getLogger(__name__), DEBUG level, %-style arguments) and never
  configure handlers themselves.
- configure_logging() is called by `python -m argosy` (or by any host that
  wants the same output) to route those records through structlog.

Output modes
- console (default): structlog's ConsoleRenderer on stderr, colored when
  stderr is a terminal.
- JSON lines (log_json=True): one JSON object per record on stderr.

Levels
- verbose=True enables DEBUG for the "argosy" logger hierarchy; otherwise
  only warnings and errors are shown.
"""
import logging
import sys

import structlog


def configure_logging(*, verbose=False, log_json=False, stream=None):
    """
    configure structlog processors and route stdlib records to `stream`
    (stderr by default). Safe to call more than once; the root handlers are
    replaced each time.
    """
    stream = sys.stderr if stream is None else stream

    shared = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("argosy").setLevel(logging.DEBUG if verbose else logging.WARNING)


__all__ = (
    "configure_logging",
)
