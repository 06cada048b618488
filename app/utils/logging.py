"""structlog helpers shared by the validators and the CLI scripts.

Library code only ever calls :func:`get_logger`.  Loggers are bound to stdlib
loggers under the ``validators`` / ``scripts`` hierarchy, so the host's logging
configuration decides what is shown; until a host configures logging nothing
is emitted.  Scripts call :func:`configure_logging` once at start-up so log
lines go to stderr and stdout stays reserved for the one-line summary the
tests parse.
"""

import logging
import sys

import structlog

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.processors.add_log_level,
    structlog.processors.KeyValueRenderer(key_order=["level", "event"], sort_keys=True),
]

logging.getLogger("validators").addHandler(logging.NullHandler())


def configure_logging(level: str = "WARNING") -> None:
    """Route log output to stderr, filtered at *level*."""
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(message)s",
        force=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger tagged with *name*, backed by stdlib logging."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
