# psref/config/logging_config.py

"""Per-run timestamped logging configuration for the psref CLI.

Each command-line invocation creates a dedicated log file inside
``logs/``, named with the launch timestamp (e.g.
``logs/run_20260214_153045.log``).  All ``psref.*`` loggers route
through this file handler, so request attempts, retries and resolver
decisions from one run land in the same file.

Library users who never call :func:`setup_logging` get no handlers from
this package; records propagate to whatever the application configures.
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path

from psref.config.settings import Settings

# "<path> #<attempt>" while an attempt is in progress
request_context: ContextVar[str] = ContextVar("psref_request", default="-")

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(request)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RequestContextFilter(logging.Filter):
    """Stamp each record with the request attempt in progress, if any."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request = request_context.get()
        return True


def setup_logging(console_level: int = logging.WARNING) -> Path:
    """Initialise the root ``psref`` logger for the current run.

    Args:
        console_level: Minimum level echoed to stderr.

    Returns:
        The :class:`~pathlib.Path` to the log file created for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger("psref")
    root_logger.setLevel(logging.DEBUG)

    # Prevent duplicate handlers on repeated calls (e.g. tests)
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.addFilter(RequestContextFilter())
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)

    return log_file
