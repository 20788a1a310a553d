# storefront/config/logging_config.py

"""Per-run timestamped logging configuration for storefront.

Each launch writes to its own file inside ``logs/`` named after the
launch time (e.g. ``logs/run_20260214_153045.log``). Every
``storefront.*`` logger propagates into that file, while only warnings
and errors reach the terminal so the TUI is not disturbed.

Credentials and bearer tokens must never be passed to these loggers.
Both handlers still carry a :class:`SecretRedactingFilter` that masks
bearer tokens and password or token fields before a record is written.
"""

import logging
import re
import sys
from datetime import datetime
from pathlib import Path

from storefront.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_BEARER_RE = re.compile(r"(Bearer\s+)[^\s'\",]+", re.IGNORECASE)
_SECRET_FIELD_RE = re.compile(
    r"(\b(?:access_token|refresh_token|password)['\"]?\s*[:=]\s*['\"]?)"
    r"[^\s'\",}&]+",
    re.IGNORECASE,
)


def redact_secrets(text: str) -> str:
    """Mask bearer tokens and password or token values in *text*."""
    text = _BEARER_RE.sub(r"\1***", text)
    return _SECRET_FIELD_RE.sub(r"\1***", text)


class SecretRedactingFilter(logging.Filter):
    """Rewrite a record's message with its secrets masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging() -> Path:
    """Initialise the root ``storefront`` logger for the current run.

    Returns:
        The :class:`~pathlib.Path` to the log file created for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger("storefront")
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, CLI + TUI) keep the first run's handlers
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    redactor = SecretRedactingFilter()
    file_handler.addFilter(redactor)
    console_handler.addFilter(redactor)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)

    return log_file
