from __future__ import annotations

import logging
import sys
from typing import Any

"""Logging setup for the report CLI.

Log lines share stdout with the printed reports, so each one starts with a
label a reader (or grep) can pick out: INFO, WARN, ERROR or SUMMARY. SUMMARY
is level 25 and carries the final line of a batch.

Records about a specific workbook pass ``extra=workbook_extra(name)``; the
formatter then tags them as ``LABEL [name] message``.

Modules log through ``logging.getLogger(__name__)`` and reach the single
handler installed on the ``edu_report`` logger.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_debug",
    "setup_logging",
    "workbook_extra",
]

LOGGER_NAME = "edu_report"

# between INFO (20) and WARNING (30): shown at the default level
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


def workbook_extra(file_name: str) -> dict[str, Any]:
    return {"workbook": file_name}


class LabeledFormatter(logging.Formatter):
    """``LABEL message`` or ``LABEL [workbook] message``."""

    LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        SUMMARY_LEVEL: "SUMMARY",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LABELS.get(record.levelno, record.levelname)
        workbook = getattr(record, "workbook", None)
        if workbook:
            return f"{label} [{workbook}] {record.getMessage()}"
        return f"{label} {record.getMessage()}"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Install the stdout handler on the package logger (once) and return it."""
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # a previous setup (tests, re-entry) may have left its handler behind
    for old in list(logger.handlers):
        logger.removeHandler(old)

    out = logging.StreamHandler(sys.stdout)
    out.setLevel(level)
    out.setFormatter(LabeledFormatter())
    logger.addHandler(out)
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def set_debug(logger: logging.Logger) -> None:
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() starts over."""
    global _logger
    _logger = None
