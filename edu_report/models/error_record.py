from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from .errors import ReportError

"""One line of the run's error log.

A record describes a workbook that produced no report: it was rejected by
suffix, could not be read, or its header did not fit any shape. ``shape`` is
"" when the failure happened before a shape was known.
"""

__all__ = [
    "ErrorRecord",
    "UNSUPPORTED_FILE",
]

UNSUPPORTED_FILE = "UNSUPPORTED_FILE"


def _utc_stamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ErrorRecord:
    timestamp: str  # ISO8601 UTC, "Z" suffix
    file: str  # workbook name, no directory
    shape: str  # ReportShape value or ""
    error_type: str  # UPPER_SNAKE, from ReportError.error_type
    message: str  # developer-facing text, not the user message

    @staticmethod
    def create(file: str, shape: str, error_type: str, message: str) -> ErrorRecord:
        return ErrorRecord(
            timestamp=_utc_stamp(),
            file=file,
            shape=shape,
            error_type=error_type,
            message=message,
        )

    @classmethod
    def from_error(cls, file: str, error: ReportError) -> ErrorRecord:
        """Record a pipeline failure; the shape comes from the error when it has one."""
        shape = getattr(error, "shape", None)
        return cls.create(file, shape.value if shape else "", error.error_type, str(error))

    @classmethod
    def unsupported(cls, path: Path) -> ErrorRecord:
        return cls.create(path.name, "", UNSUPPORTED_FILE, f"unsupported suffix {path.suffix!r}")

    def to_json_line(self) -> str:
        # ensure_ascii=False: Cyrillic file names stay readable in the log
        return json.dumps(asdict(self), ensure_ascii=False)
