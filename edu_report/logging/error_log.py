from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord
from ..models.errors import ReportError

"""Per-run error log.

Workbooks that produce no report are collected during the batch and written
at the end as JSON Lines to ``<logs>/errors-YYYYMMDD-HHMMSS.log`` (UTC). A
run without failures creates no file.
"""

__all__ = [
    "ErrorLogBuffer",
    "ErrorRecord",
]

FILE_STAMP = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Failures of one run, flushed as JSON Lines.

    The target file is named on first flush and reused afterwards.
    """

    def __init__(self, logs_dir: Path = Path("./logs")) -> None:
        self._logs_dir = logs_dir
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            self._file_path = self._logs_dir / f"errors-{datetime.now(UTC).strftime(FILE_STAMP)}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def record_failure(self, file_name: str, error: ReportError) -> None:
        self.append(ErrorRecord.from_error(file_name, error))

    def record_rejected(self, path: Path) -> None:
        self.append(ErrorRecord.unsupported(path))

    def error_types(self) -> Counter[str]:
        """Pending records counted by error_type."""
        return Counter(r.error_type for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append pending records to the log file; None when nothing is pending."""
        if not self._records:
            return None
        target = self.file_path
        with target.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._records)
        self._records.clear()
        return target
