from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

"""Processing result models for a batch of workbooks.

FileReport tracks one workbook; BatchResult aggregates the run and feeds the
SUMMARY line.
"""


class FileStatus(Enum):
    """Outcome of processing one workbook.

    - REPORTED: a report was produced (possibly with zero findings)
    - NO_DATA: the sheet was empty or too short, informational only
    - FAILED: the file could not be read, classified or resolved
    """
    REPORTED = "reported"
    NO_DATA = "no_data"
    FAILED = "failed"


@dataclass(frozen=True)
class FileReport:
    """Per-file outcome."""
    file_name: str
    status: FileStatus
    shape: str | None = None  # ReportShape value
    findings: int = 0
    chunks: list[str] | None = None  # text segments delivered to the output
    error: str | None = None  # user-facing failure message
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results of one CLI run."""
    reported_files: int
    no_data_files: int
    failed_files: int
    total_findings: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_reports: list[FileReport] | None = None

    @property
    def total_files(self) -> int:
        return self.reported_files + self.no_data_files + self.failed_files

    @staticmethod
    def from_reports(
        reports: list[FileReport], start_time: datetime, end_time: datetime
    ) -> BatchResult:
        return BatchResult(
            reported_files=sum(1 for r in reports if r.status is FileStatus.REPORTED),
            no_data_files=sum(1 for r in reports if r.status is FileStatus.NO_DATA),
            failed_files=sum(1 for r in reports if r.status is FileStatus.FAILED),
            total_findings=sum(r.findings for r in reports),
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            file_reports=reports,
        )
