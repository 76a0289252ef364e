from __future__ import annotations

import logging
import time
from collections.abc import Callable, Hashable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ReportConfig
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import workbook_extra
from ..models.errors import NoDataError, ReportError
from ..models.processing_result import BatchResult, FileReport, FileStatus
from .chunker import chunk
from .pipeline import build_report
from .progress import ProgressTracker
from .session import SessionModeStore

"""Batch processing of workbooks for the command line front end.

Each file runs through the report pipeline independently; a failing file
never stops the batch. Failures are collected in the error log buffer and
counted in the BatchResult.
"""

logger = logging.getLogger(__name__)

UNSUPPORTED_FILE_MESSAGE = "Пожалуйста, отправьте файл в формате Excel (.xlsx или .xls)"


class BatchError(Exception):
    """Fatal input error (missing directory) that prevents the batch."""
    pass


def collect_files(
    paths: Sequence[Path], allowed_extensions: Sequence[str]
) -> tuple[list[Path], list[Path]]:
    """Expand inputs into (accepted files, rejected files).

    Directories are scanned non-recursively and only contribute files with an
    allowed suffix. Explicit file paths with another suffix are rejected so
    that the caller can tell the user.

    Raises:
        BatchError: an input path does not exist
    """
    allowed = {e.lower() for e in allowed_extensions}
    accepted: list[Path] = []
    rejected: list[Path] = []
    for p in paths:
        if p.is_dir():
            try:
                found = sorted(f for f in p.iterdir() if f.is_file() and f.suffix.lower() in allowed)
            except OSError as e:
                raise BatchError(f"error reading directory {p}: {e}") from e
            accepted.extend(found)
        elif p.exists():
            (accepted if p.suffix.lower() in allowed else rejected).append(p)
        else:
            raise BatchError(f"path not found: {p}")
    return accepted, rejected


def process_file(
    path: Path,
    *,
    store: SessionModeStore,
    conversation_id: Hashable,
    max_length: int,
    error_log: ErrorLogBuffer | None = None,
) -> FileReport:
    """Build, chunk and account for the report of one workbook."""
    started = time.perf_counter()
    try:
        report = build_report(path, store, conversation_id)
    except NoDataError as e:
        logger.info("no data", extra=workbook_extra(path.name))
        return FileReport(
            file_name=path.name,
            status=FileStatus.NO_DATA,
            shape=e.shape.value if e.shape else None,
            chunks=[e.user_message],
            elapsed_seconds=time.perf_counter() - started,
        )
    except ReportError as e:
        shape = getattr(e, "shape", None)
        logger.error(str(e), extra=workbook_extra(path.name))
        if error_log is not None:
            error_log.record_failure(path.name, e)
        return FileReport(
            file_name=path.name,
            status=FileStatus.FAILED,
            shape=shape.value if shape else None,
            chunks=[e.user_message],
            error=e.user_message,
            elapsed_seconds=time.perf_counter() - started,
        )

    return FileReport(
        file_name=path.name,
        status=FileStatus.REPORTED,
        shape=report.shape.value,
        findings=len(report.findings),
        chunks=chunk(report.text, max_length),
        elapsed_seconds=time.perf_counter() - started,
    )


def _rejected_report(path: Path, error_log: ErrorLogBuffer | None) -> FileReport:
    logger.warning("unsupported file type", extra=workbook_extra(path.name))
    if error_log is not None:
        error_log.record_rejected(path)
    return FileReport(
        file_name=path.name,
        status=FileStatus.FAILED,
        chunks=[UNSUPPORTED_FILE_MESSAGE],
        error=UNSUPPORTED_FILE_MESSAGE,
    )


def process_all(
    files: Sequence[Path],
    config: ReportConfig,
    *,
    store: SessionModeStore,
    conversation_id: Hashable,
    rejected: Sequence[Path] = (),
    max_length: int | None = None,
    error_log: ErrorLogBuffer | None = None,
    emit: Callable[[FileReport, ProgressTracker], None] | None = None,
) -> BatchResult:
    """Process every file and aggregate the outcome.

    Args:
        files: workbooks to process, in order
        config: loaded configuration
        store: session mode store consulted for ``conversation_id``
        rejected: inputs refused for their suffix, reported as failures
        max_length: chunk size, defaults to ``config.max_message_length``
        error_log: buffer collecting failures
        emit: called with each FileReport as soon as it is ready
    """
    start_time = datetime.now(UTC)
    limit = max_length or config.max_message_length
    reports: list[FileReport] = []

    with ProgressTracker(len(files) + len(rejected), description="Building reports") as progress:
        for path in rejected:
            reports.append(_rejected_report(path, error_log))
            if emit is not None:
                emit(reports[-1], progress)
            progress.finish_file(FileStatus.FAILED)
        for path in files:
            progress.start_file(path)
            file_report = process_file(
                path,
                store=store,
                conversation_id=conversation_id,
                max_length=limit,
                error_log=error_log,
            )
            reports.append(file_report)
            if emit is not None:
                emit(file_report, progress)
            progress.finish_file(file_report.status, findings=file_report.findings)

    return BatchResult.from_reports(reports, start_time, datetime.now(UTC))
