"""Domain models for the spreadsheet report engine.

Shapes, findings, the error taxonomy and batch processing results.
"""

from .error_record import ErrorRecord
from .errors import (
    InvalidModeError,
    MissingColumnsError,
    NoDataError,
    ReadError,
    ReportError,
    UnrecognizedShapeError,
)
from .finding import Finding, Report
from .processing_result import BatchResult, FileReport, FileStatus
from .shapes import ReportShape

__all__ = [
    # Report models
    "Finding",
    "Report",
    "ReportShape",
    # Errors
    "ReportError",
    "ReadError",
    "NoDataError",
    "UnrecognizedShapeError",
    "MissingColumnsError",
    "InvalidModeError",
    # Processing models
    "BatchResult",
    "ErrorRecord",
    "FileReport",
    "FileStatus",
]
