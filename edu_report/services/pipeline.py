from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence
from pathlib import Path

from ..excel.reader import read_first_sheet_rows
from ..logging.init import workbook_extra
from ..models.errors import NoDataError, UnrecognizedShapeError
from ..models.finding import Report
from ..models.shapes import ReportShape
from .classifier import classify
from .columns import resolve
from .descriptors import get_descriptor
from .extractors import extract
from .render import render
from .session import SessionModeStore, coerce_shape

"""Report pipeline: rows -> shape -> role index -> findings -> text.

``classify_and_extract`` is a pure function of its inputs: the same rows and
mode always give byte-identical report text. Failures surface as
ReportError subclasses carrying the message for the end user.
"""

__all__ = [
    "build_report",
    "classify_and_extract",
]

logger = logging.getLogger(__name__)


def classify_and_extract(
    rows: Sequence[Sequence[str]], forced_shape: ReportShape | str | None = None
) -> Report:
    """Build a report from the rows of one sheet.

    Args:
        rows: sheet rows as text, header first
        forced_shape: operator mode; bypasses the classifier when given

    Raises:
        InvalidModeError: forced_shape is not one of the six shapes
        NoDataError: fewer rows than the shape needs
        UnrecognizedShapeError: no forced shape and the header matches none
        MissingColumnsError: a required column of the shape is absent
    """
    if forced_shape is not None:
        shape = coerce_shape(forced_shape)
        detected = False
    else:
        if not rows:
            raise NoDataError()
        detected_shape = classify(rows[0])
        if detected_shape is None:
            raise UnrecognizedShapeError()
        shape = detected_shape
        detected = True
        logger.debug("classified header as %s", shape.value)

    descriptor = get_descriptor(shape)
    if len(rows) < descriptor.min_rows:
        raise NoDataError(shape)

    role_index = resolve(rows[descriptor.header_row], shape)
    findings = extract(rows[descriptor.header_row + 1:], role_index, descriptor)
    return Report(
        shape=shape,
        text=render(shape, findings),
        findings=findings,
        detected=detected,
    )


def build_report(
    path: Path,
    store: SessionModeStore | None = None,
    conversation_id: Hashable | None = None,
) -> Report:
    """Read the first sheet of ``path`` and build its report.

    The mode stored for ``conversation_id`` (if any) overrides detection.

    Raises:
        ReadError: the workbook cannot be read
        ReportError: any failure of classify_and_extract
    """
    forced = store.get(conversation_id) if store is not None else None
    rows = read_first_sheet_rows(path)
    report = classify_and_extract(rows, forced)
    logger.info(
        "%s (%s) findings=%d",
        report.shape.category_label,
        "auto" if report.detected else "mode",
        len(report.findings),
        extra=workbook_extra(path.name),
    )
    return report
