from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..models.finding import Finding
from .descriptors import ShapeDescriptor

"""Parametrized extractor shared by all six report shapes.

Rows are walked in sheet order. A row contributes at most one finding: the
first check of the descriptor that coerces and flags. Rows that are too
short, have an empty required cell, or fail every coercion are skipped
without error; dirty exports still produce a partial report.
"""

__all__ = [
    "extract",
    "schedule_tally",
]

logger = logging.getLogger(__name__)


def _cell(row: Sequence[str], position: int) -> str:
    if position >= len(row):
        return ""
    return str(row[position]).strip()


def _evaluate(descriptor: ShapeDescriptor, cells: Mapping[str, str]) -> Finding | None:
    for check in descriptor.checks:
        texts = [cells.get(role, "") for role in check.roles]
        try:
            value = check.coerce(*texts)
        except ValueError:
            continue
        if check.flagged(value):
            return Finding(
                name=cells[descriptor.name_role],
                category=check.category_for(value),
                value=check.report_value(value),
            )
    return None


def _tally(findings: list[Finding]) -> list[Finding]:
    counts: dict[tuple[str, str], int] = {}
    for f in findings:
        key = (f.name, f.category)
        counts[key] = counts.get(key, 0) + f.value
    return [Finding(name=name, category=category, value=n) for (name, category), n in counts.items()]


def extract(
    data_rows: Sequence[Sequence[str]],
    role_index: Mapping[str, int],
    descriptor: ShapeDescriptor,
) -> list[Finding]:
    """Return findings for ``data_rows`` in row-encounter order.

    Args:
        data_rows: rows below the header
        role_index: role -> column position from the column resolver
        descriptor: shape descriptor with the checks to apply
    """
    required_width = max(role_index[r] for r in descriptor.required_roles) + 1
    findings: list[Finding] = []
    skipped = 0
    for row in data_rows:
        if len(row) < required_width:
            skipped += 1
            continue
        cells = {role: _cell(row, position) for role, position in role_index.items()}
        if any(not cells[role] for role in descriptor.required_roles):
            skipped += 1
            continue
        finding = _evaluate(descriptor, cells)
        if finding is not None:
            findings.append(finding)

    if descriptor.aggregate:
        findings = _tally(findings)
    logger.debug(
        "extract shape=%s rows=%d findings=%d skipped=%d",
        descriptor.shape.value, len(data_rows), len(findings), skipped,
    )
    return findings


def schedule_tally(findings: Sequence[Finding]) -> dict[str, dict[str, int]]:
    """Nest aggregated schedule findings as group -> subject -> pair count."""
    tally: dict[str, dict[str, int]] = {}
    for f in findings:
        tally.setdefault(f.name, {})[f.category] = f.value
    return tally
