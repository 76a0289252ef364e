from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .shapes import ReportShape

"""Finding and Report models.

A Finding is one flagged or aggregated item produced by an extractor.
A Report bundles the findings of one sheet together with the rendered text.
"""

__all__ = [
    "Finding",
    "Report",
]


@dataclass(frozen=True)
class Finding:
    """One extracted item.

    Attributes:
        name: row subject (group, topic text, student or teacher name)
        category: what was found ("homework", "attendance", "valid", subject name ...)
        value: coerced value, or the tally count for aggregated shapes
    """
    name: str
    category: str
    value: Any = None


@dataclass(frozen=True)
class Report:
    """Result of a successful classify/extract/render run."""
    shape: ReportShape
    text: str
    findings: list[Finding] = field(default_factory=list)
    detected: bool = True  # False when the shape was forced by a mode
