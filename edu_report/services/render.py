from __future__ import annotations

from collections.abc import Sequence

from ..models.finding import Finding
from ..models.shapes import ReportShape
from .descriptors import ShapeDescriptor, get_descriptor
from .extractors import schedule_tally

"""Report renderer: findings -> fixed-structure text.

Three layouts are used:

- numbered: title, intro line, ``1. ...`` list (threshold shapes)
- grouped: title, intro, one block per group with its subjects (schedule)
- buckets: title, valid list, invalid list (lesson topics)

A shape without findings always renders its "all clear" sentence, so that an
empty report is distinguishable from a report that could not be built.
"""

__all__ = [
    "render",
]


def _format(template: str, finding: Finding) -> str:
    return template.format(name=finding.name, category=finding.category, value=finding.value)


def _numbered(d: ShapeDescriptor, findings: Sequence[Finding]) -> list[str]:
    lines = [d.title, ""]
    if not findings:
        return lines + [d.empty_message]
    lines.append(d.intro)
    for i, f in enumerate(findings, start=1):
        lines.append(f"{i}. {_format(d.templates[f.category], f)}")
    return lines


def _grouped(d: ShapeDescriptor, findings: Sequence[Finding]) -> list[str]:
    if not findings:
        return [d.title, "", d.empty_message]
    lines = [d.title, d.intro, ""]
    for group, subjects in schedule_tally(findings).items():
        lines.append(d.templates["group"].format(name=group))
        for subject, count in subjects.items():
            lines.append(d.templates["item"].format(name=group, category=subject, value=count))
        lines.append("")
    return lines


def _buckets(d: ShapeDescriptor, findings: Sequence[Finding]) -> list[str]:
    lines = [d.title, ""]
    if not findings:
        return lines + [d.empty_message]
    for bucket in ("valid", "invalid"):
        items = [f for f in findings if f.category == bucket]
        if not items:
            continue
        lines.append(d.templates[bucket])
        lines.extend(_format(d.templates["item"], f) for f in items)
        lines.append("")
    return lines


_LAYOUTS = {
    "numbered": _numbered,
    "grouped": _grouped,
    "buckets": _buckets,
}


def render(shape: ReportShape, findings: Sequence[Finding]) -> str:
    """Render ``findings`` of ``shape`` as report text (no trailing newline)."""
    descriptor = get_descriptor(shape)
    lines = _LAYOUTS[descriptor.layout](descriptor, findings)
    return "\n".join(lines).rstrip()
