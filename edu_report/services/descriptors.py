from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..models.shapes import ReportShape

"""Per-shape descriptors driving the extractor and the renderer.

The six report shapes share one extraction algorithm. What differs between
them lives here as data: which roles a shape needs, where its header sits,
how a cell is coerced, which comparison flags a row, and how findings are
laid out in the report text.

Coercion functions raise ValueError for text they cannot convert; the
extractor treats that as "no finding from this check".
"""

__all__ = [
    "Check",
    "DESCRIPTORS",
    "ShapeDescriptor",
    "get_descriptor",
    "parse_decimal",
    "parse_integer",
    "parse_percent",
]

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)
LESSON_TOPIC_RE = re.compile(r"^Урок №\s*\d+.*Тема:", re.ASCII)

ATTENDANCE_THRESHOLD = 40.0
CHECKED_THRESHOLD = 70.0
CLASSWORK_THRESHOLD = 3.0
SUBMITTED_THRESHOLD = 70


def parse_decimal(text: str) -> float:
    if not _DECIMAL_RE.fullmatch(text):
        raise ValueError(f"not a decimal number: {text!r}")
    return float(text)


def parse_integer(text: str) -> int:
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def parse_percent(text: str) -> float:
    """Decimal with at most one trailing '%' sign removed."""
    return parse_decimal(text.removesuffix("%"))


def _submitted_percent(text: str) -> tuple[int, str]:
    """Integer percentage plus its text as given.

    One trailing '%' is dropped, so percent-formatted cells read as "65%"
    compare like "65".
    """
    given = text.removesuffix("%")
    return parse_integer(given), given


def _text(text: str) -> str:
    if not text:
        raise ValueError("empty cell")
    return text


def _checked_ratio(checked: str, total: str) -> float:
    done = parse_decimal(checked)
    received = parse_decimal(total)
    if received <= 0:
        raise ValueError("nothing received")
    return done / received * 100


def _topic_bucket(topic: str) -> str:
    return "valid" if LESSON_TOPIC_RE.match(topic) else "invalid"


def _always(value: Any) -> bool:
    return True


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class Check:
    """One flagging rule applied to a row.

    ``coerce`` receives the trimmed texts of ``roles`` in order. ``category``
    is either a fixed label or computed from the coerced value.
    """
    category: str | Callable[[Any], str]
    roles: tuple[str, ...]
    coerce: Callable[..., Any]
    flagged: Callable[[Any], bool] = _always
    report_value: Callable[[Any], Any] = _identity

    def category_for(self, value: Any) -> str:
        if callable(self.category):
            return self.category(value)
        return self.category


@dataclass(frozen=True)
class ShapeDescriptor:
    """Everything shape specific about resolving, extracting and rendering."""
    shape: ReportShape
    required_roles: tuple[str, ...]
    name_role: str
    checks: tuple[Check, ...]
    title: str
    empty_message: str
    optional_roles: tuple[str, ...] = ()
    header_row: int = 0
    min_rows: int = 2
    aggregate: bool = False  # tally findings by (name, category)
    subject_fallback: bool = False
    layout: str = "numbered"  # numbered | grouped | buckets
    intro: str = ""
    templates: Mapping[str, str] = field(default_factory=dict)

    @property
    def roles(self) -> tuple[str, ...]:
        return self.required_roles + self.optional_roles


DESCRIPTORS: dict[ReportShape, ShapeDescriptor] = {
    ReportShape.SCHEDULE: ShapeDescriptor(
        shape=ReportShape.SCHEDULE,
        required_roles=("group", "subject"),
        name_role="group",
        checks=(
            Check(
                category=_identity,
                roles=("subject",),
                coerce=_text,
                report_value=lambda _: 1,
            ),
        ),
        aggregate=True,
        subject_fallback=True,
        layout="grouped",
        title="📅 ОТЧЕТ ПО РАСПИСАНИЮ ГРУПП",
        intro="Количество пар по дисциплинам:",
        templates={"group": "Группа: {name}", "item": "  {category}: {value} пар"},
        empty_message="Занятия в расписании не найдены",
    ),
    ReportShape.LESSON_TOPICS: ShapeDescriptor(
        shape=ReportShape.LESSON_TOPICS,
        required_roles=("topic",),
        name_role="topic",
        checks=(Check(category=_topic_bucket, roles=("topic",), coerce=_text, report_value=lambda _: None),),
        min_rows=1,
        layout="buckets",
        title="📚 ОТЧЕТ ПО ТЕМАМ ЗАНЯТИЙ",
        templates={
            "valid": "✅ Темы в правильном формате:",
            "invalid": "❌ Темы в НЕправильном формате:",
            "item": "• {name}",
        },
        empty_message="Темы уроков не найдены",
    ),
    ReportShape.STUDENTS: ShapeDescriptor(
        shape=ReportShape.STUDENTS,
        required_roles=("fio",),
        optional_roles=("homework", "classwork"),
        name_role="fio",
        checks=(
            # a homework grade of exactly "1" wins over the classwork check
            Check(category="homework", roles=("homework",), coerce=_text, flagged=lambda v: v == "1"),
            Check(
                category="classwork",
                roles=("classwork",),
                coerce=parse_decimal,
                flagged=lambda v: v < CLASSWORK_THRESHOLD,
            ),
        ),
        title="👨‍🎓 ОТЧЕТ ПО СТУДЕНТАМ",
        intro="Студенты, требующие внимания:",
        templates={
            "homework": "{name} (домашняя: {value})",
            "classwork": "{name} (классная: {value:.1f})",
        },
        empty_message="✅ Все студенты успешно справляются",
    ),
    ReportShape.ATTENDANCE: ShapeDescriptor(
        shape=ReportShape.ATTENDANCE,
        required_roles=("teacher", "attendance_percent"),
        name_role="teacher",
        checks=(
            Check(
                category="attendance",
                roles=("attendance_percent",),
                coerce=parse_percent,
                flagged=lambda v: v < ATTENDANCE_THRESHOLD,
            ),
        ),
        title="👨‍🏫 ОТЧЕТ ПО ПОСЕЩАЕМОСТИ ПРЕПОДАВАТЕЛЕЙ",
        intro="Преподаватели с посещаемостью ниже 40%:",
        templates={"attendance": "{name} ({value:.1f}%)"},
        empty_message="✅ У всех преподавателей посещаемость 40% и выше",
    ),
    ReportShape.CHECKED_HOMEWORK: ShapeDescriptor(
        shape=ReportShape.CHECKED_HOMEWORK,
        required_roles=("teacher", "checked_count", "total_count"),
        name_role="teacher",
        checks=(
            Check(
                category="checked",
                roles=("checked_count", "total_count"),
                coerce=_checked_ratio,
                flagged=lambda v: v < CHECKED_THRESHOLD,
            ),
        ),
        # first row of these exports is a period banner, header is the second
        header_row=1,
        min_rows=2,
        title="📝 ОТЧЕТ ПО ПРОВЕРЕННЫМ ДОМАШНИМ ЗАДАНИЯМ",
        intro="Преподаватели с проверкой ниже 70%:",
        templates={"checked": "{name} ({value:.1f}% проверено)"},
        empty_message="✅ Все преподаватели проверяют более 70% заданий",
    ),
    ReportShape.SUBMITTED_HOMEWORK: ShapeDescriptor(
        shape=ReportShape.SUBMITTED_HOMEWORK,
        required_roles=("fio", "percent"),
        name_role="fio",
        checks=(
            Check(
                category="submitted",
                roles=("percent",),
                coerce=_submitted_percent,
                flagged=lambda v: v[0] < SUBMITTED_THRESHOLD,
                report_value=lambda v: v[1],
            ),
        ),
        title="📊 ОТЧЕТ ПО СДАННЫМ ДОМАШНИМ ЗАДАНИЯМ",
        intro="Студенты с выполнением домашних заданий ниже 70%:",
        templates={"submitted": "{name} - {value}%"},
        empty_message="✅ Все студенты выполнили не менее 70% домашних заданий",
    ),
}


def get_descriptor(shape: ReportShape) -> ShapeDescriptor:
    return DESCRIPTORS[shape]
