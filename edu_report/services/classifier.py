from __future__ import annotations

from collections.abc import Callable, Sequence

from ..models.shapes import ReportShape

"""Type classifier: picks the report shape from the header row alone.

Predicates run over the whole header joined into one lowercase string. They
overlap (a schedule header may also mention "тема"), so the order of
``SHAPE_PREDICATES`` is the tie-break: the first match wins.
"""

__all__ = [
    "SHAPE_PREDICATES",
    "classify",
    "header_text",
]

Predicate = Callable[[str], bool]


def _all(*tokens: str) -> Predicate:
    return lambda text: all(t in text for t in tokens)


def _any(*tokens: str) -> Predicate:
    return lambda text: any(t in text for t in tokens)


def _either(*predicates: Predicate) -> Predicate:
    return lambda text: any(p(text) for p in predicates)


SHAPE_PREDICATES: list[tuple[ReportShape, Predicate]] = [
    (ReportShape.SCHEDULE, _all("группа", "время", "пара")),
    # "тема урока" is covered by "тема"
    (ReportShape.LESSON_TOPICS, _any("урок", "тема")),
    (ReportShape.STUDENTS, _either(_any("fio"), _all("homework", "classroom"))),
    (ReportShape.ATTENDANCE, _all("фио преподавателя", "средняя посещаемость")),
    (
        ReportShape.CHECKED_HOMEWORK,
        _either(
            _all("форма обучения", "фио преподавателя"),
            _any("месяц", "неделя", "день", "проверено"),
        ),
    ),
    (
        ReportShape.SUBMITTED_HOMEWORK,
        _either(
            _all("fio", "percentage homework"),
            _all("fio", "домашнее"),
        ),
    ),
]


def header_text(header_row: Sequence[str]) -> str:
    return " ".join(str(c) for c in header_row).lower()


def classify(header_row: Sequence[str]) -> ReportShape | None:
    """Return the first shape whose predicate matches, or None when unknown."""
    text = header_text(header_row)
    for shape, predicate in SHAPE_PREDICATES:
        if predicate(text):
            return shape
    return None
