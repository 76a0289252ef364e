from __future__ import annotations

from enum import Enum

"""ReportShape enum for the spreadsheet report engine.

Each shape is one recognized export category. The enum value is the mode
string the operator selects (``mode_<value>`` in the selection menu), so
the same identifier flows through the session store, the CLI ``--mode``
flag and the pipeline.
"""

__all__ = [
    "ReportShape",
]


class ReportShape(Enum):
    """Six report categories, in classifier priority order."""
    SCHEDULE = "schedule"
    LESSON_TOPICS = "lessons"
    STUDENTS = "students"
    ATTENDANCE = "attendance"
    CHECKED_HOMEWORK = "checked_homework"
    SUBMITTED_HOMEWORK = "submitted_homework"

    @property
    def menu_label(self) -> str:
        """Button caption shown in the mode-selection menu."""
        return _MENU_LABELS[self]

    @property
    def category_label(self) -> str:
        """Name of the category when it was detected from headers."""
        return _CATEGORY_LABELS[self]

    @classmethod
    def from_mode(cls, mode: str) -> ReportShape:
        """Parse an operator mode string.

        Raises:
            ValueError: if the mode is not one of the six shapes
        """
        normalized = mode.strip().lower()
        for shape in cls:
            if shape.value == normalized:
                return shape
        raise ValueError(f"unknown report mode: {mode!r}")


_MENU_LABELS = {
    ReportShape.SCHEDULE: "Расписание групп",
    ReportShape.LESSON_TOPICS: "Темы уроков",
    ReportShape.STUDENTS: "Студенты",
    ReportShape.ATTENDANCE: "Посещаемость",
    ReportShape.CHECKED_HOMEWORK: "Проверенные ДЗ",
    ReportShape.SUBMITTED_HOMEWORK: "Сданные ДЗ",
}

_CATEGORY_LABELS = {
    ReportShape.SCHEDULE: "Расписание групп",
    ReportShape.LESSON_TOPICS: "Темы уроков",
    ReportShape.STUDENTS: "Отчет по студентам",
    ReportShape.ATTENDANCE: "Посещаемость по преподавателям",
    ReportShape.CHECKED_HOMEWORK: "Отчет по проверенным ДЗ",
    ReportShape.SUBMITTED_HOMEWORK: "Отчет по сданным ДЗ",
}
