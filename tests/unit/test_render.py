from __future__ import annotations

import pytest

from edu_report.models.finding import Finding
from edu_report.models.shapes import ReportShape
from edu_report.services.descriptors import get_descriptor
from edu_report.services.render import render


@pytest.mark.parametrize("shape", list(ReportShape))
def test_empty_findings_render_all_clear(shape: ReportShape):
    text = render(shape, [])
    descriptor = get_descriptor(shape)
    assert text.startswith(descriptor.title)
    assert text.endswith(descriptor.empty_message)
    assert descriptor.empty_message.strip()


def test_schedule_grouped_layout():
    findings = [Finding("101", "Матем", 2), Finding("102", "Физика", 1), Finding("101", "Химия", 1)]
    text = render(ReportShape.SCHEDULE, findings)
    assert text == (
        "📅 ОТЧЕТ ПО РАСПИСАНИЮ ГРУПП\n"
        "Количество пар по дисциплинам:\n"
        "\n"
        "Группа: 101\n"
        "  Матем: 2 пар\n"
        "  Химия: 1 пар\n"
        "\n"
        "Группа: 102\n"
        "  Физика: 1 пар"
    )


def test_lesson_topics_buckets():
    findings = [
        Finding("Урок № 1. Тема: A", "valid"),
        Finding("Введение", "invalid"),
    ]
    text = render(ReportShape.LESSON_TOPICS, findings)
    assert text == (
        "📚 ОТЧЕТ ПО ТЕМАМ ЗАНЯТИЙ\n"
        "\n"
        "✅ Темы в правильном формате:\n"
        "• Урок № 1. Тема: A\n"
        "\n"
        "❌ Темы в НЕправильном формате:\n"
        "• Введение"
    )


def test_lesson_topics_only_invalid_bucket():
    text = render(ReportShape.LESSON_TOPICS, [Finding("Введение", "invalid")])
    assert "✅" not in text
    assert "❌ Темы в НЕправильном формате:" in text


def test_students_numbered_lines():
    findings = [Finding("Иванов", "homework", "1"), Finding("Петров", "classwork", 2.5)]
    text = render(ReportShape.STUDENTS, findings)
    assert text.splitlines()[2:] == [
        "Студенты, требующие внимания:",
        "1. Иванов (домашняя: 1)",
        "2. Петров (классная: 2.5)",
    ]


def test_percent_values_have_one_decimal():
    text = render(ReportShape.ATTENDANCE, [Finding("Смирнова", "attendance", 39.94)])
    assert "1. Смирнова (39.9%)" in text
    text = render(ReportShape.CHECKED_HOMEWORK, [Finding("Орлова", "checked", 100 / 3)])
    assert "1. Орлова (33.3% проверено)" in text


def test_submitted_homework_integer_as_given():
    text = render(ReportShape.SUBMITTED_HOMEWORK, [Finding("Иванов", "submitted", "065")])
    assert "1. Иванов - 065%" in text


def test_checked_homework_all_clear_text():
    assert render(ReportShape.CHECKED_HOMEWORK, []).endswith(
        "✅ Все преподаватели проверяют более 70% заданий"
    )


def test_render_has_no_trailing_newline():
    assert not render(ReportShape.SCHEDULE, [Finding("101", "Матем", 1)]).endswith("\n")
