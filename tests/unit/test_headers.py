from __future__ import annotations

import pytest

from edu_report.services.headers import ROLE_RULES, matches, normalize_header


def test_normalize_header_folds_case_and_trims():
    assert normalize_header("  ФИО Преподавателя \n") == "фио преподавателя"
    assert normalize_header(None) == ""


@pytest.mark.parametrize(
    "role, cell",
    [
        ("group", "Группа"),
        ("group", "Учебная группа"),
        ("subject", "Предмет"),
        ("subject", "Пара"),
        ("topic", "Тема урока"),
        ("fio", "ФИО"),
        ("fio", " fio "),
        ("homework", "Homework"),
        ("homework", "Домашняя работа"),
        ("classwork", "CLASSWORK"),
        ("classwork", "Классная работа"),
        ("teacher", "ФИО преподавателя (полностью)"),
        ("attendance_percent", "Средняя посещаемость, %"),
        ("checked_count", "Проверено"),
        ("total_count", "Получено"),
        ("percent", "Percentage Homework"),
    ],
)
def test_role_matches(role: str, cell: str):
    assert matches(role, cell)


@pytest.mark.parametrize(
    "role, cell",
    [
        # equality roles do not accept longer labels
        ("fio", "ФИО преподавателя"),
        ("homework", "homework average"),
        ("checked_count", "Проверено, шт"),
        ("percent", "percentage"),
        # substring roles need the whole token
        ("topic", "Тема"),
        ("group", "Группы"),
        ("teacher", "Преподаватель"),
    ],
)
def test_role_does_not_match(role: str, cell: str):
    assert not matches(role, cell)


def test_no_transliteration():
    assert not matches("group", "gruppa")


def test_unknown_role_raises():
    with pytest.raises(KeyError):
        matches("nickname", "Ник")


def test_every_rule_has_a_token():
    for role, rule in ROLE_RULES.items():
        assert rule.equals or rule.contains, role
