from __future__ import annotations

from dataclasses import dataclass

"""Header matcher: decides whether a header cell plays a semantic role.

Matching is deterministic: lowercase + strip, then either exact equality with
a fixed label or substring containment of a fixed token. The tokens are the
compatibility contract with existing exports and must not be changed.
"""

__all__ = [
    "ROLE_RULES",
    "RoleRule",
    "matches",
    "normalize_header",
]


@dataclass(frozen=True)
class RoleRule:
    """Matching rule of one role."""
    equals: tuple[str, ...] = ()
    contains: tuple[str, ...] = ()

    def test(self, normalized: str) -> bool:
        if normalized in self.equals:
            return True
        return any(token in normalized for token in self.contains)


ROLE_RULES: dict[str, RoleRule] = {
    "group": RoleRule(contains=("группа",)),
    "subject": RoleRule(contains=("предмет", "пара")),
    "topic": RoleRule(contains=("тема урока",)),
    "fio": RoleRule(equals=("фио", "fio")),
    "homework": RoleRule(equals=("homework", "домашняя работа")),
    "classwork": RoleRule(equals=("classwork", "классная работа")),
    "teacher": RoleRule(contains=("фио преподавателя",)),
    "attendance_percent": RoleRule(contains=("средняя посещаемость",)),
    "checked_count": RoleRule(equals=("проверено",)),
    "total_count": RoleRule(equals=("получено",)),
    "percent": RoleRule(equals=("percentage homework",)),
}


def normalize_header(cell: str | None) -> str:
    return (cell or "").strip().lower()


def matches(role: str, header_cell: str | None) -> bool:
    """Return True when ``header_cell`` satisfies ``role``.

    Raises:
        KeyError: for an unknown role name
    """
    return ROLE_RULES[role].test(normalize_header(header_cell))
