from __future__ import annotations

from collections.abc import Sequence

from ..models.errors import MissingColumnsError
from ..models.shapes import ReportShape
from .descriptors import get_descriptor
from .headers import matches

"""Column resolver: maps a shape's roles to header positions.

The header is scanned once, left to right. Each cell is given to the first
role of the shape (in declaration order) that it satisfies and that is still
unassigned; an assigned role keeps its first column.
"""

__all__ = [
    "RoleIndex",
    "resolve",
]

RoleIndex = dict[str, int]


def resolve(header_row: Sequence[str], shape: ReportShape) -> RoleIndex:
    """Resolve column positions for ``shape``.

    Optional roles are included when found and never cause a failure.

    Raises:
        MissingColumnsError: if any required role has no column
    """
    descriptor = get_descriptor(shape)
    index: RoleIndex = {}
    for position, cell in enumerate(header_row):
        for role in descriptor.roles:
            if role in index:
                continue
            if matches(role, cell):
                index[role] = position
                break

    # Schedule exports sometimes name the subject column freely
    if descriptor.subject_fallback and "subject" not in index and "group" in index:
        for position in range(len(header_row)):
            if position != index["group"]:
                index["subject"] = position
                break

    missing = [role for role in descriptor.required_roles if role not in index]
    if missing:
        raise MissingColumnsError(shape, missing)
    return index
