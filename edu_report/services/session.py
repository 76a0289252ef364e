from __future__ import annotations

import logging
import threading
from collections.abc import Hashable

from ..models.errors import InvalidModeError
from ..models.shapes import ReportShape

"""Session mode store: conversation -> operator-chosen report shape.

The store is the only state shared between requests. It is passed into the
pipeline by reference and guards its mapping with a lock, so conversations
never see each other's entries and a read after a write in the same
conversation observes the write. Entries do not expire.
"""

__all__ = [
    "CALLBACK_PREFIX",
    "MODE_MENU",
    "SessionModeStore",
    "coerce_shape",
]

logger = logging.getLogger(__name__)

CALLBACK_PREFIX = "mode_"

# Layout of the mode-selection menu: rows of (button label, callback data)
MODE_MENU: list[list[tuple[str, str]]] = [
    [
        (shape.menu_label, CALLBACK_PREFIX + shape.value)
        for shape in row
    ]
    for row in (
        (ReportShape.SCHEDULE, ReportShape.LESSON_TOPICS),
        (ReportShape.STUDENTS, ReportShape.ATTENDANCE),
        (ReportShape.CHECKED_HOMEWORK, ReportShape.SUBMITTED_HOMEWORK),
    )
]


def coerce_shape(mode: ReportShape | str) -> ReportShape:
    """Accept a ReportShape or its mode string.

    Raises:
        InvalidModeError: for anything that is not one of the six shapes
    """
    if isinstance(mode, ReportShape):
        return mode
    if isinstance(mode, str):
        try:
            return ReportShape.from_mode(mode)
        except ValueError as e:
            raise InvalidModeError(mode) from e
    raise InvalidModeError(mode)


class SessionModeStore:
    """Thread-safe mapping of conversation id to ReportShape."""

    def __init__(self) -> None:
        self._modes: dict[Hashable, ReportShape] = {}
        self._lock = threading.Lock()

    def get(self, conversation_id: Hashable) -> ReportShape | None:
        with self._lock:
            return self._modes.get(conversation_id)

    def set(self, conversation_id: Hashable, mode: ReportShape | str) -> ReportShape:
        """Store the operator choice, returning the parsed shape."""
        shape = coerce_shape(mode)
        with self._lock:
            self._modes[conversation_id] = shape
        logger.debug("mode set conversation=%s mode=%s", conversation_id, shape.value)
        return shape

    def clear(self, conversation_id: Hashable) -> None:
        with self._lock:
            self._modes.pop(conversation_id, None)

    def select_from_callback(self, conversation_id: Hashable, callback_data: str) -> ReportShape:
        """Handle a menu button press (``mode_<shape>``).

        Raises:
            InvalidModeError: when the callback data names no shape
        """
        if not callback_data.startswith(CALLBACK_PREFIX):
            raise InvalidModeError(callback_data)
        return self.set(conversation_id, callback_data[len(CALLBACK_PREFIX):])

    def __len__(self) -> int:
        with self._lock:
            return len(self._modes)
