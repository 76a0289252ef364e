from __future__ import annotations

"""Message chunker for transports with a maximum payload size."""

__all__ = [
    "DEFAULT_MAX_LENGTH",
    "chunk",
]

DEFAULT_MAX_LENGTH = 4000


def chunk(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> list[str]:
    """Split ``text`` into segments of at most ``max_length`` characters.

    Cuts prefer the last newline inside the window and fall back to a hard cut
    at ``max_length``. Segments are whitespace-trimmed; whitespace-only
    segments are dropped. The result is never empty: text that is all
    whitespace and longer than ``max_length`` yields ``[""]``.

    Raises:
        ValueError: if ``max_length`` is smaller than 1
    """
    if max_length < 1:
        raise ValueError(f"max_length must be >= 1, got {max_length}")
    if len(text) <= max_length:
        return [text]

    parts: list[str] = []
    rest = text
    while len(rest) > max_length:
        cut = rest.rfind("\n", 0, max_length)
        if cut == -1:
            cut = max_length
        head = rest[:cut].strip()
        if head:
            parts.append(head)
        rest = rest[cut:].strip()
    if rest or not parts:
        parts.append(rest)
    return parts
