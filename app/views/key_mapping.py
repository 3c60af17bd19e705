"""Translate Qt key events into the key identifiers the mode controller expects."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt

UNIDENTIFIED = "Unidentified"


def _code(qt_key: Any) -> int:
    """`QKeyEvent.key()` gives an int, `Qt.Key` members carry it in `.value`."""
    return int(getattr(qt_key, "value", qt_key))


_NAMED_KEYS: dict[int, str] = {
    _code(Qt.Key.Key_Left): "ArrowLeft",
    _code(Qt.Key.Key_Right): "ArrowRight",
    _code(Qt.Key.Key_Up): "ArrowUp",
    _code(Qt.Key.Key_Down): "ArrowDown",
    _code(Qt.Key.Key_Return): "Enter",
    _code(Qt.Key.Key_Enter): "Enter",
    _code(Qt.Key.Key_Escape): "Escape",
    _code(Qt.Key.Key_Backspace): "Backspace",
    _code(Qt.Key.Key_Tab): "Tab",
    _code(Qt.Key.Key_Delete): "Delete",
    _code(Qt.Key.Key_Home): "Home",
    _code(Qt.Key.Key_End): "End",
}
_NAMED_KEYS.update({_code(Qt.Key.Key_F1) + n: f"F{n + 1}" for n in range(12)})


def key_identifier(qt_key: Any, text: str) -> str:
    """Return the identifier for a key press.

    Named keys map to names such as "ArrowLeft" or "Enter"; anything else is
    identified by the single character it types.
    """
    name = _NAMED_KEYS.get(_code(qt_key))
    if name is not None:
        return name
    if len(text) == 1 and text.isprintable():
        return text
    return UNIDENTIFIED
