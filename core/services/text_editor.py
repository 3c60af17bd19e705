"""Single-line text input shared by the search and album picker modes."""

from __future__ import annotations

import re

_SUPPORTED_LETTER = re.compile(r"[a-zA-Z0-9 ]")


def is_supported_search_letter(key: str) -> bool:
    """True if `key` as a whole is one ASCII letter, digit or space.

    Named keys such as "Enter" never match and fall through to their own bindings.
    """
    return _SUPPORTED_LETTER.fullmatch(key) is not None


def append(text: str, char: str) -> str:
    return text + char


def backspace(text: str) -> str:
    """Drop the last character; an empty string stays empty."""
    return text[:-1]
