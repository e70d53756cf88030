"""
String Manipulation Utilities for pikegen.

This module provides the identifier styling and escaping functions used by
the naming engine and the backends: character legalization, word splitting,
underscore and pascal styles, and escaping of text embedded in comments.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List

from .constants import (
    EMPTY_NAME,
    ILLEGAL_CHARACTER_PATTERN,
    LEADING_DIGIT_PREFIX,
    NamingStyle,
    WORD_PATTERN,
)

_ILLEGAL_CHARACTER_RE = re.compile(ILLEGAL_CHARACTER_PATTERN)
_WORD_RE = re.compile(WORD_PATTERN)

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


# =============================================================================
# Identifier Legalization and Styling
# =============================================================================

def legalize_characters(name: str) -> str:
    """Replace every character that cannot appear in an identifier with '_'."""
    return _ILLEGAL_CHARACTER_RE.sub("_", name)


def split_into_words(name: str) -> List[str]:
    """
    Split a name into words.

    Separators, camelCase humps, acronym boundaries and digit runs all
    start a new word: ``"HTTP2ServerName"`` gives
    ``["HTTP", "2", "Server", "Name"]``.
    """
    return _WORD_RE.findall(legalize_characters(name))


def _finish_identifier(styled: str, empty: str) -> str:
    if not styled:
        return empty
    if styled[0].isdigit():
        return f"{LEADING_DIGIT_PREFIX}{styled}"
    return styled


def _pascal_join(words: List[str]) -> str:
    return "".join(word[:1].upper() + word[1:].lower() for word in words)


def underscore_style(name: str) -> str:
    """Style a name as ``lower_case_words``."""
    words = split_into_words(name)
    return _finish_identifier("_".join(word.lower() for word in words), EMPTY_NAME.lower())


def pascal_style(name: str) -> str:
    """Style a name as ``CapitalizedWords``."""
    words = split_into_words(name)
    return _finish_identifier(_pascal_join(words), _pascal_join([EMPTY_NAME]))


_STYLES: Dict[NamingStyle, Callable[[str], str]] = {
    NamingStyle.UNDERSCORE: underscore_style,
    NamingStyle.PASCAL: pascal_style,
}


def get_style_function(style: NamingStyle) -> Callable[[str], str]:
    """Return the styling function for a naming style."""
    return _STYLES[style]


# =============================================================================
# Escaping
# =============================================================================

def _unicode_escape(code_point: int) -> str:
    if code_point > 0xFFFF:
        code_point -= 0x10000
        high = 0xD800 + (code_point >> 10)
        low = 0xDC00 + (code_point & 0x3FF)
        return f"\\u{high:04x}\\u{low:04x}"
    return f"\\u{code_point:04x}"


def string_escape(text: str) -> str:
    """
    Escape text for a double-quoted string inside a line comment.

    Backslashes, quotes and the common control characters get their
    short escapes; any other non-printable character is written as a
    ``\\uXXXX`` escape (astral characters as a surrogate pair), so the
    result never spans more than one line.

    Args:
        text: Raw text, e.g. an original JSON key

    Returns:
        Escaped text
    """
    parts = []
    for char in text:
        escaped = _SIMPLE_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif char.isprintable():
            parts.append(char)
        else:
            parts.append(_unicode_escape(ord(char)))
    return "".join(parts)


# =============================================================================
# Identifier Checks
# =============================================================================

def is_legal_identifier(name: str) -> bool:
    """Check whether a name is already a legal, styled-or-not identifier."""
    return bool(name) and not name[0].isdigit() and legalize_characters(name) == name
