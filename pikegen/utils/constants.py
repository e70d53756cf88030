"""
Constants and Enumerations for pikegen.

This module consolidates the constant definitions shared by the naming
engine, the emitter and the Pike backend.
"""

from __future__ import annotations

from enum import Enum


# =============================================================================
# Emission Constants
# =============================================================================

class BlankLines(Enum):
    """Blank line placement when emitting a sequence of blocks."""

    NONE = "none"
    LEADING = "leading"  # Before every item
    INTERPOSING = "interposing"  # Between consecutive items
    LEADING_AND_INTERPOSING = "leading-and-interposing"


DEFAULT_INDENT_SIZE = 4
COMMENT_PREFIX = "// "
BLOCK_OPEN = " {"
BLOCK_CLOSE = "}"


# =============================================================================
# Naming Constants
# =============================================================================

class NamingStyle(Enum):
    """Identifier styles applied by namers."""

    UNDERSCORE = "underscore"  # first_name
    PASCAL = "pascal"  # FirstName


EMPTY_NAME = "empty"
LEADING_DIGIT_PREFIX = "_"
ILLEGAL_CHARACTER_PATTERN = r"[^A-Za-z0-9_]"
WORD_PATTERN = r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+"


# =============================================================================
# Pike Target Constants
# =============================================================================

PIKE_KEYWORDS = (
    "nomask",
    "final",
    "static",
    "extern",
    "private",
    "local",
    "public",
    "protected",
    "inline",
    "optional",
    "variant",
    "void",
    "mixed",
    "array",
    "__attribute__",
    "__deprecated__",
    "mapping",
    "multiset",
    "object",
    "function",
    "__func__",
    "program",
    "string",
    "float",
    "int",
    "enum",
    "typedef",
    "if",
    "do",
    "for",
    "while",
    "else",
    "foreach",
    "catch",
    "gauge",
    "class",
    "break",
    "case",
    "constant",
    "continue",
    "default",
    "import",
    "inherit",
    "lambda",
    "predef",
    "return",
    "sscanf",
    "switch",
    "typeof",
    "global",
)

DEFAULT_CONVERT_CLASS_NAME = "Convert"
DECODER_NAME_TEMPLATE = "to_{}"
ENCODER_NAME_TEMPLATE = "{}_to_json"
DECODER_PARAMETER = "string json_str"
ENCODER_PARAMETER_NAME = "value"
