"""
Go-specific naming utilities.

Handles Go reserved words, identifier checks and string literal encoding.
"""

import re
from typing import List

# Go reserved words
GO_RESERVED_WORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}

GO_IDENTIFIER = re.compile(r"^[^\W\d]\w*$", re.UNICODE)

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def is_go_identifier(name: str) -> bool:
    """True for a syntactically valid, non-keyword Go identifier."""
    return bool(GO_IDENTIFIER.match(name)) and name not in GO_RESERVED_WORDS


def go_string_literal(value: str) -> str:
    """Encode text as a Go interpreted string literal."""
    out = []
    for char in str(value):
        if char in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\x{ord(char):02x}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def validate_go_package_name(name: str) -> List[str]:
    """
    Validate Go package name according to Go naming rules.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    if not GO_IDENTIFIER.match(name):
        errors.append(f"'{name}' is not a valid Go identifier")

    if name in GO_RESERVED_WORDS:
        errors.append(f"'{name}' is a Go reserved word")

    return errors
