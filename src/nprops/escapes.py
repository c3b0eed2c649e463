"""
Escape Table for the properties format.

A backslash followed by one designated letter stands for a single
represented character. The table is fixed and read-only.

Decode direction accepts every sequence below.
Encode direction only produces the subset needed for a safe round-trip:

    \\n  line feed            (decode, encode)
    \\r  carriage return      (decode, encode)
    \\t  horizontal tab       (decode, encode)
    \\f  form feed            (decode, encode)
    \\0  NUL                  (decode, encode)
    \\\\  backslash            (decode, encode)
    \\'  apostrophe           (decode only)
    \\"  double quote         (decode only)
    \\=  equals sign          (decode, encode in keys)
    \\:  colon                (decode only)
    \\   space                (decode, encode at key and value edges)
"""

from types import MappingProxyType
from typing import Mapping, Optional

ESCAPE_CHAR = "\\"
DELIMITER = "="
COMMENT_MARKER = "#"

DECODE_TABLE: Mapping[str, str] = MappingProxyType({
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "f": "\f",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "=": "=",
    ":": ":",
    " ": " ",
})

# Escapes applied to every character of a value
INTERIOR_ENCODE_TABLE: Mapping[str, str] = MappingProxyType({
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    "\0": "\\0",
    "\\": "\\\\",
})

# First and last character of a value: a bare space there would be trimmed on load
EDGE_ENCODE_TABLE: Mapping[str, str] = MappingProxyType({
    **INTERIOR_ENCODE_TABLE,
    " ": "\\ ",
})

KEY_ENCODE_TABLE: Mapping[str, str] = MappingProxyType({
    "=": "\\=",
    "\\": "\\\\",
})

# Unicode spaces and NEL, which are not whitespace for the format
_EXCLUDED_SPACES = frozenset("\u0085\u00a0\u2007\u202f")


def is_whitespace(c: str) -> bool:
    """Whitespace as the format sees it: any Unicode space except NEL and non-breaking ones."""
    return c.isspace() and c not in _EXCLUDED_SPACES


def is_control(c: str) -> bool:
    """True for C0 and C1 control characters (U+0000-U+001F, U+007F-U+009F)."""
    code = ord(c)
    return code <= 0x1F or 0x7F <= code <= 0x9F


def unescape(c: str) -> Optional[str]:
    """
    Return the character represented by the escape letter `c`.

    Returns None when `c` is not a legal escape letter; the caller decides
    how to report it.
    """
    return DECODE_TABLE.get(c)


__all__ = [
    "ESCAPE_CHAR",
    "DELIMITER",
    "COMMENT_MARKER",
    "DECODE_TABLE",
    "INTERIOR_ENCODE_TABLE",
    "EDGE_ENCODE_TABLE",
    "KEY_ENCODE_TABLE",
    "is_whitespace",
    "is_control",
    "unescape",
]
