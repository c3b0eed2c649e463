"""
Properties Writer (Properties → Text).

Serializes a property set in a syntax that the parser reads back to the
same mapping:

    - one `key=value` line per property, no whitespace around '='
    - an optional leading comment block, each line starting with '#'
    - no line wrapping, no blank lines

Escaping is minimal: only what the parser would otherwise misread is
escaped. Spaces inside a value are kept as-is; a space at either end of
the value is escaped so the parser does not trim it.
"""

import io
import logging
import os
import re
from typing import Iterator, List, Mapping, Optional, Union

from nprops.escapes import (
    EDGE_ENCODE_TABLE,
    INTERIOR_ENCODE_TABLE,
    KEY_ENCODE_TABLE,
)
from nprops.model import Properties

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
DEFAULT_LINE_SEPARATOR = os.linesep

_COMMENT_LINE_BREAK = re.compile(r"\r\n|\r|\n")

PropertySource = Union[Properties, Mapping[str, str]]


def encode_key(key: str) -> str:
    """
    Escape a key for output.

    '=' and backslash are escaped. A space at either end is escaped too;
    valid keys never have one, but a raw mapping may.
    """
    last = len(key) - 1
    out: List[str] = []
    for i, c in enumerate(key):
        if c in KEY_ENCODE_TABLE:
            out.append(KEY_ENCODE_TABLE[c])
        elif c == " " and (i == 0 or i == last):
            out.append("\\ ")
        else:
            out.append(c)
    return "".join(out)


def encode_value(value: str) -> str:
    """
    Escape a value for output.

    Control characters and backslashes are escaped everywhere; the first and
    last characters also get their spaces escaped.
    """
    if not value:
        return ""
    out: List[str] = [EDGE_ENCODE_TABLE.get(value[0], value[0])]
    for c in value[1:-1]:
        out.append(INTERIOR_ENCODE_TABLE.get(c, c))
    if len(value) > 1:
        out.append(EDGE_ENCODE_TABLE.get(value[-1], value[-1]))
    return "".join(out)


def format_property(key: str, value: str) -> str:
    """Format one property line, without terminator."""
    return f"{encode_key(key)}={encode_value(value)}"


def format_comments(comments: Optional[str]) -> List[str]:
    """
    Format leading comment text as comment lines, without terminators.

    Each line gets a "# " prefix unless it already starts with '#'.
    Empty lines stay empty. None gives no lines at all.
    """
    if comments is None:
        return []
    lines = []
    for comment in _COMMENT_LINE_BREAK.split(comments):
        if comment and not comment.startswith("#"):
            comment = "# " + comment
        lines.append(comment)
    return lines


def iter_lines(properties: PropertySource, comments: Optional[str] = None) -> Iterator[str]:
    """Yield every output line (comments first), without terminators."""
    yield from format_comments(comments)
    for key, value in properties.items():
        yield format_property(key, value)


def dump_properties_string(
    properties: PropertySource,
    comments: Optional[str] = None,
    line_separator: str = DEFAULT_LINE_SEPARATOR,
) -> str:
    """
    Serialize properties to text.

    Args:
        properties: Properties object or plain str→str mapping
        comments: Leading comment text, or None for no comment block
        line_separator: Terminator written after every line

    Returns:
        Properties text
    """
    if properties is None:
        raise TypeError("Cannot store None")
    return "".join(line + line_separator for line in iter_lines(properties, comments))


def write_properties_stream(
    properties: PropertySource,
    stream,
    comments: Optional[str] = None,
    line_separator: str = DEFAULT_LINE_SEPARATOR,
) -> None:
    """
    Write properties to an open stream.

    Binary streams receive UTF-8 bytes. The stream is flushed, not closed.

    Raises:
        TypeError: If stream is None or has no write method
    """
    if stream is None:
        raise TypeError("Cannot store properties to None")
    if not callable(getattr(stream, "write", None)):
        raise TypeError(f"Cannot store properties to {type(stream).__name__}: not a writable stream")
    content = dump_properties_string(properties, comments, line_separator)
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        stream.write(content.encode(DEFAULT_ENCODING))
    else:
        stream.write(content)
    stream.flush()
    logger.debug("Stored %d properties", len(properties))


def write_properties_file(
    properties: PropertySource,
    filepath: Union[str, "os.PathLike[str]"],
    comments: Optional[str] = None,
    line_separator: str = DEFAULT_LINE_SEPARATOR,
) -> None:
    """
    Write properties to a UTF-8 file, replacing its content.

    Args:
        properties: Properties object or plain str→str mapping
        filepath: Output file path
        comments: Leading comment text, or None for no comment block
        line_separator: Terminator written after every line
    """
    content = dump_properties_string(properties, comments, line_separator)
    # newline="" so line_separator is written untranslated
    with open(filepath, "w", encoding=DEFAULT_ENCODING, newline="") as f:
        f.write(content)
    logger.debug("Stored %d properties to %s", len(properties), filepath)


__all__ = [
    "DEFAULT_LINE_SEPARATOR",
    "encode_key",
    "encode_value",
    "format_property",
    "format_comments",
    "iter_lines",
    "dump_properties_string",
    "write_properties_stream",
    "write_properties_file",
]
