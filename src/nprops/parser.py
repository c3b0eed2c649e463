"""
Properties Parser (Layer 1: Raw Text → Properties).

Converts properties text to decoded key/value pairs.

Format:
    key = value

Syntax Notes:
    - '=' is the only delimiter; '\\=' keeps an equals sign inside the key
    - '#' as first non-whitespace character starts a comment line
    - A line ending in an odd number of backslashes continues on the next line
    - LF, CR and CRLF are all accepted as line terminators, even mixed
    - Whitespace around the key, around '=' and after the value is ignored;
      whitespace inside the key or value is kept exactly

Load pipeline:
    physical lines → continuation → classification → delimiter → decoding
"""

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Union

from nprops.errors import (
    EmptyKeyError,
    IllegalEscapeError,
    InvalidKeyError,
    MissingDelimiterError,
    UnterminatedContinuationError,
)
from nprops.escapes import (
    COMMENT_MARKER,
    DELIMITER,
    ESCAPE_CHAR,
    is_whitespace,
    unescape,
)
from nprops.model import Properties

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

_LINE_TERMINATOR = re.compile(r"\r\n|\r|\n")


class LineKind(Enum):
    """Classification of a line, decided on its first physical line."""
    BLANK = "blank"
    COMMENT = "comment"
    PROPERTY = "property"


@dataclass(frozen=True)
class LogicalLine:
    """
    One or more physical lines joined by continuation.

    Properties:
        text: Joined text, continuation backslashes removed
        line_number: Number of the first physical line (1-based)
    """

    text: str
    line_number: int


@dataclass(frozen=True)
class DecodedProperty:
    """A key/value pair decoded from one logical property line."""

    key: str
    value: str
    line_number: int


def iter_physical_lines(text: str) -> Iterator[str]:
    """
    Split text into physical lines without their terminators.

    A terminator at the very end of the text does not start another line,
    so "a\\n" yields a single line.
    """
    if not text:
        return
    lines = _LINE_TERMINATOR.split(text)
    if lines[-1] == "":
        lines.pop()
    yield from lines


def skip_whitespace(line: str, index: int = 0) -> int:
    """
    Return the index of the first non-whitespace character at or after `index`.

    Returns len(line) when only whitespace remains.
    """
    length = len(line)
    while index < length and is_whitespace(line[index]):
        index += 1
    return index


def is_wrapped(line: str) -> bool:
    """True if the line ends in an unescaped (odd-count) backslash."""
    count = len(line) - len(line.rstrip(ESCAPE_CHAR))
    return count % 2 == 1


def classify_line(line: str) -> LineKind:
    """Label a physical line as blank, comment or property."""
    first = skip_whitespace(line)
    if first == len(line):
        return LineKind.BLANK
    if line[first] == COMMENT_MARKER:
        return LineKind.COMMENT
    return LineKind.PROPERTY


class _LineCursor:
    """Iterator over physical lines that remembers the current line number."""

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self.line_number = 0

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self.line_number += 1
        return line


def resolve_continuation(line: str, cursor: Iterator[str], line_number: int) -> str:
    """
    Join a wrapped line with the physical lines that continue it.

    The trailing backslash of each wrapped line is dropped, and the whole
    leading whitespace run of each continuation line is discarded before
    appending. Whitespace before a continuation backslash is preserved.

    Args:
        line: First physical line of the logical line
        cursor: Iterator yielding the following physical lines
        line_number: Number of `line`, updated for diagnostics as lines are read

    Raises:
        UnterminatedContinuationError: If the input ends while wrapped
    """
    if not is_wrapped(line):
        return line

    parts: List[str] = [line[:-1]]
    while True:
        try:
            line = next(cursor)
        except StopIteration:
            raise UnterminatedContinuationError(line_number) from None
        line_number += 1
        start = skip_whitespace(line)
        if is_wrapped(line):
            parts.append(line[start:-1])
        else:
            parts.append(line[start:])
            return "".join(parts)


def locate_delimiter(line: str, start: int, line_number: int) -> int:
    """
    Find the first unescaped '=' at or after `start`.

    An '=' preceded by an odd run of backslashes is escaped: it belongs to
    the key and the search continues past it.

    Raises:
        EmptyKeyError: If the delimiter is the first significant character
        MissingDelimiterError: If the line has no unescaped '='
    """
    index = line.find(DELIMITER, start)
    while index >= 0:
        backslashes = 0
        while index - backslashes - 1 >= start and line[index - backslashes - 1] == ESCAPE_CHAR:
            backslashes += 1
        if backslashes % 2 == 0:
            break
        index = line.find(DELIMITER, index + 1)

    if index == start:
        raise EmptyKeyError(line_number)
    if index < 0:
        raise MissingDelimiterError(line_number)
    return index


def decode_component(line: str, start: int, end: int, line_number: int) -> str:
    """
    Decode the raw key or value in line[start:end].

    Escape sequences are replaced by the character they stand for. A run
    of unescaped whitespace is dropped entirely when it reaches `end`, and
    copied verbatim otherwise, so that interior spacing survives while
    insignificant trailing whitespace does not.

    Raises:
        IllegalEscapeError: If a backslash is followed by a non-escape letter
    """
    out: List[str] = []
    i = start
    # while, not for: whitespace runs advance i by more than one
    while i < end:
        c = line[i]
        if c == ESCAPE_CHAR:
            if i + 1 >= end:
                raise IllegalEscapeError("", line_number)
            decoded = unescape(line[i + 1])
            if decoded is None:
                raise IllegalEscapeError(line[i + 1], line_number)
            out.append(decoded)
            i += 2
        elif is_whitespace(c):
            # Does this run reach the end of the requested range?
            run_end = skip_whitespace(line, i + 1)
            if run_end >= end:
                break
            out.append(line[i:run_end])
            i = run_end
        else:
            out.append(c)
            i += 1
    return "".join(out)


def decode_property(logical: LogicalLine) -> DecodedProperty:
    """
    Split a logical property line at its delimiter and decode both sides.

    The key spans from the first significant character to the delimiter,
    the value from the first significant character after the delimiter
    to the end of the line.
    """
    line = logical.text
    first = skip_whitespace(line)
    delimiter = locate_delimiter(line, first, logical.line_number)
    key = decode_component(line, first, delimiter, logical.line_number)

    value_start = skip_whitespace(line, delimiter + 1)
    value = decode_component(line, value_start, len(line), logical.line_number)
    return DecodedProperty(key=key, value=value, line_number=logical.line_number)


def parse_lines(lines: Iterable[str]) -> Iterator[DecodedProperty]:
    """
    Decode properties from physical lines, in source order.

    Blank and comment lines are skipped. Classification is done on the first
    physical line of a logical line, before continuation: a comment never
    continues onto the next line, and a continuation line is never a comment.

    Any error stops the iteration; pairs already yielded are unaffected.
    """
    cursor = _LineCursor(lines)
    for line in cursor:
        if classify_line(line) is not LineKind.PROPERTY:
            continue
        line_number = cursor.line_number
        text = resolve_continuation(line, cursor, line_number)
        yield decode_property(LogicalLine(text=text, line_number=line_number))


def _commit(lines: Iterable[str], into: Properties) -> Properties:
    """Set each decoded pair on `into` as soon as it is decoded."""
    count = 0
    for prop in parse_lines(lines):
        try:
            into.set_property(prop.key, prop.value)
        except InvalidKeyError as e:
            raise InvalidKeyError(prop.key, line_number=prop.line_number) from e
        count += 1
    logger.debug("Loaded %d properties", count)
    return into


def parse_properties_string(text: str, into: Optional[Properties] = None) -> Properties:
    """
    Parse properties text.

    Args:
        text: Properties file content
        into: Existing Properties to update (a new one is created if None)

    Returns:
        The updated Properties object

    Raises:
        PropertiesParseError: If the text is malformed
        InvalidKeyError: If a decoded key is not a valid key
    """
    if into is None:
        into = Properties()
    return _commit(iter_physical_lines(text), into)


def parse_properties_stream(stream, into: Optional[Properties] = None) -> Properties:
    """
    Parse properties from an open stream.

    Text streams are read as-is. Binary streams are decoded as UTF-8.
    The stream is not closed.
    """
    if stream is None:
        raise TypeError("Cannot load properties from None")
    content = stream.read()
    if isinstance(content, (bytes, bytearray)):
        content = content.decode(DEFAULT_ENCODING)
    return parse_properties_string(content, into=into)


def parse_properties_file(
    filepath: Union[str, "os.PathLike[str]"],
    into: Optional[Properties] = None,
) -> Properties:
    """
    Parse a UTF-8 properties file.

    Args:
        filepath: Path to the properties file
        into: Existing Properties to update (a new one is created if None)

    Returns:
        The updated Properties object

    Raises:
        FileNotFoundError: If file doesn't exist
        PropertiesParseError: If the file is malformed
    """
    try:
        # newline="" keeps CR and CRLF for our own line splitting
        with open(filepath, "r", encoding=DEFAULT_ENCODING, newline="") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Properties file not found: {filepath}")

    logger.debug("Parsing properties file %s", filepath)
    return parse_properties_string(content, into=into)


__all__ = [
    "LineKind",
    "LogicalLine",
    "DecodedProperty",
    "iter_physical_lines",
    "is_wrapped",
    "classify_line",
    "resolve_continuation",
    "locate_delimiter",
    "decode_component",
    "decode_property",
    "parse_lines",
    "parse_properties_string",
    "parse_properties_stream",
    "parse_properties_file",
]
