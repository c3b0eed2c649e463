"""
Exceptions raised by the properties codec.

Every load error is fatal: the parser never skips a malformed line and
never ignores a bad escape sequence. Errors raised while reading carry the
number of the physical line where the problem was detected.
"""

from typing import Optional


class PropertiesError(Exception):
    """Base class for all nprops errors."""
    pass


class PropertiesParseError(PropertiesError, ValueError):
    """Raised when properties text cannot be parsed."""

    def __init__(self, message: str, line_number: int):
        self.line_number = line_number
        super().__init__(f"Line {line_number}: {message}")


class EmptyKeyError(PropertiesParseError):
    """The delimiter is the first significant character of the line."""

    def __init__(self, line_number: int):
        super().__init__("key cannot be empty", line_number)


class MissingDelimiterError(PropertiesParseError):
    """No unescaped '=' in a property line."""

    def __init__(self, line_number: int):
        super().__init__("missing delimiter", line_number)


class UnterminatedContinuationError(PropertiesParseError):
    """The input ended while a continuation line was expected."""

    def __init__(self, line_number: int):
        super().__init__("last line cannot be wrapped", line_number)


class IllegalEscapeError(PropertiesParseError):
    """A backslash is followed by a character that is not an escape letter."""

    def __init__(self, character: str, line_number: int):
        self.character = character
        if character:
            message = f"invalid escape sequence: \\{character}"
        else:
            message = "dangling escape character"
        super().__init__(message, line_number)


class InvalidKeyError(PropertiesError, ValueError):
    """
    Raised when a key is empty, starts with "#", starts or ends with
    whitespace, or contains a control character.
    """

    def __init__(self, key: str, line_number: Optional[int] = None):
        self.key = key
        self.line_number = line_number
        message = f"Invalid key: {key!r}"
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class SerializationError(PropertiesError):
    """Raised when a property set cannot be converted to or from JSON/YAML."""
    pass


__all__ = [
    "PropertiesError",
    "PropertiesParseError",
    "EmptyKeyError",
    "MissingDelimiterError",
    "UnterminatedContinuationError",
    "IllegalEscapeError",
    "InvalidKeyError",
    "SerializationError",
]
