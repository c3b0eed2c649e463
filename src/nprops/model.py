"""
Core Properties Store

Defines the in-memory key/value container that the codec loads into and
stores from.

ARCHITECTURAL RULE:
    This object:
        - Knows nothing about escaping or line syntax
        - Holds decoded strings only
        - Validates keys, not values
        - Overwrites on set, returns a default on miss

INVARIANTS:
    - Every key is non-empty
    - No key starts with "#"
    - No key starts or ends with whitespace
    - No key contains a control character
"""

import os
from dataclasses import dataclass, field
from typing import Dict, ItemsView, Iterator, KeysView, Optional

from .errors import InvalidKeyError
from .escapes import COMMENT_MARKER, is_control, is_whitespace


def is_valid_key(key: str) -> bool:
    """
    True if `key` can be stored and read back.

    A key must be non-empty, must not start with the comment marker, must
    not start or end with whitespace, and must not contain control characters.
    """
    if not key or key[0] == COMMENT_MARKER:
        return False
    if is_whitespace(key[0]) or is_whitespace(key[-1]):
        return False
    return not any(is_control(c) for c in key)


def validate_key(key: str) -> None:
    """
    Check a property key.

    Raises:
        TypeError: If key is None
        InvalidKeyError: If the key is empty, starts with "#", starts or ends
            with whitespace, or contains control characters
    """
    if key is None:
        raise TypeError("Cannot set null property")
    if not is_valid_key(key):
        raise InvalidKeyError(key)


@dataclass
class Properties:
    """
    A set of properties: string keys mapped to string values.

    Entries keep the order in which their keys were first set; overwriting
    a key keeps its position.

    Properties:
        entries:
            Key/value pairs, decoded (no escape sequences)

    Example:
        props = Properties()
        props.load("greeting = hello world")
        props.get_property("greeting")            # "hello world"
        props.get_property("missing", "fallback")  # "fallback"
    """

    entries: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for key in self.entries:
            validate_key(key)

    def set_property(self, key: str, value: Optional[str]) -> None:
        """
        Set the property of given key to the given value.

        Spaces within the key are accepted; a None value removes the property.

        Raises:
            TypeError: If key is None
            InvalidKeyError: If the key is invalid
        """
        validate_key(key)
        if value is None:
            self.entries.pop(key, None)
        else:
            self.entries[key] = value

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Retrieve the value of the property of given key.

        Args:
            key: Property key
            default: Value returned when there is no such property

        Returns:
            The property value, or `default` if not found
        """
        return self.entries.get(key, default)

    def remove_property(self, key: str) -> Optional[str]:
        """Remove a property, returning its value (None if it was not set)."""
        return self.entries.pop(key, None)

    def keys(self) -> KeysView[str]:
        return self.entries.keys()

    def items(self) -> ItemsView[str, str]:
        return self.entries.items()

    def to_dict(self) -> Dict[str, str]:
        return dict(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def load(self, source) -> "Properties":
        """
        Load properties from `source` into this object.

        Args:
            source: Properties text (str), a path (os.PathLike),
                or an open text or binary stream

        Returns:
            self, for chaining
        """
        from .parser import (
            parse_properties_file,
            parse_properties_stream,
            parse_properties_string,
        )

        if isinstance(source, str):
            return parse_properties_string(source, into=self)
        if isinstance(source, os.PathLike):
            return parse_properties_file(source, into=self)
        return parse_properties_stream(source, into=self)

    def store(self, sink, comments: Optional[str] = None) -> None:
        """
        Write the properties of this object, preceded by optional comments.

        Args:
            sink: A path (str or os.PathLike) or an open text or binary stream
            comments: Leading comment text, or None for no comment block

        Raises:
            TypeError: If sink is None or not a path or writable stream
        """
        from .writer import write_properties_file, write_properties_stream

        if isinstance(sink, (str, os.PathLike)):
            write_properties_file(self, sink, comments=comments)
        else:
            write_properties_stream(self, sink, comments=comments)

    def dumps(self, comments: Optional[str] = None) -> str:
        """Return the properties text of this object."""
        from .writer import dump_properties_string

        return dump_properties_string(self, comments=comments)
