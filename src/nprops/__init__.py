"""
nprops: strict properties files

Reads and writes line-oriented `key = value` configuration files.

DIFFERENCES FROM LENIENT PARSERS:
---------------------------------
    - '=' is the only delimiter; ':' is an ordinary character
    - '#' is the only comment marker; '!' starts a property line
    - Illegal escape sequences are errors, never silently dropped
    - Whitespace inside keys and values is preserved exactly

Text is parsed into a Properties object; Properties objects are written
back in a form that reads to the same mapping.
"""

import logging

from .errors import (
    EmptyKeyError,
    IllegalEscapeError,
    InvalidKeyError,
    MissingDelimiterError,
    PropertiesError,
    PropertiesParseError,
    SerializationError,
    UnterminatedContinuationError,
)
from .model import Properties
from .parser import parse_properties_file, parse_properties_stream, parse_properties_string
from .writer import dump_properties_string, write_properties_file, write_properties_stream

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Properties",
    "parse_properties_string",
    "parse_properties_stream",
    "parse_properties_file",
    "dump_properties_string",
    "write_properties_stream",
    "write_properties_file",
    "PropertiesError",
    "PropertiesParseError",
    "EmptyKeyError",
    "MissingDelimiterError",
    "UnterminatedContinuationError",
    "IllegalEscapeError",
    "InvalidKeyError",
    "SerializationError",
]
