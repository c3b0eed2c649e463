"""
Serialization helpers for Properties objects.

Provides lossless JSON/YAML round-trip via intermediate dict representation.

Two YAML layouts are supported:
    flat:    {"db.host": "localhost", "db.port": "5432"}
    nested:  {"db": {"host": "localhost", "port": "5432"}}

Nested layout splits keys on '.', which only works when no key is both a
leaf and a prefix of another key ("db" and "db.host").
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

import yaml

from nprops.errors import SerializationError
from nprops.model import Properties

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "."


def _scalar_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        raise SerializationError(f"Unsupported sequence value: {value!r}")
    return str(value)


def _flatten(d: Dict[str, Any], prefix: str, out: Dict[str, str]) -> None:
    for key, value in d.items():
        full_key = f"{prefix}{KEY_SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, dict):
            _flatten(value, full_key, out)
        else:
            out[full_key] = _scalar_to_str(value)


def to_layers(flat: Dict[str, str]) -> Dict[str, Any]:
    """
    Convert dotted keys to nested dicts.

    Raises:
        SerializationError: If a key is both a value and a parent of other keys
    """
    layers: Dict[str, Any] = {}
    for key, value in flat.items():
        words = key.split(KEY_SEPARATOR)
        current = layers
        for word in words[:-1]:
            child = current.setdefault(word, {})
            if not isinstance(child, dict):
                raise SerializationError(f"Key {key!r} conflicts with a value at {word!r}")
            current = child
        if words[-1] in current:
            raise SerializationError(f"Key {key!r} conflicts with nested keys")
        current[words[-1]] = value
    return layers


def properties_to_dict(p: Properties) -> Dict[str, str]:
    return p.to_dict()


def properties_from_dict(d: Dict[str, Any] | None) -> Properties:
    """
    Build Properties from a dict, flattening nested dicts with '.'.

    None becomes "", booleans become "true"/"false", other scalars str().
    Keys are validated like any other property key.
    """
    flat: Dict[str, str] = {}
    if d is not None:
        if not isinstance(d, dict):
            raise SerializationError(f"Expected a mapping, got {type(d).__name__}")
        _flatten(d, "", flat)
    p = Properties()
    for key, value in flat.items():
        p.set_property(key, value)
    return p


def properties_to_json(p: Properties) -> str:
    return json.dumps(properties_to_dict(p), sort_keys=True)


def properties_from_json(s: str) -> Properties:
    d = json.loads(s)
    return properties_from_dict(d)


def properties_to_yaml(p: Properties, nested: bool = False) -> str:
    d = properties_to_dict(p)
    if nested:
        d = to_layers(d)
    logger.debug("Converting %d properties to YAML (nested=%s)", len(p), nested)
    return yaml.safe_dump(d, default_flow_style=False, allow_unicode=True)


def properties_from_yaml(s: str) -> Properties:
    d = yaml.safe_load(s)
    return properties_from_dict(d)
