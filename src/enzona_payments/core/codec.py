"""
JSON encoding and decoding between the API's camelCase payloads and the
dataclasses in :mod:`enzona_payments.core.models`.

Field names are converted snake_case -> camelCase unless the field declares an
explicit wire name through ``json_field("wireName")``.
"""

from __future__ import annotations

import dataclasses
import json
import typing
from typing import Any, Dict, Optional, Type, TypeVar, Union

__all__ = [
    "decode",
    "dumps",
    "json_field",
    "loads",
    "to_payload",
    "wire_name",
]

T = TypeVar("T")

_WIRE_KEY = "enzona_wire_name"


def json_field(name: str, **kwargs: Any) -> Any:
    """Declare a dataclass field whose JSON key is not the camelCase default."""
    kwargs.setdefault("default", None)
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[_WIRE_KEY] = name
    return dataclasses.field(metadata=metadata, **kwargs)


def wire_name(field: dataclasses.Field) -> str:
    explicit = field.metadata.get(_WIRE_KEY)
    if explicit:
        return explicit
    head, *rest = field.name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_payload(value: Any) -> Any:
    """
    Turn a dataclass (or nested containers of them) into JSON-ready data.

    ``None`` fields are dropped rather than sent as ``null``.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        payload: Dict[str, Any] = {}
        for field in dataclasses.fields(value):
            item = getattr(value, field.name)
            if item is None:
                continue
            payload[wire_name(field)] = to_payload(item)
        return payload
    if isinstance(value, dict):
        return {key: to_payload(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    return value


def dumps(value: Any) -> str:
    return json.dumps(to_payload(value), separators=(",", ":"))


def loads(text: str, shape: Optional[Type[T]]) -> Any:
    """Parse ``text`` and decode it into ``shape``; raises ``ValueError`` on failure."""
    data = json.loads(text)
    if shape is None:
        return data
    if data is None and dataclasses.is_dataclass(shape):
        raise ValueError(f"Expected a JSON object for {shape.__name__}, got null")
    return decode(data, shape)


def _strip_optional(tp: Any) -> Any:
    if typing.get_origin(tp) is Union:
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def decode(data: Any, shape: Any) -> Any:
    shape = _strip_optional(shape)
    if data is None:
        return None
    if shape is Any:
        return data

    if isinstance(shape, type) and dataclasses.is_dataclass(shape):
        if not isinstance(data, dict):
            raise ValueError(
                f"Expected a JSON object for {shape.__name__}, got {type(data).__name__}"
            )
        hints = typing.get_type_hints(shape)
        kwargs: Dict[str, Any] = {}
        for field in dataclasses.fields(shape):
            if not field.init:
                continue
            key = wire_name(field)
            if data.get(key) is not None:
                kwargs[field.name] = decode(data[key], hints.get(field.name, Any))
        # unknown keys are ignored, nulls fall back to the field default
        return shape(**kwargs)

    origin = typing.get_origin(shape)
    if origin in (list, tuple):
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
        args = typing.get_args(shape)
        item_type = args[0] if args else Any
        items = [decode(item, item_type) for item in data]
        return tuple(items) if origin is tuple else items
    if origin is dict:
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return dict(data)

    if shape is float and isinstance(data, (int, float)) and not isinstance(data, bool):
        return float(data)
    return data
