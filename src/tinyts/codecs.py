"""Builtins conversion for terms and types.

The parser hands over trees of tagged dicts, for example::

    {"tag": "add", "left": {"tag": "number", "n": 1}, "right": ...}

Term tags are lower camel case (``objectGet``), type tags are capitalised
(``Func``), so one lookup over both registries resolves any tag. Field names
travel in camelCase; binder bodies of types travel under ``type``.
Parameters and properties are untagged ``{"name", "type"}`` or
``{"name", "term"}`` records.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import fields
from typing import Any

from tinyts.nodes import Location, Position, TermNode
from tinyts.terms import PropertyTerm
from tinyts.types import ObjectType, Param, PropertyType, TypeNode

_TAG_KEY = "tag"
_LOC_KEY = "loc"

# Type binders keep their body under "type" on the wire.
_TYPE_FIELD_ALIASES = {"body": "type"}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _wire_name(obj: TermNode | TypeNode, field_name: str) -> str:
    if isinstance(obj, TypeNode):
        field_name = _TYPE_FIELD_ALIASES.get(field_name, field_name)
    return _camel(field_name)


def to_builtins(obj: Any) -> Any:
    """Convert a term or type tree to JSON-compatible Python builtins.

    Args:
        obj: A term, type, parameter/property record, or plain value.

    Returns:
        JSON-compatible Python value (dict, list, str, int, float, bool, None)

    """
    # 1. Terms and types
    if isinstance(obj, TermNode | TypeNode):
        result: dict[str, Any] = {_TAG_KEY: obj.tag}
        for f in fields(obj):
            if f.name == _LOC_KEY:
                continue
            value = getattr(obj, f.name)
            if value is None:
                continue
            result[_wire_name(obj, f.name)] = to_builtins(value)
        if isinstance(obj, TermNode) and obj.loc is not None:
            result[_LOC_KEY] = _location_to_builtins(obj.loc)
        return result

    # 2. Untagged records
    if isinstance(obj, Param | PropertyType):
        return {"name": obj.name, "type": to_builtins(obj.type)}
    if isinstance(obj, PropertyTerm):
        return {"name": obj.name, "term": to_builtins(obj.term)}

    # 3. Sequences
    if isinstance(obj, Sequence) and not isinstance(obj, str | bytes):
        return [to_builtins(item) for item in obj]

    # 4. Primitives pass through
    return obj


def _location_to_builtins(loc: Location) -> dict[str, Any]:
    return {
        "start": {"line": loc.start.line, "column": loc.start.column},
        "end": {"line": loc.end.line, "column": loc.end.column},
    }


def from_builtins(data: Mapping[str, Any]) -> TermNode | TypeNode:
    """Deserialize a tagged dict to a term or a type.

    Args:
        data: Dict with 'tag' field

    Returns:
        Deserialized term or type

    Raises:
        KeyError: If 'tag' field is missing
        ValueError: If tag is unknown or a required field is missing

    """
    if _TAG_KEY not in data:
        msg = f"Missing required '{_TAG_KEY}' field"
        raise KeyError(msg)
    tag = data[_TAG_KEY]
    if tag in TermNode.registry:
        return _deserialize_node(TermNode.registry[tag], data)
    if tag in TypeNode.registry:
        return _deserialize_node(TypeNode.registry[tag], data)
    msg = f"Unknown tag '{tag}'"
    raise ValueError(msg)


def _deserialize_node(
    cls: type[TermNode] | type[TypeNode],
    data: Mapping[str, Any],
) -> TermNode | TypeNode:
    is_type = issubclass(cls, TypeNode)
    record = PropertyType if cls is ObjectType else Param
    field_values: dict[str, Any] = {}
    for f in fields(cls):
        if f.name == _LOC_KEY:
            continue
        key = _camel(_TYPE_FIELD_ALIASES.get(f.name, f.name) if is_type else f.name)
        if key in data:
            field_values[f.name] = _deserialize_value(data[key], record)

    if not is_type and isinstance(loc := data.get(_LOC_KEY), Mapping):
        field_values[_LOC_KEY] = _deserialize_location(loc)

    try:
        return cls(**field_values)
    except TypeError as e:
        known = ", ".join(k for k in data if k != _TAG_KEY)
        msg = f"Cannot build '{cls.tag}' from fields: {known}"
        raise ValueError(msg) from e


def _deserialize_value(
    value: Any,
    record: type[Param] | type[PropertyType] = Param,
) -> Any:
    """Deserialize a field value: tagged trees, records, lists, primitives."""
    if isinstance(value, Mapping):
        if _TAG_KEY in value:
            return from_builtins(value)
        if "term" in value:
            return PropertyTerm(value["name"], _deserialize_value(value["term"]))
        if "type" in value:
            return record(value["name"], _deserialize_value(value["type"]))
        msg = f"Cannot deserialize record with keys {sorted(value)}"
        raise ValueError(msg)
    if isinstance(value, list | tuple):
        return tuple(_deserialize_value(item, record) for item in value)
    return value


def _deserialize_location(loc: Mapping[str, Any]) -> Location:
    start, end = loc["start"], loc["end"]
    return Location(
        Position(start["line"], start["column"]),
        Position(end["line"], end["column"]),
    )
