"""Parse raw schemas into typed nodes.

A raw schema is plain data: a mapping of field names to either a type string
(``"email"``, ``"string:slug"``), another mapping (a nested object) or a
single-element list describing a collection. :func:`parse_schema` checks the
shape once and returns ``Nested``/``TypeRef``/``Collection`` nodes for the
walker to dispatch on.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .errors import configuration_error

DESCRIPTOR_KEYS = frozenset({"type", "required", "params", "errorMessage"})


@dataclass(frozen=True)
class TypeRef:
    """Reference to a rule by name, with an optional inert ``:suffix``."""

    raw: str

    @property
    def rule_name(self) -> str:
        return self.raw.split(":", 1)[0]

    @property
    def suffix(self) -> Optional[str]:
        if ":" not in self.raw:
            return None
        return self.raw.split(":", 1)[1]


@dataclass(frozen=True)
class FieldDescriptor:
    type: str
    required: bool = True
    params: Mapping[str, Any] = field(default_factory=dict)
    error_message: Optional[str] = None

    def as_options(self) -> Dict[str, Any]:
        """Mapping handed to rule predicates and message producers."""
        return {
            "type": self.type,
            "required": self.required,
            "params": dict(self.params),
            "errorMessage": self.error_message,
        }


@dataclass(frozen=True)
class Nested:
    fields: Mapping[str, "SchemaNode"]


@dataclass(frozen=True)
class Collection:
    """Homogeneous list; ``item`` is a descriptor or an object schema."""

    item: Union[FieldDescriptor, Nested]


SchemaNode = Union[TypeRef, Nested, Collection]


def _join(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _looks_like_descriptor(item: Mapping[str, Any]) -> bool:
    return isinstance(item.get("type"), str) and set(item) <= DESCRIPTOR_KEYS


def parse_descriptor(raw: Mapping[str, Any], path: str = "") -> FieldDescriptor:
    type_name = raw.get("type")
    if not isinstance(type_name, str):
        raise configuration_error("param 'type' must be a string", path)
    required = raw.get("required", True)
    if not isinstance(required, bool):
        raise configuration_error("param 'required' must be a boolean", path)
    params = raw.get("params")
    if params is None:
        params = {}
    elif not isinstance(params, Mapping):
        raise configuration_error("param 'params' must be an object", path)
    error_message = raw.get("errorMessage")
    if error_message is not None and not isinstance(error_message, str):
        raise configuration_error("param 'errorMessage' must be a string", path)
    return FieldDescriptor(type_name, required, params, error_message)


def parse_node(raw: Any, path: str = "") -> SchemaNode:
    if isinstance(raw, str):
        return TypeRef(raw)
    if isinstance(raw, list):
        if len(raw) != 1 or not isinstance(raw[0], Mapping):
            raise configuration_error("model is invalid", path)
        item = raw[0]
        if _looks_like_descriptor(item):
            return Collection(parse_descriptor(item, path))
        return Collection(parse_schema(item, path))
    if isinstance(raw, Mapping):
        return parse_schema(raw, path)
    raise configuration_error("model is invalid", path)


def parse_schema(raw: Any, path: str = "") -> Nested:
    """Parse an object schema, raising ConfigurationError on bad shapes."""
    if not isinstance(raw, Mapping):
        raise configuration_error("schema must be an object", path)
    return Nested({key: parse_node(value, _join(path, key)) for key, value in raw.items()})


__all__ = [
    "Collection",
    "FieldDescriptor",
    "Nested",
    "SchemaNode",
    "TypeRef",
    "parse_descriptor",
    "parse_node",
    "parse_schema",
]
