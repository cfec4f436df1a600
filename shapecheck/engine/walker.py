"""Recursive walk of an input tree against a parsed schema."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple, Union

from .errors import ConfigurationError, configuration_error
from .nodes import Collection, FieldDescriptor, Nested, SchemaNode, TypeRef
from .rules import Rule, RuleOptions, RuleRegistry

SUCCESS = "success"
REQUIRED = "is required"

ErrorTree = Dict[str, Any]
FieldResult = Union[str, ErrorTree, List[Any]]


def _join(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


class SchemaWalker:
    """Validate data level by level and build the matching error tree.

    Every key is visited even after a failure so the returned tree is always
    complete. Each call returns a fresh sub-tree which the caller stores
    under its own key.
    """

    def __init__(self, registry: RuleRegistry, strict_collections: bool = False) -> None:
        self.registry = registry
        self.strict_collections = strict_collections

    def walk(self, data: Any, schema: Nested, path: str = "") -> Tuple[bool, ErrorTree]:
        if not isinstance(data, Mapping):
            raise configuration_error("input must be an object", path)

        success = True
        tree: ErrorTree = {}
        for key, node in schema.fields.items():
            key_path = _join(path, key)
            if key not in data:
                raise configuration_error("key does not exist", key_path)
            ok, tree[key] = self._field(data[key], node, key_path)
            success = success and ok
        return success, tree

    def _field(self, value: Any, node: SchemaNode, path: str) -> Tuple[bool, FieldResult]:
        if isinstance(node, TypeRef):
            return self._type_ref(value, node, path)
        if isinstance(node, Collection):
            return self._collection(value, node, path)
        if isinstance(node, Nested):
            return self.walk(value, node, path)
        raise configuration_error("model is invalid", path)

    def _type_ref(self, value: Any, node: TypeRef, path: str) -> Tuple[bool, str]:
        rule = self.registry.resolve(node.raw, path)
        if value is None:
            return False, REQUIRED
        return self._apply(rule, value, {"type": node.raw}, path)

    def _collection(self, value: Any, node: Collection, path: str) -> Tuple[bool, FieldResult]:
        if not isinstance(value, list):
            if not isinstance(node.item, FieldDescriptor):
                raise configuration_error("param 'type' must be a string", path)
            return self._descriptor(value, node.item, path)

        success = True
        results: List[Any] = []
        checked = False
        for index, element in enumerate(value):
            element_path = f"{path}[{index}]"
            if isinstance(element, Mapping) or self.strict_collections:
                ok, result = self._element(element, node.item, element_path)
                checked = True
            else:
                ok, result = True, SUCCESS
            success = success and ok
            results.append(result)

        if not checked and not self.strict_collections:
            return success, SUCCESS
        return success, results

    def _element(self, element: Any, item: Union[FieldDescriptor, Nested], path: str) -> Tuple[bool, FieldResult]:
        if isinstance(item, Nested):
            if not isinstance(element, Mapping):
                return False, "must be an object"
            return self.walk(element, item, path)
        return self._descriptor(element, item, path)

    def _descriptor(self, value: Any, descriptor: FieldDescriptor, path: str) -> Tuple[bool, str]:
        rule = self.registry.resolve(descriptor.type, path)
        if value is None:
            if descriptor.required:
                return False, REQUIRED
            return True, SUCCESS
        ok, message = self._apply(rule, value, descriptor.as_options(), path)
        if not ok and descriptor.error_message:
            return False, descriptor.error_message
        return ok, message

    def _apply(self, rule: Rule, value: Any, options: RuleOptions, path: str) -> Tuple[bool, str]:
        try:
            if rule.check(value, options):
                return True, SUCCESS
            return False, rule.describe(value, options)
        except ConfigurationError as exc:
            # Rules do not know where they are used; attach the field path here.
            if exc.path:
                raise
            raise configuration_error(exc.reason, path) from exc


__all__ = ["ErrorTree", "REQUIRED", "SUCCESS", "SchemaWalker"]
