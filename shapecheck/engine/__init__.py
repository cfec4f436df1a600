"""Rule registry and recursive schema walker."""
from __future__ import annotations

from .errors import ConfigurationError
from .nodes import Collection, FieldDescriptor, Nested, TypeRef, parse_schema
from .rules import Rule, RuleRegistry
from .validator import Validator, validate
from .walker import REQUIRED, SUCCESS, SchemaWalker

__all__ = [
    "Collection",
    "ConfigurationError",
    "FieldDescriptor",
    "Nested",
    "REQUIRED",
    "Rule",
    "RuleRegistry",
    "SUCCESS",
    "SchemaWalker",
    "TypeRef",
    "Validator",
    "parse_schema",
    "validate",
]
