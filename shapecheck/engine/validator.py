"""Validator bound to one input object and one schema."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import structlog

from .nodes import parse_schema
from .rules import Predicate, RuleRegistry
from .walker import ErrorTree, SchemaWalker

logger = structlog.get_logger("shapecheck.engine")


class Validator:
    """Check ``data`` against ``schema`` and keep the resulting error tree.

    Each instance owns its own rule registry, so rules added with
    :meth:`extend` never leak into other validators.
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        schema: Mapping[str, Any],
        *,
        strict_collections: bool = False,
    ) -> None:
        self.data = data
        self.schema = schema
        self.strict_collections = strict_collections
        self.rules = RuleRegistry()
        self.errors: ErrorTree = {}

    def extend(self, name: str, predicate: Predicate, error_message: Optional[str] = None) -> None:
        """Register a custom rule usable by name in the schema."""
        self.rules.register(name, predicate, error_message)

    def validate(self) -> bool:
        parsed = parse_schema(self.schema)
        walker = SchemaWalker(self.rules, strict_collections=self.strict_collections)
        success, self.errors = walker.walk(self.data, parsed)
        logger.debug("validation_complete", success=success, fields=len(self.errors))
        return success


def validate(data: Mapping[str, Any], schema: Mapping[str, Any], **kwargs: Any) -> Dict[str, Any]:
    """One-shot helper returning ``{"success": bool, "errors": tree}``."""
    validator = Validator(data, schema, **kwargs)
    success = validator.validate()
    return {"success": success, "errors": validator.errors}


__all__ = ["Validator", "validate"]
