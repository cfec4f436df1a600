"""Named schema catalog."""
from __future__ import annotations

from .registry import (
    SchemaDocument,
    SchemaSummary,
    all_schemas,
    reload_catalog,
    resolve_schema,
    schema_summaries,
)

__all__ = [
    "SchemaDocument",
    "SchemaSummary",
    "all_schemas",
    "reload_catalog",
    "resolve_schema",
    "schema_summaries",
]
