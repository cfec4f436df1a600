"""Load named schemas and expose lookup helpers."""
from __future__ import annotations

import json
from difflib import get_close_matches
from pathlib import Path
from typing import Any, Dict, Iterable, List

import structlog
import yaml

from shapecheck.engine import parse_schema
from shapecheck.settings import settings

SchemaDocument = Dict[str, Any]
SchemaSummary = Dict[str, object]

_SUFFIXES = {".json", ".yaml", ".yml"}

logger = structlog.get_logger("shapecheck.catalog")

_by_id: Dict[str, SchemaDocument] = {}
_by_id_lower: Dict[str, SchemaDocument] = {}
_by_alias_lower: Dict[str, SchemaDocument] = {}
_fuzzy_keys: List[str] = []
_fuzzy_map: Dict[str, SchemaDocument] = {}


def _read_document(path: Path) -> SchemaDocument:
    text = path.read_text()
    if path.suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def _load_documents(directory: Path) -> Dict[str, SchemaDocument]:
    documents: Dict[str, SchemaDocument] = {}
    if not directory.is_dir():
        logger.warning("schemas_dir_missing", path=str(directory))
        return documents
    for path in sorted(directory.iterdir()):
        if path.suffix not in _SUFFIXES or path.name.startswith("_"):
            continue
        data = _read_document(path)
        if not isinstance(data, dict) or "id" not in data or "schema" not in data:
            raise ValueError(f"{path.name}: schema documents need 'id' and 'schema' keys")
        # Malformed schemas raise ConfigurationError here rather than on first use.
        parse_schema(data["schema"], str(data["id"]))
        documents[str(data["id"]).lower()] = data
    return documents


def _build_indexes(documents: Dict[str, SchemaDocument]) -> None:
    global _by_id, _by_id_lower, _by_alias_lower, _fuzzy_keys, _fuzzy_map
    _by_id = {str(doc["id"]): doc for doc in documents.values()}
    _by_id_lower = {key.lower(): value for key, value in _by_id.items()}
    _by_alias_lower = {}
    _fuzzy_map = {}
    _fuzzy_keys = []
    for doc in _by_id.values():
        identifier = str(doc["id"]).lower()
        _fuzzy_keys.append(identifier)
        _fuzzy_map[identifier] = doc
        aliases = doc.get("aliases") or []
        if isinstance(aliases, list):
            for alias in aliases:
                alias_key = str(alias).lower()
                _by_alias_lower[alias_key] = doc
                _fuzzy_keys.append(alias_key)
                _fuzzy_map[alias_key] = doc
        title = str(doc.get("title") or "").strip().lower()
        if title:
            _fuzzy_keys.append(title)
            _fuzzy_map[title] = doc


def reload_catalog(directory: Path | None = None) -> None:
    """Reload schema documents from disk."""
    documents = _load_documents(directory or settings.SCHEMAS_DIR)
    _build_indexes(documents)
    logger.info("schemas_loaded", count=len(_by_id))


def all_schemas() -> Iterable[SchemaDocument]:
    return _by_id.values()


def schema_summaries() -> List[SchemaSummary]:
    summaries: List[SchemaSummary] = []
    for doc in _by_id.values():
        summaries.append(
            {
                "id": doc.get("id"),
                "title": doc.get("title"),
                "aliases": doc.get("aliases", []),
                "fields": sorted(doc["schema"]),
            }
        )
    summaries.sort(key=lambda item: str(item.get("id") or "").lower())
    return summaries


def resolve_schema(name_or_id: str) -> SchemaDocument:
    if not name_or_id:
        raise KeyError("Schema identifier cannot be empty")
    token = name_or_id.strip().lower()
    direct = _by_id_lower.get(token)
    if direct:
        return direct
    alias = _by_alias_lower.get(token)
    if alias:
        return alias
    matches = get_close_matches(token, _fuzzy_keys, n=1, cutoff=0.6)
    if matches:
        resolved = _fuzzy_map.get(matches[0])
        if resolved:
            return resolved
    raise KeyError(f"Schema '{name_or_id}' was not found in the catalog")


# Initial load during module import.
reload_catalog()
