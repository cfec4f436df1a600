"""Validate a JSON or YAML payload against an inline or catalog schema."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shapecheck.engine import ConfigurationError, Validator
from shapecheck.observability import init_logging

EXIT_INVALID = 1
EXIT_MISCONFIGURED = 2


def _load_document(source: str) -> Dict[str, Any]:
    path = Path(source).expanduser().resolve()
    try:
        text = path.read_text()
    except OSError as exc:
        raise SystemExit(f"Failed to read {path}: {exc}") from exc
    if path.suffix in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Failed to decode {path}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("data", help="Path to the payload (.json, .yaml or .yml)")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--schema", help="Path to a schema file")
    group.add_argument("--schema-id", help="Catalog schema id or alias")
    parser.add_argument(
        "--strict-collections",
        action="store_true",
        help="Check scalar collection elements against the item rule",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # stdout carries the JSON report only.
    init_logging(logging.WARNING, stream=sys.stderr)

    data = _load_document(args.data)
    if args.schema:
        schema = _load_document(args.schema)
    else:
        from shapecheck.catalog import resolve_schema

        try:
            schema = resolve_schema(args.schema_id)["schema"]
        except KeyError as exc:
            raise SystemExit(str(exc.args[0])) from exc

    validator = Validator(data, schema, strict_collections=args.strict_collections)
    try:
        success = validator.validate()
    except ConfigurationError as exc:
        print(f"Invalid schema: {exc}", file=sys.stderr)
        return EXIT_MISCONFIGURED

    print(json.dumps({"success": success, "errors": validator.errors}, indent=2, sort_keys=True))
    return 0 if success else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
