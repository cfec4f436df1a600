"""Payload validation endpoint."""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException

from shapecheck.catalog import resolve_schema
from shapecheck.engine import ConfigurationError, Validator
from shapecheck.models.api import ValidateRequest, ValidateResponse
from shapecheck.observability import record_validation
from shapecheck.settings import settings

router = APIRouter(tags=["validate"])


def _select_schema(payload: ValidateRequest) -> tuple[Optional[str], Dict[str, Any]]:
    if payload.schema_ is not None:
        return None, payload.schema_
    try:
        document = resolve_schema(payload.schema_id or "")
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
    return str(document["id"]), document["schema"]


@router.post("/validate", response_model=ValidateResponse)
def validate_payload(payload: ValidateRequest) -> Dict[str, object]:
    schema_id, schema = _select_schema(payload)
    strict = settings.STRICT_COLLECTIONS if payload.strict_collections is None else payload.strict_collections

    # One validator per request; rule registries are never shared.
    validator = Validator(payload.data, schema, strict_collections=strict)
    try:
        success = validator.validate()
    except ConfigurationError as exc:
        record_validation(schema_id, "misconfigured")
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    record_validation(schema_id, "valid" if success else "invalid")
    return {"success": success, "errors": validator.errors, "schema_id": schema_id}
