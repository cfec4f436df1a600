"""Schema catalog endpoints."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter

from shapecheck.catalog import schema_summaries
from shapecheck.models.api import SchemaSummary

router = APIRouter(tags=["schemas"])


@router.get("/schemas", response_model=List[SchemaSummary])
def list_schemas():
    """Return the named schemas available to /api/validate."""
    return schema_summaries()
