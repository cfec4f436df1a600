"""Pydantic models shared by the API routers."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class ValidateRequest(BaseModel):
    """Payload plus either an inline schema or a catalog schema id."""

    data: Dict[str, Any] = Field(..., description="Object to validate")
    schema_: Optional[Dict[str, Any]] = Field(
        default=None, alias="schema", description="Inline schema definition"
    )
    schema_id: Optional[str] = Field(default=None, description="Catalog schema id or alias")
    strict_collections: Optional[bool] = Field(
        default=None, description="Validate scalar collection elements against the item rule"
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _exactly_one_schema(self) -> "ValidateRequest":
        if (self.schema_ is None) == (self.schema_id is None):
            raise ValueError("provide exactly one of 'schema' or 'schema_id'")
        return self


class ValidateResponse(BaseModel):
    """Verdict and per-field error tree."""

    success: bool
    errors: Dict[str, Any]
    schema_id: Optional[str] = None


class SchemaSummary(BaseModel):
    id: str
    title: Optional[str] = None
    aliases: List[str] = Field(default_factory=list)
    fields: List[str] = Field(default_factory=list)


__all__ = ["SchemaSummary", "ValidateRequest", "ValidateResponse"]
