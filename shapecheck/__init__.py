"""Declarative validation of nested request payloads."""
from __future__ import annotations

from .engine import ConfigurationError, RuleRegistry, Validator, parse_schema, validate

__all__ = ["ConfigurationError", "RuleRegistry", "Validator", "parse_schema", "validate"]
