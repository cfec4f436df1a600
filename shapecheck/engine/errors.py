"""Errors raised for broken schemas and rule definitions."""
from __future__ import annotations

import structlog

logger = structlog.get_logger("shapecheck.engine")


class ConfigurationError(ValueError):
    """A schema or rule definition is invalid.

    Raised for programmer mistakes (bad rule registration, malformed schema
    nodes, schema keys missing from the input). Data that merely fails a rule
    never raises; it is reported in the error tree instead.
    """

    def __init__(self, reason: str, path: str = "") -> None:
        self.reason = reason
        self.path = path
        super().__init__(f"{path}: {reason}" if path else reason)


def configuration_error(reason: str, path: str = "") -> ConfigurationError:
    """Log a configuration problem and return the exception to raise."""
    logger.error("schema_configuration_error", path=path or "<root>", reason=reason)
    return ConfigurationError(reason, path)


__all__ = ["ConfigurationError", "configuration_error"]
