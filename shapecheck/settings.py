"""Runtime settings for the validation service."""
from __future__ import annotations

import os
from pathlib import Path
from types import SimpleNamespace

ROOT = Path(__file__).resolve().parents[1]


def _comma_separated_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def _compute_schemas_dir() -> Path:
    override = os.getenv("SCHEMAS_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return ROOT / "config" / "schemas"


ENV = os.getenv("ENV", os.getenv("ENVIRONMENT", "development")).strip().lower()
ENVIRONMENT = os.getenv("ENVIRONMENT", ENV).strip().lower()
ALLOWED_CORS_ORIGINS = _comma_separated_list(os.getenv("ALLOWED_ORIGINS"))

SCHEMAS_DIR = _compute_schemas_dir()

MAX_BODY_KB = int(os.getenv("MAX_BODY_KB", "256"))
MAX_BODY_BYTES = MAX_BODY_KB * 1024

RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "30"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

STRICT_COLLECTIONS = _flag(os.getenv("STRICT_COLLECTIONS"))

settings = SimpleNamespace(
    ENV=ENV,
    ENVIRONMENT=ENVIRONMENT,
    ALLOWED_ORIGINS=ALLOWED_CORS_ORIGINS,
    ALLOWED_CORS_ORIGINS=ALLOWED_CORS_ORIGINS,
    SCHEMAS_DIR=SCHEMAS_DIR,
    MAX_BODY_KB=MAX_BODY_KB,
    MAX_BODY_BYTES=MAX_BODY_BYTES,
    RATE_LIMIT_REQUESTS=RATE_LIMIT_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS=RATE_LIMIT_WINDOW_SECONDS,
    STRICT_COLLECTIONS=STRICT_COLLECTIONS,
)

__all__ = [
    "ENV",
    "ENVIRONMENT",
    "ALLOWED_CORS_ORIGINS",
    "SCHEMAS_DIR",
    "MAX_BODY_KB",
    "MAX_BODY_BYTES",
    "RATE_LIMIT_REQUESTS",
    "RATE_LIMIT_WINDOW_SECONDS",
    "STRICT_COLLECTIONS",
    "settings",
]
