from __future__ import annotations

import importlib
import sys

from fastapi.middleware.cors import CORSMiddleware

# Only the modules that read the environment at import time are reloaded;
# metrics collectors must stay registered once per process.
_RELOADED = ("shapecheck.main", "shapecheck.settings")


def _reload_app_modules():
    for name in _RELOADED:
        sys.modules.pop(name, None)


def test_production_cors_uses_allowlist(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://app.example.com,https://console.example.com")

    _reload_app_modules()
    main = importlib.import_module("shapecheck.main")

    cors_layers = [m for m in main.app.user_middleware if m.cls is CORSMiddleware]
    assert cors_layers, "CORS middleware should be registered"
    cors = cors_layers[0]
    assert cors.kwargs["allow_origins"] == [
        "https://app.example.com",
        "https://console.example.com",
    ]

    # Reset modules to keep subsequent tests in development mode
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    _reload_app_modules()
    importlib.import_module("shapecheck.main")


def test_development_cors_allows_any_origin(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)

    _reload_app_modules()
    main = importlib.import_module("shapecheck.main")

    cors_layers = [m for m in main.app.user_middleware if m.cls is CORSMiddleware]
    cors = cors_layers[0]
    assert cors.kwargs["allow_origins"] == ["*"]
