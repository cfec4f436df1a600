"""Logging and metrics wiring for the validation service."""
import logging
import sys
import time

import structlog
from fastapi import FastAPI, Request
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

VALIDATIONS = Counter(
    "shapecheck_validations_total",
    "Payload validations by schema and outcome.",
    ["schema", "outcome"],
)


def init_logging(level: int = logging.INFO, stream=sys.stdout) -> None:
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    logging.basicConfig(stream=stream, level=level)


def record_validation(schema_id: str | None, outcome: str) -> None:
    """Count one validation; outcome is ``valid``, ``invalid`` or ``misconfigured``."""
    VALIDATIONS.labels(schema=schema_id or "inline", outcome=outcome).inc()
    structlog.get_logger("validation").info("validated", schema=schema_id or "inline", outcome=outcome)


def attach_instrumentation(app: FastAPI) -> None:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    @app.middleware("http")
    async def _latency(request: Request, call_next):
        start = time.perf_counter()
        resp = await call_next(request)
        dur_ms = (time.perf_counter() - start) * 1000
        structlog.get_logger("request").info(
            "req",
            path=request.url.path,
            method=request.method,
            status=resp.status_code,
            duration_ms=round(dur_ms, 2),
        )
        return resp
