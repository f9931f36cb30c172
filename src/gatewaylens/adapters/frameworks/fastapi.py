"""FastAPI adapter for the admin console endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from gatewaylens.adapters.console import MetricsConsole, translate_error
from gatewaylens.adapters.frameworks.query_params import (
    _validate_level,
    _validate_since,
)
from gatewaylens.core.encoding.ndjson import encode_logs


def create_console_router(console: MetricsConsole) -> APIRouter:
    """Create a FastAPI router with the console endpoints under /api.

    Args:
        console: MetricsConsole holding the sources and log storage.

    Returns:
        APIRouter with /api/metrics, /api/metrics/summary, /api/logs,
        /api/config and /api/diagnostics configured.
    """
    router = APIRouter(prefix="/api")

    async def _error_response(exc: Exception, message: str) -> JSONResponse:
        await console.record_failure(message)
        status, payload = translate_error(exc)
        return JSONResponse(content=payload, status_code=status)

    @router.get("/metrics")
    async def get_metrics() -> Response:
        """Return the gateway's exposition text unchanged."""
        try:
            body = await console.raw_metrics()
        except Exception as exc:
            return await _error_response(exc, "Failed to fetch metrics")
        return Response(content=body, media_type="text/plain")

    @router.get("/metrics/summary")
    async def get_summary() -> Any:
        """Return the dashboard summary."""
        try:
            return await console.summary()
        except Exception as exc:
            return await _error_response(exc, "Failed to build metrics summary")

    @router.get("/logs")
    async def get_endpoint_stats() -> Any:
        """Return per-endpoint request statistics."""
        try:
            return await console.endpoints()
        except Exception as exc:
            return await _error_response(exc, "Failed to fetch request logs")

    @router.get("/config")
    async def get_config() -> Any:
        """Return the admin configuration."""
        if console.config_source is None:
            raise HTTPException(status_code=404, detail="Not Found")
        try:
            return await console.admin_config()
        except Exception as exc:
            return await _error_response(exc, "Failed to fetch config")

    @router.get("/diagnostics")
    async def get_diagnostics(
        since: float = Query(default=0),
        level: str | None = Query(default=None),
    ) -> Response:
        """Return recorded diagnostics in NDJSON format.

        Args:
            since: Unix timestamp. Returns entries with timestamp > since.
            level: Optional level filter (DEBUG, INFO, WARN, ERROR).
        """
        entries = console.log_storage.read(
            since=_validate_since(since), level=_validate_level(level)
        )
        body = await encode_logs(entries)
        return Response(content=body, media_type="application/x-ndjson")

    return router
