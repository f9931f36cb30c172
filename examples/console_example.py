"""Example FastAPI console in front of a gateway.

Run with:
    GATEWAY_URL=http://localhost:8080 ADMIN_TOKEN=secret \
        uvicorn examples.console_example:app --reload

Endpoints:
    /api/metrics          - raw exposition text from the gateway
    /api/metrics/summary  - dashboard summary cards (JSON)
    /api/logs             - per-endpoint request statistics (JSON)
    /api/config           - admin configuration passthrough (JSON)
    /api/diagnostics      - skipped lines and request failures (NDJSON)
"""

import logging

from fastapi import FastAPI

from gatewaylens.adapters.console import MetricsConsole
from gatewaylens.adapters.frameworks.fastapi import create_console_router
from gatewaylens.adapters.gateway import GatewayClient
from gatewaylens.core.config import ConsoleSettings

logging.basicConfig(level=logging.INFO)

settings = ConsoleSettings.from_env()
gateway = GatewayClient(settings)

app = FastAPI(title="Gateway Console")
app.include_router(create_console_router(MetricsConsole(gateway, config_source=gateway)))


@app.get("/")
async def root() -> dict[str, str]:
    """Report which gateway the console reads from."""
    return {"gateway": settings.gateway_url}
