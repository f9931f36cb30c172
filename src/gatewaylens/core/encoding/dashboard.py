"""Dashboard JSON encoders for summaries and endpoint statistics.

Keys follow the shapes the dashboard consumes.
"""

from collections.abc import Iterable
from typing import Any

from gatewaylens.core.models import BackendHealth, EndpointStats, MetricsSummary


def backend_to_dict(backend: BackendHealth) -> dict[str, Any]:
    """Encode a BackendHealth; ``latency`` is omitted when unknown."""
    data: dict[str, Any] = {
        "url": backend.url,
        "healthy": backend.healthy,
        "errorCount": backend.error_count,
    }
    if backend.latency_ms is not None:
        data["latency"] = backend.latency_ms
    return data


def summary_to_dict(summary: MetricsSummary) -> dict[str, Any]:
    """Encode a MetricsSummary to a JSON-serializable dict."""
    return {
        "totalRequests": summary.total_requests,
        "activeConnections": summary.active_connections,
        "authSuccessRate": summary.auth_success_rate,
        "cacheHitRate": summary.cache_hit_rate,
        "statusCodes": {
            "2xx": summary.status_codes.status_2xx,
            "4xx": summary.status_codes.status_4xx,
            "5xx": summary.status_codes.status_5xx,
        },
        "backends": [backend_to_dict(b) for b in summary.backends],
    }


def endpoint_to_dict(stats: EndpointStats) -> dict[str, Any]:
    """Encode an EndpointStats to a JSON-serializable dict."""
    return {
        "endpoint": stats.path,
        "total_requests": stats.total,
        "status_2xx": stats.success_2xx,
        "status_4xx": stats.client_error_4xx,
        "status_5xx": stats.server_error_5xx,
        "error_rate": stats.error_rate,
    }


def endpoints_to_list(endpoints: Iterable[EndpointStats]) -> list[dict[str, Any]]:
    """Encode endpoint statistics, keeping their order."""
    return [endpoint_to_dict(stats) for stats in endpoints]
