"""Configuration objects for the metrics engine and the console adapters."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_GATEWAY_URL = "http://localhost:8080"


@dataclass(frozen=True)
class SummaryConfig:
    """Metric names and thresholds used to derive dashboard statistics.

    Attributes:
        requests_metric: Request counter, optionally labeled by path/status.
        active_connections_metric: Gauge of open connections.
        auth_success_metric: Counter of successful authentications.
        auth_failure_metric: Counter of failed authentications.
        cache_hits_metric: Counter of cache hits.
        cache_misses_metric: Counter of cache misses.
        backend_errors_metric: Error counter labeled by backend.
        backend_latency_metric: Latency sample labeled by backend.
        backend_label: Label key identifying a backend.
        path_label: Label key holding the request path.
        status_label: Label key holding the HTTP status code.
        health_error_threshold: A backend is healthy while its error count
            stays below this value.
        latency_scale: Factor turning the latency sample into milliseconds.
    """

    requests_metric: str = "gateway_requests_total"
    active_connections_metric: str = "gateway_active_connections"
    auth_success_metric: str = "gateway_auth_success_total"
    auth_failure_metric: str = "gateway_auth_failure_total"
    cache_hits_metric: str = "gateway_cache_hits_total"
    cache_misses_metric: str = "gateway_cache_misses_total"
    backend_errors_metric: str = "gateway_backend_errors_total"
    backend_latency_metric: str = "gateway_backend_latency_seconds"
    backend_label: str = "backend"
    path_label: str = "path"
    status_label: str = "status"
    health_error_threshold: float = 5.0
    latency_scale: float = 1000.0

    def __post_init__(self) -> None:
        if self.health_error_threshold < 0:
            raise ValueError("health_error_threshold must be non-negative")
        if self.latency_scale <= 0:
            raise ValueError("latency_scale must be positive")


@dataclass(frozen=True)
class ConsoleSettings:
    """Settings for talking to the gateway.

    Attributes:
        gateway_url: Base URL of the gateway (no trailing slash needed).
        admin_token: Bearer token for the admin API, None when unset.
        timeout_seconds: Timeout applied to every gateway request.
    """

    gateway_url: str = DEFAULT_GATEWAY_URL
    admin_token: str | None = None
    timeout_seconds: float = 10.0

    def __post_init__(self) -> None:
        if not (self.timeout_seconds > 0):
            raise ValueError("timeout_seconds must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConsoleSettings":
        """Build settings from GATEWAY_URL, ADMIN_TOKEN and GATEWAY_TIMEOUT.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: If GATEWAY_TIMEOUT is not a positive number.
        """
        env = os.environ if environ is None else environ
        timeout_raw = env.get("GATEWAY_TIMEOUT") or "10"
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"Invalid GATEWAY_TIMEOUT: {timeout_raw!r}") from None
        return cls(
            gateway_url=env.get("GATEWAY_URL") or DEFAULT_GATEWAY_URL,
            admin_token=env.get("ADMIN_TOKEN") or None,
            timeout_seconds=timeout,
        )
