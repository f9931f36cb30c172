"""Core domain models for gateway metrics data."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Log level (e.g., INFO, WARN, ERROR).
        message: The log message.
        attributes: Additional structured fields.
    """

    timestamp: float
    level: str
    message: str
    attributes: dict[str, str | int | float | bool] = field(default_factory=dict)


@dataclass(frozen=True)
class MetricSample:
    """A single sample read from one exposition line.

    Attributes:
        name: Metric name (e.g., gateway_requests_total).
        value: The sample value.
        labels: Key-value pairs for metric dimensions.
        timestamp: Optional exposition timestamp in milliseconds.
    """

    name: str
    value: float
    labels: dict[str, str] = field(default_factory=dict)
    timestamp: int | None = None


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one exposition document.

    Attributes:
        samples: Parsed samples in input order.
        skipped: Number of malformed lines that were dropped.
        diagnostics: WARN entries describing dropped lines and duplicate labels.
    """

    samples: list[MetricSample] = field(default_factory=list)
    skipped: int = 0
    diagnostics: list[LogEntry] = field(default_factory=list)


@dataclass(frozen=True)
class EndpointStats:
    """Request counts for a single path, split by status class."""

    path: str
    total: float = 0.0
    success_2xx: float = 0.0
    client_error_4xx: float = 0.0
    server_error_5xx: float = 0.0

    @property
    def error_rate(self) -> float:
        """Percentage of requests that ended in a 4xx or 5xx status."""
        if self.total == 0:
            return 0.0
        return (self.client_error_4xx + self.server_error_5xx) / self.total * 100


@dataclass(frozen=True)
class BackendHealth:
    """Health of one backend as seen through its error and latency samples.

    Attributes:
        url: Backend identifier, taken verbatim from the ``backend`` label.
        error_count: Value of the backend error counter.
        healthy: True when error_count is below the configured threshold.
        latency_ms: Latency in milliseconds, None when not reported.
    """

    url: str
    error_count: float
    healthy: bool
    latency_ms: float | None = None


@dataclass(frozen=True)
class StatusCodeBreakdown:
    """Request totals per status class."""

    status_2xx: float = 0.0
    status_4xx: float = 0.0
    status_5xx: float = 0.0


@dataclass(frozen=True)
class MetricsSummary:
    """Point-in-time dashboard summary derived from one metrics dump.

    Attributes:
        total_requests: Total requests served by the gateway.
        active_connections: Current open connections (gauge).
        auth_success_rate: Successful authentications in percent.
        cache_hit_rate: Cache hits in percent.
        status_codes: Request totals per status class.
        backends: Health of every backend that reported errors.
    """

    total_requests: float = 0.0
    active_connections: float = 0.0
    auth_success_rate: float = 0.0
    cache_hit_rate: float = 0.0
    status_codes: StatusCodeBreakdown = field(default_factory=StatusCodeBreakdown)
    backends: list[BackendHealth] = field(default_factory=list)
