"""gatewaylens: metrics exposition parser and dashboard statistics for an API gateway.

Example:
    ```python
    from gatewaylens import aggregate_endpoints, build_summary

    summary = build_summary(metrics_text)
    endpoints = aggregate_endpoints(metrics_text)
    ```
"""

from gatewaylens.adapters.gateway import GatewayClient
from gatewaylens.adapters.mock_gateway import GatewayCounters
from gatewaylens.adapters.storage.in_memory import InMemoryLogStorage
from gatewaylens.core.config import ConsoleSettings, SummaryConfig
from gatewaylens.core.encoding.prometheus import (
    encode_exposition,
    parse_exposition,
    parse_line,
    parse_samples,
)
from gatewaylens.core.endpoints import aggregate_endpoints, aggregate_samples
from gatewaylens.core.exceptions import (
    ConfigurationError,
    GatewayError,
    GatewayLensError,
    GatewayUnavailableError,
)
from gatewaylens.core.metrics import counter, gauge
from gatewaylens.core.models import (
    BackendHealth,
    EndpointStats,
    LogEntry,
    MetricSample,
    MetricsSummary,
    ParseResult,
    StatusCodeBreakdown,
)
from gatewaylens.core.queries import (
    distinct_label_values,
    sum_matching,
    unlabeled_value,
    value_of,
)
from gatewaylens.core.summary import build_summary, summarize_samples

__all__ = [
    "BackendHealth",
    "ConfigurationError",
    "ConsoleSettings",
    "EndpointStats",
    "GatewayClient",
    "GatewayCounters",
    "GatewayError",
    "GatewayLensError",
    "GatewayUnavailableError",
    "InMemoryLogStorage",
    "LogEntry",
    "MetricSample",
    "MetricsSummary",
    "ParseResult",
    "StatusCodeBreakdown",
    "SummaryConfig",
    "aggregate_endpoints",
    "aggregate_samples",
    "build_summary",
    "counter",
    "distinct_label_values",
    "encode_exposition",
    "gauge",
    "parse_exposition",
    "parse_line",
    "parse_samples",
    "sum_matching",
    "summarize_samples",
    "unlabeled_value",
    "value_of",
]
