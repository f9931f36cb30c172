"""Metric helper functions for creating MetricSample objects."""

from gatewaylens.core.models import MetricSample


def counter(
    name: str,
    value: float = 1.0,
    labels: dict[str, str] | None = None,
) -> MetricSample:
    """Create a counter metric sample.

    Args:
        name: Metric name (e.g., "gateway_requests_total")
        value: Counter value (default: 1.0)
        labels: Optional dimension labels

    Returns:
        MetricSample for the counter
    """
    return MetricSample(
        name=name,
        value=float(value),
        labels=labels or {},
    )


def gauge(
    name: str,
    value: float,
    labels: dict[str, str] | None = None,
) -> MetricSample:
    """Create a gauge metric sample.

    Args:
        name: Metric name (e.g., "gateway_active_connections")
        value: Current gauge value
        labels: Optional dimension labels

    Returns:
        MetricSample for the gauge
    """
    return MetricSample(
        name=name,
        value=float(value),
        labels=labels or {},
    )
