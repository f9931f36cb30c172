"""Dashboard summary built from one metrics dump.

The summary is a pure function of the exposition text and the config: no
caching, no I/O, no state kept between calls.

Total requests: the unlabeled aggregate sample of the request counter is
preferred. When the dump only carries labeled variants, they are summed.
"""

from collections.abc import Sequence

from gatewaylens.core.config import SummaryConfig
from gatewaylens.core.encoding.prometheus import parse_samples
from gatewaylens.core.endpoints import STATUS_CLASS_PATTERNS
from gatewaylens.core.models import (
    BackendHealth,
    MetricSample,
    MetricsSummary,
    StatusCodeBreakdown,
)
from gatewaylens.core.queries import (
    distinct_label_values,
    sum_matching,
    unlabeled_value,
    value_of,
)


def percentage(part: float, other: float) -> float:
    """Return part / (part + other) * 100, or 0.0 when the sum is 0."""
    denominator = part + other
    if denominator == 0:
        return 0.0
    return part / denominator * 100


def total_requests(samples: Sequence[MetricSample], config: SummaryConfig) -> float:
    """Unlabeled request total, falling back to the sum of labeled variants."""
    total = unlabeled_value(samples, config.requests_metric)
    if total is not None:
        return total
    return sum_matching(samples, config.requests_metric)


def status_breakdown(
    samples: Sequence[MetricSample], config: SummaryConfig
) -> StatusCodeBreakdown:
    """Sum the request counter per status class."""
    totals = {
        status_class: sum_matching(
            samples,
            config.requests_metric,
            label_patterns={config.status_label: pattern},
        )
        for status_class, pattern in STATUS_CLASS_PATTERNS.items()
    }
    return StatusCodeBreakdown(
        status_2xx=totals["2xx"],
        status_4xx=totals["4xx"],
        status_5xx=totals["5xx"],
    )


def backend_health(
    samples: Sequence[MetricSample], config: SummaryConfig
) -> list[BackendHealth]:
    """Health of every backend that appears in the error counter.

    An empty list is returned when the dump has no backend error samples.
    """
    backends = []
    for url in distinct_label_values(
        samples, config.backend_errors_metric, config.backend_label
    ):
        selector = {config.backend_label: url}
        error_count = value_of(samples, config.backend_errors_metric, selector)
        latency = value_of(samples, config.backend_latency_metric, selector)
        backends.append(
            BackendHealth(
                url=url,
                error_count=error_count,
                healthy=error_count < config.health_error_threshold,
                latency_ms=latency * config.latency_scale if latency > 0 else None,
            )
        )
    return backends


def summarize_samples(
    samples: Sequence[MetricSample],
    config: SummaryConfig | None = None,
) -> MetricsSummary:
    """Build a MetricsSummary from already parsed samples."""
    config = config or SummaryConfig()
    return MetricsSummary(
        total_requests=total_requests(samples, config),
        active_connections=value_of(samples, config.active_connections_metric),
        auth_success_rate=percentage(
            value_of(samples, config.auth_success_metric),
            value_of(samples, config.auth_failure_metric),
        ),
        cache_hit_rate=percentage(
            value_of(samples, config.cache_hits_metric),
            value_of(samples, config.cache_misses_metric),
        ),
        status_codes=status_breakdown(samples, config),
        backends=backend_health(samples, config),
    )


def build_summary(text: str, config: SummaryConfig | None = None) -> MetricsSummary:
    """Parse exposition text and build the dashboard summary.

    Args:
        text: Raw exposition text.
        config: Metric names and health threshold. Defaults to SummaryConfig().

    Returns:
        MetricsSummary; every field is 0 (and backends empty) for an empty dump.
    """
    return summarize_samples(parse_samples(text), config)
