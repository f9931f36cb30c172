"""Per-endpoint request statistics."""

import logging
import math
import re
from collections.abc import Iterable

from gatewaylens.core.config import SummaryConfig
from gatewaylens.core.encoding.prometheus import parse_samples
from gatewaylens.core.models import EndpointStats, MetricSample

logger = logging.getLogger(__name__)

# Also used by the summary's status breakdown
STATUS_CLASS_PATTERNS = {
    "2xx": re.compile(r"2[0-9]{2}", re.ASCII),
    "4xx": re.compile(r"4[0-9]{2}", re.ASCII),
    "5xx": re.compile(r"5[0-9]{2}", re.ASCII),
}


def _status_class(status: str) -> str | None:
    """Map a status label to "2xx", "4xx", "5xx" or None.

    Only three ASCII digits are a status code; "0200", " 200" and 1xx/3xx
    values have no class.
    """
    for status_class, pattern in STATUS_CLASS_PATTERNS.items():
        if pattern.fullmatch(status) is not None:
            return status_class
    logger.debug("Unclassified status label %r", status)
    return None


def aggregate_samples(
    samples: Iterable[MetricSample],
    config: SummaryConfig | None = None,
) -> list[EndpointStats]:
    """Group request counters by path and split them by status class.

    Labels are looked up by key, so their order within the braces does not
    matter. Paths are grouped verbatim. Negative and non-finite counts are
    ignored, which keeps every error rate within [0, 100].

    Args:
        samples: Parsed samples.
        config: Metric and label names. Defaults to SummaryConfig().

    Returns:
        EndpointStats sorted by total descending, ties in first-seen order.
    """
    config = config or SummaryConfig()
    # path -> [total, 2xx, 4xx, 5xx]
    buckets: dict[str, list[float]] = {}
    class_index = {"2xx": 1, "4xx": 2, "5xx": 3}

    for sample in samples:
        if sample.name != config.requests_metric:
            continue
        path = sample.labels.get(config.path_label)
        status = sample.labels.get(config.status_label)
        if path is None or status is None:
            continue
        if sample.value < 0 or not math.isfinite(sample.value):
            logger.debug("Ignoring request count %r for path %r", sample.value, path)
            continue

        counts = buckets.setdefault(path, [0.0, 0.0, 0.0, 0.0])
        counts[0] += sample.value
        status_class = _status_class(status)
        if status_class is not None:
            counts[class_index[status_class]] += sample.value

    stats = [
        EndpointStats(
            path=path,
            total=total,
            success_2xx=ok,
            client_error_4xx=client_errors,
            server_error_5xx=server_errors,
        )
        for path, (total, ok, client_errors, server_errors) in buckets.items()
    ]
    # sorted() is stable, so equal totals keep first-seen order
    return sorted(stats, key=lambda s: s.total, reverse=True)


def aggregate_endpoints(
    text: str,
    config: SummaryConfig | None = None,
) -> list[EndpointStats]:
    """Parse exposition text and aggregate its request counters per path."""
    return aggregate_samples(parse_samples(text), config)
