"""Point lookups and aggregations over a parsed sample sequence.

A metric that is absent from the dump reads as 0: exposition formats omit
zero-valued series by convention, so absence is not an error.

A metric name given to ``sum_matching`` as a plain string is compared
literally, so ``"gateway_.*_total"`` matches nothing. Pass
``re.compile(r"gateway_.*_total")`` to match names by pattern.
"""

import re
from collections.abc import Iterable, Mapping

from gatewaylens.core.models import MetricSample

LabelPattern = str | re.Pattern[str]


def _labels_match(sample: MetricSample, labels: Mapping[str, str]) -> bool:
    """Check that every expected label is present with the same value."""
    return all(sample.labels.get(key) == value for key, value in labels.items())


def value_of(
    samples: Iterable[MetricSample],
    name: str,
    labels: Mapping[str, str] | None = None,
) -> float:
    """Return the value of the first sample matching name and labels.

    Args:
        samples: Parsed samples.
        name: Exact metric name.
        labels: Labels the sample must carry. Extra labels on the sample
            are ignored. When None, the first sample with the name wins.

    Returns:
        The sample value, or 0.0 when nothing matches.
    """
    for sample in samples:
        if sample.name != name:
            continue
        if labels is None or _labels_match(sample, labels):
            return sample.value
    return 0.0


def unlabeled_value(samples: Iterable[MetricSample], name: str) -> float | None:
    """Return the value of the first label-free sample named ``name``.

    Returns:
        The sample value, or None when the dump has no unlabeled sample.
    """
    for sample in samples:
        if sample.name == name and not sample.labels:
            return sample.value
    return None


def _compile(pattern: LabelPattern) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def sum_matching(
    samples: Iterable[MetricSample],
    name_pattern: LabelPattern,
    label_patterns: Mapping[str, LabelPattern] | None = None,
) -> float:
    """Sum the values of all samples whose name matches a pattern.

    Args:
        samples: Parsed samples.
        name_pattern: Exact metric name (str, compared literally) or a
            compiled regular expression that must match the whole name.
        label_patterns: Optional label key to regex mapping. The regex
            must match the whole label value; samples without the key are
            excluded.

    Returns:
        Sum of matching values, 0.0 when nothing matches.
    """
    if isinstance(name_pattern, re.Pattern):
        name_re = name_pattern
    else:
        name_re = re.compile(re.escape(name_pattern))
    compiled = {key: _compile(p) for key, p in (label_patterns or {}).items()}

    total = 0.0
    for sample in samples:
        if name_re.fullmatch(sample.name) is None:
            continue
        if any(
            key not in sample.labels or regex.fullmatch(sample.labels[key]) is None
            for key, regex in compiled.items()
        ):
            continue
        total += sample.value
    return total


def distinct_label_values(
    samples: Iterable[MetricSample],
    name: str,
    label_key: str,
) -> list[str]:
    """Return the distinct non-empty values of a label for one metric.

    Used to discover backends without a separate registry.

    Returns:
        Values in first-seen order.
    """
    seen: dict[str, None] = {}
    for sample in samples:
        if sample.name != name:
            continue
        value = sample.labels.get(label_key)
        if value:
            seen.setdefault(value, None)
    return list(seen)
