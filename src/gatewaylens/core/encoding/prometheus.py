"""Prometheus text exposition format parser and encoder.

Parsing is best effort: a line that does not fit the grammar is dropped
and reported, the rest of the document is still parsed.

Grammar of a data line::

    name{key="value",key2="value2"} value [timestamp]

Label values are taken verbatim between the quotes; there is no escape
processing. When a key repeats within one line the last occurrence wins.
"""

import logging
import math
import re
from collections.abc import Iterable, Mapping

from gatewaylens.core.logs import warn
from gatewaylens.core.models import LogEntry, MetricSample, ParseResult

logger = logging.getLogger(__name__)

_NAME = r"[A-Za-z_:][A-Za-z0-9_:]*"
_LABEL_KEY = r"[A-Za-z_][A-Za-z0-9_]*"
_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_LABEL_PAIR = rf'\s*({_LABEL_KEY})\s*=\s*"([^"]*)"\s*'

_LINE_RE = re.compile(
    rf"(?P<name>{_NAME})"
    r'(?:\{(?P<labels>(?:[^"{}]|"[^"]*")*)\})?'
    rf"\s+(?P<value>{_NUMBER})"
    r"(?:\s+(?P<timestamp>-?\d+))?"
)
_LABEL_LIST_RE = re.compile(rf"\s*(?:{_LABEL_PAIR}(?:,{_LABEL_PAIR})*,?)?\s*")
_LABEL_PAIR_RE = re.compile(_LABEL_PAIR)

# Longest slice of an offending line kept in a diagnostic entry
_MAX_DIAGNOSTIC_LINE = 200


def _is_directive(line: str) -> bool:
    """Return True for blank lines and '#' comment/HELP/TYPE lines."""
    return not line or line.startswith("#")


def _parse_labels(body: str) -> tuple[dict[str, str], list[str]] | None:
    """Parse the text between the braces into a label map.

    Returns:
        Tuple of (labels, duplicated keys), or None if the body does not
        fit the label list grammar.
    """
    if _LABEL_LIST_RE.fullmatch(body) is None:
        return None
    labels: dict[str, str] = {}
    duplicates: list[str] = []
    for match in _LABEL_PAIR_RE.finditer(body):
        key, value = match.group(1), match.group(2)
        if key in labels:
            duplicates.append(key)
        labels[key] = value
    return labels, duplicates


def _parse_data_line(line: str) -> tuple[MetricSample | None, list[str]]:
    """Parse a stripped, non-directive line.

    Returns:
        Tuple of (sample or None when malformed, duplicated label keys).
    """
    match = _LINE_RE.fullmatch(line)
    if match is None:
        return None, []

    labels: dict[str, str] = {}
    duplicates: list[str] = []
    if match.group("labels") is not None:
        parsed = _parse_labels(match.group("labels"))
        if parsed is None:
            return None, []
        labels, duplicates = parsed

    timestamp = match.group("timestamp")
    sample = MetricSample(
        name=match.group("name"),
        value=float(match.group("value")),
        labels=labels,
        timestamp=int(timestamp) if timestamp is not None else None,
    )
    return sample, duplicates


def parse_line(line: str) -> MetricSample | None:
    """Parse one line of exposition text.

    Args:
        line: A single line, with or without its trailing newline.

    Returns:
        The parsed MetricSample, or None for comments, blank lines and
        malformed lines.
    """
    stripped = line.strip()
    if _is_directive(stripped):
        return None
    sample, duplicates = _parse_data_line(stripped)
    if duplicates:
        logger.debug("Duplicate labels %s in line %r", duplicates, stripped)
    return sample


def parse_exposition(text: str) -> ParseResult:
    """Parse a complete exposition document.

    Malformed lines never abort the parse. Each one is counted, logged at
    WARNING and described by a WARN entry in the result diagnostics.

    Args:
        text: Raw exposition text.

    Returns:
        ParseResult with samples in input order.
    """
    samples: list[MetricSample] = []
    diagnostics: list[LogEntry] = []
    skipped = 0

    for line_number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if _is_directive(stripped):
            continue

        sample, duplicates = _parse_data_line(stripped)
        if sample is None:
            skipped += 1
            logger.warning("Skipping malformed metrics line %d: %r", line_number, raw)
            diagnostics.append(
                warn(
                    "Skipped malformed metrics line",
                    line_number=line_number,
                    line=raw[:_MAX_DIAGNOSTIC_LINE],
                )
            )
            continue

        for key in duplicates:
            diagnostics.append(
                warn(
                    "Duplicate label, last value wins",
                    line_number=line_number,
                    metric=sample.name,
                    label=key,
                    value=sample.labels[key],
                )
            )
        samples.append(sample)

    return ParseResult(samples=samples, skipped=skipped, diagnostics=diagnostics)


def parse_samples(text: str) -> list[MetricSample]:
    """Parse exposition text and return only the samples."""
    return parse_exposition(text).samples


def _format_value(value: float) -> str:
    """Format a sample value without a trailing '.0' for whole numbers."""
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def _format_sample(sample: MetricSample) -> str:
    """Render one sample as an exposition line (without newline)."""
    line = sample.name
    if sample.labels:
        pairs = ",".join(f'{key}="{value}"' for key, value in sample.labels.items())
        line += "{" + pairs + "}"
    line += f" {_format_value(sample.value)}"
    if sample.timestamp is not None:
        line += f" {sample.timestamp}"
    return line


def encode_exposition(
    samples: Iterable[MetricSample],
    help_texts: Mapping[str, str] | None = None,
    types: Mapping[str, str] | None = None,
) -> str:
    """Encode metric samples to Prometheus text format.

    Samples are grouped by name in first-seen order. A metric gets
    ``# HELP`` and ``# TYPE`` lines when its name is present in the
    corresponding mapping.

    Args:
        samples: Samples to encode.
        help_texts: Optional metric name to help text mapping.
        types: Optional metric name to type (counter, gauge, ...) mapping.

    Returns:
        Exposition text, one line per sample, ending with a newline.
        Empty string if no samples.
    """
    help_texts = help_texts or {}
    types = types or {}
    groups: dict[str, list[MetricSample]] = {}
    for sample in samples:
        groups.setdefault(sample.name, []).append(sample)

    blocks = []
    for name, group in groups.items():
        lines = []
        if name in help_texts:
            lines.append(f"# HELP {name} {help_texts[name]}")
        if name in types:
            lines.append(f"# TYPE {name} {types[name]}")
        lines.extend(_format_sample(sample) for sample in group)
        blocks.append("\n".join(lines) + "\n")

    return "\n".join(blocks)
