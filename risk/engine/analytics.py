"""
Cause and temporal analytics over a record collection.

All functions accept any iterable of :class:`IncidentRecord` and never raise
on empty input: rankings come back empty, the dominant cause is
``"Unknown"`` and the histogram is 24 zero buckets.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .classifier import RiskTier, classify
from .records import UNKNOWN, IncidentRecord
from .scoring import score_group
from .temporal import is_valid_hour, parse_hour

logger = logging.getLogger(__name__)

HOURS_IN_DAY = 24
DEFAULT_TOP_N = 5
DEFAULT_PEAK_HOURS = 3

# Number of same-hour records at which an hourly prediction is reported
# with full confidence.
PREDICTION_FULL_CONFIDENCE_SAMPLES = 10


def top_values(
    records: Iterable[IncidentRecord],
    attribute: str,
    n: int = DEFAULT_TOP_N,
) -> List[Tuple[str, int]]:
    """
    Rank the values of ``attribute`` by descending frequency.

    Blank or missing values are tallied as ``"Unknown"``. Ties keep the
    order in which the values were first seen.
    """
    counts: Counter[str] = Counter()
    for record in records:
        value = getattr(record, attribute, None)
        counts[str(value) if value not in (None, "") else UNKNOWN] += 1
    # Counter preserves insertion order and sorted() is stable.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[: max(n, 0)]


def top_causes(records: Iterable[IncidentRecord], n: int = DEFAULT_TOP_N) -> List[Tuple[str, int]]:
    return top_values(records, "cause_primary", n)


def dominant_cause(records: Iterable[IncidentRecord]) -> str:
    ranked = top_causes(records, 1)
    return ranked[0][0] if ranked else UNKNOWN


@dataclass
class HourlyHistogram:
    counts: List[int] = field(default_factory=lambda: [0] * HOURS_IN_DAY)
    # Records whose time string had a ':' but no parseable hour, or whose
    # hour fell outside 0..23.
    unparsed_count: int = 0

    def pairs(self) -> List[Tuple[int, int]]:
        return list(enumerate(self.counts))


def build_hourly_histogram(records: Iterable[IncidentRecord]) -> HourlyHistogram:
    histogram = HourlyHistogram()
    for record in records:
        hour = parse_hour(record.time)
        if is_valid_hour(hour):
            histogram.counts[hour] += 1
        else:
            histogram.unparsed_count += 1

    if histogram.unparsed_count:
        logger.debug(
            "Skipped records with unusable time strings",
            extra={"unparsed_count": histogram.unparsed_count},
        )
    return histogram


def hourly_histogram(records: Iterable[IncidentRecord]) -> List[Tuple[int, int]]:
    """24 ``(hour, count)`` pairs, zero-count hours included."""
    return build_hourly_histogram(records).pairs()


def peak_hours(
    records: Iterable[IncidentRecord],
    n: int = DEFAULT_PEAK_HOURS,
) -> List[Tuple[int, int]]:
    """Busiest hours first, ties in hour order, zero-count hours dropped."""
    ranked = sorted(hourly_histogram(records), key=lambda pair: pair[1], reverse=True)
    return [pair for pair in ranked[:n] if pair[1] > 0]


def filter_by_hour(records: Iterable[IncidentRecord], hour: int) -> List[IncidentRecord]:
    return [record for record in records if parse_hour(record.time) == hour]


@dataclass(frozen=True)
class HourlyPrediction:
    hour: int
    predicted_risk_score: float
    safety_level: RiskTier
    confidence: float
    sample_size: int


def predict_for_hour(
    hour: int,
    records: Sequence[IncidentRecord],
    population_scores: Optional[Iterable[float]] = None,
) -> HourlyPrediction:
    """
    Classify the historical records that happened at ``hour``.

    Without ``population_scores`` the absolute thresholds apply; an hour
    with no history is safe.
    """
    matching = filter_by_hour(records, hour)
    score = score_group(matching)
    tier = classify(score, population_scores, record_count=len(matching))
    confidence = min(1.0, len(matching) / float(PREDICTION_FULL_CONFIDENCE_SAMPLES))
    return HourlyPrediction(
        hour=hour,
        predicted_risk_score=score,
        safety_level=tier,
        confidence=round(confidence, 2),
        sample_size=len(matching),
    )


def average_response_time(
    records: Iterable[IncidentRecord],
    attribute: str = "ambulance_time_min",
) -> Optional[float]:
    """
    Mean of ``attribute`` over the records that have it.

    Records with a null value are left out of both the sum and the count.
    Returns ``None`` when no record carries the field.
    """
    values = [
        getattr(record, attribute)
        for record in records
        if getattr(record, attribute, None) is not None
    ]
    if not values:
        return None
    return sum(values) / len(values)
