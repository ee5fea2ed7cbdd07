"""
Severity score for a group of accident records.

    score = 10 * sum(fatalities)
          +  5 * count(severity in {"severe", "fatal"})
          +  2 * count(severity == "moderate")

Severity labels are compared case-insensitively. Fatalities are summed over
every record regardless of its label, so a fatal record counts in both
terms. Injuries and group size do not enter the score.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from .records import IncidentRecord

FATALITY_WEIGHT = 10.0
SEVERE_WEIGHT = 5.0
MODERATE_WEIGHT = 2.0

SEVERE_LABELS = frozenset({"severe", "fatal"})
MODERATE_LABELS = frozenset({"moderate"})
CANONICAL_SEVERITIES = ("fatal", "severe", "moderate", "minor")


def normalize_severity(label: Optional[str]) -> str:
    """Lower-cased canonical label, or ``"unknown"`` for anything else."""
    if not label:
        return "unknown"
    lowered = str(label).strip().lower()
    return lowered if lowered in CANONICAL_SEVERITIES else "unknown"


def score_group(records: Iterable[IncidentRecord]) -> float:
    total_fatalities = 0
    severe_count = 0
    moderate_count = 0

    for record in records:
        total_fatalities += record.fatalities or 0
        label = normalize_severity(record.severity)
        if label in SEVERE_LABELS:
            severe_count += 1
        elif label in MODERATE_LABELS:
            moderate_count += 1

    return (
        FATALITY_WEIGHT * total_fatalities
        + SEVERE_WEIGHT * severe_count
        + MODERATE_WEIGHT * moderate_count
    )


def severity_breakdown(records: Iterable[IncidentRecord]) -> Dict[str, int]:
    """Count records per canonical severity label (plus ``"unknown"``)."""
    counts: Dict[str, int] = {label: 0 for label in CANONICAL_SEVERITIES}
    counts["unknown"] = 0
    for record in records:
        counts[normalize_severity(record.severity)] += 1
    return counts
