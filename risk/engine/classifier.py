"""
Three-tier risk classification of severity scores.

Two policies are supported and the caller picks one by what it passes:

* Population-relative: pass the scores of every group in the current
  partition (e.g. every area). Scores at or above the 75th percentile are
  high-risk, at or above the 25th percentile moderate, the rest safe.
* Absolute: pass no population. Scores >= 50 are high-risk, >= 20 moderate,
  the rest safe. Used for ad hoc selections with nothing to compare to.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .records import IncidentRecord
from .scoring import score_group

logger = logging.getLogger(__name__)

HIGH_RISK_PERCENTILE = 75.0
MODERATE_PERCENTILE = 25.0

HIGH_RISK_THRESHOLD = 50.0
MODERATE_THRESHOLD = 20.0


class RiskTier(str, enum.Enum):
    SAFE = "safe"
    MODERATE = "moderate"
    HIGH_RISK = "high-risk"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]


_TIER_ORDER: List[RiskTier] = [RiskTier.SAFE, RiskTier.MODERATE, RiskTier.HIGH_RISK]
_TIER_LABELS: Dict[RiskTier, str] = {
    RiskTier.SAFE: "Safe",
    RiskTier.MODERATE: "Moderate Risk",
    RiskTier.HIGH_RISK: "High Risk",
}


def percentile(values: Iterable[float], p: float) -> float:
    """
    ``p``-th percentile of ``values`` with linear interpolation between
    order statistics (index ``p / 100 * (n - 1)``). Empty input gives 0.
    """
    data = np.asarray(list(values), dtype=float)
    if data.size == 0:
        return 0.0
    return float(np.percentile(data, p, method="linear"))


def _classify_absolute(score: float) -> RiskTier:
    if score >= HIGH_RISK_THRESHOLD:
        return RiskTier.HIGH_RISK
    if score >= MODERATE_THRESHOLD:
        return RiskTier.MODERATE
    return RiskTier.SAFE


def _classify_relative(score: float, population_scores: Sequence[float]) -> RiskTier:
    p25 = percentile(population_scores, MODERATE_PERCENTILE)
    p75 = percentile(population_scores, HIGH_RISK_PERCENTILE)
    logger.debug(
        "Percentile cut points",
        extra={"p25": p25, "p75": p75, "population_size": len(population_scores)},
    )
    if score >= p75:
        return RiskTier.HIGH_RISK
    if score >= p25:
        return RiskTier.MODERATE
    return RiskTier.SAFE


def classify(
    score: float,
    population_scores: Optional[Iterable[float]] = None,
    *,
    record_count: Optional[int] = None,
) -> RiskTier:
    """
    Map ``score`` to a :class:`RiskTier`.

    ``record_count == 0`` short-circuits to safe whatever the policy, so an
    empty selection never lands in a percentile band. ``population_scores``
    of ``None`` selects the absolute thresholds.
    """
    if record_count == 0:
        return RiskTier.SAFE
    if population_scores is None:
        return _classify_absolute(score)
    return _classify_relative(score, list(population_scores))


def classify_group(
    records: Sequence[IncidentRecord],
    population_scores: Optional[Iterable[float]] = None,
) -> RiskTier:
    return classify(score_group(records), population_scores, record_count=len(records))


def classify_groups(
    groups: Mapping[Hashable, Sequence[IncidentRecord]],
) -> Dict[Hashable, Tuple[float, RiskTier]]:
    """Score every group and classify each against all the others."""
    scores = {key: score_group(records) for key, records in groups.items()}
    population = list(scores.values())
    return {
        key: (scores[key], classify(scores[key], population, record_count=len(records)))
        for key, records in groups.items()
    }
