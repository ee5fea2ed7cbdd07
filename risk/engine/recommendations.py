"""
Advisory content keyed on an area's dominant accident cause.

``RECOMMENDATION_RULES`` is evaluated top to bottom and the first rule with
a keyword contained (case-insensitively) in the cause wins. Causes that
match nothing get ``DEFAULT_ADVISORY``. The wording is editorial content;
the keyword -> category mapping and the fallback are what callers rely on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Advisory:
    authority: Tuple[str, ...]
    civilian: Tuple[str, ...]

    def as_dict(self) -> Dict[str, List[str]]:
        return {"authority": list(self.authority), "civilian": list(self.civilian)}


@dataclass(frozen=True)
class RecommendationRule:
    category: str
    keywords: Tuple[str, ...]
    advisory: Advisory

    def matches(self, cause: str) -> bool:
        lowered = cause.lower()
        return any(keyword in lowered for keyword in self.keywords)


RECOMMENDATION_RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule(
        category="weather",
        keywords=("weather", "rain", "fog"),
        advisory=Advisory(
            authority=(
                "Improve road drainage and repair surfaces that hold standing water.",
                "Install fog lights and high-visibility lane markings on this stretch.",
                "Publish live weather alerts on electronic signboards.",
                "Deploy traffic personnel during heavy rain and low-visibility hours.",
            ),
            civilian=(
                "Reduce speed and keep extra distance in rain or fog.",
                "Use low-beam headlights and fog lamps when visibility drops.",
                "Avoid sudden braking on wet roads.",
                "Check weather updates before starting your journey.",
            ),
        ),
    ),
    RecommendationRule(
        category="speeding",
        keywords=("speed", "overspeeding"),
        advisory=Advisory(
            authority=(
                "Install speed cameras and automated enforcement on this corridor.",
                "Add speed breakers and rumble strips near junctions.",
                "Review and clearly sign posted speed limits.",
                "Increase fines and patrols for repeat speeding offences.",
            ),
            civilian=(
                "Stay within the posted speed limit at all times.",
                "Leave earlier so you are not tempted to rush.",
                "Slow down near schools, markets and crossings.",
                "Use navigation apps that warn about speed limits.",
            ),
        ),
    ),
    RecommendationRule(
        category="inattention",
        keywords=("inattention", "distract", "signal", "red light", "mobile", "phone"),
        advisory=Advisory(
            authority=(
                "Enforce penalties for mobile phone use while driving.",
                "Install red-light cameras at signalised junctions.",
                "Improve signal visibility and timing at busy intersections.",
                "Run awareness campaigns on distracted driving.",
            ),
            civilian=(
                "Keep your phone out of reach while driving.",
                "Never jump a signal, even when the road looks clear.",
                "Stay alert at intersections and watch for turning vehicles.",
                "Take a break if you feel tired or distracted.",
            ),
        ),
    ),
    RecommendationRule(
        category="alcohol",
        keywords=("alcohol", "drunk"),
        advisory=Advisory(
            authority=(
                "Set up breath-analyser checkpoints, especially at night and on weekends.",
                "Suspend licences of repeat drunk-driving offenders.",
                "Work with bars and restaurants to promote designated drivers.",
                "Extend late-night public transport on this route.",
            ),
            civilian=(
                "Never drive after drinking; use a cab or public transport.",
                "Choose a designated driver before going out.",
                "Stop friends from driving under the influence.",
                "Report suspected drunk drivers to the traffic police.",
            ),
        ),
    ),
    RecommendationRule(
        category="pedestrian",
        keywords=("pedestrian", "jaywalk"),
        advisory=Advisory(
            authority=(
                "Build foot overbridges, subways or marked zebra crossings.",
                "Install pedestrian signals with countdown timers.",
                "Clear encroachments from footpaths.",
                "Improve street lighting around crossings.",
            ),
            civilian=(
                "Cross only at marked crossings or foot overbridges.",
                "Wear light or reflective clothing when walking at night.",
                "Drivers: slow down and yield to pedestrians at crossings.",
                "Avoid using your phone while crossing the road.",
            ),
        ),
    ),
    RecommendationRule(
        category="reckless",
        keywords=("overtak", "reckless"),
        advisory=Advisory(
            authority=(
                "Install median barriers to stop wrong-side overtaking.",
                "Mark no-overtaking zones on curves and narrow stretches.",
                "Increase patrols and penalties for rash driving.",
                "Use CCTV to prosecute dangerous lane changes.",
            ),
            civilian=(
                "Overtake only when the road ahead is clearly visible.",
                "Signal before every lane change and check mirrors.",
                "Keep calm and do not race other vehicles.",
                "Report rash drivers to the traffic helpline.",
            ),
        ),
    ),
)

DEFAULT_ADVISORY = Advisory(
    authority=(
        "Carry out a road safety audit of this area.",
        "Improve signage, lighting and lane markings.",
        "Increase traffic police presence during peak hours.",
        "Reduce emergency response times with nearby ambulance staging.",
    ),
    civilian=(
        "Follow traffic rules and posted speed limits.",
        "Wear a seatbelt or helmet on every trip.",
        "Stay alert and avoid distractions while driving.",
        "Plan routes that avoid high-risk areas where possible.",
    ),
)


def match_category(cause: Optional[str]) -> Optional[str]:
    """Name of the first rule matching ``cause``, or ``None``."""
    rule = _match_rule(cause)
    return rule.category if rule else None


def _match_rule(cause: Optional[str]) -> Optional[RecommendationRule]:
    if not cause:
        return None
    for rule in RECOMMENDATION_RULES:
        if rule.matches(cause):
            return rule
    return None


def recommend(dominant_cause: Optional[str]) -> Dict[str, List[str]]:
    rule = _match_rule(dominant_cause)
    advisory = rule.advisory if rule else DEFAULT_ADVISORY
    return advisory.as_dict()
