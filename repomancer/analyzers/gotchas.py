"""Heuristics that flag operational caveats."""

from __future__ import annotations

from typing import List, Tuple

from .base import Classifier
from ..models import RepoSignals

DEFAULT_DEPENDENCY_THRESHOLD = 50

API_KEY_MARKERS: Tuple[str, ...] = ("API key", "API_KEY")

API_KEY_GOTCHA = "Requires API keys for external services"
DEPENDENCY_BLOAT_GOTCHA = "Large number of dependencies - install time may be significant"


class GotchaHeuristics(Classifier[Tuple[str, ...]]):
    """Checks README text and dependency volume, in that order."""

    name = "gotchas"

    def __init__(self, *, dependency_threshold: int = DEFAULT_DEPENDENCY_THRESHOLD) -> None:
        self.dependency_threshold = dependency_threshold

    def classify(self, signals: RepoSignals) -> Tuple[str, ...]:
        gotchas: List[str] = []
        if any(marker in signals.readme for marker in API_KEY_MARKERS):
            gotchas.append(API_KEY_GOTCHA)
        if len(signals.dependencies) > self.dependency_threshold:
            gotchas.append(DEPENDENCY_BLOAT_GOTCHA)
        return tuple(gotchas)


__all__ = [
    "API_KEY_GOTCHA",
    "API_KEY_MARKERS",
    "DEFAULT_DEPENDENCY_THRESHOLD",
    "DEPENDENCY_BLOAT_GOTCHA",
    "GotchaHeuristics",
]
