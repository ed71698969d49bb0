"""Classifier for repository layout and architecture style."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, Tuple

from .base import Classifier
from ..models import ArchitecturePattern, RepoSignals


@dataclass(frozen=True)
class LayoutSignals:
    """Structural facts derived from repository file paths."""

    has_src: bool
    has_components: bool
    has_services: bool
    has_api: bool

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "LayoutSignals":
        normalized = [path.replace("\\", "/") for path in paths]
        return cls(
            has_src=any(path.startswith("src/") for path in normalized),
            has_components=_contains(normalized, ("components",)),
            has_services=_contains(normalized, ("services",)),
            has_api=_contains(normalized, ("api", "routes")),
        )


@dataclass(frozen=True)
class ArchitectureRule:
    predicate: Callable[[LayoutSignals], bool]
    pattern: ArchitecturePattern


# Evaluated in order; the first matching rule wins.
ARCHITECTURE_RULES: Tuple[ArchitectureRule, ...] = (
    ArchitectureRule(
        lambda layout: layout.has_src and layout.has_components and layout.has_services,
        ArchitecturePattern.MODULAR_MONOREPO,
    ),
    ArchitectureRule(lambda layout: layout.has_components, ArchitecturePattern.COMPONENT_BASED),
    ArchitectureRule(lambda layout: layout.has_api, ArchitecturePattern.API_DRIVEN),
)


class ArchitectureClassifier(Classifier[ArchitecturePattern]):
    """Picks an architecture label from structural path signals."""

    name = "architecture"

    def __init__(self, rules: Sequence[ArchitectureRule] = ARCHITECTURE_RULES) -> None:
        self.rules = tuple(rules)

    def classify(self, signals: RepoSignals) -> ArchitecturePattern:
        layout = LayoutSignals.from_paths(signals.file_paths)
        for rule in self.rules:
            if rule.predicate(layout):
                return rule.pattern
        return ArchitecturePattern.STANDARD


def _contains(paths: Sequence[str], needles: Sequence[str]) -> bool:
    return any(needle in path for path in paths for needle in needles)


__all__ = [
    "ARCHITECTURE_RULES",
    "ArchitectureClassifier",
    "ArchitectureRule",
    "LayoutSignals",
]
