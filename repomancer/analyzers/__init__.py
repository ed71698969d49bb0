"""Rule-table classifiers that turn repository signals into categories."""

from __future__ import annotations

from .architecture import ArchitectureClassifier
from .base import Classifier
from .capabilities import CapabilityClassifier
from .entrypoints import EntryPointClassifier, identify_entry_points
from .gotchas import GotchaHeuristics
from .stack import TechStackClassifier
from .superpowers import derive_super_powers

__all__ = [
    "ArchitectureClassifier",
    "CapabilityClassifier",
    "Classifier",
    "EntryPointClassifier",
    "GotchaHeuristics",
    "TechStackClassifier",
    "derive_super_powers",
    "identify_entry_points",
]
