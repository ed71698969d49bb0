"""Core data models shared across repomancer components."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple


class DependencyKind(str, Enum):
    """Whether a dependency is needed at runtime or only for development."""

    PRODUCTION = "production"
    DEVELOPMENT = "dev"


class ArchitecturePattern(str, Enum):
    """Fixed set of architecture labels inferred from the file tree."""

    MODULAR_MONOREPO = "Monorepo with modular architecture"
    COMPONENT_BASED = "Component-based architecture"
    API_DRIVEN = "API-driven architecture"
    STANDARD = "Standard repository structure"


@dataclass(frozen=True)
class Dependency:
    """A dependency declared in a repository manifest."""

    name: str
    version: str
    kind: DependencyKind
    source: Optional[str] = None


@dataclass(frozen=True)
class Capability:
    """A functional ability inferred from repository signals."""

    name: str
    purpose: str
    use_cases: Tuple[str, ...]
    example: str
    domain: Optional[str] = None


@dataclass(frozen=True)
class SuperPower:
    """Emergent label formed by co-occurring capability domains."""

    label: str
    description: str

    def __str__(self) -> str:
        return f"{self.label} - {self.description}"


@dataclass(frozen=True)
class RepoIdentity:
    """Owner/name pair that identifies a hosted repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def canonical_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.name}"


@dataclass(frozen=True)
class RepoMetadata:
    """Repository metadata returned by the data provider."""

    description: Optional[str]
    clone_url: str
    default_branch: Optional[str] = None


@dataclass(frozen=True)
class RepoSignals:
    """Normalized facts handed to the classifiers."""

    dependency_names: FrozenSet[str] = frozenset()
    dependencies: Tuple[Dependency, ...] = ()
    file_paths: Tuple[str, ...] = ()
    languages: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    readme: str = ""


@dataclass(frozen=True)
class AnalysisProfile:
    """Complete, immutable result of one repository analysis."""

    identity: RepoIdentity
    purpose: str
    tech_stack: Tuple[str, ...]
    architecture: ArchitecturePattern
    languages: Mapping[str, int]
    capabilities: Tuple[Capability, ...]
    super_powers: Tuple[SuperPower, ...]
    dependencies: Tuple[Dependency, ...]
    entry_points: Tuple[str, ...]
    gotchas: Tuple[str, ...]
    integration_guide: str
    analyzed_at: datetime

    @property
    def owner(self) -> str:
        return self.identity.owner

    @property
    def repo(self) -> str:
        return self.identity.name

    @property
    def url(self) -> str:
        return self.identity.canonical_url

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready representation of the profile."""
        return {
            "owner": self.identity.owner,
            "repo": self.identity.name,
            "repo_url": self.identity.canonical_url,
            "overview": {
                "purpose": self.purpose,
                "tech_stack": list(self.tech_stack),
                "architecture": self.architecture.value,
                "languages": dict(self.languages),
            },
            "capabilities": [
                {
                    "name": cap.name,
                    "purpose": cap.purpose,
                    "use_cases": list(cap.use_cases),
                    "example": cap.example,
                }
                for cap in self.capabilities
            ],
            "super_powers": [
                {"label": power.label, "description": power.description}
                for power in self.super_powers
            ],
            "dependencies": [
                {"name": dep.name, "version": dep.version, "type": dep.kind.value}
                for dep in self.dependencies
            ],
            "entry_points": list(self.entry_points),
            "integration_guide": self.integration_guide,
            "gotchas": list(self.gotchas),
            "analyzed_at": self.analyzed_at.isoformat(),
        }
