"""Signal extraction from raw provider payloads."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .manifests import MANIFEST_PARSERS, canonical_name
from .models import Dependency, DependencyKind, RepoSignals


def manifest_paths(file_paths: Iterable[str]) -> List[str]:
    """Return the root-level manifest files present in the tree, in parser order."""
    present = set(file_paths)
    return [name for name in MANIFEST_PARSERS if name in present]


def collect_dependencies(manifests: Mapping[str, Optional[str]]) -> Tuple[Dependency, ...]:
    """Parse manifest texts into a kind-tagged list unique by (name, kind).

    Python names are compared in canonical form; the first spelling seen is kept.
    """
    seen: Set[Tuple[str, DependencyKind]] = set()
    dependencies: List[Dependency] = []
    for path, parser in MANIFEST_PARSERS.items():
        text = manifests.get(path)
        if not text:
            continue
        for dependency in parser(text):
            key = (canonical_name(dependency), dependency.kind)
            if key in seen:
                continue
            seen.add(key)
            dependencies.append(dependency)
    return tuple(dependencies)


def normalize_languages(languages: Mapping[str, int] | None) -> Mapping[str, int]:
    histogram: Dict[str, int] = {}
    for language, count in (languages or {}).items():
        try:
            histogram[str(language)] = max(int(count), 0)
        except (TypeError, ValueError):
            histogram[str(language)] = 0
    return MappingProxyType(histogram)


def extract_signals(
    *,
    file_paths: Iterable[str] | None = None,
    manifests: Mapping[str, Optional[str]] | None = None,
    languages: Mapping[str, int] | None = None,
    readme: str | None = None,
) -> RepoSignals:
    """Build the normalized signal bundle consumed by the classifiers.

    Missing inputs are treated as empty; a repository without any manifest
    simply yields no dependencies.
    """
    dependencies = collect_dependencies(manifests or {})
    return RepoSignals(
        dependency_names=frozenset(canonical_name(dep) for dep in dependencies),
        dependencies=dependencies,
        file_paths=tuple(file_paths or ()),
        languages=normalize_languages(languages),
        readme=readme or "",
    )


__all__ = [
    "collect_dependencies",
    "extract_signals",
    "manifest_paths",
    "normalize_languages",
]
