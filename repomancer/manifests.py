"""Parsers for dependency manifests fetched from a repository."""

from __future__ import annotations

import json
import re
import tomllib
from typing import Any, Callable, Dict, Iterable, List, Tuple

from .logging import get_logger
from .models import Dependency, DependencyKind

logger = get_logger("manifests")

_REQUIREMENT_NAME = re.compile(r"^([A-Za-z0-9][A-Za-z0-9._-]*)(\[[^\]]*\])?\s*(.*)$")


def parse_package_json(text: str) -> List[Dependency]:
    """Return runtime then dev dependencies declared in package.json."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.debug("package.json is not valid JSON; ignoring")
        return []
    if not isinstance(data, dict):
        return []

    dependencies: List[Dependency] = []
    for key, kind in (
        ("dependencies", DependencyKind.PRODUCTION),
        ("devDependencies", DependencyKind.DEVELOPMENT),
    ):
        section = data.get(key)
        if not isinstance(section, dict):
            continue
        for name, version in section.items():
            dependencies.append(
                Dependency(
                    name=str(name),
                    version=str(version) if version is not None else "*",
                    kind=kind,
                    source="package.json",
                )
            )
    return dependencies


def parse_requirements(text: str) -> List[Dependency]:
    """Return production dependencies listed in requirements.txt."""
    dependencies: List[Dependency] = []
    for line in text.splitlines():
        stripped = line.split("#", 1)[0].strip()
        if not stripped or stripped.startswith("-") or "://" in stripped:
            continue
        parsed = _split_requirement(stripped)
        if parsed is None:
            continue
        name, version = parsed
        dependencies.append(
            Dependency(
                name=name,
                version=version,
                kind=DependencyKind.PRODUCTION,
                source="requirements.txt",
            )
        )
    return dependencies


def parse_pyproject(text: str) -> List[Dependency]:
    """Return dependencies from PEP 621 and Poetry tables in pyproject.toml."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError:
        logger.debug("pyproject.toml could not be parsed; ignoring")
        return []

    entries: List[Tuple[str, str, DependencyKind]] = []

    project = data.get("project")
    if isinstance(project, dict):
        entries.extend(_pep621_entries(project.get("dependencies"), DependencyKind.PRODUCTION))
        optional = project.get("optional-dependencies")
        if isinstance(optional, dict):
            for values in optional.values():
                entries.extend(_pep621_entries(values, DependencyKind.DEVELOPMENT))

    tool = data.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    if isinstance(poetry, dict):
        entries.extend(_poetry_entries(poetry.get("dependencies"), DependencyKind.PRODUCTION))
        entries.extend(_poetry_entries(poetry.get("dev-dependencies"), DependencyKind.DEVELOPMENT))
        groups = poetry.get("group")
        if isinstance(groups, dict):
            for group in groups.values():
                if isinstance(group, dict):
                    entries.extend(
                        _poetry_entries(group.get("dependencies"), DependencyKind.DEVELOPMENT)
                    )

    return [
        Dependency(name=name, version=version, kind=kind, source="pyproject.toml")
        for name, version, kind in entries
    ]


MANIFEST_PARSERS: Dict[str, Callable[[str], List[Dependency]]] = {
    "package.json": parse_package_json,
    "requirements.txt": parse_requirements,
    "pyproject.toml": parse_pyproject,
}

PYTHON_MANIFESTS = frozenset({"requirements.txt", "pyproject.toml"})

_NAME_SEPARATORS = re.compile(r"[-_.]+")


def canonical_name(dependency: Dependency) -> str:
    """Return the identifier rules match against.

    PyPI names compare case-insensitively with ``-``, ``_`` and ``.`` treated
    alike (PEP 503); npm names are already canonical.
    """
    if dependency.source in PYTHON_MANIFESTS:
        return _NAME_SEPARATORS.sub("-", dependency.name).lower()
    return dependency.name


def _split_requirement(requirement: str) -> Tuple[str, str] | None:
    requirement = requirement.split(";", 1)[0].strip()
    match = _REQUIREMENT_NAME.match(requirement)
    if not match:
        return None
    version = match.group(3).strip()
    return match.group(1), version or "*"


def _pep621_entries(values: Any, kind: DependencyKind) -> Iterable[Tuple[str, str, DependencyKind]]:
    if not isinstance(values, list):
        return []
    entries = []
    for value in values:
        if not isinstance(value, str):
            continue
        parsed = _split_requirement(value)
        if parsed is not None:
            entries.append((parsed[0], parsed[1], kind))
    return entries


def _poetry_entries(table: Any, kind: DependencyKind) -> Iterable[Tuple[str, str, DependencyKind]]:
    if not isinstance(table, dict):
        return []
    entries = []
    for name, constraint in table.items():
        if str(name).lower() == "python":
            continue
        if isinstance(constraint, dict):
            version = str(constraint.get("version", "*"))
        else:
            version = str(constraint)
        entries.append((str(name), version, kind))
    return entries


__all__ = [
    "MANIFEST_PARSERS",
    "PYTHON_MANIFESTS",
    "canonical_name",
    "parse_package_json",
    "parse_pyproject",
    "parse_requirements",
]
