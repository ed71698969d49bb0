"""Tests for the architecture classifier."""

from __future__ import annotations

from repomancer.analyzers.architecture import ArchitectureClassifier, LayoutSignals
from repomancer.models import ArchitecturePattern
from repomancer.signals import extract_signals


def _classify(paths: list[str]) -> ArchitecturePattern:
    return ArchitectureClassifier().classify(extract_signals(file_paths=paths))


def test_src_components_and_services_is_modular_monorepo() -> None:
    paths = ["src/components/App.tsx", "src/services/api.ts", "src/index.ts"]

    assert _classify(paths) == ArchitecturePattern.MODULAR_MONOREPO
    assert _classify(paths).value == "Monorepo with modular architecture"


def test_removing_services_collapses_to_component_based() -> None:
    paths = ["src/components/App.tsx", "src/index.ts"]

    assert _classify(paths) == ArchitecturePattern.COMPONENT_BASED
    assert _classify(paths).value == "Component-based architecture"


def test_components_outside_src_is_component_based() -> None:
    assert _classify(["components/Button.vue", "services/auth.js"]) == (
        ArchitecturePattern.COMPONENT_BASED
    )


def test_api_or_routes_is_api_driven() -> None:
    assert _classify(["server/routes/users.js"]) == ArchitecturePattern.API_DRIVEN
    assert _classify(["app/api/handlers.py"]) == ArchitecturePattern.API_DRIVEN


def test_empty_tree_defaults_to_standard_structure() -> None:
    assert _classify([]) == ArchitecturePattern.STANDARD
    assert _classify(["README.md", "setup.cfg"]) == ArchitecturePattern.STANDARD


def test_layout_signals_normalise_backslashes() -> None:
    layout = LayoutSignals.from_paths(["src\\components\\App.tsx"])

    assert layout.has_src is True
    assert layout.has_components is True
    assert layout.has_services is False
    assert layout.has_api is False
