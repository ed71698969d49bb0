"""Tests for report rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from types import MappingProxyType

import pytest

from repomancer.models import (
    AnalysisProfile,
    ArchitecturePattern,
    Capability,
    Dependency,
    DependencyKind,
    RepoIdentity,
    SuperPower,
)
from repomancer.report import PLACEHOLDERS, ReportRenderer, language_shares


def _profile(**overrides) -> AnalysisProfile:
    values = dict(
        identity=RepoIdentity("acme", "demo"),
        purpose="Demo repository",
        tech_stack=(),
        architecture=ArchitecturePattern.STANDARD,
        languages=MappingProxyType({}),
        capabilities=(),
        super_powers=(),
        dependencies=(),
        entry_points=(),
        gotchas=(),
        integration_guide="To use this repository:",
        analyzed_at=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
    )
    values.update(overrides)
    return AnalysisProfile(**values)


def test_empty_profile_renders_placeholders_for_every_section() -> None:
    report = ReportRenderer().render(_profile())

    assert report.startswith("# RepoMancer Analysis: acme/demo")
    for placeholder in PLACEHOLDERS.values():
        assert placeholder in report
    assert "**Architecture:** Standard repository structure" in report


def test_populated_profile_renders_sections() -> None:
    profile = _profile(
        tech_stack=("React", "TypeScript"),
        architecture=ArchitecturePattern.COMPONENT_BASED,
        languages=MappingProxyType({"TypeScript": 750, "CSS": 250}),
        capabilities=(
            Capability(
                name="React UI Components",
                purpose="Build interfaces",
                use_cases=("Reusable components",),
                example="import React from 'react';",
            ),
        ),
        super_powers=(SuperPower("Emotion-Responsive AI", "Detect emotions"),),
        dependencies=(Dependency("react", "^18.2.0", DependencyKind.PRODUCTION),),
        entry_points=("src/index.tsx",),
        gotchas=("Requires API keys for external services",),
    )

    report = ReportRenderer().render_markdown(profile)

    assert "**Tech Stack:** React, TypeScript" in report
    assert "- TypeScript: 75.0%" in report
    assert "- CSS: 25.0%" in report
    assert "### React UI Components" in report
    assert "- Reusable components" in report
    assert "```javascript\nimport React from 'react';\n```" in report
    assert "- **Emotion-Responsive AI** - Detect emotions" in report
    assert "- **react** (`^18.2.0`) - production" in report
    assert "- `src/index.tsx`" in report
    assert "- Requires API keys for external services" in report
    assert PLACEHOLDERS["dependencies"] not in report
    assert PLACEHOLDERS["capabilities"] not in report


def test_language_shares_sum_to_one_hundred() -> None:
    shares = language_shares({"A": 1, "B": 1, "C": 1})

    assert [share.name for share in shares] == ["A", "B", "C"]
    assert sum(share.percent for share in shares) == pytest.approx(100.0)
    assert sorted(share.percent for share in shares) == [33.3, 33.3, 33.4]


def test_language_shares_handle_zero_totals() -> None:
    assert [share.percent for share in language_shares({"A": 0})] == [0.0]
    assert language_shares({}) == []


def test_json_render_round_trips_profile_fields() -> None:
    profile = _profile(
        dependencies=(Dependency("vite", "^5.0.0", DependencyKind.DEVELOPMENT),),
    )

    payload = json.loads(ReportRenderer().render(profile, "json"))

    assert payload["repo_url"] == "https://github.com/acme/demo"
    assert payload["overview"]["architecture"] == "Standard repository structure"
    assert payload["dependencies"] == [{"name": "vite", "version": "^5.0.0", "type": "dev"}]
    assert payload["super_powers"] == []
    assert payload["analyzed_at"] == "2024-05-01T12:00:00+00:00"


def test_unknown_format_is_rejected() -> None:
    with pytest.raises(ValueError):
        ReportRenderer().render(_profile(), "html")


def test_custom_templates_dir_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "report.md.j2").write_text("Custom {{ profile.repo }}", encoding="utf-8")

    report = ReportRenderer(tmp_path).render(_profile())

    assert report == "Custom demo\n"
