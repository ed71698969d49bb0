"""Tests for gotcha heuristics."""

from __future__ import annotations

from repomancer.analyzers.gotchas import (
    API_KEY_GOTCHA,
    DEPENDENCY_BLOAT_GOTCHA,
    GotchaHeuristics,
)
from repomancer.models import RepoSignals


def test_api_key_and_dependency_volume_in_fixed_order(make_signals) -> None:
    production = [f"pkg-{index}" for index in range(40)]
    development = [f"dev-{index}" for index in range(20)]
    signals = make_signals(
        production,
        dev_dependencies=development,
        readme="Set the OPENAI_API_KEY environment variable.",
    )

    gotchas = GotchaHeuristics().classify(signals)

    assert len(signals.dependencies) == 60
    assert gotchas == (API_KEY_GOTCHA, DEPENDENCY_BLOAT_GOTCHA)


def test_api_key_marker_is_case_sensitive(make_signals) -> None:
    heuristics = GotchaHeuristics()

    assert heuristics.classify(make_signals(readme="Grab an API key first")) == (API_KEY_GOTCHA,)
    assert heuristics.classify(make_signals(readme="grab an api key first")) == ()


def test_dependency_threshold_is_exclusive(make_signals) -> None:
    heuristics = GotchaHeuristics(dependency_threshold=3)

    assert heuristics.classify(make_signals(["a", "b", "c"])) == ()
    assert heuristics.classify(make_signals(["a", "b", "c", "d"])) == (DEPENDENCY_BLOAT_GOTCHA,)


def test_no_signals_no_gotchas() -> None:
    assert GotchaHeuristics().classify(RepoSignals()) == ()
