"""Configuration loading for repomancer (.repomancer.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

import yaml

from .analyzers.gotchas import DEFAULT_DEPENDENCY_THRESHOLD

CONFIG_FILENAME = ".repomancer.yml"

DEFAULT_GITHUB_BASE_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "repomancer"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class GitHubConfig:
    """Connection settings for the GitHub data provider."""

    token: Optional[str] = None
    base_url: str = DEFAULT_GITHUB_BASE_URL
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class AnalysisConfig:
    """Tunables for the classifiers and heuristics."""

    dependency_threshold: int = DEFAULT_DEPENDENCY_THRESHOLD
    max_languages: int = 3


@dataclass(frozen=True)
class ReportConfig:
    """Report rendering preferences."""

    format: str = "markdown"
    templates_dir: Optional[Path] = None


@dataclass(frozen=True)
class RepoMancerConfig:
    """Represents the settings defined in .repomancer.yml plus env overrides."""

    root: Path
    github: GitHubConfig = field(default_factory=GitHubConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def with_token(self, token: Optional[str]) -> "RepoMancerConfig":
        """Return a copy whose GitHub token is replaced when ``token`` is set."""
        if not token:
            return self
        return replace(self, github=replace(self.github, token=token))


ENV_TOKEN_KEYS = ("REPOMANCER_GITHUB_TOKEN", "GITHUB_TOKEN")
ENV_BASE_URL_KEYS = ("REPOMANCER_GITHUB_BASE_URL",)


def load_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> RepoMancerConfig:
    """Load configuration from disk, then apply environment overrides."""
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path or Path.cwd())
    root = config_file.parent.resolve()

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)

    github_data = _as_dict(data.get("github"))
    github = GitHubConfig(
        token=_as_str(github_data.get("token")),
        base_url=(_as_str(github_data.get("base_url")) or DEFAULT_GITHUB_BASE_URL).rstrip("/"),
        timeout=_as_float(github_data.get("timeout")) or 30.0,
        user_agent=_as_str(github_data.get("user_agent")) or DEFAULT_USER_AGENT,
    )
    env_token = _first_env_value(env, ENV_TOKEN_KEYS)
    if env_token:
        github = replace(github, token=env_token)
    env_base_url = _first_env_value(env, ENV_BASE_URL_KEYS)
    if env_base_url:
        github = replace(github, base_url=env_base_url.rstrip("/"))

    analysis_data = _as_dict(data.get("analysis"))
    threshold = _as_int(analysis_data.get("dependency_threshold"))
    max_languages = _as_int(analysis_data.get("max_languages"))
    analysis = AnalysisConfig(
        dependency_threshold=threshold if threshold is not None else DEFAULT_DEPENDENCY_THRESHOLD,
        max_languages=max_languages if max_languages is not None else 3,
    )

    report_data = _as_dict(data.get("report"))
    report_format = (_as_str(report_data.get("format")) or "markdown").lower()
    if report_format not in {"markdown", "json"}:
        raise ConfigError(f"Unsupported report format '{report_format}' in {CONFIG_FILENAME}")
    templates_dir_str = _as_str(report_data.get("templates_dir"))
    report = ReportConfig(
        format=report_format,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
    )

    return RepoMancerConfig(root=root, github=github, analysis=analysis, report=report)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _first_env_value(env: Mapping[str, str], keys: Sequence[str]) -> str | None:
    for key in keys:
        value = env.get(key)
        if value:
            return value
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "AnalysisConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "GitHubConfig",
    "RepoMancerConfig",
    "ReportConfig",
    "load_config",
]
