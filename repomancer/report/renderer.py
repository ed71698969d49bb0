"""Renders an AnalysisProfile as Markdown or JSON."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Tuple

from jinja2 import Environment, FileSystemLoader

from ..models import AnalysisProfile

TEMPLATE_NAME = "report.md.j2"

PLACEHOLDERS: Dict[str, str] = {
    "tech_stack": "None identified",
    "languages": "No language data available.",
    "super_powers": "No unique super powers identified.",
    "capabilities": "No core capabilities identified.",
    "dependencies": "No dependencies found.",
    "entry_points": "No entry points identified.",
    "gotchas": "No known gotchas identified.",
}

SUPPORTED_FORMATS = ("markdown", "json")


@dataclass(frozen=True)
class LanguageShare:
    name: str
    bytes: int
    percent: float


def language_shares(languages: Mapping[str, int]) -> List[LanguageShare]:
    """Return languages by descending size with percentages summing to 100.0.

    Percentages carry one decimal; the largest-remainder method distributes
    rounding slack so the displayed values always add up.
    """
    ordered: List[Tuple[str, int]] = sorted(
        ((name, max(count, 0)) for name, count in languages.items()),
        key=lambda item: item[1],
        reverse=True,
    )
    total = sum(count for _, count in ordered)
    if total <= 0:
        return [LanguageShare(name, count, 0.0) for name, count in ordered]

    exact = [count * 1000 / total for _, count in ordered]
    tenths = [math.floor(value) for value in exact]
    slack = 1000 - sum(tenths)
    by_remainder = sorted(range(len(exact)), key=lambda i: exact[i] - tenths[i], reverse=True)
    for index in by_remainder[:slack]:
        tenths[index] += 1
    return [
        LanguageShare(name, count, tenths[i] / 10)
        for i, (name, count) in enumerate(ordered)
    ]


class ReportRenderer:
    """Formats analysis profiles for humans (Markdown) or tools (JSON)."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, profile: AnalysisProfile, fmt: str = "markdown") -> str:
        fmt = fmt.lower()
        if fmt == "json":
            return self.render_json(profile)
        if fmt == "markdown":
            return self.render_markdown(profile)
        raise ValueError(f"Unsupported report format: {fmt}")

    def render_markdown(self, profile: AnalysisProfile) -> str:
        template = self._env.get_template(TEMPLATE_NAME)
        rendered = template.render(
            profile=profile,
            analyzed_at=profile.analyzed_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
            languages=language_shares(profile.languages),
            placeholders=PLACEHOLDERS,
        )
        return rendered.strip() + "\n"

    @staticmethod
    def render_json(profile: AnalysisProfile) -> str:
        return json.dumps(profile.to_dict(), indent=2) + "\n"

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


__all__ = [
    "LanguageShare",
    "PLACEHOLDERS",
    "ReportRenderer",
    "SUPPORTED_FORMATS",
    "language_shares",
]
