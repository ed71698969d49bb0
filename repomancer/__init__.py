"""RepoMancer: infer a capability profile for a hosted code repository."""

from __future__ import annotations

import asyncio
from typing import Optional

from .assembler import ProfileAssembler
from .config import RepoMancerConfig, load_config
from .errors import AccessDenied, InvalidLocator, ProviderError, RepositoryNotFound
from .models import AnalysisProfile
from .report import ReportRenderer

__version__ = "0.1.0"


def analyze_repository(
    locator: str,
    token: Optional[str] = None,
    *,
    config: RepoMancerConfig | None = None,
) -> AnalysisProfile:
    """Analyze ``locator`` and return its profile (blocking)."""
    effective = config or load_config()
    assembler = ProfileAssembler.from_config(effective, token=token)
    return asyncio.run(assembler.analyze(locator))


def render_report(profile: AnalysisProfile, fmt: str = "markdown") -> str:
    """Render ``profile`` as Markdown (default) or JSON."""
    return ReportRenderer().render(profile, fmt)


__all__ = [
    "AccessDenied",
    "AnalysisProfile",
    "InvalidLocator",
    "ProfileAssembler",
    "ProviderError",
    "RepositoryNotFound",
    "analyze_repository",
    "render_report",
]
