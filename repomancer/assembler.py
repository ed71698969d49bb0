"""Profile assembly: fetch, classify and merge into one AnalysisProfile."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any, Callable, Coroutine, Dict, List, Optional, Sequence, TypeVar

from .analyzers import (
    ArchitectureClassifier,
    CapabilityClassifier,
    EntryPointClassifier,
    GotchaHeuristics,
    TechStackClassifier,
    derive_super_powers,
)
from .config import AnalysisConfig, GitHubConfig, RepoMancerConfig
from .logging import get_logger
from .models import (
    AnalysisProfile,
    Capability,
    Dependency,
    RepoIdentity,
    RepoMetadata,
    RepoSignals,
)
from .providers import GitHubProvider, RepositoryDataProvider
from .signals import extract_signals, manifest_paths

logger = get_logger("assembler")

DEFAULT_PURPOSE = "No description available"

_INSTALL_COMMANDS: Dict[str, str] = {
    "package.json": "`npm install` or `yarn`",
    "requirements.txt": "`pip install -r requirements.txt`",
    "pyproject.toml": "`pip install .`",
}


ProviderFactory = Callable[[], RepositoryDataProvider]
T = TypeVar("T")


class ProfileAssembler:
    """Coordinates one repository analysis from locator to profile.

    A new provider is created for every call to :meth:`analyze`, so concurrent
    analyses never share client state.
    """

    def __init__(
        self,
        provider_factory: ProviderFactory | None = None,
        *,
        github: GitHubConfig | None = None,
        analysis: AnalysisConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        github_settings = github or GitHubConfig()
        self._provider_factory: ProviderFactory = provider_factory or (
            lambda: GitHubProvider(github_settings)
        )
        settings = analysis or AnalysisConfig()
        self.stack_classifier = TechStackClassifier(max_languages=settings.max_languages)
        self.capability_classifier = CapabilityClassifier()
        self.architecture_classifier = ArchitectureClassifier()
        self.entrypoint_classifier = EntryPointClassifier()
        self.gotcha_heuristics = GotchaHeuristics(
            dependency_threshold=settings.dependency_threshold
        )
        self._clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_config(
        cls, config: RepoMancerConfig, *, token: Optional[str] = None
    ) -> "ProfileAssembler":
        effective = config.with_token(token)
        return cls(github=effective.github, analysis=effective.analysis)

    async def analyze(self, locator: str) -> AnalysisProfile:
        """Analyze the repository referenced by ``locator``.

        Raises ``InvalidLocator`` for unparsable locators and propagates
        ``RepositoryNotFound``/``AccessDenied``/``ProviderError`` from the
        metadata fetch. Every other failure degrades to an empty default.
        """
        async with self._provider_factory() as provider:
            identity = provider.resolve_identity(locator)
            owner, name = identity.owner, identity.name
            logger.info("Analyzing repository: %s", identity.full_name)

            metadata, languages, file_tree, readme = await _join(
                provider.fetch_metadata(owner, name),
                provider.fetch_languages(owner, name),
                provider.fetch_file_tree(owner, name),
                provider.fetch_readme_text(owner, name),
            )
            logger.debug(
                "Fetched %d paths and %d languages for %s",
                len(file_tree),
                len(languages),
                identity.full_name,
            )

            present = manifest_paths(file_tree)
            contents = await _join(
                *(provider.fetch_file_content(owner, name, path) for path in present)
            )
            manifests = dict(zip(present, contents))

        signals = extract_signals(
            file_paths=file_tree,
            manifests=manifests,
            languages=languages,
            readme=readme,
        )
        return self.assemble(identity=identity, metadata=metadata, signals=signals)

    def assemble(
        self, *, identity: RepoIdentity, metadata: RepoMetadata, signals: RepoSignals
    ) -> AnalysisProfile:
        """Run every classifier over ``signals`` and build the profile."""
        capabilities = self.capability_classifier.classify(signals)
        super_powers = derive_super_powers(capability.name for capability in capabilities)
        profile = AnalysisProfile(
            identity=identity,
            purpose=metadata.description or DEFAULT_PURPOSE,
            tech_stack=self.stack_classifier.classify(signals),
            architecture=self.architecture_classifier.classify(signals),
            languages=signals.languages,
            capabilities=capabilities,
            super_powers=super_powers,
            dependencies=signals.dependencies,
            entry_points=self.entrypoint_classifier.classify(signals),
            gotchas=self.gotcha_heuristics.classify(signals),
            integration_guide=build_integration_guide(
                metadata, signals.dependencies, capabilities
            ),
            analyzed_at=self._clock(),
        )
        logger.info(
            "Detected %d capabilities and %d super powers for %s",
            len(profile.capabilities),
            len(profile.super_powers),
            identity.full_name,
        )
        return profile


async def _join(*coros: Coroutine[Any, Any, T]) -> List[T]:
    """Run ``coros`` concurrently and return their results in order.

    The first failure cancels the siblings and is re-raised under its own
    type, so callers never see an ``ExceptionGroup``.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(coro) for coro in coros]
    except ExceptionGroup as failures:
        raise failures.exceptions[0] from None
    return [task.result() for task in tasks]


def build_integration_guide(
    metadata: RepoMetadata,
    dependencies: Sequence[Dependency],
    capabilities: Sequence[Capability],
) -> str:
    """Return numbered getting-started steps for the analyzed repository."""
    sources = []
    for dependency in dependencies:
        if dependency.source and dependency.source not in sources:
            sources.append(dependency.source)
    if sources:
        install = " / ".join(_INSTALL_COMMANDS.get(source, source) for source in sources)
    else:
        install = "No dependencies found"

    lines = [
        "To use this repository:",
        "",
        "1. Clone the repository:",
        f"   `git clone {metadata.clone_url}`",
        "",
        "2. Install dependencies:",
        f"   {install}",
        "",
        "3. Start using the capabilities:",
    ]
    if capabilities:
        lines.extend(f"   - {capability.name}" for capability in capabilities)
    else:
        lines.append("   - No specific capabilities identified")
    return "\n".join(lines)


__all__ = ["DEFAULT_PURPOSE", "ProfileAssembler", "build_integration_guide"]
