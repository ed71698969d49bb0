from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Callable, Dict, Iterable, List, Mapping, Optional

import pytest

from repomancer.errors import ProviderError
from repomancer.models import RepoIdentity, RepoMetadata, RepoSignals
from repomancer.providers.github import parse_github_locator
from repomancer.signals import extract_signals

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class FakeProvider:
    """In-memory provider that records calls and serves canned payloads."""

    def __init__(
        self,
        *,
        metadata: RepoMetadata | None = None,
        metadata_error: ProviderError | None = None,
        languages: Mapping[str, int] | None = None,
        file_tree: Iterable[str] = (),
        readme: str = "",
        files: Mapping[str, str] | None = None,
    ) -> None:
        self.metadata = metadata or RepoMetadata(
            description="Demo repository",
            clone_url="https://github.com/acme/demo.git",
            default_branch="main",
        )
        self.metadata_error = metadata_error
        self.languages = dict(languages or {})
        self.file_tree = list(file_tree)
        self.readme = readme
        self.files = dict(files or {})
        self.calls: List[str] = []
        self.closed = False

    async def __aenter__(self) -> "FakeProvider":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True

    def resolve_identity(self, locator: str) -> RepoIdentity:
        return parse_github_locator(locator)

    async def fetch_metadata(self, owner: str, name: str) -> RepoMetadata:
        self.calls.append("metadata")
        if self.metadata_error is not None:
            raise self.metadata_error
        return self.metadata

    async def fetch_languages(self, owner: str, name: str) -> Dict[str, int]:
        self.calls.append("languages")
        return dict(self.languages)

    async def fetch_file_tree(self, owner: str, name: str) -> List[str]:
        self.calls.append("tree")
        return list(self.file_tree)

    async def fetch_readme_text(self, owner: str, name: str) -> str:
        self.calls.append("readme")
        return self.readme

    async def fetch_file_content(self, owner: str, name: str, path: str) -> Optional[str]:
        self.calls.append(f"content:{path}")
        return self.files.get(path)


@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    """Return a factory for configured fake providers."""
    return FakeProvider


@pytest.fixture
def make_signals() -> Callable[..., RepoSignals]:
    """Build RepoSignals from a plain dependency list and optional extras."""

    def _make(
        dependencies: Iterable[str] = (),
        *,
        dev_dependencies: Iterable[str] = (),
        file_paths: Iterable[str] = (),
        languages: Mapping[str, int] | None = None,
        readme: str = "",
    ) -> RepoSignals:
        package = {
            "dependencies": {name: "^1.0.0" for name in dependencies},
            "devDependencies": {name: "^1.0.0" for name in dev_dependencies},
        }

        return extract_signals(
            file_paths=file_paths,
            manifests={"package.json": json.dumps(package)},
            languages=languages,
            readme=readme,
        )

    return _make


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def _reset_repomancer_logger():
    yield
    logger = logging.getLogger("repomancer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
