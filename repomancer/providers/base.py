"""Contract for repository data providers consumed by the assembler."""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol

from ..models import RepoIdentity, RepoMetadata


class RepositoryDataProvider(Protocol):
    """Source of raw repository signals.

    ``fetch_metadata`` is the only mandatory fetch: it raises
    ``RepositoryNotFound``, ``AccessDenied`` or ``ProviderError``. The other
    fetches return an empty default when the remote call fails.
    Providers are async context managers and are opened once per analysis.
    """

    async def __aenter__(self) -> "RepositoryDataProvider": ...

    async def __aexit__(self, *exc_info: object) -> None: ...

    def resolve_identity(self, locator: str) -> RepoIdentity: ...

    async def fetch_metadata(self, owner: str, name: str) -> RepoMetadata: ...

    async def fetch_languages(self, owner: str, name: str) -> Dict[str, int]: ...

    async def fetch_file_tree(self, owner: str, name: str) -> List[str]: ...

    async def fetch_readme_text(self, owner: str, name: str) -> str: ...

    async def fetch_file_content(self, owner: str, name: str, path: str) -> Optional[str]: ...


__all__ = ["RepositoryDataProvider"]
