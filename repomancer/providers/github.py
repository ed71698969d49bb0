"""GitHub REST API implementation of the repository data provider."""

from __future__ import annotations

import base64
import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..config import GitHubConfig
from ..errors import AccessDenied, InvalidLocator, ProviderError, RepositoryNotFound
from ..logging import get_logger, redact
from ..models import RepoIdentity, RepoMetadata

logger = get_logger("providers.github")

_URL_LOCATOR = re.compile(
    r"github\.com[/:](?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+?)(?:\.git)?(?:[/?#].*)?$"
)
_SHORT_LOCATOR = re.compile(r"^(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+?)(?:\.git)?$")


def parse_github_locator(locator: str) -> RepoIdentity:
    """Parse a GitHub URL, SSH remote or ``owner/name`` shorthand."""
    candidate = (locator or "").strip()
    match = _URL_LOCATOR.search(candidate) or _SHORT_LOCATOR.match(candidate)
    if not match:
        raise InvalidLocator(f"Invalid GitHub repository locator: {locator!r}")
    owner, name = match.group("owner"), match.group("name")
    if owner in {".", ".."} or name in {".", ".."}:
        raise InvalidLocator(f"Invalid GitHub repository locator: {locator!r}")
    return RepoIdentity(owner=owner, name=name)


class GitHubProvider:
    """Fetches repository signals from the GitHub REST API.

    Each instance owns one ``httpx.AsyncClient``; open a fresh provider per
    analysis and close it with ``aclose`` or ``async with``.
    """

    def __init__(
        self,
        settings: GitHubConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or GitHubConfig()
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.settings.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.settings.token:
            headers["Authorization"] = f"Bearer {self.settings.token}"
        self._client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            headers=headers,
            timeout=self.settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubProvider":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def resolve_identity(self, locator: str) -> RepoIdentity:
        return parse_github_locator(locator)

    async def fetch_metadata(self, owner: str, name: str) -> RepoMetadata:
        data = await self._get_json(_repo_path(owner, name))
        if not isinstance(data, dict):
            raise ProviderError(f"Unexpected repository payload for {owner}/{name}")
        description = data.get("description")
        clone_url = data.get("clone_url") or f"https://github.com/{owner}/{name}.git"
        default_branch = data.get("default_branch")
        return RepoMetadata(
            description=description if isinstance(description, str) else None,
            clone_url=str(clone_url),
            default_branch=default_branch if isinstance(default_branch, str) else None,
        )

    async def fetch_languages(self, owner: str, name: str) -> Dict[str, int]:
        try:
            data = await self._get_json(f"{_repo_path(owner, name)}/languages")
        except ProviderError as exc:
            self._log_degraded("languages", owner, name, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {
            str(language): count
            for language, count in data.items()
            if isinstance(count, int) and not isinstance(count, bool)
        }

    async def fetch_file_tree(self, owner: str, name: str) -> List[str]:
        try:
            data = await self._get_json(
                f"{_repo_path(owner, name)}/git/trees/HEAD", params={"recursive": "1"}
            )
        except ProviderError as exc:
            self._log_degraded("file tree", owner, name, exc)
            return []
        tree = data.get("tree") if isinstance(data, dict) else None
        if not isinstance(tree, list):
            return []
        if isinstance(data, dict) and data.get("truncated"):
            logger.warning("File tree for %s/%s was truncated by GitHub", owner, name)
        return [
            item["path"]
            for item in tree
            if isinstance(item, dict) and item.get("type") == "blob" and isinstance(item.get("path"), str)
        ]

    async def fetch_readme_text(self, owner: str, name: str) -> str:
        try:
            data = await self._get_json(f"{_repo_path(owner, name)}/readme")
        except ProviderError as exc:
            self._log_degraded("README", owner, name, exc)
            return ""
        return _decode_content(data) or ""

    async def fetch_file_content(self, owner: str, name: str, path: str) -> Optional[str]:
        try:
            data = await self._get_json(
                f"{_repo_path(owner, name)}/contents/{quote(path, safe='/')}"
            )
        except ProviderError as exc:
            self._log_degraded(path, owner, name, exc)
            return None
        return _decode_content(data)

    async def _get_json(self, path: str, params: Dict[str, str] | None = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise ProviderError(f"GitHub request to {path} failed: {exc}") from exc

        status = response.status_code
        if status == 404:
            raise RepositoryNotFound(f"GitHub resource not found: {path}", status_code=status)
        if status in (401, 403):
            raise AccessDenied(
                f"GitHub denied access to {path} (HTTP {status})", status_code=status
            )
        if status >= 400:
            raise ProviderError(f"GitHub request to {path} failed with HTTP {status}", status_code=status)

        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(f"GitHub returned invalid JSON for {path}") from exc

    def _log_degraded(self, what: str, owner: str, name: str, exc: Exception) -> None:
        logger.warning(
            "Could not fetch %s for %s/%s; continuing without it: %s",
            what,
            owner,
            name,
            redact(str(exc), self.settings.token),
        )


def _repo_path(owner: str, name: str) -> str:
    return f"/repos/{quote(owner, safe='')}/{quote(name, safe='')}"


def _decode_content(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    content = data.get("content")
    if not isinstance(content, str):
        return None
    if data.get("encoding", "base64") != "base64":
        return content
    try:
        return base64.b64decode(content).decode("utf-8", errors="replace")
    except ValueError:
        return None


__all__ = ["GitHubProvider", "parse_github_locator"]
