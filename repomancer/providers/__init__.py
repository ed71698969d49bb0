"""Repository data providers."""

from .base import RepositoryDataProvider
from .github import GitHubProvider, parse_github_locator

__all__ = ["GitHubProvider", "RepositoryDataProvider", "parse_github_locator"]
