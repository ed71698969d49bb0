"""Exception taxonomy for repository analysis."""

from __future__ import annotations


class RepoMancerError(RuntimeError):
    """Base class for errors that abort an analysis."""


class InvalidLocator(RepoMancerError):
    """Raised when a repository reference cannot be parsed into owner/name."""


class ProviderError(RepoMancerError):
    """Raised when a mandatory provider request fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RepositoryNotFound(ProviderError):
    """The target repository does not exist."""


class AccessDenied(ProviderError):
    """The credentials in use cannot read the target repository."""


__all__ = [
    "AccessDenied",
    "InvalidLocator",
    "ProviderError",
    "RepoMancerError",
    "RepositoryNotFound",
]
