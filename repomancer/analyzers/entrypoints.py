"""Classifier to detect conventional entry files across languages."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from .base import Classifier
from ..models import RepoSignals

ENTRY_FILE_PATTERNS: Tuple[str, ...] = (
    # JavaScript / TypeScript
    "index.js",
    "index.ts",
    "index.jsx",
    "index.tsx",
    "src/index.js",
    "src/index.ts",
    "src/index.jsx",
    "src/index.tsx",
    "src/main.js",
    "src/main.ts",
    "src/App.jsx",
    "src/App.tsx",
    "main.js",
    "main.ts",
    "app.js",
    "app.ts",
    # Python
    "main.py",
    "__main__.py",
    # Go / Rust
    "main.go",
    "src/main.rs",
)


def matches_entry_pattern(path: str, patterns: Sequence[str] = ENTRY_FILE_PATTERNS) -> bool:
    """Return True when ``path`` ends with a whole-segment entry pattern.

    This is stricter than a bare string suffix test: ``app/domain.py`` does
    not match ``main.py`` and ``lib/reindex.js`` does not match ``index.js``,
    while ``packages/web/src/index.ts`` still matches ``src/index.ts``.
    """
    norm = path.replace("\\", "/")
    return any(norm == pattern or norm.endswith(f"/{pattern}") for pattern in patterns)


def identify_entry_points(
    paths: Iterable[str], patterns: Sequence[str] = ENTRY_FILE_PATTERNS
) -> Tuple[str, ...]:
    """Return every path matching an entry pattern, in file-tree order."""
    return tuple(path for path in paths if matches_entry_pattern(path, patterns))


class EntryPointClassifier(Classifier[Tuple[str, ...]]):
    """Lists likely entry files for quick-start guidance."""

    name = "entrypoints"

    def __init__(self, patterns: Sequence[str] = ENTRY_FILE_PATTERNS) -> None:
        self.patterns = tuple(patterns)

    def classify(self, signals: RepoSignals) -> Tuple[str, ...]:
        return identify_entry_points(signals.file_paths, self.patterns)


__all__ = [
    "ENTRY_FILE_PATTERNS",
    "EntryPointClassifier",
    "identify_entry_points",
    "matches_entry_pattern",
]
