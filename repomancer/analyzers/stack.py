"""Tech-stack classifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Sequence, Tuple

from .base import Classifier
from ..models import RepoSignals


@dataclass(frozen=True)
class StackRule:
    """Adds ``label`` to the stack when ``identifier`` is a declared dependency."""

    identifier: str
    label: str


STACK_RULES: Tuple[StackRule, ...] = (
    StackRule("react", "React"),
    StackRule("vue", "Vue"),
    StackRule("next", "Next.js"),
    StackRule("express", "Express"),
    StackRule("typescript", "TypeScript"),
    StackRule("vite", "Vite"),
    StackRule("@tensorflow/tfjs", "TensorFlow.js"),
    StackRule("three", "Three.js"),
    StackRule("@google/generative-ai", "Google Gemini"),
    StackRule("openai", "OpenAI"),
    StackRule("fastapi", "FastAPI"),
    StackRule("django", "Django"),
    StackRule("flask", "Flask"),
)


class TechStackClassifier(Classifier[Tuple[str, ...]]):
    """Labels known frameworks, then appends the dominant languages."""

    name = "stack"

    def __init__(
        self,
        rules: Sequence[StackRule] = STACK_RULES,
        *,
        max_languages: int = 3,
    ) -> None:
        self.rules = tuple(rules)
        self.max_languages = max_languages

    def classify(self, signals: RepoSignals) -> Tuple[str, ...]:
        stack: List[str] = [
            rule.label for rule in self.rules if rule.identifier in signals.dependency_names
        ]
        for language in top_languages(signals.languages, self.max_languages):
            if language not in stack:
                stack.append(language)
        return tuple(stack)


def top_languages(languages: Mapping[str, int], limit: int) -> List[str]:
    """Return up to ``limit`` language names by descending byte count.

    Ties keep the histogram's own order.
    """
    if limit <= 0:
        return []
    ordered = sorted(languages.items(), key=lambda item: item[1], reverse=True)
    return [name for name, _ in ordered[:limit]]


__all__ = ["STACK_RULES", "StackRule", "TechStackClassifier", "top_languages"]
