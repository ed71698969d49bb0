"""Base classes for signal classifiers."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..models import RepoSignals

T = TypeVar("T")


class Classifier(ABC, Generic[T]):
    """Contract for pure classifiers that map repository signals to labels."""

    name: str = "classifier"

    @abstractmethod
    def classify(self, signals: RepoSignals) -> T:
        """Return the classification for the given signals without raising."""
