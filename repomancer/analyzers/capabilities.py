"""Capability classifier driven by dependency identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Sequence, Tuple

from .base import Classifier
from ..models import Capability, RepoSignals

DOMAIN_GENERATIVE_AI = "generative-ai"
DOMAIN_ON_DEVICE_ML = "on-device-ml"
DOMAIN_3D = "3d"


@dataclass(frozen=True)
class CapabilityRule:
    """Emits ``capability`` when any alias is among the dependency names."""

    aliases: FrozenSet[str]
    capability: Capability

    def matches(self, dependency_names: AbstractSet[str]) -> bool:
        return not self.aliases.isdisjoint(dependency_names)


CAPABILITY_RULES: Tuple[CapabilityRule, ...] = (
    CapabilityRule(
        aliases=frozenset({"react"}),
        capability=Capability(
            name="React UI Components",
            purpose="Build interactive user interfaces with component-based architecture",
            use_cases=(
                "Create reusable UI components",
                "Build interactive web applications",
            ),
            example="import React from 'react';\nimport { Component } from './path/to/component';",
        ),
    ),
    CapabilityRule(
        aliases=frozenset(
            {
                "@google/generative-ai",
                "openai",
                "@anthropic-ai/sdk",
                "anthropic",
                "google-generativeai",
            }
        ),
        capability=Capability(
            name="Generative AI Integration",
            purpose=(
                "Connect to and use Generative AI models for text, image, "
                "and multimodal generation"
            ),
            use_cases=(
                "Generate AI-powered content",
                "Build chatbots",
                "Create images",
            ),
            example="const response = await genAI.generateContent(prompt);",
            domain=DOMAIN_GENERATIVE_AI,
        ),
    ),
    CapabilityRule(
        aliases=frozenset({"@tensorflow/tfjs", "@tensorflow/tfjs-node"}),
        capability=Capability(
            name="Machine Learning",
            purpose="Run machine learning models directly in the browser or Node.js",
            use_cases=(
                "Image classification",
                "Object detection",
                "Pose estimation",
            ),
            example="const model = await tf.loadModel(modelUrl);",
            domain=DOMAIN_ON_DEVICE_ML,
        ),
    ),
    CapabilityRule(
        aliases=frozenset({"three", "@react-three/fiber"}),
        capability=Capability(
            name="3D Graphics & VR/AR",
            purpose="Create immersive 3D scenes, VR experiences, and AR visualizations",
            use_cases=(
                "Build VR/AR experiences",
                "Create 3D visualizations",
            ),
            example="const scene = new THREE.Scene();",
            domain=DOMAIN_3D,
        ),
    ),
)


class CapabilityClassifier(Classifier[Tuple[Capability, ...]]):
    """Maps dependency identifiers to capability records, one per rule."""

    name = "capabilities"

    def __init__(self, rules: Sequence[CapabilityRule] = CAPABILITY_RULES) -> None:
        self.rules = tuple(rules)

    def classify(self, signals: RepoSignals) -> Tuple[Capability, ...]:
        capabilities = []
        seen = set()
        for rule in self.rules:
            if rule.capability.name in seen or not rule.matches(signals.dependency_names):
                continue
            seen.add(rule.capability.name)
            capabilities.append(rule.capability)
        return tuple(capabilities)


__all__ = [
    "CAPABILITY_RULES",
    "CapabilityClassifier",
    "CapabilityRule",
    "DOMAIN_3D",
    "DOMAIN_GENERATIVE_AI",
    "DOMAIN_ON_DEVICE_ML",
]
