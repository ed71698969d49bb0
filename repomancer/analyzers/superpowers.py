"""Combinatorial rules that derive super powers from capability domains."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple

from .capabilities import (
    CAPABILITY_RULES,
    DOMAIN_3D,
    DOMAIN_GENERATIVE_AI,
    DOMAIN_ON_DEVICE_ML,
)
from ..models import SuperPower


@dataclass(frozen=True)
class SuperPowerRule:
    """Fires when every domain in ``requires`` was detected."""

    requires: FrozenSet[str]
    power: SuperPower

    def matches(self, domains: AbstractSet[str]) -> bool:
        return self.requires.issubset(domains)


SUPER_POWER_RULES: Tuple[SuperPowerRule, ...] = (
    SuperPowerRule(
        frozenset({DOMAIN_GENERATIVE_AI, DOMAIN_ON_DEVICE_ML}),
        SuperPower(
            "Emotion-Responsive AI",
            "Detect emotions and generate content based on them",
        ),
    ),
    SuperPowerRule(
        frozenset({DOMAIN_GENERATIVE_AI, DOMAIN_3D}),
        SuperPower(
            "AI-Powered 3D Generation",
            "Generate 3D scenes and VR environments from text prompts",
        ),
    ),
    SuperPowerRule(
        frozenset({DOMAIN_ON_DEVICE_ML, DOMAIN_3D}),
        SuperPower(
            "Real-Time Computer Vision in 3D",
            "Detect objects, poses, faces in 3D space",
        ),
    ),
    SuperPowerRule(
        frozenset({DOMAIN_GENERATIVE_AI, DOMAIN_ON_DEVICE_ML, DOMAIN_3D}),
        SuperPower(
            "Multimodal Creation Engine",
            "Generate images, video, music, and 3D scenes from emotions and prompts",
        ),
    ),
)

CAPABILITY_DOMAINS: Mapping[str, Optional[str]] = {
    rule.capability.name: rule.capability.domain for rule in CAPABILITY_RULES
}


def detected_domains(
    capability_names: Iterable[str],
    domains: Mapping[str, Optional[str]] = CAPABILITY_DOMAINS,
) -> FrozenSet[str]:
    """Collapse capability names into the set of technology domains present."""
    return frozenset(
        domain for name in capability_names if (domain := domains.get(name)) is not None
    )


def derive_super_powers(
    capability_names: Iterable[str],
    *,
    rules: Sequence[SuperPowerRule] = SUPER_POWER_RULES,
    domains: Mapping[str, Optional[str]] = CAPABILITY_DOMAINS,
) -> Tuple[SuperPower, ...]:
    """Return every super power whose domains are all present, in rule order."""
    present = detected_domains(capability_names, domains)
    return tuple(rule.power for rule in rules if rule.matches(present))


__all__ = [
    "CAPABILITY_DOMAINS",
    "SUPER_POWER_RULES",
    "SuperPowerRule",
    "derive_super_powers",
    "detected_domains",
]
