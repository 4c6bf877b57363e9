"""Data models for the particle field and the orbital display."""
from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, Union


@dataclass
class Particle:
    """A single drifting dot of the background starfield."""

    x: float
    y: float
    size: float
    speed: float
    alpha: float


@dataclass(frozen=True)
class Satellite:
    """Visual and motion parameters of one orbiting blip."""

    size: float
    altitude_factor: float
    angular_speed: float
    offset_deg: float
    phase_offset: float
    color_index: int
    source_country: str
    weight: int


@dataclass(frozen=True)
class DistributionEntry:
    """Satellite count attributed to one country."""

    country: str
    count: int

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, numbers.Integral):
            raise ValueError(f"count for {self.country!r} must be an integer")
        if self.count < 0:
            raise ValueError(f"count for {self.country!r} must be non-negative")


DistributionLike = Union[DistributionEntry, Mapping[str, object], Sequence[object]]
DistributionSignature = tuple[tuple[str, int], ...]


def coerce_distribution(items: Iterable[DistributionLike]) -> tuple[DistributionEntry, ...]:
    """Normalise entries, ``(country, count)`` pairs or mappings to entries."""

    entries: list[DistributionEntry] = []
    for item in items:
        if isinstance(item, DistributionEntry):
            entries.append(item)
        elif isinstance(item, Mapping):
            entries.append(DistributionEntry(str(item["country"]), item["count"]))  # type: ignore[arg-type]
        else:
            country, count = item  # type: ignore[misc]
            entries.append(DistributionEntry(str(country), count))
    return tuple(entries)


def distribution_signature(entries: Iterable[DistributionEntry]) -> DistributionSignature:
    """Ordered ``(country, count)`` pairs used to detect distribution changes."""

    return tuple((entry.country, entry.count) for entry in entries)


@dataclass
class GlobeState:
    """Rotation and placement of the rendered globe."""

    angle: float = 0.0
    revolutions: int = 0
    radius: float = 0.0
    center: tuple[float, float] = (0.0, 0.0)

    @property
    def unwrapped_angle(self) -> float:
        return self.revolutions * 360.0 + self.angle

    def advance(self, step_deg: float) -> None:
        if step_deg <= 0.0:
            return
        self.angle += step_deg
        while self.angle >= 360.0:
            self.angle -= 360.0
            self.revolutions += 1

    def reset(self) -> None:
        self.angle = 0.0
        self.revolutions = 0


__all__ = [
    "DistributionEntry",
    "DistributionLike",
    "DistributionSignature",
    "GlobeState",
    "Particle",
    "Satellite",
    "coerce_distribution",
    "distribution_signature",
]
