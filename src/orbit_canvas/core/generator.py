"""Procedural generation of the satellite fleet."""
from __future__ import annotations

import random
from typing import Iterable

from .config import FLEET_CFG, FleetCfg
from .geometry import uniform
from .model import DistributionEntry, DistributionLike, Satellite, coerce_distribution


def generate_satellites(
    distribution: Iterable[DistributionLike],
    desired_count: int,
    *,
    rng: random.Random | None = None,
    cfg: FleetCfg = FLEET_CFG,
) -> list[Satellite]:
    """Build ``desired_count`` satellites attributed to the given countries.

    Countries and palette colours are assigned round robin by index, not in
    proportion to each country's count. An empty distribution is replaced by a
    single synthetic ``cfg.fallback_country`` entry.
    """

    if desired_count < 0:
        raise ValueError("desired_count must be non-negative")
    rng = rng or random.Random()
    entries = coerce_distribution(distribution)
    if not entries:
        entries = (DistributionEntry(cfg.fallback_country, cfg.fallback_count),)

    palette_size = len(cfg.palette)
    satellites: list[Satellite] = []
    for i in range(desired_count):
        pick = entries[i % len(entries)]
        satellites.append(
            Satellite(
                size=uniform(rng, cfg.min_size, cfg.max_size),
                altitude_factor=uniform(rng, cfg.min_altitude, cfg.max_altitude),
                angular_speed=uniform(rng, cfg.min_angular_speed, cfg.max_angular_speed),
                offset_deg=uniform(rng, 0.0, cfg.max_offset_deg),
                phase_offset=uniform(rng, 0.0, cfg.max_phase),
                color_index=i % palette_size,
                source_country=pick.country,
                weight=pick.count,
            )
        )
    return satellites


__all__ = ["generate_satellites"]
