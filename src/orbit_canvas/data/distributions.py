"""Satellite distributions fed to the orbital display."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from orbit_canvas.core.model import DistributionEntry, coerce_distribution


@dataclass(frozen=True)
class FleetReport:
    """Aggregate numbers owned outside the renderer: a total and per-country counts."""

    total: int
    by_country: tuple[DistributionEntry, ...]


DEFAULT_DISTRIBUTION: tuple[DistributionEntry, ...] = (
    DistributionEntry("USA", 3200),
    DistributionEntry("China", 1100),
    DistributionEntry("Russia", 850),
    DistributionEntry("India", 450),
    DistributionEntry("EU/ESA", 300),
)
DEFAULT_SATELLITE_TOTAL = 7645
DEFAULT_REPORT = FleetReport(DEFAULT_SATELLITE_TOTAL, DEFAULT_DISTRIBUTION)


def load_report(path: str | Path) -> FleetReport:
    """Read ``{"total": int, "by_country": [{"country": str, "count": int}, ...]}``.

    A missing total defaults to the sum of the country counts.
    """

    with Path(path).open("r", encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, dict):
        raise ValueError("distribution file must contain a JSON object")
    entries = coerce_distribution(raw.get("by_country", []))
    total = raw.get("total")
    if total is None:
        total = sum(entry.count for entry in entries)
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise ValueError("total must be a non-negative integer")
    return FleetReport(total, entries)


__all__ = [
    "DEFAULT_DISTRIBUTION",
    "DEFAULT_REPORT",
    "DEFAULT_SATELLITE_TOTAL",
    "FleetReport",
    "load_report",
]
