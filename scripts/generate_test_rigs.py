#!/usr/bin/env python3
"""
Generate synthetic rig JSON fixtures for exercising bubble placement.

Files:
rigs_scattered.json:  rigs spread across the map bounds
rigs_clustered.json:  tight clusters (many rigs per field)
rigs_stacked.json:    several rigs sharing one coordinate
rigs_edge.json:       rigs hugging the map bounds
"""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np

# Output directory
OUTPUT_DIR = Path(__file__).parent.parent / "data" / "test_rigs"

MIN_LAT, MAX_LAT = 20.0, 32.0
MIN_LNG, MAX_LNG = 34.0, 56.0
CLASSES = ("B1-B2", "B1-B123", "B123-134", "B123-145")


def save_rigs(filename: str, rigs: list[dict]) -> None:
    """Save rig list to a JSON file."""
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    path = OUTPUT_DIR / filename
    path.write_text(json.dumps(rigs, indent=2), encoding="utf-8")
    print(f"Created: {path.name} ({len(rigs)} rigs)")


def _rig(i: int, lat: float, lng: float, location: str, rng: np.random.Generator) -> dict:
    return {
        "rigId": f"RIG-{i:04d}",
        "location": location,
        "classification": CLASSES[int(rng.integers(len(CLASSES)))],
        "lat": round(float(lat), 5),
        "lng": round(float(lng), 5),
    }


def generate_scattered(seed: int, n: int = 60) -> list[dict]:
    rng = np.random.default_rng(seed)
    lats = rng.uniform(MIN_LAT + 1, MAX_LAT - 1, n)
    lngs = rng.uniform(MIN_LNG + 1, MAX_LNG - 1, n)
    return [_rig(i, lat, lng, "Field", rng) for i, (lat, lng) in enumerate(zip(lats, lngs))]


def generate_clustered(
    seed: int,
    n_clusters: int = 5,
    per_cluster: int = 12,
    spread_deg: float = 0.03,
) -> list[dict]:
    """Rigs grouped around a few field centers, spread well under one bubble radius."""
    rng = np.random.default_rng(seed)
    rigs: list[dict] = []
    for c in range(n_clusters):
        clat = rng.uniform(MIN_LAT + 2, MAX_LAT - 2)
        clng = rng.uniform(MIN_LNG + 2, MAX_LNG - 2)
        for _ in range(per_cluster):
            rigs.append(_rig(
                len(rigs),
                clat + rng.normal(0, spread_deg),
                clng + rng.normal(0, spread_deg),
                f"Field {c + 1}",
                rng,
            ))
    return rigs


def generate_stacked(seed: int, n: int = 8) -> list[dict]:
    rng = np.random.default_rng(seed)
    return [_rig(i, 25.0, 49.0, "Stack", rng) for i in range(n)]


def generate_edge(seed: int, n: int = 20) -> list[dict]:
    """Rigs within 0.05 degrees of the bounds, where many candidates fall outside."""
    rng = np.random.default_rng(seed)
    rigs: list[dict] = []
    for i in range(n):
        side = i % 4
        if side == 0:
            lat, lng = MIN_LAT + rng.uniform(0, 0.05), rng.uniform(MIN_LNG, MAX_LNG)
        elif side == 1:
            lat, lng = MAX_LAT - rng.uniform(0, 0.05), rng.uniform(MIN_LNG, MAX_LNG)
        elif side == 2:
            lat, lng = rng.uniform(MIN_LAT, MAX_LAT), MIN_LNG + rng.uniform(0, 0.05)
        else:
            lat, lng = rng.uniform(MIN_LAT, MAX_LAT), MAX_LNG - rng.uniform(0, 0.05)
        rigs.append(_rig(i, lat, lng, "Edge", rng))
    return rigs


def main() -> None:
    save_rigs("rigs_scattered.json", generate_scattered(seed=1000))
    save_rigs("rigs_clustered.json", generate_clustered(seed=2000))
    save_rigs("rigs_stacked.json", generate_stacked(seed=3000))
    save_rigs("rigs_edge.json", generate_edge(seed=4000))
    print(f"\nFixtures written to {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
