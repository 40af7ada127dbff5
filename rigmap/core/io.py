# rigmap/core/io.py
"""
Load and validate rig records from a JSON array.
Each record needs an id (rigId or id) and lat/lng; other keys are kept as
display attributes for the renderer.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from rigmap.core.types import Anchor

ID_KEYS: tuple[str, ...] = ("rigId", "id")


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def _coord(record: dict[str, Any], key: str, index: int) -> float:
    if key not in record or record[key] is None:
        raise ValueError(f"Rig record {index}: missing '{key}'")
    try:
        v = float(record[key])
    except (TypeError, ValueError):
        raise ValueError(f"Rig record {index}: '{key}' is not a number: {record[key]!r}") from None
    if not math.isfinite(v):
        raise ValueError(f"Rig record {index}: '{key}' is not finite")
    return v


def parse_rig(record: dict[str, Any], index: int = 0) -> Anchor:
    """Convert one JSON record into an Anchor. Raises ValueError on bad input."""
    if not isinstance(record, dict):
        raise ValueError(f"Rig record {index}: expected an object, got {type(record).__name__}")
    rig_id = next((record[k] for k in ID_KEYS if record.get(k) not in (None, "")), None)
    if rig_id is None:
        raise ValueError(f"Rig record {index}: missing id (one of {', '.join(ID_KEYS)})")
    lat = _coord(record, "lat", index)
    lng = _coord(record, "lng", index)
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"Rig record {index}: lat {lat} out of range")
    if not -180.0 <= lng <= 180.0:
        raise ValueError(f"Rig record {index}: lng {lng} out of range")
    attributes = {
        str(k): str(v)
        for k, v in record.items()
        if k not in ID_KEYS and k not in ("lat", "lng") and v is not None
    }
    return Anchor(id=str(rig_id), lat=lat, lng=lng, attributes=attributes)


def parse_rigs(data: Any) -> list[Anchor]:
    """Parse a decoded JSON array of rig records."""
    if not isinstance(data, list):
        raise ValueError("Rig data must be a JSON array")
    return [parse_rig(rec, i) for i, rec in enumerate(data)]


def load_rigs(path: str | Path, repo_root: Path | None = None) -> list[Anchor]:
    """
    Load rigs from a JSON file.
    Raises FileNotFoundError if path is missing, ValueError if content is invalid.
    """
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Rig file not found: {resolved}")
    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Rig file is not valid JSON: {resolved}: {exc}") from exc
    return parse_rigs(data)
