# rigmap/core/reporting.py
"""
Create reports/<run_name>/ and write layout.json (render adapter input) and
run_metadata.json (timestamp + config snapshot).
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from rigmap.core.config import (
    BUBBLE_RADIUS,
    MAP_BOUNDS,
    MAX_RINGS,
    MIN_SEPARATION_FACTOR,
    REPORTS_DIR,
    RETRY_MULTIPLIER,
    RETRY_PASSES,
    RETRY_WIDEN_RINGS,
    RETRY_WIDEN_STEP,
    SCHEMA_VERSION,
    STEP_SIZE,
)
from rigmap.core.error_codes import user_message
from rigmap.core.metrics import layout_metrics
from rigmap.core.types import BoundsRegion, LayoutSummary, PlacementFailure, PlacementResult, Point


def _latlng(p: Point) -> dict[str, float]:
    return {"lat": float(p[1]), "lng": float(p[0])}


def result_to_dict(result: PlacementResult) -> dict:
    """One placed rig: bubble position and connector, as the renderer consumes them."""
    a, b = result.connector
    return {
        "anchorId": result.anchor_id,
        "anchor": _latlng(result.anchor.xy),
        "bubblePosition": _latlng(result.position),
        "connectorSegment": [_latlng(a), _latlng(b)],
        "radius": result.bubble.radius,
        "pass": result.pass_index,
        "attributes": dict(result.anchor.attributes),
    }


def failure_to_dict(failure: PlacementFailure) -> dict:
    """One unplaced rig; the renderer draws the rig without a bubble."""
    return {
        "anchorId": failure.anchor_id,
        "anchor": _latlng(failure.anchor.xy),
        "unplaced": True,
        "reason": failure.reason,
        "message": user_message(failure.reason),
        "warnings": list(failure.warnings),
    }


def layout_to_dict(summary: LayoutSummary, region: BoundsRegion | None = None) -> dict:
    """Exact structure for layout.json."""
    return {
        "schema_version": SCHEMA_VERSION,
        "placed": [result_to_dict(r) for r in summary.results],
        "unplaced": [failure_to_dict(f) for f in summary.failures],
        "states": [{"anchorId": i, "state": s} for i, s in summary.states],
        "summary": layout_metrics(summary, region),
    }


def run_metadata_dict(
    run_name: str,
    rigs_path: str,
    params: dict,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "rigs_path": rigs_path,
        "params": params,
        "config": {
            "STEP_SIZE": STEP_SIZE,
            "MAX_RINGS": MAX_RINGS,
            "BUBBLE_RADIUS": BUBBLE_RADIUS,
            "MIN_SEPARATION_FACTOR": MIN_SEPARATION_FACTOR,
            "RETRY_MULTIPLIER": RETRY_MULTIPLIER,
            "RETRY_PASSES": RETRY_PASSES,
            "RETRY_WIDEN_STEP": RETRY_WIDEN_STEP,
            "RETRY_WIDEN_RINGS": RETRY_WIDEN_RINGS,
            "MAP_BOUNDS": dict(MAP_BOUNDS),
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_layout_json(
    report_dir: Path,
    summary: LayoutSummary,
    region: BoundsRegion | None = None,
    filename: str = "layout.json",
) -> Path:
    """Write layout.json to report_dir. Returns path to file."""
    path = report_dir / filename
    path.write_text(json.dumps(layout_to_dict(summary, region), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    rigs_path: str,
    params: dict,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, rigs_path, params)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
