# rigmap/core/runner.py
"""
CLI entrypoint: load rigs JSON, run bubble layout (with retry), write layout.json
and run_metadata.json. Default rigs: data/rigs.json (repo-relative).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rigmap.core.bounds import DEFAULT_REGION
from rigmap.core.config import (
    BUBBLE_RADIUS,
    CANDIDATE_STRATEGIES,
    DEFAULT_RIGS_PATH,
    DEFAULT_STRATEGY,
    LOG_LEVEL,
    MAX_RINGS,
    REPORTS_DIR,
    RETRY_MULTIPLIER,
    RETRY_PASSES,
    STEP_SIZE,
)
from rigmap.core.error_codes import RUN_FAILED, user_message
from rigmap.core.io import load_rigs
from rigmap.core.layout import place_all, relayout
from rigmap.core.reporting import (
    ensure_report_dir,
    write_layout_json,
    write_run_metadata_json,
)
from rigmap.core.zoom import parse_zoom_levels

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Rig label bubble placement.")
    p.add_argument("--rigs", type=str, default=DEFAULT_RIGS_PATH, help="Rigs JSON path (repo-relative)")
    p.add_argument("--step-size", type=float, default=None, dest="step_size", help=f"Ring step (default {STEP_SIZE}, or the zoom radius)")
    p.add_argument("--max-rings", type=int, default=MAX_RINGS, dest="max_rings", help="Rings searched on the first pass")
    p.add_argument("--bubble-radius", type=float, default=None, dest="bubble_radius", help=f"Collision radius (default {BUBBLE_RADIUS}; not with --zoom-levels)")
    p.add_argument("--retry-multiplier", type=float, default=RETRY_MULTIPLIER, dest="retry_multiplier", help="Search widening per retry")
    p.add_argument("--retry-passes", type=int, default=RETRY_PASSES, dest="retry_passes", help="Retry passes (0 disables)")
    p.add_argument("--strategy", type=str, default=DEFAULT_STRATEGY, choices=CANDIDATE_STRATEGIES, help="Candidate pattern")
    p.add_argument("--no-bounds", action="store_true", dest="no_bounds", help="Do not restrict bubbles to the map bounds")
    p.add_argument("--zoom-levels", type=str, default="", dest="zoom_levels", help="Lay out per zoom, e.g. '6,8,10'")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    args = p.parse_args(argv)
    if args.zoom_levels and args.bubble_radius is not None:
        p.error("--bubble-radius cannot be combined with --zoom-levels (the radius follows the zoom)")
    return args


def run(argv: list[str] | None = None) -> list[Path]:
    """Run the layout CLI. Returns the written file paths."""
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    anchors = load_rigs(args.rigs, repo_root=repo_root)
    logger.info("Loaded %d rig(s) from %s", len(anchors), args.rigs)
    region = None if args.no_bounds else DEFAULT_REGION
    bubble_radius = args.bubble_radius if args.bubble_radius is not None else BUBBLE_RADIUS
    zoom_levels = parse_zoom_levels(args.zoom_levels) if args.zoom_levels else []

    common = dict(
        max_rings=args.max_rings,
        retry_multiplier=args.retry_multiplier,
        retry_passes=args.retry_passes,
        region=region,
        strategy=args.strategy,
    )
    if args.step_size is not None:
        common["step_size"] = args.step_size

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    written: list[Path] = []
    summaries = []
    if zoom_levels:
        for zoom in zoom_levels:
            summary = relayout(anchors, zoom, **common)
            written.append(write_layout_json(report_dir, summary, region, filename=f"layout_z{zoom}.json"))
            summaries.append((f"zoom {zoom}", summary))
    else:
        summary = place_all(
            anchors,
            step_size=common.pop("step_size", STEP_SIZE),
            bubble_radius=bubble_radius,
            **common,
        )
        written.append(write_layout_json(report_dir, summary, region))
        summaries.append(("layout", summary))

    params = {
        "step_size": args.step_size,
        "max_rings": args.max_rings,
        "bubble_radius": None if zoom_levels else bubble_radius,
        "retry_multiplier": args.retry_multiplier,
        "retry_passes": args.retry_passes,
        "strategy": args.strategy,
        "bounded": region is not None,
        "zoom_levels": zoom_levels,
    }
    written.append(write_run_metadata_json(report_dir, args.run_name, args.rigs, params))

    for p in written:
        print(p)
    for name, s in summaries:
        print(f"{name}: placed {s.success_count}/{s.n_anchors}, unplaced {len(s.failures)}")
    return written


def main() -> None:
    try:
        run()
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s %s", user_message(RUN_FAILED), e)
        sys.exit(1)


if __name__ == "__main__":
    main()
