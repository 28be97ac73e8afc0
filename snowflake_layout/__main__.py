import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from snowflake_layout import (
    LayoutConfig,
    Point,
    SnowflakeLayout,
    TreeNode,
    UnknownPositionError,
    debug_overlay,
    get_layout_config,
    paint_records,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_focus(value: Optional[str]) -> Optional[Point]:
    if not value:
        return None
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError("focus must be given as X,Y")
    try:
        return Point(float(parts[0]), float(parts[1]))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid focus {value!r}") from exc


def _build_config(args: argparse.Namespace) -> LayoutConfig:
    config = get_layout_config()
    if args.min_line_distance is not None:
        config.min_line_distance = args.min_line_distance
    if args.probe_length is not None:
        config.probe_length = args.probe_length
    if args.max_settle_passes is not None:
        config.max_settle_passes = args.max_settle_passes
    if args.root_full_circle:
        config.root_full_circle = True
    return config


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Resolve a snowflake diagram layout")
    parser.add_argument("path", help="Path to the JSON tree")
    parser.add_argument(
        "--activate",
        action="append",
        default=[],
        metavar="POSITION_ID",
        help="Activate a position (dotted child-index path, e.g. 0.2.1); repeatable",
    )
    parser.add_argument("--min-line-distance", type=float, help="Minimum active separation")
    parser.add_argument("--probe-length", type=float, help="Boundary ray length for collision tests")
    parser.add_argument("--max-settle-passes", type=int, help="Settling pass budget per event")
    parser.add_argument(
        "--root-full-circle",
        action="store_true",
        help="Spread the hub's children over the full circle",
    )
    parser.add_argument("--focus", type=_parse_focus, help="Camera focus point X,Y applied at paint time")
    parser.add_argument(
        "--debug-overlay",
        action="store_true",
        help="Include boundary rays and collision records in the JSON output",
    )
    parser.add_argument("--json-output-path", help="Write paint records as JSON to the given path")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    with open(args.path, encoding="utf-8") as fin:
        data = json.load(fin)

    config = _build_config(args)
    logger.info("Loading tree from %s", args.path)
    tree = TreeNode.from_mapping(data, config)
    layout = SnowflakeLayout(tree, config)
    logger.info("Layout has %d position(s), %d reachable", len(layout.arena), len(layout.positions()))

    for position_id in args.activate:
        try:
            layout.toggle_active(position_id, True)
        except UnknownPositionError as exc:
            parser.error(str(exc))
        report = layout.last_report
        logger.info(
            "Activated %s: passes=%d writes=%d converged=%s",
            position_id,
            report.passes,
            report.writes,
            report.converged,
        )

    records = paint_records(layout, args.focus)
    print("Positions:")
    for record in records:
        x, y = record.position.as_tuple()
        flag = "active" if record.active else "inactive"
        print(f"  {record.position_id} [{record.node_id}] {flag} r={record.radius:g}: ({x:.6f}, {y:.6f})")

    print("Ledger:")
    entries = sorted(layout.ledger, key=lambda item: item[0])
    if entries:
        for key, distance in entries:
            print(f"  {key.label} ({layout.pair_label(key)}): {distance:.6f}")
    else:
        print("  (empty)")

    if args.json_output_path:
        output_path = Path(args.json_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"nodes": [record.to_dict() for record in records]}
        if args.debug_overlay:
            payload["overlay"] = [record.to_dict() for record in debug_overlay(layout)]
        logger.info("Writing paint records to %s", output_path)
        output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Paint records written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
