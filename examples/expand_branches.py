"""Example: expand a few branches of a snowflake diagram and print the layout."""

import json
from pathlib import Path

from snowflake_layout import SnowflakeLayout, TreeNode, paint_records

DATA = Path(__file__).resolve().parent / "system_view.json"


def main() -> None:
    tree = TreeNode.from_mapping(json.loads(DATA.read_text(encoding="utf-8")))
    layout = SnowflakeLayout(tree)

    # Domains -> Outpatients -> Waiting List, then Teams
    for position_id in ("0.0", "0.0.0", "0.0.0.0", "0.1"):
        layout.toggle_active(position_id)
        report = layout.last_report
        print(f"toggle {position_id}: passes={report.passes} writes={report.writes} converged={report.converged}")

    print("Layout:")
    for record in paint_records(layout):
        x, y = record.position.as_tuple()
        print(f"  {record.position_id:<10} {record.title:<24} r={record.radius:>4g} ({x:9.2f}, {y:9.2f})")

    print("Ledger:")
    for key, distance in layout.ledger:
        print(f"  {layout.pair_label(key)}: {distance:.2f}")


if __name__ == "__main__":
    main()
