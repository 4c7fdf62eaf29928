"""CLI helper for checking the competition schedule dataset before deploying."""

from __future__ import annotations

import json
import sys
from typing import Dict, List

from slc_core.loader import DataStore


def _format_summary(summary: Dict[str, object]) -> str:
    lines = [
        f"Competitors: {summary.get('people', 0)}",
        f"Schools: {summary.get('schools', 0)}",
        f"Event rows: {summary.get('eventRows', 0)}",
        f"Filtered rows: {summary.get('nonEventRows', 0)}",
    ]
    skipped = summary.get("skipped", [])
    if isinstance(skipped, list):
        for item in skipped:
            lines.append(f"  - {item.get('name')}: {item.get('competition')!r}")
    return "\n".join(lines)


def main(argv: List[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    store = DataStore()
    try:
        summary = store.schedule_summary()
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if "--json" in argv:
        print(json.dumps(summary, indent=2))
    else:
        print(f"Dataset: {store.schedule_path}")
        print(_format_summary(summary))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
