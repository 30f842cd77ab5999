"""Run artifact helpers for resolution reporting."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any


def build_run_report(
    entry: str,
    stats: dict[str, int],
    definition_names: list[str],
    status: str = "success",
) -> dict[str, Any]:
    """Assemble the JSON payload describing one resolution run."""
    return {
        "status": status,
        "entry": entry,
        "stats": dict(stats),
        "definition_count": len(definition_names),
        "definitions": list(definition_names),
    }


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "output/run_reports",
) -> str:
    """Write a JSON run report and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return path
