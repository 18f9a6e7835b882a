"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path

from style_diff.models.diff_report import DiffReport


def report_to_dict(report: DiffReport) -> dict:
    """The report as plain data, using the published camelCase field names."""
    return report.model_dump(mode="json", by_alias=True)


def generate_json_report(report: DiffReport, output_path: Path) -> None:
    """Write a machine-readable JSON report."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report_to_dict(report), f, indent=2, ensure_ascii=False)
