"""Report generation orchestration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from style_diff.models.diff_report import DiffReport

from .css_patch import PatchOptions, PatchStyle, render_patch
from .json_report import generate_json_report

logger = logging.getLogger(__name__)

REPORT_FILENAME = "diff.json"
PATCH_FILENAME = "patch.css"


class Reporter:
    """Writes the diff report and the CSS patch for one comparison run."""

    def __init__(self, output_dir: Path, options: Optional[PatchOptions] = None):
        self.output_dir = output_dir
        self.options = options or PatchOptions()

    def generate_reports(
        self,
        report: DiffReport,
        patch_style: PatchStyle | str = PatchStyle.PLAIN,
    ) -> tuple[str, dict[str, str]]:
        """Write ``diff.json`` and ``patch.css``. Returns the patch text and format -> file path."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Report output directory: %s", self.output_dir)
        generated = {}

        path = self.output_dir / REPORT_FILENAME
        generate_json_report(report, path)
        generated["json"] = str(path)
        logger.info("Diff report saved to: %s", path)

        logger.debug("Generating CSS patch (%s)...", getattr(patch_style, "value", patch_style))
        patch = render_patch(report, patch_style, self.options)
        path = self.output_dir / PATCH_FILENAME
        path.write_text(patch, encoding="utf-8")
        generated["css"] = str(path)
        logger.info("CSS patch saved to: %s", path)

        return patch, generated
