"""Pipeline orchestrator: runs the extract, compare and report stages in order."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from style_diff.engine.compare import compare_elements, generate_diff_report
from style_diff.extractor.style_extractor import extract_styles_from_both_sites
from style_diff.models.config import DiffConfig
from style_diff.models.diff_report import DiffReport
from style_diff.reporter.css_patch import PatchOptions, PatchStyle
from style_diff.reporter.reporter import Reporter

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    report: DiffReport
    patch: str
    outputs: dict[str, str] = field(default_factory=dict)  # format -> file path
    duration: float = 0.0


class DiffPipeline:
    """Runs one old-vs-new comparison end to end."""

    def __init__(
        self,
        config: DiffConfig,
        output_dir: Path,
        patch_options: Optional[PatchOptions] = None,
    ):
        self.config = config
        self.output_dir = output_dir
        self.patch_options = patch_options or PatchOptions(
            use_important=config.css.use_important,
        )

    def run(
        self,
        old_source: str,
        new_source: str,
        selectors: Sequence[str] = (),
        properties: Sequence[str] = (),
        patch_style: PatchStyle | str = PatchStyle.PLAIN,
    ) -> PipelineResult:
        """Execute the complete extract → compare → report pipeline."""
        return asyncio.run(
            self._run_pipeline(old_source, new_source, selectors, properties, patch_style)
        )

    async def _run_pipeline(
        self,
        old_source: str,
        new_source: str,
        selectors: Sequence[str],
        properties: Sequence[str],
        patch_style: PatchStyle | str,
    ) -> PipelineResult:
        start = time.time()
        logger.info("=== Comparing %s -> %s ===", old_source, new_source)

        # Stage 1: Extract
        logger.info("--- Stage 1: Extract ---")
        stage_start = time.time()
        old_records, new_records = await extract_styles_from_both_sites(
            old_source, new_source, selectors, properties,
            timeout_ms=self.config.timeout_ms,
            browser_config=self.config.browser,
        )
        logger.info("--- Stage 1 complete: %d old / %d new elements in %.1fs ---",
                    len(old_records), len(new_records), time.time() - stage_start)

        # Stage 2: Compare
        logger.info("--- Stage 2: Compare ---")
        stage_start = time.time()
        comparison = compare_elements(
            old_records, new_records,
            properties=properties,
            matching_strategy=self.config.matching_strategy,
        )
        report = generate_diff_report(old_source, new_source, comparison)
        logger.info("--- Stage 2 complete: %d elements differ in %.1fs ---",
                    report.summary.diff_elements, time.time() - stage_start)

        # Stage 3: Report
        logger.info("--- Stage 3: Report ---")
        reporter = Reporter(self.output_dir, self.patch_options)
        patch, outputs = reporter.generate_reports(report, patch_style)

        duration = time.time() - start
        self._log_summary(report)
        logger.info("=== Pipeline complete in %.1fs ===", duration)

        return PipelineResult(
            report=report,
            patch=patch,
            outputs=outputs,
            duration=round(duration, 2),
        )

    @staticmethod
    def _log_summary(report: DiffReport) -> None:
        summary = report.summary
        logger.info("Total elements compared: %d", summary.total_elements)
        logger.info("Matched elements: %d", summary.matched_elements)
        logger.info("Unmatched elements: %d", summary.unmatched_elements)
        logger.info("Elements with differences: %d", summary.diff_elements)
        logger.info("Total property differences: %d", summary.diff_property_count)
