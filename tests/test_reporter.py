"""Tests for report orchestration."""

import json
from pathlib import Path

import pytest

from style_diff.reporter.css_patch import PatchOptions, PatchStyle
from style_diff.reporter.reporter import PATCH_FILENAME, REPORT_FILENAME, Reporter


class TestReporter:
    def test_writes_both_outputs(self, tmp_path: Path, sample_report):
        reporter = Reporter(tmp_path / "output")
        patch, generated = reporter.generate_reports(sample_report)

        assert set(generated) == {"json", "css"}
        assert Path(generated["json"]).name == REPORT_FILENAME
        assert Path(generated["css"]).name == PATCH_FILENAME
        assert Path(generated["css"]).read_text(encoding="utf-8") == patch
        assert json.loads(Path(generated["json"]).read_text())["summary"]["diffElements"] == 3

    def test_patch_style(self, tmp_path: Path, sample_report):
        reporter = Reporter(tmp_path)
        patch, _ = reporter.generate_reports(sample_report, PatchStyle.GROUPED)
        assert "/* Component: card-title */" in patch

    def test_patch_options_applied(self, tmp_path: Path, sample_report):
        reporter = Reporter(tmp_path, PatchOptions(use_important=True, include_comments=False))
        patch, _ = reporter.generate_reports(sample_report, "plain")
        assert "/*" not in patch
        assert "margin: 0px !important;" in patch

    def test_invalid_style(self, tmp_path: Path, sample_report):
        with pytest.raises(ValueError):
            Reporter(tmp_path).generate_reports(sample_report, "fancy")
        assert not (tmp_path / PATCH_FILENAME).exists()
