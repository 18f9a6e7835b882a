"""Integration tests for the diff tool.

These tests run the matcher, comparison engine, and patch generator together
on realistic element records. The browser is replaced by canned records.
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from style_diff.engine.compare import compare_elements, generate_diff_report
from style_diff.models.config import DiffConfig
from style_diff.models.diff_report import DiffReport
from style_diff.models.element import ElementRecord
from style_diff.pipeline import DiffPipeline
from style_diff.reporter.css_patch import PatchStyle, render_patch


def _records(raw: list[dict]) -> list[ElementRecord]:
    return [ElementRecord.model_validate(r) for r in raw]


OLD_PAGE = _records([
    {"selector": "#header", "xpath": '//*[@id="header"]', "tagName": "header", "id": "header",
     "classes": [], "styles": {"background-color": "rgb(255, 255, 255)", "padding": "16px 24px 16px 24px"}},
    {"selector": "a.nav-link", "xpath": '//*[@id="header"]/nav[1]/a[1]', "tagName": "a",
     "id": None, "classes": ["nav-link"], "styles": {"color": "#333", "font-size": "14.0px"}},
    {"selector": "a.nav-link", "xpath": '//*[@id="header"]/nav[1]/a[2]', "tagName": "a",
     "id": None, "classes": ["nav-link"], "styles": {"color": "#333", "font-size": "14.0px"}},
    {"selector": "h1.hero-title", "xpath": "/html/body/section[1]/h1[1]", "tagName": "h1",
     "id": None, "classes": ["hero-title"], "styles": {"color": "black", "font-weight": "700"}},
    {"selector": "div.promo", "xpath": "/html/body/div[1]", "tagName": "div",
     "id": None, "classes": ["promo"], "styles": {"border": "1px solid RED"}},
])

NEW_PAGE = _records([
    {"selector": "#header", "xpath": '//*[@id="header"]', "tagName": "header", "id": "header",
     "classes": [], "styles": {"background-color": "#FFF", "padding": "16px 24px"}},
    {"selector": "a.nav-link", "xpath": '//*[@id="header"]/nav[1]/a[1]', "tagName": "a",
     "id": None, "classes": ["nav-link"], "styles": {"color": "rgb(51, 51, 51)", "font-size": "14px"}},
    {"selector": "a.nav-link", "xpath": '//*[@id="header"]/nav[1]/a[2]', "tagName": "a",
     "id": None, "classes": ["nav-link"], "styles": {"color": "rgb(0, 0, 255)", "font-size": "14px"}},
    {"selector": "h1.hero-title", "xpath": "/html/body/section[1]/h1[1]", "tagName": "h1",
     "id": None, "classes": ["hero-title"], "styles": {"color": "#000000", "font-weight": "400"}},
])


@pytest.mark.integration
class TestEnginePipeline:
    """Records -> matcher -> comparison -> report -> patch."""

    def test_selector_strategy_end_to_end(self):
        comparison = compare_elements(OLD_PAGE, NEW_PAGE)
        report = generate_diff_report("old/index.html", "https://new.example.com", comparison)

        summary = report.summary
        assert summary.total_elements == 5
        assert summary.matched_elements == 4
        assert summary.unmatched_elements == 1
        assert summary.diff_elements == 2
        assert summary.diff_property_count == 2

        second_link, title = report.differences
        assert second_link.xpath == '//*[@id="header"]/nav[1]/a[2]'
        assert second_link.properties["color"].old == "#333"
        assert second_link.properties["color"].new == "rgb(0, 0, 255)"
        assert list(title.properties) == ["font-weight"]

        patch_text = render_patch(report, PatchStyle.PLAIN)
        assert "a.nav-link {\n  color: #333;\n}" in patch_text
        assert "h1.hero-title {\n  font-weight: 700;\n}" in patch_text

    def test_similarity_strategy_matches_same_pairs(self):
        selector_matches = compare_elements(OLD_PAGE, NEW_PAGE).matches
        similarity_matches = compare_elements(
            OLD_PAGE, NEW_PAGE, matching_strategy="similarity"
        ).matches
        assert [m.new_index for m in similarity_matches] == [m.new_index for m in selector_matches]

    def test_report_round_trips_through_json(self):
        report = generate_diff_report("a", "b", compare_elements(OLD_PAGE, NEW_PAGE))
        data = json.loads(json.dumps(report.model_dump(mode="json", by_alias=True)))
        assert DiffReport.model_validate(data) == report

    def test_all_patch_styles_render(self):
        report = generate_diff_report("a", "b", compare_elements(OLD_PAGE, NEW_PAGE))
        for style in PatchStyle:
            text = render_patch(report, style)
            assert text.count("{") == len(report.differences)


@pytest.mark.integration
class TestDiffPipelineIntegration:
    def test_outputs_on_disk(self, tmp_path: Path):
        mock_extract = AsyncMock(return_value=(OLD_PAGE, NEW_PAGE))
        output_dir = tmp_path / "output"

        with patch("style_diff.pipeline.extract_styles_from_both_sites", mock_extract):
            result = DiffPipeline(DiffConfig(), output_dir).run(
                "old/index.html", "https://new.example.com", patch_style="grouped",
            )

        data = json.loads((output_dir / "diff.json").read_text())
        assert data["oldSite"] == "old/index.html"
        assert data["summary"]["diffElements"] == len(data["differences"]) == 2

        css = (output_dir / "patch.css").read_text(encoding="utf-8")
        assert css == result.patch
        assert "/* Component: ungrouped */\n/* Elements: 2 */" in css
