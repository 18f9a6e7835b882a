"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest

from style_diff.models.config import BrowserConfig, CssConfig, DiffConfig, ViewportConfig
from style_diff.models.diff_report import (
    Difference,
    DiffReport,
    DiffSummary,
    PropertyDifference,
)
from style_diff.models.element import ElementRecord


# ============================================================================
# Element Fixtures
# ============================================================================


@pytest.fixture
def old_elements() -> list[ElementRecord]:
    """Elements captured from the old site."""
    return [
        ElementRecord(
            selector="#main",
            xpath='//*[@id="main"]',
            tag_name="main",
            id="main",
            styles={"color": "rgb(0, 0, 0)", "margin": "0px"},
        ),
        ElementRecord(
            selector="h2.card-title",
            xpath="/html/body/div[1]/h2[1]",
            tag_name="h2",
            classes=("card-title",),
            styles={"color": "red", "font-size": "24.0px"},
        ),
        ElementRecord(
            selector="a.btn.primary",
            xpath="/html/body/div[1]/a[1]",
            tag_name="a",
            classes=("btn", "primary"),
            styles={"color": "#fff", "padding": "8px 16px 8px 16px"},
        ),
        ElementRecord(
            selector="div.legacy-banner",
            xpath="/html/body/div[2]",
            tag_name="div",
            classes=("legacy-banner",),
            styles={"display": "block"},
        ),
    ]


@pytest.fixture
def new_elements() -> list[ElementRecord]:
    """Elements captured from the new site: one change, one removal."""
    return [
        ElementRecord(
            selector="#main",
            xpath='//*[@id="main"]',
            tag_name="main",
            id="main",
            styles={"color": "#000", "margin": "0px 0px 0px 0px"},
        ),
        ElementRecord(
            selector="h2.card-title",
            xpath="/html/body/div[1]/h2[1]",
            tag_name="h2",
            classes=("card-title",),
            styles={"color": "#ff0000", "font-size": "20px"},
        ),
        ElementRecord(
            selector="a.btn.primary",
            xpath="/html/body/div[1]/a[1]",
            tag_name="a",
            classes=("btn", "primary"),
            styles={"color": "rgb(255, 255, 255)", "padding": "8px 16px"},
        ),
    ]


# ============================================================================
# Report Fixtures
# ============================================================================


@pytest.fixture
def hero_difference() -> Difference:
    return Difference(
        selector=".hero",
        xpath="/html/body/section[1]",
        tag_name="section",
        classes=("hero",),
        match_score=100,
        properties={"backgroundColor": PropertyDifference(old="", new="#fff")},
    )


@pytest.fixture
def sample_report() -> DiffReport:
    """A report with grouped and ungrouped differences."""
    return DiffReport(
        timestamp="2025-01-01T00:00:00+00:00",
        old_site="https://old.example.com",
        new_site="https://new.example.com",
        summary=DiffSummary(
            total_elements=4,
            matched_elements=3,
            unmatched_elements=1,
            diff_elements=3,
            diff_property_count=4,
        ),
        differences=[
            Difference(
                selector=".card-title",
                xpath="/html/body/div[1]/h2[1]",
                tag_name="h2",
                classes=("card-title",),
                match_score=100,
                properties={
                    "font-size": PropertyDifference(old="24px", new="20px"),
                    "color": PropertyDifference(old="red", new="blue"),
                },
            ),
            Difference(
                selector="#main",
                xpath='//*[@id="main"]',
                tag_name="main",
                id="main",
                match_score=100,
                properties={"margin": PropertyDifference(old="0px", new="8px")},
            ),
            Difference(
                selector=".card-title.small",
                xpath="/html/body/div[2]/h2[1]",
                tag_name="h2",
                classes=("card-title", "small"),
                match_score=100,
                properties={"letter-spacing": PropertyDifference(old=None, new="1px")},
            ),
        ],
    )


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def diff_config() -> DiffConfig:
    return DiffConfig(
        default_properties=["color", "margin"],
        browser=BrowserConfig(headless=True, viewport=ViewportConfig(width=1280, height=720)),
        css=CssConfig(use_important=False),
        timeout_ms=5000,
    )


@pytest.fixture
def temp_config_file(tmp_path: Path, diff_config: DiffConfig) -> Path:
    """Write diff_config to a JSON file and return its path."""
    path = tmp_path / "default.json"
    path.write_text(json.dumps(diff_config.model_dump(), indent=2))
    return path
