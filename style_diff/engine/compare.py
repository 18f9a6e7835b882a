"""Style comparison between matched elements, and diff report assembly."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence

from style_diff.models.diff_report import (
    ComparisonResult,
    Difference,
    DiffReport,
    DiffSummary,
    PropertyDifference,
)
from style_diff.models.element import ElementRecord

from .matcher import get_matching_strategy
from .normalize import values_equal

logger = logging.getLogger(__name__)


def compare_styles(
    old_styles: Mapping[str, str],
    new_styles: Mapping[str, str],
    properties: Optional[Sequence[str]] = None,
) -> dict[str, PropertyDifference]:
    """Return the properties whose normalized values differ, with both raw values.

    With no ``properties`` allowlist, every property present on either side is
    compared. A property missing on one side counts as a difference.
    """
    if properties:
        to_compare = list(properties)
    else:
        to_compare = list(dict.fromkeys([*old_styles, *new_styles]))

    differences = {}
    for prop in to_compare:
        old_value = old_styles.get(prop)
        new_value = new_styles.get(prop)
        if not values_equal(prop, old_value, new_value):
            differences[prop] = PropertyDifference(old=old_value, new=new_value)
    return differences


def compare_elements(
    old_elements: Sequence[ElementRecord],
    new_elements: Sequence[ElementRecord],
    properties: Optional[Sequence[str]] = None,
    matching_strategy: str = "selector",
) -> ComparisonResult:
    """Match old elements to new ones and collect per-element style differences."""
    match_fn = get_matching_strategy(matching_strategy)
    logger.info("Matching elements between old and new sites (%s strategy)...", matching_strategy)
    matches = match_fn(old_elements, new_elements)

    matched = [m for m in matches if m.new is not None]
    logger.info("Matched %d of %d elements", len(matched), len(matches))

    differences = []
    for match in matches:
        if match.new is None:
            logger.debug("Element not found in new site: %s", match.old.selector)
            continue

        style_diffs = compare_styles(match.old.styles, match.new.styles, properties)
        if style_diffs:
            old = match.old
            differences.append(Difference(
                selector=old.selector,
                xpath=old.xpath,
                tag_name=old.tag_name,
                id=old.id,
                classes=old.classes,
                match_score=match.match_score,
                properties=style_diffs,
            ))

    property_count = sum(len(d.properties) for d in differences)
    logger.info(
        "Found %d elements with differences (%d properties)",
        len(differences), property_count,
    )

    return ComparisonResult(
        differences=differences,
        summary=DiffSummary(
            total_elements=len(matches),
            matched_elements=len(matched),
            unmatched_elements=len(matches) - len(matched),
            diff_elements=len(differences),
            diff_property_count=property_count,
        ),
        matches=matches,
    )


def generate_diff_report(
    old_site: str,
    new_site: str,
    comparison: ComparisonResult,
    timestamp: Optional[str] = None,
) -> DiffReport:
    """Wrap a comparison result into a timestamped report."""
    return DiffReport(
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        old_site=old_site,
        new_site=new_site,
        summary=comparison.summary,
        differences=comparison.differences,
    )
