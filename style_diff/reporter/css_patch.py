"""CSS patch generation: override rules that pull the new site back to the old look.

Every declaration carries the OLD site's raw value. Three layouts share the
same rule builder: plain, detailed (annotated), and grouped by component.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from style_diff.engine.normalize import to_css_property_name
from style_diff.models.diff_report import Difference, DiffReport

_COMPONENT_RE = re.compile(r"^\.([A-Za-z0-9_-]+)")
_BANNER = "/* ========================================== */"

UNGROUPED = "ungrouped"


class PatchStyle(str, Enum):
    PLAIN = "plain"
    DETAILED = "detailed"
    GROUPED = "grouped"


class PatchOptions(BaseModel):
    use_important: bool = False
    include_comments: bool = True
    show_old_and_new: bool = True  # detailed layout only


def format_css_value(value: Optional[str]) -> str:
    if value is None or value == "":
        return "initial"
    return value


def generate_css_rule(difference: Difference, use_important: bool = False) -> str:
    """Build one rule block restoring the old values of a difference."""
    important = " !important" if use_important else ""
    declarations = [
        f"  {to_css_property_name(prop)}: {format_css_value(values.old)}{important};"
        for prop, values in difference.properties.items()
    ]
    return f"{difference.selector} {{\n" + "\n".join(declarations) + "\n}"


def generate_css_patch(report: DiffReport, options: Optional[PatchOptions] = None) -> str:
    """Plain patch: short header, then one rule per difference."""
    options = options or PatchOptions()
    summary = report.summary
    lines = []

    if options.include_comments:
        lines.append("/* Auto-generated CSS Patch */")
        lines.append(f"/* Generated at: {report.timestamp} */")
        lines.append(f"/* Old Site: {report.old_site} */")
        lines.append(f"/* New Site: {report.new_site} */")
        lines.append(
            f"/* Differences found: {summary.diff_elements} elements, "
            f"{summary.diff_property_count} properties */"
        )
        lines.append("")

    for index, diff in enumerate(report.differences, 1):
        if options.include_comments:
            lines.append(f"/* Element {index}: {diff.selector} */")
            if diff.xpath:
                lines.append(f"/* XPath: {diff.xpath} */")
        lines.append(generate_css_rule(diff, options.use_important))
        lines.append("")

    return "\n".join(lines)


def generate_detailed_css_patch(report: DiffReport, options: Optional[PatchOptions] = None) -> str:
    """Detailed patch: summary header and per-element identity and change annotations."""
    options = options or PatchOptions()
    summary = report.summary
    lines = []

    if options.include_comments:
        lines.extend([
            _BANNER,
            "/*       Auto-generated CSS Patch            */",
            _BANNER,
            f"/* Generated at: {report.timestamp} */",
            f"/* Old Site: {report.old_site} */",
            f"/* New Site: {report.new_site} */",
            _BANNER,
            "",
            "/* Summary:",
            f"   - Total elements compared: {summary.total_elements}",
            f"   - Matched elements: {summary.matched_elements}",
            f"   - Unmatched elements: {summary.unmatched_elements}",
            f"   - Elements with differences: {summary.diff_elements}",
            f"   - Total property differences: {summary.diff_property_count}",
            "*/",
            "",
        ])

    for index, diff in enumerate(report.differences, 1):
        if options.include_comments:
            lines.append(_BANNER)
            lines.append(f"/* Element {index} */")
            lines.append(f"/* Selector: {diff.selector} */")
            if diff.xpath:
                lines.append(f"/* XPath: {diff.xpath} */")
            if diff.id:
                lines.append(f"/* ID: {diff.id} */")
            if diff.classes:
                lines.append(f"/* Classes: {', '.join(diff.classes)} */")
            lines.append(_BANNER)

            if options.show_old_and_new:
                lines.append("/* Property changes (new → old): */")
                for prop, values in diff.properties.items():
                    lines.append(
                        f"/*   {to_css_property_name(prop)}: "
                        f"{format_css_value(values.new)} → {format_css_value(values.old)} */"
                    )

        lines.append(generate_css_rule(diff, options.use_important))
        lines.append("")

    return "\n".join(lines)


def component_name(selector: str) -> str:
    """Leading class of a selector (``.card-title`` -> ``card-title``), else ``ungrouped``."""
    match = _COMPONENT_RE.match(selector)
    return match.group(1) if match else UNGROUPED


def group_differences_by_component(differences: list[Difference]) -> dict[str, list[Difference]]:
    """Bucket differences by component, keeping first-seen bucket order."""
    groups: dict[str, list[Difference]] = {}
    for diff in differences:
        groups.setdefault(component_name(diff.selector), []).append(diff)
    return groups


def generate_grouped_css_patch(report: DiffReport, options: Optional[PatchOptions] = None) -> str:
    """Patch organized into one labeled section per component."""
    options = options or PatchOptions()
    lines = []

    if options.include_comments:
        lines.append("/* Auto-generated CSS Patch (Organized by Component) */")
        lines.append(f"/* Generated at: {report.timestamp} */")
        lines.append("")

    for component, diffs in group_differences_by_component(report.differences).items():
        if options.include_comments:
            lines.extend([
                _BANNER,
                f"/* Component: {component} */",
                f"/* Elements: {len(diffs)} */",
                _BANNER,
                "",
            ])
        for diff in diffs:
            lines.append(generate_css_rule(diff, options.use_important))
            lines.append("")

    return "\n".join(lines)


_GENERATORS = {
    PatchStyle.PLAIN: generate_css_patch,
    PatchStyle.DETAILED: generate_detailed_css_patch,
    PatchStyle.GROUPED: generate_grouped_css_patch,
}


def render_patch(
    report: DiffReport,
    style: PatchStyle | str = PatchStyle.PLAIN,
    options: Optional[PatchOptions] = None,
) -> str:
    """Render a report in the requested patch layout."""
    try:
        style = PatchStyle(style)
    except ValueError:
        raise ValueError(
            f"Unknown patch style {style!r}; expected one of: "
            + ", ".join(s.value for s in PatchStyle)
        ) from None
    return _GENERATORS[style](report, options)
