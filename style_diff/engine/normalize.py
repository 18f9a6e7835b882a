"""Style value normalization: canonical forms so equivalent values compare equal.

Computed styles from two different builds of a page often spell the same value
differently (``rgb(255, 255, 255)`` vs ``#fff``, ``10.0px`` vs ``10px``,
``10px 10px 10px 10px`` vs ``10px``). Everything here maps a raw value to one
canonical string per meaning; nothing here decides whether a difference
matters.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

# Returned untouched, never normalized
KEYWORD_VALUES = frozenset({"none", "auto", "initial", "inherit"})

NAMED_COLORS = {
    "white": "#ffffff",
    "black": "#000000",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "transparent": "transparent",
}

_DECIMAL_RE = re.compile(r"(\d+)\.(\d+)([a-z%]*)", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
_HEX3_RE = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$")
_RGB_RE = re.compile(r"^rgb\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)$")
_RGBA_RE = re.compile(r"^rgba\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([\d.]+)\s*\)$")
_ALPHA_RE = re.compile(r"^[a-z]+$", re.IGNORECASE)


def to_css_property_name(name: str) -> str:
    """Convert a camelCase property name to its hyphenated CSS form.

    Already-hyphenated names pass through lower-cased:
    ``backgroundColor`` -> ``background-color``, ``border-top`` -> ``border-top``.
    """
    return _CAMEL_BOUNDARY_RE.sub(r"\1-\2", name).lower()


def _trim_decimal(match: re.Match) -> str:
    whole, fraction, unit = match.groups()
    fraction = fraction.rstrip("0")
    if fraction:
        return f"{whole}.{fraction}{unit}"
    return f"{whole}{unit}"


def normalize_numeric(value: str) -> str:
    """Drop trailing zeros from decimals: ``10.0px`` -> ``10px``, ``1.50em`` -> ``1.5em``."""
    return _DECIMAL_RE.sub(_trim_decimal, value)


def normalize_spacing(value: str) -> str:
    """Collapse whitespace runs to one space and strip the ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def normalize_color(value: str) -> str:
    """Canonicalize a color.

    Named colors from the table and ``rgb()`` become 6-digit lowercase hex,
    3-digit hex is expanded, ``rgba()`` keeps its alpha with normalized
    spacing. Anything else is returned lower-cased.
    """
    value = value.strip().lower()

    if value in NAMED_COLORS:
        return NAMED_COLORS[value]

    m = _HEX3_RE.match(value)
    if m:
        return "#" + "".join(c * 2 for c in m.groups())

    m = _RGB_RE.match(value)
    if m:
        return "#" + "".join(f"{int(c):02x}" for c in m.groups())

    m = _RGBA_RE.match(value)
    if m:
        return "rgba({}, {}, {}, {})".format(*m.groups())

    return value


def normalize_box_shorthand(value: str) -> str:
    """Collapse a four-value margin/padding shorthand where possible."""
    parts = value.split(" ")
    if len(parts) != 4:
        return value
    top, right, bottom, left = parts
    if top == right == bottom == left:
        return top
    if top == bottom and right == left:
        return f"{top} {right}"
    return value


def _looks_like_color(token: str) -> bool:
    return "rgb" in token or "#" in token or bool(_ALPHA_RE.match(token))


def normalize_border(value: str) -> str:
    """Normalize the color tokens of a multi-token border value."""
    if " " not in value:
        return value
    return " ".join(
        normalize_color(part) if _looks_like_color(part) else part
        for part in value.split(" ")
    )


# Checked in order; the first matching predicate picks the rule.
PROPERTY_RULES: tuple[tuple[Callable[[str], bool], Callable[[str], str]], ...] = (
    (lambda prop: "color" in prop, normalize_color),
    (lambda prop: "margin" in prop or "padding" in prop, normalize_box_shorthand),
    (lambda prop: "border" in prop, normalize_border),
)


def normalize_value(property_name: str, value: Optional[str]) -> Optional[str]:
    """Return the canonical form of ``value`` for ``property_name``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(
            f"Style value for {property_name!r} must be a string, got {type(value).__name__}"
        )
    if value == "" or value in KEYWORD_VALUES:
        return value

    value = normalize_spacing(normalize_numeric(value))

    prop = to_css_property_name(property_name)
    for applies, rule in PROPERTY_RULES:
        if applies(prop):
            return rule(value)
    return value


def values_equal(property_name: str, value1: Optional[str], value2: Optional[str]) -> bool:
    """True if both values normalize to the same canonical form."""
    return normalize_value(property_name, value1) == normalize_value(property_name, value2)
