"""Difference report data structures produced by the comparison engine."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .element import MatchResult

_CAMEL = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PropertyDifference(BaseModel):
    model_config = _CAMEL

    old: Optional[str] = None  # None = property absent on that side
    new: Optional[str] = None


class Difference(BaseModel):
    """A matched pair with at least one differing property."""

    model_config = _CAMEL

    selector: str
    xpath: str = ""
    tag_name: str = ""
    id: Optional[str] = None
    classes: tuple[str, ...] = ()
    match_score: float = 0
    properties: dict[str, PropertyDifference] = Field(default_factory=dict)


class DiffSummary(BaseModel):
    model_config = _CAMEL

    total_elements: int = 0
    matched_elements: int = 0
    unmatched_elements: int = 0
    diff_elements: int = 0
    diff_property_count: int = 0

    @model_validator(mode="after")
    def check_counts(self) -> "DiffSummary":
        if not self.diff_elements <= self.matched_elements <= self.total_elements:
            raise ValueError(
                "Summary counts out of order: "
                f"diff={self.diff_elements} matched={self.matched_elements} "
                f"total={self.total_elements}"
            )
        if self.matched_elements + self.unmatched_elements != self.total_elements:
            raise ValueError("matched + unmatched must equal total elements")
        return self


class ComparisonResult(BaseModel):
    model_config = _CAMEL

    differences: list[Difference] = Field(default_factory=list)
    summary: DiffSummary = Field(default_factory=DiffSummary)
    matches: list[MatchResult] = Field(default_factory=list)


class DiffReport(BaseModel):
    model_config = _CAMEL

    timestamp: str  # ISO-8601
    old_site: str
    new_site: str
    summary: DiffSummary
    differences: list[Difference] = Field(default_factory=list)
