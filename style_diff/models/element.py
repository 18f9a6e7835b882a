"""Element records captured from a rendered page, and matcher output."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ElementRecord(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    selector: str
    xpath: str = ""
    tag_name: str = ""
    id: Optional[str] = None
    classes: tuple[str, ...] = ()
    styles: dict[str, str] = Field(default_factory=dict)


class MatchResult(BaseModel):
    """One old element paired with zero or one new element."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    old: ElementRecord
    new: Optional[ElementRecord] = None
    match_score: float = 0  # 0 means unmatched
    old_index: int
    new_index: Optional[int] = None

    @property
    def is_matched(self) -> bool:
        return self.new is not None
