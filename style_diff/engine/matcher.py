"""Element matching: pairs each old-site element with at most one new-site element.

Two strategies share one contract: one MatchResult per old element, in
old-element order, and no new element is consumed twice.

- ``selector``: exact selector string, first-come first-served. Deterministic.
- ``similarity``: greedy best-score scan over the remaining new elements
  (id, tag, class overlap, xpath depth). Order-dependent by design; an early
  old element can take a new element a later one would have scored higher on.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from typing import Callable, Optional, Sequence

from style_diff.models.element import ElementRecord, MatchResult

logger = logging.getLogger(__name__)

SELECTOR_MATCH_SCORE = 100
SIMILARITY_THRESHOLD = 30

MatchFn = Callable[[Sequence[ElementRecord], Sequence[ElementRecord]], list[MatchResult]]


def _unmatched(old: ElementRecord, old_index: int) -> MatchResult:
    return MatchResult(old=old, new=None, match_score=0, old_index=old_index, new_index=None)


def _xpath_depth(xpath: str) -> int:
    return len(xpath.split("/"))


def calculate_similarity(old: ElementRecord, new: ElementRecord) -> float:
    """Score how likely ``new`` is the same element as ``old``."""
    score = 0.0

    if old.id and new.id and old.id == new.id:
        score += 100

    if old.tag_name == new.tag_name:
        score += 10

    if old.classes and new.classes:
        old_classes = set(old.classes)
        new_classes = set(new.classes)
        union = old_classes | new_classes
        score += len(old_classes & new_classes) / len(union) * 50

    # Structural position
    if old.xpath and new.xpath:
        depth_diff = abs(_xpath_depth(old.xpath) - _xpath_depth(new.xpath))
        if depth_diff == 0:
            score += 20
        elif depth_diff <= 2:
            score += 10

    return score


def match_by_selector(
    old_elements: Sequence[ElementRecord],
    new_elements: Sequence[ElementRecord],
) -> list[MatchResult]:
    """Match elements by identical selector string, taking candidates in order."""
    pool: dict[str, deque[int]] = defaultdict(deque)
    for index, element in enumerate(new_elements):
        pool[element.selector].append(index)

    matches = []
    for old_index, old in enumerate(old_elements):
        candidates = pool.get(old.selector)
        if candidates:
            new_index = candidates.popleft()
            matches.append(MatchResult(
                old=old,
                new=new_elements[new_index],
                match_score=SELECTOR_MATCH_SCORE,
                old_index=old_index,
                new_index=new_index,
            ))
        else:
            matches.append(_unmatched(old, old_index))
    return matches


def _best_candidate(
    old: ElementRecord,
    new_elements: Sequence[ElementRecord],
    consumed: set[int],
) -> tuple[Optional[int], float]:
    best_index: Optional[int] = None
    best_score = 0.0
    for new_index, new in enumerate(new_elements):
        if new_index in consumed:
            continue
        score = calculate_similarity(old, new)
        # Strict > keeps the first candidate seen on ties
        if score > best_score:
            best_index, best_score = new_index, score
    return best_index, best_score


def match_by_similarity(
    old_elements: Sequence[ElementRecord],
    new_elements: Sequence[ElementRecord],
) -> list[MatchResult]:
    """Greedy similarity matching; accepts the best candidate scoring >= SIMILARITY_THRESHOLD."""
    consumed: set[int] = set()
    matches = []

    for old_index, old in enumerate(old_elements):
        new_index, score = _best_candidate(old, new_elements, consumed)
        if new_index is not None and score >= SIMILARITY_THRESHOLD:
            consumed.add(new_index)
            matches.append(MatchResult(
                old=old,
                new=new_elements[new_index],
                match_score=score,
                old_index=old_index,
                new_index=new_index,
            ))
        else:
            logger.debug("No similar element for %s (best score %.1f)", old.selector, score)
            matches.append(_unmatched(old, old_index))

    return matches


MATCHING_STRATEGIES: dict[str, MatchFn] = {
    "selector": match_by_selector,
    "similarity": match_by_similarity,
}


def get_matching_strategy(name: str = "selector") -> MatchFn:
    """Look up a matching strategy by name."""
    try:
        return MATCHING_STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown matching strategy {name!r}; expected one of: "
            + ", ".join(sorted(MATCHING_STRATEGIES))
        ) from None
