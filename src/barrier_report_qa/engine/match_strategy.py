"""
Match Strategy - Rank rendered options against a requested value.

Option lists in the report panel show values that may be truncated or
reformatted, so matching is tiered (tried in order, strongest wins):

1. EXACT - normalized texts are equal
2. TEXT_CONTAINS_VALUE - option text contains the requested value
3. VALUE_CONTAINS_TEXT - requested value contains the option text
4. PREFIX - the first 30 normalized characters are equal

Among candidates of the same kind the first one in index order wins.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence
import logging

from barrier_report_qa.engine.text_normalizer import DEFAULT_PREFIX_LENGTH, normalize

logger = logging.getLogger(__name__)


class MatchKind(Enum):
    """How a candidate matched the requested value."""
    EXACT = "exact"
    TEXT_CONTAINS_VALUE = "text-contains-value"
    VALUE_CONTAINS_TEXT = "value-contains-text"
    PREFIX = "prefix"
    NONE = "none"

    @property
    def rank(self) -> int:
        """Higher is stronger; NONE is 0."""
        return _RANKS[self]


_RANKS = {
    MatchKind.EXACT: 4,
    MatchKind.TEXT_CONTAINS_VALUE: 3,
    MatchKind.VALUE_CONTAINS_TEXT: 2,
    MatchKind.PREFIX: 1,
    MatchKind.NONE: 0,
}


@dataclass(frozen=True)
class OptionCandidate:
    """
    One rendered option of an open dropdown.
    
    Attributes:
        text: Visible text of the option
        index: Position in the rendered list
        visible: Whether layout state showed it as visible when polled
    """
    text: str
    index: int
    visible: bool = True


@dataclass
class MatchResult:
    """
    Outcome of matching a value against a candidate list.
    
    Attributes:
        kind: Strongest match kind found
        candidate: The winning candidate (None when kind is NONE)
        candidates: Every candidate considered, for diagnostics
    """
    kind: MatchKind
    candidate: Optional[OptionCandidate] = None
    candidates: List[OptionCandidate] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.kind is not MatchKind.NONE and self.candidate is not None

    @property
    def candidate_texts(self) -> List[str]:
        return [c.text for c in self.candidates]


def classify(
    text: str,
    target: str,
    prefix_length: int = DEFAULT_PREFIX_LENGTH,
) -> MatchKind:
    """
    Classify a single option text against a target value.
    
    Both arguments are normalized here; an empty side never matches.
    """
    norm_text = normalize(text)
    norm_target = normalize(target)
    if not norm_text or not norm_target:
        return MatchKind.NONE
    
    if norm_text == norm_target:
        return MatchKind.EXACT
    if norm_target in norm_text:
        return MatchKind.TEXT_CONTAINS_VALUE
    if norm_text in norm_target:
        return MatchKind.VALUE_CONTAINS_TEXT
    if norm_text[:prefix_length] == norm_target[:prefix_length]:
        return MatchKind.PREFIX
    return MatchKind.NONE


def match(
    candidates: Sequence[OptionCandidate],
    target: str,
    prefix_length: int = DEFAULT_PREFIX_LENGTH,
) -> MatchResult:
    """
    Find the best candidate for target in one pass.
    
    Candidates are scanned in index order and a later candidate only
    replaces the current best if its kind is strictly stronger.
    
    Args:
        candidates: Rendered options
        target: Requested value
        prefix_length: Characters compared by the PREFIX tier
        
    Returns:
        MatchResult; kind NONE carries the full candidate list
    """
    ordered = sorted(candidates, key=lambda c: c.index)
    best_kind = MatchKind.NONE
    best: Optional[OptionCandidate] = None
    
    if normalize(target):
        for candidate in ordered:
            if not normalize(candidate.text):
                continue
            kind = classify(candidate.text, target, prefix_length)
            if kind.rank > best_kind.rank:
                best_kind, best = kind, candidate
                if kind is MatchKind.EXACT:
                    break
    
    if best is not None:
        logger.debug(f"Matched '{target}' to '{best.text}' ({best_kind.value})")
    else:
        logger.debug(f"No option matched '{target}' among {len(ordered)} candidates")
    
    return MatchResult(kind=best_kind, candidate=best, candidates=list(ordered))
