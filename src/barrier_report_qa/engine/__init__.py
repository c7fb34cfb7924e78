"""
Engine Module - Resilient element resolution and verification.

This is the reusable core of the suite, handling:
- Text normalization and option matching
- Polling dynamic lists until they settle
- Resolving fields by ordered locator strategies and selecting options
- Verifying scraped report grids against filter criteria
"""

from barrier_report_qa.engine.text_normalizer import normalize, prefix
from barrier_report_qa.engine.match_strategy import (
    MatchKind,
    MatchResult,
    OptionCandidate,
    classify,
    match,
)
from barrier_report_qa.engine.stability import StabilityOptions, StabilityPoller, wait_for_stable
from barrier_report_qa.engine.locators import FieldDescriptor, LocatorKind, LocatorStrategy
from barrier_report_qa.engine.selector import (
    DEFAULT_INTERACTIONS,
    InteractionFallback,
    ResilientSelector,
    SelectionOutcome,
    SelectorConfig,
)
from barrier_report_qa.engine.verifier import (
    FilterCriteria,
    GridRow,
    VerificationReport,
    resolve_columns,
    verify,
    verify_report,
)

__all__ = [
    # Text
    "normalize",
    "prefix",
    # Matching
    "MatchKind",
    "MatchResult",
    "OptionCandidate",
    "classify",
    "match",
    # Polling
    "StabilityOptions",
    "StabilityPoller",
    "wait_for_stable",
    # Resolution
    "FieldDescriptor",
    "LocatorKind",
    "LocatorStrategy",
    "ResilientSelector",
    "SelectorConfig",
    "SelectionOutcome",
    "InteractionFallback",
    "DEFAULT_INTERACTIONS",
    # Verification
    "GridRow",
    "FilterCriteria",
    "VerificationReport",
    "resolve_columns",
    "verify",
    "verify_report",
]
