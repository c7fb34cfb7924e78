"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout barrier-report-qa,
providing clear error types for different failure scenarios.
"""

from barrier_report_qa.exceptions.base import (
    BarrierReportQAError,
    ConfigurationError,
)
from barrier_report_qa.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    NavigationError,
)
from barrier_report_qa.exceptions.resolution import (
    ResolutionError,
    FieldNotFoundError,
    StabilityTimeoutError,
    OptionNotFoundError,
    InteractionFailedError,
)
from barrier_report_qa.exceptions.validation import (
    ValidationError,
    UnsupportedLanguageError,
    InvalidCriteriaError,
    MalformedRowError,
)

__all__ = [
    # Base exceptions
    "BarrierReportQAError",
    "ConfigurationError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "NavigationError",
    # Resolution exceptions
    "ResolutionError",
    "FieldNotFoundError",
    "StabilityTimeoutError",
    "OptionNotFoundError",
    "InteractionFailedError",
    # Validation exceptions
    "ValidationError",
    "UnsupportedLanguageError",
    "InvalidCriteriaError",
    "MalformedRowError",
]
