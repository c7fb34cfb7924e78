"""
Browser-related exceptions.
"""

from barrier_report_qa.exceptions.base import BarrierReportQAError


class BrowserError(BarrierReportQAError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.
    
    Raised when the browser fails to start, which could be due to:
    - Missing browser binaries
    - Invalid browser options
    - Resource constraints
    """
    pass


class NavigationError(BrowserError):
    """
    Error during page navigation.
    
    Raised when navigating to the application or between its menus fails.
    """
    
    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url
