"""
Browsers module - Browser session management.
"""

from barrier_report_qa.browsers.playwright_browser import BrowserSession

__all__ = [
    "BrowserSession",
]
