"""
Reporting module for barrier-report-qa.

Provides step recording and error screenshots for scenario runs.
"""

from barrier_report_qa.reporting.screenshot_manager import (
    Screenshot,
    ScreenshotManager,
)
from barrier_report_qa.reporting.step_logger import (
    StepStatus,
    StepLog,
    StepRecorder,
)

__all__ = [
    # Screenshots
    "Screenshot",
    "ScreenshotManager",
    # Steps
    "StepStatus",
    "StepLog",
    "StepRecorder",
]
