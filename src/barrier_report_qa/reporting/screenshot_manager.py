"""
Screenshot Manager - Capture and organize screenshots during runs.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, List
import logging
import re

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def slugify(text: str, max_length: int = 40) -> str:
    """File-name-safe form of a step name."""
    slug = _UNSAFE.sub("_", text).strip("_").lower()
    return slug[:max_length] or "step"


@dataclass
class Screenshot:
    """
    A captured screenshot.

    Attributes:
        path: File path to the screenshot
        step_number: Associated step number
        step_name: Name of the step it belongs to
        timestamp: When the screenshot was taken
        is_error: Whether this is an error screenshot
    """
    path: Path
    step_number: int
    step_name: str
    timestamp: datetime
    is_error: bool = False


class ScreenshotManager:
    """
    Manage screenshot capture for a run.

    Example:
        >>> manager = ScreenshotManager(output_dir="./output", run_id="run_20240501_101500")
        >>> shot = await manager.capture(page, 3, "Select age group", is_error=True)
    """

    def __init__(self, output_dir: str | Path, run_id: str, format: str = "png"):
        """
        Args:
            output_dir: Base directory; screenshots go to <output_dir>/<run_id>/screenshots
            run_id: Unique run identifier
            format: Image format (png, jpeg)
        """
        self.output_dir = Path(output_dir) / run_id / "screenshots"
        self.run_id = run_id
        self.format = format
        self._screenshots: List[Screenshot] = []

    async def capture(
        self,
        page: Any,
        step_number: int,
        step_name: str,
        full_page: bool = False,
        is_error: bool = False,
    ) -> Screenshot:
        """
        Capture a screenshot of page.

        Returns:
            Screenshot object with path and metadata
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now()
        prefix = "error_" if is_error else ""
        filename = (
            f"{prefix}step_{step_number:03d}_{slugify(step_name)}_"
            f"{timestamp.strftime('%H%M%S')}.{self.format}"
        )
        path = self.output_dir / filename

        await page.screenshot(path=str(path), full_page=full_page)

        screenshot = Screenshot(
            path=path,
            step_number=step_number,
            step_name=step_name,
            timestamp=timestamp,
            is_error=is_error,
        )
        self._screenshots.append(screenshot)

        logger.debug(f"Captured screenshot: {path}")
        return screenshot

    async def capture_on_error(self, page: Any, step_number: int, step_name: str) -> Screenshot:
        """Capture a full-page error screenshot."""
        return await self.capture(page, step_number, step_name, full_page=True, is_error=True)

    def get_screenshots(self) -> List[Screenshot]:
        """Get all captured screenshots."""
        return self._screenshots.copy()
