"""
Step Logger - Step-by-step logging for scenario runs.

Every scenario step runs inside StepRecorder.step(); the recorder logs
start, success and failure with durations, keeps a StepLog per step and
takes an error screenshot when a step fails with a page attached.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional
import json
import logging
import time

from barrier_report_qa.reporting.screenshot_manager import ScreenshotManager

logger = logging.getLogger(__name__)


class StepStatus(Enum):
    """Lifecycle state of a step."""
    START = "start"
    SUCCESS = "success"
    ERROR = "error"


STATUS_MARKERS = {
    StepStatus.START: "🚀",
    StepStatus.SUCCESS: "✅",
    StepStatus.ERROR: "❌",
}


@dataclass
class StepLog:
    """
    Record of a single scenario step.

    Attributes:
        step_number: 1-based position in the run
        name: Step name
        status: Final status
        started_at: When the step started
        duration_ms: Wall time spent in the step
        data: Values the step attached (selected options, counts, ...)
        error: Error message if the step failed
        screenshot: Path to the error screenshot, if captured
    """
    step_number: int
    name: str
    status: StepStatus
    started_at: datetime
    duration_ms: float = 0.0
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    screenshot: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "step_number": self.step_number,
            "name": self.name,
            "status": self.status.value,
            "started_at": self.started_at.isoformat(),
            "duration_ms": round(self.duration_ms, 1),
            "data": self.data,
            "error": self.error,
            "screenshot": self.screenshot,
        }


class StepRecorder:
    """
    Records scenario steps.

    Example:
        >>> recorder = StepRecorder(run_id="run_123", page=page)
        >>> async with recorder.step("Login") as log:
        ...     await login_page.login(email, password)
        ...     log.data["email"] = email
        >>> recorder.export_json("./output/steps.json")
    """

    def __init__(
        self,
        run_id: Optional[str] = None,
        page: Any = None,
        screenshots: Optional[ScreenshotManager] = None,
        screenshot_on_failure: bool = True,
    ):
        """
        Args:
            run_id: Unique identifier for the run (generated when omitted)
            page: Page to screenshot on failure; may be attached later
            screenshots: Screenshot manager used for error screenshots
            screenshot_on_failure: Capture a screenshot when a step fails
        """
        self.run_id = run_id or datetime.now().strftime("run_%Y%m%d_%H%M%S")
        self.page = page
        self.screenshots = screenshots
        self.screenshot_on_failure = screenshot_on_failure
        self._logs: List[StepLog] = []

    @classmethod
    def from_settings(cls, settings: Any, page: Any = None, run_id: Optional[str] = None) -> "StepRecorder":
        """Build a recorder writing under settings.reporting.output_dir."""
        recorder = cls(
            run_id=run_id,
            page=page,
            screenshot_on_failure=settings.reporting.screenshot_on_failure,
        )
        recorder.screenshots = ScreenshotManager(settings.reporting.output_dir, recorder.run_id)
        return recorder

    @property
    def logs(self) -> List[StepLog]:
        return self._logs.copy()

    @property
    def failed(self) -> List[StepLog]:
        return [log for log in self._logs if log.status is StepStatus.ERROR]

    def mark(self, name: str, status: StepStatus, meta: Optional[Dict[str, Any]] = None) -> None:
        """Log a step marker line."""
        suffix = f" | {json.dumps(meta, ensure_ascii=False, default=str)}" if meta else ""
        message = f"{STATUS_MARKERS[status]} {name}{suffix}"
        if status is StepStatus.ERROR:
            logger.error(message)
        else:
            logger.info(message)

    @asynccontextmanager
    async def step(self, name: str) -> AsyncIterator[StepLog]:
        """
        Run a block as a named step.

        Exceptions are recorded and re-raised.
        """
        log = StepLog(
            step_number=len(self._logs) + 1,
            name=name,
            status=StepStatus.START,
            started_at=datetime.now(),
        )
        self._logs.append(log)
        self.mark(name, StepStatus.START)
        started = time.perf_counter()

        try:
            yield log
        except Exception as e:
            log.duration_ms = (time.perf_counter() - started) * 1000
            log.status = StepStatus.ERROR
            log.error = str(e)
            self.mark(name, StepStatus.ERROR, {"error": str(e), "duration_ms": round(log.duration_ms)})
            await self._capture_failure(log)
            raise

        log.duration_ms = (time.perf_counter() - started) * 1000
        log.status = StepStatus.SUCCESS
        self.mark(name, StepStatus.SUCCESS, {**log.data, "duration_ms": round(log.duration_ms)})

    async def _capture_failure(self, log: StepLog) -> None:
        if not (self.screenshot_on_failure and self.page is not None and self.screenshots):
            return
        try:
            shot = await self.screenshots.capture_on_error(self.page, log.step_number, log.name)
            log.screenshot = str(shot.path)
        except Exception as e:
            # The step's own error is the one that propagates
            logger.warning(f"Could not capture error screenshot for '{log.name}': {e}")

    def summary(self) -> Dict[str, Any]:
        """Counts and total duration of the recorded steps."""
        return {
            "run_id": self.run_id,
            "total": len(self._logs),
            "passed": sum(1 for log in self._logs if log.status is StepStatus.SUCCESS),
            "failed": len(self.failed),
            "duration_ms": round(sum(log.duration_ms for log in self._logs), 1),
        }

    def export_json(self, path: str | Path) -> Path:
        """Export the summary and step records to a JSON file."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(
                {"summary": self.summary(), "steps": [log.to_dict() for log in self._logs]},
                f,
                indent=2,
                ensure_ascii=False,
                default=str,
            )
        return target
