"""
Playwright Browser - Browser session for the end-to-end suite.

The suite runs serially: one browser, one context and one page per session.
Launch options, viewport, default timeouts and tracing come from Settings.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional
import logging

from barrier_report_qa.config.settings import Settings
from barrier_report_qa.exceptions.browser import BrowserError, BrowserLaunchError

logger = logging.getLogger(__name__)


class BrowserSession:
    """
    Owns the Playwright driver, browser, context and page of a run.

    Example:
        >>> async with BrowserSession(settings) as session:
        ...     await session.page.goto(settings.app.base_url)
    """

    def __init__(self, settings: Settings, run_id: Optional[str] = None):
        """
        Initialize the session (not launched yet).

        Args:
            settings: Browser and reporting settings are read from here
            run_id: Run directory under the output dir for the trace
                (generated when omitted; pass the step recorder's run_id
                to keep all artifacts of a run together)
        """
        self.settings = settings
        self.run_id = run_id or datetime.now().strftime("run_%Y%m%d_%H%M%S")
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None
        self._page: Any = None
        self._tracing = False

    @property
    def is_connected(self) -> bool:
        """Check if browser is connected."""
        return self._browser is not None and self._browser.is_connected()

    @property
    def run_dir(self) -> Path:
        """Directory holding this run's artifacts."""
        return Path(self.settings.reporting.output_dir) / self.run_id

    @property
    def page(self) -> Any:
        """The session's page."""
        if self._page is None:
            raise BrowserError("Browser not launched. Call launch() first.")
        return self._page

    async def launch(self) -> Any:
        """
        Launch the browser and open the session page.

        Returns:
            The Playwright Page

        Raises:
            BrowserLaunchError: If Playwright or the browser fails to start
        """
        browser_cfg = self.settings.browser
        try:
            from playwright.async_api import async_playwright

            self._playwright = await async_playwright().start()

            browser_launchers = {
                "chromium": self._playwright.chromium,
                "firefox": self._playwright.firefox,
                "webkit": self._playwright.webkit,
            }
            launcher = browser_launchers.get(browser_cfg.browser_type, self._playwright.chromium)

            launch_options: dict = {
                "headless": browser_cfg.headless,
                "slow_mo": browser_cfg.slow_mo,
            }
            if browser_cfg.channel:
                launch_options["channel"] = browser_cfg.channel
            self._browser = await launcher.launch(**launch_options)

            self._context = await self._browser.new_context(
                viewport={
                    "width": browser_cfg.viewport_width,
                    "height": browser_cfg.viewport_height,
                },
            )
            self._context.set_default_timeout(browser_cfg.action_timeout_ms)
            self._context.set_default_navigation_timeout(browser_cfg.navigation_timeout_ms)

            if self.settings.reporting.trace:
                await self._context.tracing.start(screenshots=True, snapshots=True, sources=False)
                self._tracing = True

            self._page = await self._context.new_page()

            logger.info(
                f"Launched {browser_cfg.browser_type} browser "
                f"(headless={browser_cfg.headless}, channel={browser_cfg.channel})"
            )
            return self._page

        except Exception as e:
            await self.close()
            raise BrowserLaunchError(
                f"Failed to launch browser: {e}",
                {"browser_type": browser_cfg.browser_type, "channel": browser_cfg.channel},
            ) from e

    async def close(self) -> Optional[Path]:
        """
        Close page, context, browser and driver.

        A failure to save the trace is logged and does not stop the rest of
        the shutdown.

        Returns:
            Path of the saved trace archive, if tracing was on and saving worked
        """
        trace_path: Optional[Path] = None

        try:
            if self._context:
                try:
                    if self._tracing:
                        trace_path = await self._save_trace()
                finally:
                    context, self._context, self._page = self._context, None, None
                    await context.close()
        finally:
            try:
                if self._browser:
                    browser, self._browser = self._browser, None
                    await browser.close()
            finally:
                if self._playwright:
                    playwright, self._playwright = self._playwright, None
                    await playwright.stop()

        logger.info("Browser closed")
        return trace_path

    async def _save_trace(self) -> Optional[Path]:
        self._tracing = False
        trace_path = self.run_dir / "trace.zip"
        try:
            trace_path.parent.mkdir(parents=True, exist_ok=True)
            await self._context.tracing.stop(path=str(trace_path))
        except Exception as e:
            logger.error(f"Failed to save trace to {trace_path}: {e}")
            return None
        logger.info(f"Trace saved: {trace_path}")
        return trace_path

    async def __aenter__(self) -> "BrowserSession":
        await self.launch()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
