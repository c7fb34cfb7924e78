"""
Base Page - Shared behaviour of every page object.
"""

from typing import Any, Optional
import logging

from barrier_report_qa.config.settings import Settings
from barrier_report_qa.constants import ensure_language
from barrier_report_qa.engine.selector import ResilientSelector, SelectorConfig
from barrier_report_qa.exceptions import NavigationError
from barrier_report_qa.pages import fields

logger = logging.getLogger(__name__)


class BasePage:
    """
    Page object base class.

    Each page object wraps the same Playwright page and drives it through a
    ResilientSelector configured from Settings.

    Attributes:
        page: Playwright Page
        settings: Run settings
        selector: Resilient selector bound to page
        current_language: Last language set through set_language()
    """

    def __init__(
        self,
        page: Any,
        settings: Settings,
        selector: Optional[ResilientSelector] = None,
    ):
        self.page = page
        self.settings = settings
        self.selector = selector or ResilientSelector(page, SelectorConfig.from_settings(settings))
        self.current_language: Optional[str] = None

    @property
    def base_url(self) -> str:
        return self.settings.app.base_url

    async def goto(self, url: Optional[str] = None) -> None:
        """
        Navigate to url (the application's landing page by default).

        Raises:
            NavigationError: If navigation fails
        """
        target = url or self.base_url
        logger.info(f"Navigating to {target}")
        try:
            await self.page.goto(target, timeout=self.settings.browser.navigation_timeout_ms)
        except Exception as e:
            raise NavigationError(f"Failed to navigate to {target}: {e}", url=target) from e

    async def get_page_title(self) -> str:
        return await self.page.title()

    async def set_language(self, language: str) -> None:
        """
        Switch the interface language.

        Args:
            language: One of "ru", "en", "ro"

        Raises:
            UnsupportedLanguageError: For any other code
        """
        ensure_language(language)
        await self.selector.click_field(fields.LANGUAGE_MENU)
        await self.selector.click_field(fields.language_option(language))
        await self.selector.wait_for_loading()
        self.current_language = language
        logger.info(f"Interface language set to '{language}'")
