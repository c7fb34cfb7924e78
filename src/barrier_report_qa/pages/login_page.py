"""
Login Page - Sign in through the landing page's modal form.
"""

from typing import Optional
import logging

from barrier_report_qa.exceptions import BarrierReportQAError, ConfigurationError
from barrier_report_qa.pages import fields
from barrier_report_qa.pages.base_page import BasePage

logger = logging.getLogger(__name__)


class LoginPage(BasePage):
    """Landing page login modal."""

    def _credentials(self, email: Optional[str], password: Optional[str]) -> tuple:
        app = self.settings.app
        email = email or app.email
        if password is None and app.password is not None:
            password = app.password.get_secret_value()
        missing = [name for name, value in (("EMAIL", email), ("PASSWORD", password)) if not value]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                {"missing": missing},
            )
        return email, password

    async def login(self, email: Optional[str] = None, password: Optional[str] = None) -> None:
        """
        Log in with the given or configured credentials.

        Raises:
            ConfigurationError: If no credentials are available
        """
        email, password = self._credentials(email, password)
        logger.info("Starting login process...")

        await self.selector.click_field(fields.LOGIN_BUTTON)
        await self.selector.resolve_field(fields.LOGIN_MODAL)
        await self.selector.fill_text(fields.EMAIL_INPUT, email)
        await self.selector.fill_text(fields.PASSWORD_INPUT, password)

        async with self.page.expect_navigation(timeout=self.settings.browser.navigation_timeout_ms):
            await self.selector.click_field(fields.LOGIN_SUBMIT)

        logger.info("Login submitted")

    async def is_logged_in(self, email: Optional[str] = None) -> bool:
        """
        True if the user menu is showing and names the logged-in e-mail.

        A missing user menu counts as not logged in.
        """
        expected = email or self.settings.app.email or ""
        try:
            menu = await self.selector.resolve_field(fields.USER_MENU)
            text = await menu.text_content() or ""
        except BarrierReportQAError as e:
            logger.warning(f"Failed to verify login status: {e}")
            return False

        logged_in = bool(expected) and expected in text
        logger.info(f"Login verification: {'Successful' if logged_in else 'Failed'}")
        return logged_in
