"""
Barrier Form Page - Anonymous barrier reporting form.

Flow: barriers menu -> anonymous reporting -> Add -> rights category, then
the demographic dropdowns, phone, one sub-option per TB barrier, free-text
details and Save. Each select_* method picks a random value from the
field's vocabulary unless one is given, and returns the option text that
was actually selected.
"""

from typing import Any, Dict, Optional, Sequence
import logging
import random

from barrier_report_qa.config.settings import Settings
from barrier_report_qa.constants import (
    AGE_GROUPS,
    GENDERS,
    IDENTITY_OPTIONS,
    LOCATIONS,
    LOCATION_TYPES,
    STUDIES_LEVELS,
    TB_BARRIERS,
    TYPE_OF_USER_OPTIONS,
    TIMEOUTS,
    barrier_options,
)
from barrier_report_qa.engine.locators import FieldDescriptor
from barrier_report_qa.engine.selector import ResilientSelector
from barrier_report_qa.exceptions import StabilityTimeoutError
from barrier_report_qa.pages import fields
from barrier_report_qa.pages.base_page import BasePage
from barrier_report_qa.utils.data import (
    generate_random_phone_number,
    generate_random_text,
    random_choice,
    random_int,
)

logger = logging.getLogger(__name__)


class BarrierFormPage(BasePage):
    """Anonymous barrier report form."""

    def __init__(
        self,
        page: Any,
        settings: Settings,
        selector: Optional[ResilientSelector] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(page, settings, selector)
        self.rng = rng

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    async def open_barriers_menu(self) -> None:
        await self.selector.click_field(fields.BARRIERS_MENU)

    async def open_anonymous_reporting(self) -> None:
        async with self.page.expect_navigation(timeout=self.settings.browser.navigation_timeout_ms):
            await self.selector.click_field(fields.ANONYMOUS_REPORTING)
        await self.selector.wait_for_loading()

    async def click_add(self) -> None:
        await self.selector.click_field(fields.ADD_BUTTON)

    async def choose_rights_category(self) -> None:
        """Pick the right-to-health category the barriers are reported under."""
        await self.selector.click_field(fields.RIGHTS_BUTTON)

    # =========================================================================
    # DEMOGRAPHICS
    # =========================================================================

    async def _select(
        self,
        descriptor: FieldDescriptor,
        options: Sequence[str],
        value: Optional[str],
    ) -> str:
        choice = value if value is not None else random_choice(options, self.rng)
        outcome = await self.selector.select_option(descriptor, choice)
        return outcome.selected_text

    async def select_age_group(self, value: Optional[str] = None) -> str:
        return await self._select(fields.AGE_GROUP, AGE_GROUPS, value)

    async def select_gender(self, value: Optional[str] = None) -> str:
        return await self._select(fields.GENDER, GENDERS, value)

    async def select_identity(self, value: Optional[str] = None) -> str:
        return await self._select(fields.IDENTITY, IDENTITY_OPTIONS, value)

    async def select_location(self, value: Optional[str] = None) -> str:
        return await self._select(fields.LOCATION, LOCATIONS, value)

    async def select_location_type(self, value: Optional[str] = None) -> str:
        return await self._select(fields.LOCATION_TYPE, LOCATION_TYPES, value)

    async def select_studies_level(self, value: Optional[str] = None) -> str:
        return await self._select(fields.STUDIES_LEVEL, STUDIES_LEVELS, value)

    async def select_type_of_user(self, value: Optional[str] = None) -> str:
        return await self._select(fields.TYPE_OF_USER, TYPE_OF_USER_OPTIONS, value)

    async def input_phone_number(self, number: Optional[str] = None) -> str:
        """Type a phone number digit by digit (random 8 digits starting with 7 by default)."""
        number = number or generate_random_phone_number(rng=self.rng)
        return await self.selector.fill_text(fields.PHONE, number, type_delay_ms=50)

    # =========================================================================
    # TB BARRIERS
    # =========================================================================

    async def select_tb_barrier(self, barrier: str, option: Optional[str] = None) -> str:
        """
        Pick a sub-option for one TB barrier.

        Raises:
            InvalidCriteriaError: If barrier is not a known TB barrier
        """
        options = barrier_options(barrier)
        return await self._select(fields.TB_BARRIER_FIELDS[barrier], options, option)

    async def select_all_tb_barriers(self) -> Dict[str, str]:
        """Pick a random sub-option for every TB barrier, in form order."""
        chosen = {}
        for barrier in TB_BARRIERS:
            chosen[barrier] = await self.select_tb_barrier(barrier)
        return chosen

    async def fill_other_details(self, text: Optional[str] = None) -> str:
        """Fill "Alte detalii" (5 to 10 random words by default)."""
        text = text or generate_random_text(random_int(5, 10, self.rng), self.rng)
        return await self.selector.fill_text(fields.OTHER_DETAILS, text)

    async def save(self) -> None:
        """
        Click Save and wait out the save indicator.

        The indicator may never render for fast saves; that is not an error.
        """
        await self.selector.click_field(fields.SAVE_BUTTON)

        try:
            await self.selector.wait_shown(
                fields.SAVE_INDICATOR,
                TIMEOUTS["short"],
                description="save indicator",
            )
        except StabilityTimeoutError:
            logger.info("No loading indicator shown during save")
        else:
            await self.selector.wait_hidden(
                fields.SAVE_INDICATOR,
                TIMEOUTS["navigation"],
                description="save to complete",
            )
        logger.info("Barrier report saved")
