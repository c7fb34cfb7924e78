"""
Report Panel Page - Demographic communities report.

Filters are toolbar select boxes driven through the ResilientSelector; the
result grid is scraped into header and row lists and checked with the
report verifier.
"""

from datetime import date
from typing import List, Optional
import logging

from barrier_report_qa.constants import REPORT_FILTERS
from barrier_report_qa.engine.selector import SelectionOutcome
from barrier_report_qa.engine.verifier import FilterCriteria, VerificationReport, verify_report
from barrier_report_qa.exceptions import InvalidCriteriaError, ValidationError
from barrier_report_qa.pages import fields
from barrier_report_qa.pages.base_page import BasePage
from barrier_report_qa.utils.data import format_report_date

logger = logging.getLogger(__name__)


GRID_HEADERS_JS = """() => {
    const headerRow = document.querySelector('[role="row"]');
    if (!headerRow) return [];
    return Array.from(headerRow.querySelectorAll('[role="columnheader"]'))
        .map(cell => cell.textContent.trim());
}"""

# Data rows only: rows without grid cells (headers, filter rows) are skipped
GRID_ROWS_JS = """() => Array.from(document.querySelectorAll('[role="row"]'))
    .map(row => Array.from(row.querySelectorAll('[role="gridcell"]')).map(cell => cell.textContent.trim()))
    .filter(cells => cells.length > 0)"""


class ReportPanelPage(BasePage):
    """Report panel -> Demographic communities."""

    async def navigate_to_demographic_communities(self) -> None:
        logger.info("Navigating to Demographic Communities section")
        await self.selector.click_field(fields.REPORTS_MENU)
        await self.selector.click_field(fields.DEMOGRAPHIC_MENU)
        await self.selector.wait_shown(
            fields.REPORT_TOOLBAR,
            self.settings.browser.navigation_timeout_ms,
            description="report toolbar",
        )
        await self.selector.wait_for_loading()

    async def select_filter(self, name: str, value: str) -> SelectionOutcome:
        """
        Select value in one of the toolbar filters.

        Args:
            name: "Type Of User", "Key population" or "Age"
            value: Option text chosen on the form

        Raises:
            InvalidCriteriaError: Unknown filter name
        """
        if name not in REPORT_FILTERS:
            raise InvalidCriteriaError(
                f"Unknown report filter: {name}. Available filters: {', '.join(REPORT_FILTERS)}",
                key=name,
                value=value,
            )
        await self.selector.wait_shown(
            fields.REPORT_TOOLBAR,
            self.settings.polling.resolve_timeout_ms,
            description="report toolbar",
        )
        await self.selector.wait_for_loading()
        return await self.selector.select_option(fields.REPORT_FILTER_FIELDS[name], value)

    async def get_grid_headers(self) -> List[str]:
        headers = await self.page.evaluate(GRID_HEADERS_JS)
        logger.debug(f"Grid headers: {headers}")
        return headers

    async def get_report_data(self) -> List[List[str]]:
        """Cell texts of every data row in the grid."""
        await self.selector.wait_shown(
            fields.REPORT_GRID,
            self.settings.polling.loading_timeout_ms,
            description="report grid",
        )
        rows = await self.page.evaluate(GRID_ROWS_JS)
        logger.info(f"Found {len(rows)} rows of data")
        return rows

    async def input_today_date(self, today: Optional[date] = None) -> str:
        """
        Type today's date (MM/DD/YYYY) into the "From" date box.

        Returns:
            The value the date box holds afterwards

        Raises:
            ValidationError: If the date box is empty after typing
        """
        formatted = format_report_date(today)
        logger.info(f"Inputting date {formatted} in From field")
        entered = await self.selector.fill_text(
            fields.DATE_FROM,
            formatted,
            type_delay_ms=50,
            commit_key="Tab",
        )
        if not entered:
            raise ValidationError("Date input appears to be empty after filling", {"date": formatted})
        await self.selector.wait_for_loading()
        return entered

    async def verify_records(self, criteria: FilterCriteria) -> VerificationReport:
        """Check the current grid against criteria once loading has settled."""
        logger.info(f"Verifying records match filters: {dict(criteria)}")
        await self.selector.wait_for_loading()
        headers = await self.get_grid_headers()
        rows = await self.get_report_data()
        if not rows:
            logger.info("No records found in the grid")
        return verify_report(rows, headers, criteria)
