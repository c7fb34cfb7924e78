"""
Barrier Report Scenario - Report a barrier and find it in the report panel.

Steps:
1. Open the application and log in
2. Switch the interface language
3. Fill and save an anonymous barrier report with random values
4. Filter the demographic communities report by the values chosen on the
   form and by today's date
5. Verify at least one row matches every filter
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional
import logging
import random

from barrier_report_qa.config.settings import Settings
from barrier_report_qa.engine.verifier import VerificationReport
from barrier_report_qa.exceptions import NavigationError, ValidationError
from barrier_report_qa.pages import BarrierFormPage, LoginPage, ReportPanelPage
from barrier_report_qa.reporting.step_logger import StepRecorder
from barrier_report_qa.utils.data import format_report_date

logger = logging.getLogger(__name__)


@dataclass
class ScenarioContext:
    """
    Values chosen on the form, carried to the report checks.

    Attributes:
        age_group / gender / identity / location / location_type /
        studies_level / type_of_user: Option texts selected on the form
        phone: Phone number typed
        barriers: TB barrier -> selected sub-option
        other_details: Free text typed into "Alte detalii"
        report_date: Date entered in the report's "From" box
        report_row_count: Rows in the grid after the option filters
        verification: Outcome of the final grid check
    """
    age_group: Optional[str] = None
    gender: Optional[str] = None
    identity: Optional[str] = None
    location: Optional[str] = None
    location_type: Optional[str] = None
    studies_level: Optional[str] = None
    type_of_user: Optional[str] = None
    phone: Optional[str] = None
    barriers: Dict[str, str] = field(default_factory=dict)
    other_details: Optional[str] = None
    report_date: Optional[date] = None
    report_row_count: int = 0
    verification: Optional[VerificationReport] = None

    def criteria(self) -> Dict[str, Optional[str]]:
        """Report criteria for the values chosen on the form."""
        return {
            "typeOfUser": self.type_of_user,
            "keyPopulation": self.identity,
            "age": self.age_group,
            "date": format_report_date(self.report_date) if self.report_date else None,
        }


async def run_barrier_report_scenario(
    page: Any,
    settings: Settings,
    recorder: Optional[StepRecorder] = None,
    rng: Optional[random.Random] = None,
) -> ScenarioContext:
    """
    Run the full barrier report flow on page.

    Args:
        page: Playwright Page of an open browser session
        settings: Run settings (credentials must be configured)
        recorder: Step recorder; one is created from settings when omitted
        rng: Random source for form values

    Returns:
        The ScenarioContext with every chosen value and the verification

    Raises:
        ConfigurationError: Missing credentials
        NavigationError: Login could not be confirmed
        ValidationError: Empty report or no matching row
        BarrierReportQAError: Any resolution or browser failure on the way
    """
    settings.require_credentials()
    recorder = recorder or StepRecorder.from_settings(settings, page=page)
    if recorder.page is None:
        recorder.page = page

    login_page = LoginPage(page, settings)
    form_page = BarrierFormPage(page, settings, selector=login_page.selector, rng=rng)
    report_page = ReportPanelPage(page, settings, selector=login_page.selector)
    context = ScenarioContext()

    async with recorder.step("Navigate to application"):
        await login_page.goto()

    async with recorder.step("Login to application"):
        await login_page.login()

    async with recorder.step("Verify successful login"):
        if not await login_page.is_logged_in():
            raise NavigationError("User menu does not show the logged-in account")

    async with recorder.step(f"Set interface language to '{settings.app.language}'"):
        await form_page.set_language(settings.app.language)

    async with recorder.step("Open barriers reporting menu"):
        await form_page.open_barriers_menu()

    async with recorder.step("Open anonymous reporting page"):
        await form_page.open_anonymous_reporting()

    async with recorder.step("Click Add button"):
        await form_page.click_add()

    async with recorder.step("Select rights option"):
        await form_page.choose_rights_category()

    async with recorder.step("Fill in form fields") as log:
        context.age_group = await form_page.select_age_group()
        context.gender = await form_page.select_gender()
        context.identity = await form_page.select_identity()
        context.location = await form_page.select_location()
        context.location_type = await form_page.select_location_type()
        context.studies_level = await form_page.select_studies_level()
        context.type_of_user = await form_page.select_type_of_user()
        context.phone = await form_page.input_phone_number()
        log.data.update(
            age_group=context.age_group,
            identity=context.identity,
            type_of_user=context.type_of_user,
        )

    async with recorder.step("Select TB barriers") as log:
        context.barriers = await form_page.select_all_tb_barriers()
        log.data["barriers"] = len(context.barriers)

    async with recorder.step("Fill in other details and save"):
        context.other_details = await form_page.fill_other_details()
        await form_page.save()

    async with recorder.step("Navigate to Report Panel and Demographic Communities"):
        await report_page.navigate_to_demographic_communities()

    async with recorder.step("Filter report by selected values") as log:
        await report_page.select_filter("Type Of User", context.type_of_user)
        await report_page.select_filter("Key population", context.identity)
        await report_page.select_filter("Age", context.age_group)
        rows = await report_page.get_report_data()
        context.report_row_count = len(rows)
        log.data["rows"] = len(rows)
        if not rows:
            raise ValidationError("Report contains no data for the selected filters", context.criteria())

    async with recorder.step("Verify records match filters") as log:
        context.report_date = date.today()
        await report_page.input_today_date(context.report_date)
        context.verification = await report_page.verify_records(context.criteria())
        log.data.update(
            matching=context.verification.matching_rows,
            total=context.verification.total_rows,
        )
        if not context.verification.matched:
            raise ValidationError(
                "No report row matches the values chosen on the form",
                {"criteria": context.criteria(), "columns": context.verification.columns},
            )

    logger.info("Barrier report scenario completed")
    return context
