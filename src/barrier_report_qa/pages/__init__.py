"""
Pages module - Page objects of the web application.
"""

from barrier_report_qa.pages.base_page import BasePage
from barrier_report_qa.pages.login_page import LoginPage
from barrier_report_qa.pages.barrier_form_page import BarrierFormPage
from barrier_report_qa.pages.report_panel_page import ReportPanelPage

__all__ = [
    "BasePage",
    "LoginPage",
    "BarrierFormPage",
    "ReportPanelPage",
]
