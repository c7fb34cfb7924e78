"""
Barrier Report QA - End-to-end checks for the TB barrier reporting web application.

The suite logs in, files an anonymous barrier report with random values and
verifies that the report panel shows it. Its core is a small library for
resilient element resolution: ordered locator strategies, option lists
polled until they settle, tolerant option matching and grid verification.

Example:
    >>> from barrier_report_qa import load_config, BrowserSession, run_barrier_report_scenario
    >>> settings = load_config()
    >>> async with BrowserSession(settings) as session:
    ...     context = await run_barrier_report_scenario(session.page, settings)
"""

__version__ = "0.1.0"

# Public API exports
from barrier_report_qa.config import Settings, load_config, get_settings
from barrier_report_qa.browsers import BrowserSession
from barrier_report_qa.engine import ResilientSelector, SelectorConfig, verify
from barrier_report_qa.scenarios import ScenarioContext, run_barrier_report_scenario

__all__ = [
    "Settings",
    "load_config",
    "get_settings",
    "BrowserSession",
    "ResilientSelector",
    "SelectorConfig",
    "verify",
    "ScenarioContext",
    "run_barrier_report_scenario",
    "__version__",
]
