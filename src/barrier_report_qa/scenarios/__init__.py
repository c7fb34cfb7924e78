"""
Scenarios module - End-to-end flows composed from page objects.
"""

from barrier_report_qa.scenarios.barrier_report import ScenarioContext, run_barrier_report_scenario

__all__ = [
    "ScenarioContext",
    "run_barrier_report_scenario",
]
