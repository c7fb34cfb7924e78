"""
Utilities module - Common utility functions.
"""

from barrier_report_qa.utils.logging import setup_logging, get_logger
from barrier_report_qa.utils.data import (
    random_choice,
    random_int,
    generate_random_text,
    generate_random_phone_number,
    format_report_date,
    format_iso_date,
    is_valid_email,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "random_choice",
    "random_int",
    "generate_random_text",
    "generate_random_phone_number",
    "format_report_date",
    "format_iso_date",
    "is_valid_email",
]
