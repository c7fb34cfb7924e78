"""
Test data helpers - random form values and date formatting.
"""

import random
import re
from datetime import date, datetime
from typing import Optional, Sequence, TypeVar, Union

T = TypeVar("T")

RANDOM_WORDS = (
    "test", "auto", "random", "text", "word", "data", "input",
    "field", "form", "value", "content", "sample", "example",
    "entry", "info", "note", "detail", "item", "record", "case",
)

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def random_choice(items: Sequence[T], rng: Optional[random.Random] = None) -> T:
    """
    Pick a random item from a non-empty sequence.
    
    Raises:
        ValueError: If items is empty
    """
    if not items:
        raise ValueError("Sequence must be non-empty")
    return (rng or random).choice(items)


def random_int(minimum: int, maximum: int, rng: Optional[random.Random] = None) -> int:
    """Random integer in [minimum, maximum]."""
    if minimum > maximum:
        raise ValueError("Min value cannot be greater than max value")
    return (rng or random).randint(minimum, maximum)


def generate_random_text(word_count: int = 5, rng: Optional[random.Random] = None) -> str:
    """Space-separated filler words for free-text fields."""
    if word_count <= 0:
        raise ValueError("Word count must be positive")
    return " ".join(random_choice(RANDOM_WORDS, rng) for _ in range(word_count))


def generate_random_phone_number(
    length: int = 8,
    prefix: str = "7",
    rng: Optional[random.Random] = None,
) -> str:
    """
    Generate a local phone number.
    
    Args:
        length: Total number of digits including the prefix
        prefix: Leading digits
    """
    if length <= 0:
        raise ValueError("Phone number length must be positive")
    if len(prefix) > length:
        raise ValueError("Prefix is longer than the phone number")
    source = rng or random
    return prefix + "".join(str(source.randint(0, 9)) for _ in range(length - len(prefix)))


def format_report_date(value: Union[date, datetime, None] = None) -> str:
    """Date as the report grid renders it: MM/DD/YYYY."""
    value = value or date.today()
    return value.strftime("%m/%d/%Y")


def format_iso_date(value: Union[date, datetime, None] = None) -> str:
    """Date as YYYY-MM-DD."""
    value = value or date.today()
    return value.strftime("%Y-%m-%d")


def is_valid_email(email: str) -> bool:
    """Loose e-mail shape check."""
    return bool(_EMAIL_PATTERN.match(email or ""))
