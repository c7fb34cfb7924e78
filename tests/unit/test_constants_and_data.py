"""
Tests for option vocabularies and test data helpers.
"""

import random
from datetime import date, datetime

import pytest

from barrier_report_qa.constants import (
    AGE_GROUPS,
    LANGUAGES,
    TB_BARRIERS,
    VOCABULARIES,
    barrier_options,
    ensure_language,
    ensure_vocabulary_value,
)
from barrier_report_qa.exceptions import InvalidCriteriaError, UnsupportedLanguageError
from barrier_report_qa.utils.data import (
    RANDOM_WORDS,
    format_iso_date,
    format_report_date,
    generate_random_phone_number,
    generate_random_text,
    is_valid_email,
    random_choice,
    random_int,
)


class TestVocabularies:
    """Test vocabulary validation."""

    @pytest.mark.parametrize("language", LANGUAGES)
    def test_supported_languages(self, language):
        assert ensure_language(language) == language

    def test_unsupported_language(self):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            ensure_language("de")

        assert "Supported languages are: ru, en, ro" in exc_info.value.message

    def test_vocabulary_value(self):
        assert ensure_vocabulary_value("age_group", "25 - 34 years") == "25 - 34 years"

    def test_value_outside_vocabulary(self):
        with pytest.raises(InvalidCriteriaError) as exc_info:
            ensure_vocabulary_value("gender", "Other")

        assert exc_info.value.key == "gender"
        assert exc_info.value.value == "Other"

    def test_unknown_vocabulary(self):
        with pytest.raises(InvalidCriteriaError, match="Unknown vocabulary"):
            ensure_vocabulary_value("region", "North")

    def test_vocabularies_are_non_empty(self):
        assert all(VOCABULARIES.values())
        assert len(AGE_GROUPS) == 8

    def test_barrier_options(self):
        barrier = "Nu am acces la tratament antituberculos"
        options = barrier_options(barrier)

        assert options == list(TB_BARRIERS[barrier])
        assert options[-1] == "Altele"

    def test_unknown_barrier(self):
        with pytest.raises(InvalidCriteriaError, match="Unknown TB barrier"):
            barrier_options("Nu am acces la internet")


class TestRandomData:
    """Test random form values."""

    def test_random_choice_is_seedable(self):
        first = random_choice(AGE_GROUPS, random.Random(7))
        assert random_choice(AGE_GROUPS, random.Random(7)) == first
        assert first in AGE_GROUPS

    def test_random_choice_empty(self):
        with pytest.raises(ValueError):
            random_choice([])

    def test_random_int_bounds(self):
        rng = random.Random(1)
        values = {random_int(5, 10, rng) for _ in range(200)}
        assert values <= set(range(5, 11))

        with pytest.raises(ValueError):
            random_int(10, 5)

    def test_random_text(self):
        text = generate_random_text(6, random.Random(3))
        words = text.split(" ")

        assert len(words) == 6
        assert all(word in RANDOM_WORDS for word in words)

        with pytest.raises(ValueError):
            generate_random_text(0)

    def test_phone_number(self):
        number = generate_random_phone_number(rng=random.Random(11))

        assert len(number) == 8
        assert number.startswith("7")
        assert number.isdigit()

    def test_phone_number_custom_prefix(self):
        number = generate_random_phone_number(length=9, prefix="06")
        assert len(number) == 9
        assert number.startswith("06")

    def test_phone_number_invalid(self):
        with pytest.raises(ValueError):
            generate_random_phone_number(length=2, prefix="373")


class TestDates:
    """Test date formatting."""

    def test_report_date(self):
        assert format_report_date(date(2024, 5, 1)) == "05/01/2024"
        assert format_report_date(datetime(2024, 12, 31, 23, 59)) == "12/31/2024"

    def test_report_date_defaults_to_today(self):
        assert format_report_date() == date.today().strftime("%m/%d/%Y")

    def test_iso_date(self):
        assert format_iso_date(date(2024, 5, 1)) == "2024-05-01"


class TestEmail:
    """Test e-mail shape check."""

    @pytest.mark.parametrize("email,valid", [
        ("qa@example.com", True),
        ("qa@example", False),
        ("qa example@x.com", False),
        ("", False),
    ])
    def test_is_valid_email(self, email, valid):
        assert is_valid_email(email) is valid
