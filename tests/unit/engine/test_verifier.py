"""
Tests for the report filter verifier.
"""

import logging

import pytest

from barrier_report_qa.engine.verifier import (
    VerificationReport,
    column_label,
    resolve_columns,
    verify,
    verify_report,
)
from barrier_report_qa.exceptions import InvalidCriteriaError


HEADERS = ["Type of User", "Age", "Date"]
ROWS = [["Medical worker", "25 - 34 years", "05/01/2024"]]


class TestColumnLabel:
    """Test criterion key to header text conversion."""

    @pytest.mark.parametrize("key,label", [
        ("typeOfUser", "type of user"),
        ("keyPopulation", "key population"),
        ("key_population", "key population"),
        ("age-group", "age group"),
        ("Age", "age"),
        ("  date ", "date"),
        ("", ""),
    ])
    def test_labels(self, key, label):
        assert column_label(key) == label


class TestResolveColumns:
    """Test header lookup."""

    def test_case_insensitive_substring(self):
        headers = ["Nr.", "TYPE OF USER", "Key population group", "Age", "Date"]
        columns = resolve_columns(headers, {"typeOfUser": "x", "keyPopulation": "y", "age": "z"})

        assert columns == {"typeOfUser": 1, "keyPopulation": 2, "age": 3}

    def test_first_matching_header_wins(self):
        assert resolve_columns(["Age group", "Age"], {"age": "x"}) == {"age": 0}

    def test_unknown_key_is_left_out(self):
        assert resolve_columns(HEADERS, {"location": "Cahul"}) == {}


class TestVerify:
    """Test verify() and verify_report()."""

    def test_matching_row(self):
        assert verify(ROWS, HEADERS, {"typeOfUser": "Medical", "age": "25 - 34"}) is True

    def test_no_matching_row(self):
        assert verify(ROWS, HEADERS, {"age": "65 years"}) is False

    def test_empty_rows_is_false(self):
        assert verify([], HEADERS, {"age": "25 - 34"}) is False
        assert verify([], HEADERS, {}) is False

    def test_no_criteria_matches_any_row(self):
        assert verify(ROWS, HEADERS, {}) is True

    def test_unresolvable_criterion_is_ignored(self):
        assert verify(ROWS, HEADERS, {"age": "25 - 34", "location": "Cahul"}) is True

    def test_every_criterion_must_match_same_row(self):
        rows = [
            ["Medical worker", "65 years and over", "05/01/2024"],
            ["Social worker", "25 - 34 years", "05/01/2024"],
        ]
        assert verify(rows, HEADERS, {"typeOfUser": "Medical", "age": "25 - 34"}) is False

    def test_match_is_case_sensitive_substring(self):
        assert verify(ROWS, HEADERS, {"typeOfUser": "medical"}) is False

    def test_date_is_an_opaque_substring(self):
        assert verify(ROWS, HEADERS, {"date": "05/01/2024"}) is True
        assert verify(ROWS, HEADERS, {"date": "2024-05-01"}) is False

    def test_none_and_empty_values_are_absent(self):
        assert verify(ROWS, HEADERS, {"typeOfUser": None, "age": "", "date": "05/01/2024"}) is True

    def test_non_string_value_is_rejected(self):
        with pytest.raises(InvalidCriteriaError) as exc_info:
            verify(ROWS, HEADERS, {"age": 25})

        assert exc_info.value.key == "age"
        assert exc_info.value.value == 25

    def test_malformed_rows_are_excluded(self, caplog):
        rows = [
            ["Medical worker", "25 - 34 years"],
            ["Medical worker", "25 - 34 years", "05/01/2024", "extra"],
        ]

        with caplog.at_level(logging.WARNING):
            report = verify_report(rows, HEADERS, {"age": "25 - 34"})

        assert report.matched is False
        assert report.malformed_rows == 2
        assert "Row 0 has 2 cells, expected 3" in caplog.text

    def test_malformed_row_does_not_hide_good_rows(self):
        rows = [["broken"], ROWS[0]]
        report = verify_report(rows, HEADERS, {"typeOfUser": "Medical"})

        assert report.matched
        assert report.total_rows == 2
        assert report.matching_rows == 1
        assert report.malformed_rows == 1

    def test_report_samples(self):
        rows = [
            ["Social worker", "25 - 34 years", "05/01/2024"],
            ["Medical worker", "25 - 34 years", "05/01/2024"],
            ["Medical worker", "25 - 34 years", "05/02/2024"],
        ]
        report = verify_report(rows, HEADERS, {"typeOfUser": "Medical"})

        assert report.matching_rows == 2
        assert report.columns == {"typeOfUser": 0}
        assert report.sample_match == rows[1]
        assert report.sample_mismatch == rows[0]

    def test_logs_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="barrier_report_qa.engine.verifier"):
            verify(ROWS, HEADERS, {"age": "25 - 34"})

        assert "Found 1 matching rows out of 1 total rows" in caplog.text


class TestVerificationReport:
    """Test the report value."""

    def test_defaults(self):
        report = VerificationReport()
        assert report.matched is False
        assert report.columns == {}
