"""
Tests for the match strategy.
"""

import pytest

from barrier_report_qa.engine.match_strategy import (
    MatchKind,
    MatchResult,
    OptionCandidate,
    classify,
    match,
)


def candidates(*texts):
    return [OptionCandidate(text=t, index=i) for i, t in enumerate(texts)]


class TestClassify:
    """Test single-candidate classification."""

    def test_exact_ignores_case_and_spacing(self):
        assert classify("  Female ", "female") is MatchKind.EXACT

    def test_text_contains_value(self):
        assert classify("Medical worker", "medical") is MatchKind.TEXT_CONTAINS_VALUE

    def test_value_contains_text(self):
        assert classify("Refugee", "Refugee (registered)") is MatchKind.VALUE_CONTAINS_TEXT

    def test_prefix(self):
        rendered = "Persoană care m-am aflat mai mult de 3 luni în afara țării"
        assert classify(rendered, "Persoană care m-am aflat mai mult de 6 luni") is MatchKind.PREFIX

    def test_prefix_needs_the_full_prefix_length(self):
        rendered = "Persoană care m-am aflat mai mult de 3 luni în afara țării"
        assert classify(rendered, "Persoană care m-am aflat o dată") is MatchKind.NONE

    def test_truncated_option_contains_value(self):
        rendered = "Persoană care m-am aflat mai mult de 3 luni în afara țării"
        requested = "Persoană care m-am aflat mai mult de 3 luni în afa"
        assert classify(rendered, requested) is MatchKind.TEXT_CONTAINS_VALUE

    def test_unrelated_is_none(self):
        assert classify("Male", "District") is MatchKind.NONE

    def test_empty_sides_never_match(self):
        assert classify("", "Male") is MatchKind.NONE
        assert classify("Male", "") is MatchKind.NONE


class TestMatchKind:
    """Test match kind ranking."""

    def test_rank_order(self):
        ranked = sorted(MatchKind, key=lambda k: k.rank, reverse=True)
        assert ranked == [
            MatchKind.EXACT,
            MatchKind.TEXT_CONTAINS_VALUE,
            MatchKind.VALUE_CONTAINS_TEXT,
            MatchKind.PREFIX,
            MatchKind.NONE,
        ]

    def test_values(self):
        assert MatchKind.TEXT_CONTAINS_VALUE.value == "text-contains-value"
        assert MatchKind.VALUE_CONTAINS_TEXT.value == "value-contains-text"


class TestMatch:
    """Test match() over candidate lists."""

    def test_case_insensitive_exact_selects_first(self):
        result = match(candidates("Female", "Male"), "female")

        assert result.kind is MatchKind.EXACT
        assert result.candidate.index == 0
        assert result.found

    def test_exact_wins_regardless_of_position(self):
        result = match(candidates("Medical worker assistant", "Social worker", "Medical worker"), "Medical worker")

        assert result.kind is MatchKind.EXACT
        assert result.candidate.index == 2

    def test_stronger_kind_beats_earlier_weaker_kind(self):
        # index 0 only contains the value's start; index 1 contains the value
        result = match(candidates("Person", "Person with TB (confirmed)"), "Person with TB")

        assert result.kind is MatchKind.TEXT_CONTAINS_VALUE
        assert result.candidate.text == "Person with TB (confirmed)"

    def test_first_of_equal_kind_wins(self):
        result = match(candidates("25 - 34 years", "25 - 34 years old"), "25 - 34")

        assert result.kind is MatchKind.TEXT_CONTAINS_VALUE
        assert result.candidate.index == 0

    def test_scans_in_index_order(self):
        shuffled = [
            OptionCandidate("Person living with HIV", 1),
            OptionCandidate("Person with a disability", 0),
        ]
        result = match(shuffled, "Person")

        assert result.candidate.index == 0
        assert [c.index for c in result.candidates] == [0, 1]

    def test_no_match_carries_all_candidates(self):
        result = match(candidates("Female", "Male"), "District")

        assert result.kind is MatchKind.NONE
        assert result.candidate is None
        assert not result.found
        assert result.candidate_texts == ["Female", "Male"]

    @pytest.mark.parametrize("target", ["", "   ", "\t"])
    def test_empty_target_is_none(self, target):
        result = match(candidates("Female", "Male", ""), target)

        assert result.kind is MatchKind.NONE
        assert result.candidate is None

    def test_empty_candidate_text_is_skipped(self):
        result = match(candidates("", "  ", "Male"), "Male")

        assert result.kind is MatchKind.EXACT
        assert result.candidate.index == 2

    def test_empty_candidate_list(self):
        result = match([], "Male")

        assert result == MatchResult(kind=MatchKind.NONE, candidate=None, candidates=[])

    def test_diacritics_do_not_block_exact_match(self):
        result = match(candidates("Persoana din grup de risc la Tuberculoza"), "Persoana din grup de risc la Tuberculoză")

        assert result.kind is MatchKind.EXACT

    def test_custom_prefix_length(self):
        result = match(candidates("Civil society representative"), "Civil servant", prefix_length=6)

        assert result.kind is MatchKind.PREFIX
