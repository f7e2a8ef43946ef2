"""Tests for edit-distance similarity."""

import pytest

from exercises.similarity import distance, similarity


class TestDistance:
    """Tests for the Levenshtein distance."""

    def test_identical_strings(self):
        assert distance("kota", "kota") == 0

    def test_classic_example(self):
        """kitten -> sitting takes three edits."""
        assert distance("kitten", "sitting") == 3

    def test_against_empty_string(self):
        assert distance("", "abc") == 3
        assert distance("abc", "") == 3

    @pytest.mark.parametrize(
        "a,b,c",
        [
            ("kot", "kota", "psa"),
            ("", "dzień", "dobry"),
            ("kitten", "sitting", "mitten"),
            ("mam kota", "ma kot", "mamy koty"),
            ("abc", "abc", "xyz"),
        ],
    )
    def test_triangle_inequality(self, a, b, c):
        assert distance(a, c) <= distance(a, b) + distance(b, c)
        assert distance(b, c) <= distance(b, a) + distance(a, c)
        assert distance(a, b) <= distance(a, c) + distance(c, b)

    def test_is_symmetric(self):
        assert distance("dzień", "dzien dobry") == distance("dzien dobry", "dzień")


class TestSimilarity:
    """Tests for the normalized similarity score."""

    def test_both_empty_is_identical(self):
        assert similarity("", "") == 1.0

    def test_one_empty_is_zero(self):
        assert similarity("", "kot") == 0.0

    def test_identical_is_one(self):
        assert similarity("dzień dobry", "dzień dobry") == 1.0

    def test_single_edit_over_four_characters(self):
        assert similarity("kota", "kot") == pytest.approx(0.75)

    def test_uses_longer_length(self):
        assert similarity("mam kota", "mam kot") == pytest.approx(7 / 8)

    def test_completely_different(self):
        assert similarity("abc", "xyz") == 0.0
