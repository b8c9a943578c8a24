"""Tests for text wrapping and truncation."""

import pytest

from docsynth.engine.fonts import FontSpec
from docsynth.engine.text_metrics import TextMetrics
from docsynth.utils.text import ELLIPSIS, HelveticaMetrics, normalize_text, truncate_text, wrap_text
from tests.helpers import FakeSurface


def measure(text):
    """Ten units per character."""
    return len(text) * 10.0


class TestNormalizeText:
    """Test suite for normalize_text."""

    def test_collapses_whitespace(self):
        assert normalize_text("  a \t b\n\nc  ") == "a b c"

    def test_none_is_empty(self):
        assert normalize_text(None) == ""

    def test_numbers_are_stringified(self):
        assert normalize_text(42) == "42"


class TestWrapText:
    """Test suite for wrap_text."""

    def test_greedy_wrap(self):
        assert wrap_text(measure, "aaa bbb ccc", 70) == ["aaa bbb", "ccc"]

    def test_empty_input_yields_one_empty_line(self):
        assert wrap_text(measure, "", 100) == [""]
        assert wrap_text(measure, "   \n ", 100) == [""]
        assert wrap_text(measure, None, 100) == [""]

    def test_long_word_is_split_by_character(self):
        assert wrap_text(measure, "abcdefghij", 30) == ["abc", "def", "ghi", "j"]

    def test_split_word_leaves_room_for_following_words(self):
        assert wrap_text(measure, "abcdefgh xy", 30) == ["abc", "def", "gh", "xy"]

    def test_non_positive_width_is_treated_as_one(self):
        assert wrap_text(measure, "ab", 0) == ["a", "b"]
        assert wrap_text(measure, "ab", -5) == ["a", "b"]

    def test_lines_fit_unless_single_character(self):
        text = "the quick brown fox jumps over the extraordinarily lazy dog"
        for width in (10, 35, 60, 120, 400):
            for line in wrap_text(measure, text, width):
                assert measure(line) <= width or len(line) == 1

    def test_round_trip_without_splits(self):
        text = "one  two three\tfour five six"
        lines = wrap_text(measure, text, 90)
        assert " ".join(lines) == normalize_text(text)
        assert len(lines) > 1


class TestTruncateText:
    """Test suite for truncate_text."""

    def test_short_text_is_unchanged(self):
        assert truncate_text(measure, "one two", 100, max_lines=2) == ["one two"]

    def test_clamps_to_max_lines_with_ellipsis(self):
        lines = truncate_text(measure, "one two three four five", 70, max_lines=2)
        assert lines == ["one two", "thre..."]

    def test_last_line_fits_after_ellipsis(self):
        lines = truncate_text(measure, "alpha beta gamma delta epsilon zeta", 80, max_lines=3)
        assert len(lines) <= 3
        assert lines[-1].endswith(ELLIPSIS)
        assert all(measure(line) <= 80 for line in lines)

    def test_max_lines_minimum_is_one(self):
        lines = truncate_text(measure, "aaa bbb ccc", 70, max_lines=0)
        assert len(lines) == 1
        assert lines[0].endswith(ELLIPSIS)

    def test_only_ellipsis_when_nothing_fits(self):
        assert truncate_text(measure, "abcdef ghijkl", 20, max_lines=1) == [ELLIPSIS]


class TestTextMetrics:
    """Test suite for the surface-bound helper."""

    def test_uses_surface_font(self):
        surface = FakeSurface()
        surface.set_font(FontSpec(size=20))
        metrics = TextMetrics(surface)

        assert metrics.measure("abcd") == 40
        assert metrics.wrap("aaa bbb", 40) == ["aaa", "bbb"]
        assert metrics.widest_line(["a", "abc", "ab"]) == 30
        assert metrics.widest_line([]) == 0.0
        assert metrics.measure_lines("aaa bbb", 40, line_height=24) == 48


class TestHelveticaMetrics:
    """Test suite for AFM based measurement."""

    def test_measure_matches_helvetica_widths(self):
        metrics = HelveticaMetrics(font_size=10)
        # H=722 e=556 l=222 l=222 o=556 per 1000 units
        assert metrics.measure("Hello") == pytest.approx(22.78)

    def test_wrap_respects_width(self):
        metrics = HelveticaMetrics(font_size=10)
        text = "lorem ipsum dolor sit amet " * 20
        lines = metrics.wrap(text, 200)
        assert len(lines) > 1
        assert all(metrics.measure(line) <= 200 for line in lines)
