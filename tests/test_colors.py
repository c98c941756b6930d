"""Tests for color name resolution."""

import logging

import pytest

from color_changer.core.animations.colors import COLORS, get_color, resolve_color


class TestResolveColor:
    """Test resolve_color normalization"""

    @pytest.mark.parametrize("name", ["red", "RED", "Red"])
    def test_names_are_case_insensitive(self, name):
        assert resolve_color(name) == "ff0000"

    def test_multi_word_name(self):
        assert resolve_color("Light Blue") == "00a0b0"

    def test_hex_literal_prefix_is_stripped(self):
        assert resolve_color("0xAABBCC") == "AABBCC"

    def test_hash_prefix_is_stripped(self):
        assert resolve_color("#123456") == "123456"

    def test_unknown_name_passes_through_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolve_color("chartreuse") == "chartreuse"
        assert "UNKNOWN COLOR: chartreuse" in caplog.text

    def test_missing_color_resolves_to_empty(self):
        assert resolve_color(None) == ""

    def test_table_has_ten_six_digit_codes(self):
        assert len(COLORS) == 10
        assert all(len(code) == 6 for code in COLORS.values())


class TestGetColor:
    """Test raw table lookup"""

    def test_known(self):
        assert get_color("Dark Green") == "004411"

    def test_unknown_returns_none(self):
        assert get_color("mauve") is None

    def test_non_string_returns_none(self):
        assert get_color(42) is None
