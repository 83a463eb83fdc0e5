"""Tests for placeholder key allocation."""

import pytest

from docweave.placeholders import allocate_key, normalize_title
from docweave.placeholders.syntax import ALLOCATED_KEY_PATTERN


class TestNormalizeTitle:
    """Test title normalization."""

    def test_basic(self):
        """Test lowercasing, punctuation removal and underscores."""
        assert normalize_title("My Cool Doc!") == "my_cool_doc"

    def test_whitespace_runs(self):
        """Test whitespace runs and tabs collapse to one underscore."""
        assert normalize_title("  Chapter \t One  ") == "chapter_one"

    def test_underscores_collapse(self):
        """Test repeated and edge underscores are cleaned up."""
        assert normalize_title("__a__b__") == "a_b"

    def test_only_symbols(self):
        """Test titles without usable characters normalize to empty."""
        assert normalize_title("!!!") == ""


class TestAllocateKey:
    """Test collision-free key allocation."""

    def test_fresh_key(self):
        """Test a title with no collisions."""
        assert allocate_key("My Cool Doc!", set()) == "my_cool_doc"

    def test_collision_appends_counter(self):
        """Test an existing key gets a numeric suffix."""
        assert allocate_key("My Cool Doc!", {"my_cool_doc"}) == "my_cool_doc_1"

    def test_multiple_collisions(self):
        """Test suffixes count up until unique."""
        existing = {"intro", "intro_1", "intro_2"}
        assert allocate_key("Intro", existing) == "intro_3"

    def test_leading_digit_gets_prefix(self):
        """Test keys always start with a letter."""
        assert allocate_key("2024 Report", []) == "doc_2024_report"

    def test_empty_title(self):
        """Test an unusable title still yields a key."""
        assert allocate_key("", []) == "doc"
        assert allocate_key("???", ["doc"]) == "doc_1"

    @pytest.mark.parametrize(
        "title",
        ["My Cool Doc!", "123", "", "Ünïcode Tïtle", "a" * 50, "__x__", "  \n  "],
    )
    def test_result_shape(self, title):
        """Test every result is a well-formed, unused key."""
        existing = {"my_cool_doc", "doc", "doc_123"}
        key = allocate_key(title, existing)

        assert key
        assert ALLOCATED_KEY_PATTERN.match(key)
        assert key not in existing
