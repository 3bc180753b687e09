"""
Unit Tests for Text Validation
Tests ASCII cleaning, banned vocabulary and the combined normalizer
"""

import pytest
import sys
from pathlib import Path

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from validation import (
    clean_to_ascii,
    collapse_whitespace,
    has_emojis,
    has_non_ascii,
    find_non_ascii_chars,
    is_valid_ascii,
    find_banned_words,
    contains_banned_words,
    remove_banned_words,
    normalize_text
)


SAMPLES = [
    "Coffee Then Adulting",
    "“Coffee” — Then Adulting ☕",
    "Perfect Gift For Fishing Dads",
    "café   naïve\tfishing\n\nclub",
    "tank gift top",
    "#1 Dog Mom 100% Certified",
    "½ marathon → full send \U0001F3C3",
    "",
    "   ",
]


# ===================
# ASCII Cleaner Tests
# ===================

class TestAsciiCleaner:
    """Test Unicode to printable ASCII conversion."""

    def test_smart_quotes_and_dashes(self):
        """Test smart punctuation maps to plain ASCII."""
        assert clean_to_ascii("“Hi” — it’s") == "\"Hi\" - it's"

    def test_accents_folded(self):
        """Test accented letters lose their marks."""
        assert clean_to_ascii("café naïve") == "cafe naive"

    def test_fractions_and_arrows(self):
        """Test table replacements expand to ASCII sequences."""
        assert clean_to_ascii("½ →") == "1/2 ->"

    def test_emojis_removed(self):
        """Test emojis are dropped and whitespace collapsed."""
        assert has_emojis("Run \U0001F3C3 fast")
        assert clean_to_ascii("Run \U0001F3C3 fast") == "Run fast"

    def test_none_and_empty(self):
        """Test None and empty input yield empty string."""
        assert clean_to_ascii(None) == ""
        assert clean_to_ascii("") == ""

    def test_whitespace_collapsed(self):
        """Test tabs and newlines collapse to single spaces."""
        assert collapse_whitespace("  a\t\tb \n c  ") == "a b c"

    def test_non_ascii_detection(self):
        """Test detection helpers."""
        assert has_non_ascii("naïve")
        assert not has_non_ascii("naive")
        assert "ï" in find_non_ascii_chars("naïve")
        assert is_valid_ascii("plain text")
        assert not is_valid_ascii("naïve")


# ===================
# Banned Words Tests
# ===================

class TestBannedWords:
    """Test banned vocabulary detection and removal."""

    def test_find_is_case_insensitive(self):
        """Test banned words are found regardless of case."""
        found = find_banned_words("PERFECT Gift for dads")
        assert "perfect" in found
        assert "gift" in found

    def test_no_partial_word_matches(self):
        """Test banned words inside longer words are left alone."""
        assert not contains_banned_words("Giftedness")

    def test_punctuated_entries_match(self):
        """Test entries with leading or trailing symbols still match."""
        assert contains_banned_words("#1 Dog Mom")
        assert contains_banned_words("100% Certified")

    def test_removal_collapses_whitespace(self):
        """Test removal leaves single spaces."""
        assert remove_banned_words("Perfect Gift For Fishing Dads") == "For Fishing Dads"

    def test_removal_reaches_fixed_point(self):
        """Test phrases joined by a removal are removed too."""
        assert remove_banned_words("tank gift top") == ""

    def test_custom_vocabulary(self):
        """Test a caller-supplied vocabulary replaces the default."""
        assert remove_banned_words("Bass Boss Gift", banned_words=["boss"]) == "Bass Gift"

    def test_empty_vocabulary(self):
        """Test an empty vocabulary removes nothing."""
        assert remove_banned_words("Perfect Gift", banned_words=[]) == "Perfect Gift"


# ===================
# Normalizer Tests
# ===================

class TestNormalizeText:
    """Test the combined normalizer."""

    def test_none_yields_empty(self):
        """Test None input."""
        assert normalize_text(None) == ""

    def test_clean_text_unchanged(self):
        """Test already clean text passes through."""
        assert normalize_text("Coffee Then Adulting") == "Coffee Then Adulting"

    @pytest.mark.parametrize("sample", SAMPLES)
    def test_output_is_printable_ascii(self, sample):
        """Test every output character is within 0x20-0x7E."""
        result = normalize_text(sample)
        assert all(0x20 <= ord(ch) <= 0x7E for ch in result)

    @pytest.mark.parametrize("sample", SAMPLES)
    def test_idempotent(self, sample):
        """Test normalizing twice equals normalizing once."""
        once = normalize_text(sample)
        assert normalize_text(once) == once

    @pytest.mark.parametrize("sample", SAMPLES)
    def test_no_banned_words_survive(self, sample):
        """Test no banned entry remains after normalization."""
        assert find_banned_words(normalize_text(sample)) == []

    def test_unicode_and_banned_together(self):
        """Test cleaning and banned removal combine."""
        assert normalize_text("Perfect Gift — Fishing") == "- Fishing"
