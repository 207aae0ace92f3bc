"""Tests for the resolver and hover modules."""

import logging

import pytest

from exdict.hover import hover_text
from exdict.resolver import Resolver, render
from exdict.schema import DESCRIPTION_SEPARATOR, Dictionary, DictionaryEntry, LookupResult


def make_dictionary(**entries):
    dictionary = Dictionary()
    for key, value in entries.items():
        dictionary.insert(DictionaryEntry(key, value))
    return dictionary.freeze()


@pytest.fixture
def resolver():
    return Resolver(make_dictionary(ORD001="SELECT 1", A="alpha"))


class TestResolve:
    """Tests for Resolver.resolve."""

    def test_exact(self, resolver):
        """Test an exact key match."""
        result = resolver.resolve("ORD001")
        assert result == LookupResult("ORD001", "SELECT 1", True, requested_key="ORD001")

    def test_quotes_stripped(self, resolver):
        """Test quoted tokens resolve like unquoted ones."""
        assert resolver.resolve("'ORD001'") == resolver.resolve("ORD001")
        assert resolver.resolve("「ORD001」") == resolver.resolve("ORD001")

    def test_fallback(self, resolver):
        """Test the last character is dropped when there is no exact match."""
        result = resolver.resolve("ORD0012")
        assert result.used_key == "ORD001"
        assert result.matched_exactly is False
        assert result.requested_key == "ORD0012"

    def test_fallback_single_step(self):
        """Test trimming is applied once only."""
        resolver = Resolver(make_dictionary(ORD00="SELECT 0"))
        assert resolver.resolve("ORD0012") is None

    def test_exact_preferred_over_fallback(self):
        """Test an exact key beats a shorter one."""
        resolver = Resolver(make_dictionary(ORD001="short", ORD0012="long"))
        assert resolver.resolve("ORD0012").value == "long"

    def test_single_character_has_no_fallback(self, resolver):
        """Test one-character tokens only match exactly."""
        assert resolver.resolve("A").matched_exactly
        assert resolver.resolve("B") is None

    def test_two_characters_fall_back(self, resolver):
        """Test a two-character token can fall back to one."""
        result = resolver.resolve("AB")
        assert result.used_key == "A"
        assert not result.matched_exactly

    def test_empty_token(self, resolver):
        """Test tokens that normalize to nothing are absent."""
        assert resolver.resolve("''") is None
        assert resolver.resolve(" ") is None

    def test_case_sensitive(self, resolver):
        """Test keys are matched case-sensitively."""
        assert resolver.resolve("ord001") is None

    def test_no_candidate_logged_at_debug(self, resolver, caplog):
        """Test a miss is a low-severity diagnostic."""
        caplog.set_level(logging.DEBUG)
        assert resolver.resolve("ZZZ999") is None
        records = [r for r in caplog.records if "No candidate" in r.getMessage()]
        assert records and all(r.levelno == logging.DEBUG for r in records)

    def test_fallback_logged(self, resolver, caplog):
        """Test fallback usage is logged."""
        caplog.set_level(logging.INFO)
        resolver.resolve("ORD0012")
        assert "Fallback match" in caplog.text


class TestReload:
    """Tests for Resolver.reload."""

    def test_swap(self, resolver):
        """Test a rebuilt dictionary replaces the old one."""
        resolver.reload(make_dictionary(ORD001="SELECT 2"))
        assert resolver.resolve("ORD001").value == "SELECT 2"
        assert resolver.resolve("A") is None

    def test_unfrozen_rejected(self, resolver):
        """Test a dictionary still being loaded cannot be swapped in."""
        with pytest.raises(ValueError):
            resolver.reload(Dictionary())


class TestRender:
    """Tests for render."""

    def test_exact_is_plain_value(self):
        """Test exact matches show the value unchanged."""
        assert render(LookupResult("A", "alpha", True, "A")) == "alpha"

    def test_fallback_names_both_keys(self):
        """Test fallback output names the used and the requested key."""
        text = render(LookupResult("ORD001", "SELECT 1", False, "ORD0012"))
        notice, value = text.split(DESCRIPTION_SEPARATOR, 1)
        assert "ORD001" in notice
        assert "ORD0012" in notice
        assert value == "SELECT 1"


class TestHoverText:
    """Tests for hover_text."""

    def test_word_under_column(self, resolver):
        """Test the word under the column is looked up."""
        assert hover_text(resolver, "FROM ORD001 x", 7) == "SELECT 1"

    def test_fallback_decorated(self, resolver):
        """Test fallback hovers carry the notice."""
        text = hover_text(resolver, "call ORD0012;", 6)
        assert "ORD0012" in text
        assert text.endswith("SELECT 1")

    def test_nothing_under_column(self, resolver):
        """Test whitespace gives no hover."""
        assert hover_text(resolver, "a   b", 2) is None

    def test_unknown_word(self, resolver):
        """Test unknown words give no hover."""
        assert hover_text(resolver, "unknown_word", 3) is None
