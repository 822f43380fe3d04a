"""Tests for fact sources."""

import pytest

from nighthawk.errors import FactLookupError
from nighthawk.facts import BAD_BACKLINK, MappingFactSource, SeoFactSource


class TestMappingFactSource:
    """Tests for the mapping-backed fact source."""

    def test_plain_values(self) -> None:
        """Test that plain values are returned as is."""
        facts = MappingFactSource({"backlink_count": 13, "backlink": "http://x/"})
        assert facts.lookup("backlink_count") == 13
        assert facts.lookup("backlink") == "http://x/"

    def test_callable_values(self) -> None:
        """Test that zero-argument callables are invoked on every lookup."""
        counter = iter(range(10))
        facts = MappingFactSource({"tick": lambda: next(counter)})
        assert facts.lookup("tick") == 0
        assert facts.lookup("tick") == 1

    def test_undefined_fact(self) -> None:
        """Test that an undefined fact raises FactLookupError."""
        facts = MappingFactSource({})
        with pytest.raises(FactLookupError) as exc_info:
            facts.lookup("backlink")
        assert exc_info.value.fact == "backlink"
        assert "undefined" in str(exc_info.value)

    def test_failing_provider(self) -> None:
        """Test that a provider error surfaces as FactLookupError."""

        def unavailable() -> int:
            raise ConnectionError("crawler offline")

        facts = MappingFactSource({"backlink_count": unavailable})
        with pytest.raises(FactLookupError) as exc_info:
            facts.lookup("backlink_count")
        assert "crawler offline" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_names_and_contains(self) -> None:
        """Test fact name listing and membership."""
        facts = MappingFactSource({"a": 1, "b": 2})
        assert facts.names() == ["a", "b"]
        assert "a" in facts
        assert "c" not in facts

    def test_snapshot(self) -> None:
        """Test that a snapshot reads every fact."""
        facts = MappingFactSource({"a": 1, "b": lambda: "two"})
        assert facts.snapshot() == {"a": 1, "b": "two"}


class TestSeoFactSource:
    """Tests for the stand-in SEO facts."""

    def test_default_values(self, seo_facts: SeoFactSource) -> None:
        """Test the fixed stand-in values."""
        assert seo_facts.lookup("backlink") == BAD_BACKLINK
        assert seo_facts.lookup("backlink_count") == 13
        assert seo_facts.lookup("internal_link_count") == 23

    def test_accessors(self) -> None:
        """Test the typed accessors match the lookups."""
        facts = SeoFactSource(backlink="http://fine.example/", backlink_count=40, internal_link_count=50)
        assert facts.backlink() == "http://fine.example/"
        assert facts.backlink_count() == 40
        assert facts.internal_link_count() == 50
        assert facts.lookup("internal_link_count") == 50

    def test_unknown_fact(self, seo_facts: SeoFactSource) -> None:
        """Test that only the three SEO facts are defined."""
        assert sorted(seo_facts.names()) == ["backlink", "backlink_count", "internal_link_count"]
        with pytest.raises(FactLookupError):
            seo_facts.lookup("page_rank")
