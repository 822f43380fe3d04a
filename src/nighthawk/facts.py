"""Fact sources that supply the values rule conditions read."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from nighthawk.errors import FactLookupError

FactValue = bool | int | float | str

BAD_BACKLINK = "http://some-bad-place.com/some-bad-path/some-bad-file.html"


class FactSource(ABC):
    """Abstract base class for fact providers."""

    @abstractmethod
    def lookup(self, name: str) -> FactValue:
        """
        Look up a single fact by name.

        Args:
            name: The fact name.

        Returns:
            The current value of the fact.

        Raises:
            FactLookupError: If the fact is undefined or cannot be read.
        """
        ...

    @abstractmethod
    def names(self) -> Iterable[str]:
        """Names of the facts this source can provide."""
        ...

    def snapshot(self) -> dict[str, FactValue]:
        """Read every fact once and return the values."""
        return {name: self.lookup(name) for name in self.names()}


class MappingFactSource(FactSource):
    """Fact source backed by a mapping of names to values or zero-argument callables."""

    def __init__(self, facts: Mapping[str, Any] | None = None) -> None:
        self._facts: dict[str, Any] = dict(facts or {})

    def lookup(self, name: str) -> FactValue:
        try:
            provider = self._facts[name]
        except KeyError:
            raise FactLookupError(name, "undefined fact") from None

        if not callable(provider):
            return provider

        try:
            return provider()
        except FactLookupError:
            raise
        except Exception as e:
            raise FactLookupError(name, str(e)) from e

    def names(self) -> list[str]:
        return list(self._facts)

    def __contains__(self, name: object) -> bool:
        return name in self._facts


class SeoFactSource(MappingFactSource):
    """
    Stand-in SEO data provider with fixed values.

    A real deployment replaces this with a source that gathers backlink
    and link-count data for a site.
    """

    def __init__(
        self,
        backlink: str = BAD_BACKLINK,
        backlink_count: int = 13,
        internal_link_count: int = 23,
    ) -> None:
        self._backlink = backlink
        self._backlink_count = backlink_count
        self._internal_link_count = internal_link_count
        providers: dict[str, Callable[[], FactValue]] = {
            "backlink": self.backlink,
            "backlink_count": self.backlink_count,
            "internal_link_count": self.internal_link_count,
        }
        super().__init__(providers)

    def backlink(self) -> str:
        return self._backlink

    def backlink_count(self) -> int:
        return self._backlink_count

    def internal_link_count(self) -> int:
        return self._internal_link_count
