"""
Driver capability interface.

The resolver never talks to a browser directly; it composes opaque locators
through a DriverAdapter. Locators are lazy: building one performs no I/O.
The only awaited operation is fetching element text during a text-match scan.
"""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Tuple

from pagepath.core.model import Query

TextFetcher = Callable[[], Awaitable[str]]


class DriverAdapter(ABC):

    @abstractmethod
    def document_root(self) -> Any:
        """Scope used by the first hop of a path."""

    @abstractmethod
    def locate(self, scope: Any, query: Query, *, multiple: bool) -> Any:
        """
        Locator for ``query`` evaluated under ``scope``.

        ``multiple=True`` addresses every match, otherwise the first match.
        """

    @abstractmethod
    def element_at(self, collection: Any, index: int) -> Any:
        """Zero-based element of a collection; never checks bounds."""

    @abstractmethod
    def first_of(self, locator: Any) -> Any:
        ...

    @abstractmethod
    def rewrite_with_text(self, collection: Any, substring: str) -> Optional[Any]:
        """
        Combined locator matching the collection's query and containing
        ``substring``, or None when the collection's query engine cannot be
        rewritten.
        """

    @abstractmethod
    def with_text(self, collection: Any, substring: str) -> Any:
        """
        The collection narrowed to elements whose text contains ``substring``
        (case-sensitive). The text condition is checked when the locator is
        evaluated, not when it is built.
        """

    @abstractmethod
    def filter_by_text(self, collection: Any) -> AsyncIterator[Tuple[Any, TextFetcher]]:
        """Lazily yield ``(element, fetch_text)`` in document order."""

    def unwrap(self, locator: Any) -> Any:
        """Native object handed back to callers."""
        return locator
