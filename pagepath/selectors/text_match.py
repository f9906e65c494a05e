from __future__ import annotations

from typing import Any

from pagepath.drivers.base import DriverAdapter
from pagepath.utils.logger import get_logger

log = get_logger(__name__)


class TextMatchOptimizer:
    """
    Picks the first element of a collection whose text contains a substring.

      - If the driver can rewrite the collection query into one combined
        "matches selector and contains text" query, use that and take the
        first match; no element is enumerated.
      - Otherwise scan the collection in document order, fetching one
        element's text at a time, and stop at the first match.
    """

    def __init__(self, driver: DriverAdapter, *, rewrite: bool = True) -> None:
        self.driver = driver
        self.rewrite = rewrite

    async def match_by_text(self, collection: Any, substring: str) -> Any:
        if self.rewrite:
            rewritten = self.driver.rewrite_with_text(collection, substring)
            if rewritten is not None:
                log.debug(f"text match {substring!r}: rewritten query")
                return self.driver.first_of(rewritten)

        scanned = 0
        async for candidate, fetch_text in self.driver.filter_by_text(collection):
            text = await fetch_text()
            if substring in (text or ""):
                log.debug(f"text match {substring!r}: element {scanned} after scan")
                return candidate
            scanned += 1

        # Keep the text condition: resolves to nothing unless a matching
        # element appears before the locator is evaluated.
        log.debug(f"text match {substring!r}: no match among {scanned} element(s)")
        return self.driver.first_of(self.driver.with_text(collection, substring))
