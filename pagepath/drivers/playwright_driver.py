from __future__ import annotations

"""Playwright driver
-------------------
Composes Playwright (async API) locators for resolved paths. Locators carry
the query engine that produced them so text matching can tell whether a
collection query is rewritable.
"""

import re
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Tuple

from playwright.async_api import Locator, Page, Playwright

from pagepath.core.model import Query, SelectorType
from pagepath.drivers.base import DriverAdapter, TextFetcher
from pagepath.utils.config import get_settings
from pagepath.utils.logger import get_logger

log = get_logger(__name__)

# Selector engine for the "js" selector type: the selector is a function body
# called with the scope element as `root`; it returns an element, a list of
# elements, or nothing.
JS_ENGINE_SCRIPT = """
{
  queryAll(root, body) {
    const found = new Function("root", body)(root);
    if (!found) return [];
    if (found instanceof Element) return [found];
    return Array.from(found);
  },
  query(root, body) {
    return this.queryAll(root, body)[0] || null;
  }
}
"""


async def register_js_engine(playwright: Playwright, name: Optional[str] = None) -> str:
    """Register the js selector engine. Call once per Playwright instance, before creating pages."""
    engine = name or get_settings().JS_ENGINE_NAME
    await playwright.selectors.register(engine, script=JS_ENGINE_SCRIPT)
    log.debug(f"Registered js selector engine as '{engine}'")
    return engine


def _contains(text: str) -> re.Pattern:
    # Case-sensitive substring, unlike a plain has_text string.
    return re.compile(re.escape(text))


@dataclass(frozen=True)
class ScopedLocator:
    locator: Locator
    engine: str  # "root" | "css" | "xpath" | "js" | "css-text" | "filter" | "nth"
    selector: Optional[str] = None
    scope: Optional[Locator] = None


class PlaywrightDriver(DriverAdapter):
    def __init__(self, page: Page, *, root_selector: Optional[str] = None, js_engine: Optional[str] = None) -> None:
        settings = get_settings()
        self.page = page
        self.root_selector = root_selector or settings.ROOT_SELECTOR
        self.js_engine = js_engine or settings.JS_ENGINE_NAME

    def document_root(self) -> ScopedLocator:
        return ScopedLocator(self.page.locator(self.root_selector), "root")

    def locate(self, scope: ScopedLocator, query: Query, *, multiple: bool) -> ScopedLocator:
        base = scope.locator
        if query.selector_type is SelectorType.css:
            located = ScopedLocator(base.locator(query.selector), "css", query.selector, base)
        elif query.selector_type is SelectorType.xpath:
            located = ScopedLocator(base.locator(f"xpath={query.selector}"), "xpath", query.selector, base)
        elif query.selector_type is SelectorType.js:
            located = ScopedLocator(base.locator(f"{self.js_engine}={query.selector}"), "js", query.selector, base)
        else:
            loc = base.locator(query.selector, has_text=_contains(query.text or ""))
            located = ScopedLocator(loc, "css-text", query.selector, base)
        return located if multiple else self.first_of(located)

    def element_at(self, collection: ScopedLocator, index: int) -> ScopedLocator:
        return ScopedLocator(collection.locator.nth(index), "nth")

    def first_of(self, locator: ScopedLocator) -> ScopedLocator:
        return ScopedLocator(locator.locator.first, "nth")

    def rewrite_with_text(self, collection: ScopedLocator, substring: str) -> Optional[ScopedLocator]:
        if collection.engine != "css" or collection.scope is None:
            return None
        loc = collection.scope.locator(collection.selector, has_text=_contains(substring))
        return ScopedLocator(loc, "css-text", collection.selector, collection.scope)

    def with_text(self, collection: ScopedLocator, substring: str) -> ScopedLocator:
        return ScopedLocator(collection.locator.filter(has_text=_contains(substring)), "filter")

    async def filter_by_text(self, collection: ScopedLocator) -> AsyncIterator[Tuple[ScopedLocator, TextFetcher]]:
        count = await collection.locator.count()
        for index in range(count):
            element = collection.locator.nth(index)
            yield ScopedLocator(element, "nth"), element.inner_text

    def unwrap(self, locator: ScopedLocator) -> Locator:
        return locator.locator
