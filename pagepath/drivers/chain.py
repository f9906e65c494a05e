from __future__ import annotations

"""Dry-run driver
-----------------
Builds locators as Playwright selector chains ("html >> .item >> nth=1")
without touching a browser. Used by the CLI to show what a path resolves to.
Element texts can be supplied up front to exercise the text-match scan.
"""

import re
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Mapping, Optional, Sequence, Tuple

from pagepath.core.model import Query, SelectorType
from pagepath.drivers.base import DriverAdapter, TextFetcher
from pagepath.utils.config import get_settings


@dataclass(frozen=True)
class Chain:
    parts: Tuple[str, ...]
    engine: str  # query engine of the last part: "root" | "css" | "xpath" | "js" | "css-text" | "filter" | "nth"

    def then(self, part: str, engine: str) -> "Chain":
        return Chain(self.parts + (part,), engine)

    def __str__(self) -> str:
        return " >> ".join(self.parts)


def _text_filter(text: str) -> str:
    # Same step Playwright renders for filter(has_text=re.compile(...)): a
    # case-sensitive regex, unlike the :has-text("...") pseudo-class.
    pattern = re.escape(text).replace("/", "\\/")
    return f"internal:has-text=/{pattern}/"


class ChainDriver(DriverAdapter):
    def __init__(
        self,
        *,
        root_selector: Optional[str] = None,
        js_engine: Optional[str] = None,
        texts: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        settings = get_settings()
        self.root_selector = root_selector or settings.ROOT_SELECTOR
        self.js_engine = js_engine or settings.JS_ENGINE_NAME
        # collection chain (as text) -> texts of its elements in document order
        self.texts: Dict[str, Sequence[str]] = dict(texts or {})

    def document_root(self) -> Chain:
        return Chain((self.root_selector,), "root")

    def locate(self, scope: Chain, query: Query, *, multiple: bool) -> Chain:
        if query.selector_type is SelectorType.css:
            located = scope.then(query.selector, "css")
        elif query.selector_type is SelectorType.xpath:
            located = scope.then(f"xpath={query.selector}", "xpath")
        elif query.selector_type is SelectorType.js:
            located = scope.then(f"{self.js_engine}={query.selector}", "js")
        else:
            located = scope.then(query.selector, "css").then(_text_filter(query.text or ""), "css-text")
        return located if multiple else self.first_of(located)

    def element_at(self, collection: Chain, index: int) -> Chain:
        return collection.then(f"nth={index}", "nth")

    def first_of(self, locator: Chain) -> Chain:
        return self.element_at(locator, 0)

    def rewrite_with_text(self, collection: Chain, substring: str) -> Optional[Chain]:
        if collection.engine != "css":
            return None
        return collection.then(_text_filter(substring), "css-text")

    def with_text(self, collection: Chain, substring: str) -> Chain:
        return collection.then(_text_filter(substring), "filter")

    async def filter_by_text(self, collection: Chain) -> AsyncIterator[Tuple[Chain, TextFetcher]]:
        for index, text in enumerate(self.texts.get(str(collection), ())):
            yield self.element_at(collection, index), _constant(text)

    def unwrap(self, locator: Chain) -> str:
        return str(locator)


def _constant(text: str) -> TextFetcher:
    async def fetch() -> str:
        return text
    return fetch
