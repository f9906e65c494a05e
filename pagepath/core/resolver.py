from __future__ import annotations

"""Path resolver
----------------
Walks a page-object graph one hop at a time and composes a driver locator
scoped under the previous hop's locator.
"""

from typing import Any, Iterable, Optional

from pagepath.core.errors import AmbiguousScope, AliasNotFound, NotACollection
from pagepath.core.model import Component, Node, NodeKind, ResolutionFrame
from pagepath.drivers.base import DriverAdapter
from pagepath.selectors.qualifier import Index, PathToken, PlainHop, QualifiedHop, parse_hop
from pagepath.selectors.text_match import TextMatchOptimizer
from pagepath.selectors.tokenizer import tokenize
from pagepath.selectors.translator import translate
from pagepath.utils.config import get_settings
from pagepath.utils.logger import get_logger
from pagepath.utils.timing import Stopwatch

log = get_logger(__name__)


def _lookup(node: Node, alias: str) -> Node:
    if isinstance(node, Component):
        return node.lookup(alias)
    # Leaves have no children.
    raise AliasNotFound(alias, node.alias)


class GraphResolver:
    """
    Resolves parsed hops against a root component.

    Plain hops produce a multi-match locator when the target is a collection
    or when the current scope already addresses several elements; otherwise
    a single-match locator. With ``strict_collection_scope`` a plain hop onto
    a non-collection under a multi-element scope raises AmbiguousScope.
    """

    def __init__(
        self,
        driver: DriverAdapter,
        *,
        optimizer: Optional[TextMatchOptimizer] = None,
        strict_collection_scope: Optional[bool] = None,
    ) -> None:
        settings = get_settings()
        self.driver = driver
        self.optimizer = optimizer or TextMatchOptimizer(driver, rewrite=settings.TEXT_MATCH_REWRITE)
        self.strict_collection_scope = (
            settings.STRICT_COLLECTION_SCOPE if strict_collection_scope is None else strict_collection_scope
        )

    async def resolve(self, root: Component, hops: Iterable[PathToken]) -> Any:
        frame = ResolutionFrame(None, root)
        count = 0
        with Stopwatch() as sw:
            for hop in hops:
                frame = await self._step(frame, hop)
                count += 1
        if count == 0:
            raise ValueError("cannot resolve a path without hops")
        log.debug(f"Resolved {count} hop(s) from '{root.alias}' in {sw.human()}")
        return frame.locator

    async def resolve_path(self, root: Component, path: str) -> Any:
        # Hops are parsed lazily so a failing hop stops before later ones are read.
        return await self.resolve(root, (parse_hop(token) for token in tokenize(path)))

    # ---------- Hops ----------

    def _scope(self, frame: ResolutionFrame) -> Any:
        return frame.locator if frame.locator is not None else self.driver.document_root()

    async def _step(self, frame: ResolutionFrame, hop: PathToken) -> ResolutionFrame:
        node = _lookup(frame.node, hop.alias)
        if isinstance(hop, PlainHop):
            return self._plain(frame, node)
        return await self._qualified(frame, node, hop)

    def _plain(self, frame: ResolutionFrame, node: Node) -> ResolutionFrame:
        if node.kind is NodeKind.composite and not node.has_selector:
            log.debug(f"hop '{node.alias}': grouping component, scope unchanged")
            return ResolutionFrame(frame.locator, node, frame.multiple)

        if frame.multiple and not node.is_collection and self.strict_collection_scope:
            raise AmbiguousScope(node.alias, frame.node.alias)

        multiple = node.is_collection or frame.multiple
        locator = self.driver.locate(self._scope(frame), translate(node), multiple=multiple)
        log.debug(f"hop '{node.alias}': {'all matches' if multiple else 'first match'}")
        return ResolutionFrame(locator, node, multiple)

    async def _qualified(self, frame: ResolutionFrame, node: Node, hop: QualifiedHop) -> ResolutionFrame:
        if not node.is_collection:
            raise NotACollection(hop.alias)

        collection = self.driver.locate(self._scope(frame), translate(node), multiple=True)
        if isinstance(hop.by, Index):
            log.debug(f"hop '{hop.alias}': element {hop.by.n}")
            locator = self.driver.element_at(collection, hop.by.zero_based)
        else:
            log.debug(f"hop '{hop.alias}': element containing {hop.by.text!r}")
            locator = await self.optimizer.match_by_text(collection, hop.by.text)
        return ResolutionFrame(locator, node, False)
