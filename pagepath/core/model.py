from __future__ import annotations

"""Page-object graph model
-------------------------
Leaf descriptors (elements and collections), composite components and the
small value types threaded through resolution.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from pagepath.core.errors import AliasNotFound


# ---------- Core enums ----------


class SelectorType(str, Enum):
    css = "css"
    xpath = "xpath"
    js = "js"
    cssContainingText = "cssContainingText"


class NodeKind(str, Enum):
    single = "single"
    multiple = "multiple"
    composite = "composite"


# ---------- Nodes ----------


@dataclass(frozen=True)
class LeafDescriptor:
    """A registered element (``single``) or collection (``multiple``)."""
    alias: str
    selector: str
    selector_type: str = SelectorType.css.value
    text: Optional[str] = None
    kind: NodeKind = NodeKind.single

    @property
    def is_collection(self) -> bool:
        return self.kind is NodeKind.multiple


class Component:
    """
    A composite node: an alias -> node mapping plus an optional selector that
    scopes its children. Aliases are unique within one component only.

    A component declared with ``collection=True`` repeats (table rows, cards):
    its selector matches many elements and it can be qualified by index or
    text just like a collection of elements.
    """

    kind = NodeKind.composite

    def __init__(
        self,
        alias: Optional[str] = None,
        selector: Optional[str] = None,
        selector_type: str = SelectorType.css.value,
        text: Optional[str] = None,
        collection: bool = False,
    ) -> None:
        if collection and not selector:
            raise ValueError(f"repeated component '{alias}' needs a selector")
        self.alias = alias
        self.selector = selector
        self.selector_type = _type_value(selector_type)
        self.text = text
        self.collection = collection
        self._elements: Dict[str, Node] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(alias={self.alias!r}, selector={self.selector!r}, children={len(self._elements)})"

    @property
    def is_collection(self) -> bool:
        return self.collection

    # ---------- Registration ----------

    def define_element(
        self,
        alias: str,
        selector: str,
        selector_type: str = SelectorType.css.value,
        text: Optional[str] = None,
    ) -> LeafDescriptor:
        leaf = LeafDescriptor(alias, selector, _type_value(selector_type), text, NodeKind.single)
        self._elements[alias] = leaf
        return leaf

    def define_collection(
        self,
        alias: str,
        selector: str,
        selector_type: str = SelectorType.css.value,
        text: Optional[str] = None,
    ) -> LeafDescriptor:
        leaf = LeafDescriptor(alias, selector, _type_value(selector_type), text, NodeKind.multiple)
        self._elements[alias] = leaf
        return leaf

    def define_component(self, component: "Component", alias: Optional[str] = None) -> "Component":
        """Register ``component`` under ``alias`` or under its own alias."""
        key = alias or component.alias
        if not key:
            raise ValueError("component needs an alias to be registered")
        self._elements[key] = component
        return component

    # ---------- Lookup ----------

    @property
    def has_selector(self) -> bool:
        return bool(self.selector)

    def lookup(self, alias: str) -> "Node":
        try:
            return self._elements[alias]
        except KeyError:
            raise AliasNotFound(alias, self.alias) from None

    def children(self) -> Iterator[Tuple[str, "Node"]]:
        yield from self._elements.items()


Node = Union[LeafDescriptor, Component]


def _type_value(selector_type: Any) -> str:
    # Enum members and plain strings are both accepted; unknown values are kept
    # as-is and only rejected when the node is reached during resolution.
    return selector_type.value if isinstance(selector_type, Enum) else str(selector_type)


# ---------- Resolution values ----------


@dataclass(frozen=True)
class Query:
    """Driver-neutral locator expression for one node."""
    selector_type: SelectorType
    selector: str
    text: Optional[str] = None


@dataclass(frozen=True)
class ResolutionFrame:
    locator: Any
    node: Node
    multiple: bool = False
