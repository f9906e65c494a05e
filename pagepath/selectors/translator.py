from __future__ import annotations

from typing import Union

from pagepath.core.errors import MissingText, UnknownSelectorType
from pagepath.core.model import Component, LeafDescriptor, Query, SelectorType


def translate(node: Union[LeafDescriptor, Component]) -> Query:
    """
    Convert a node's declared selector into a driver-neutral Query.

    css / xpath / js pass through untouched; cssContainingText needs the
    node's text. Selector syntax itself is not checked here.
    """
    try:
        selector_type = SelectorType(node.selector_type)
    except ValueError:
        raise UnknownSelectorType(node.alias, node.selector_type) from None

    if selector_type is SelectorType.cssContainingText:
        if not node.text:
            raise MissingText(node.alias)
        return Query(selector_type, node.selector, node.text)

    return Query(selector_type, node.selector)
