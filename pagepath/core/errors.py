"""
Errors raised while resolving a path against a page-object graph.

Every error aborts the current resolution; nothing here is retried.
"""

from __future__ import annotations

from typing import Optional


class PagePathError(RuntimeError):
    """Base class for all resolution errors."""


class AliasNotFound(PagePathError):
    def __init__(self, alias: str, scope: Optional[str] = None) -> None:
        self.alias = alias
        self.scope = scope
        where = f" in '{scope}'" if scope else ""
        super().__init__(f"There is no such element: '{alias}'{where}")


class NotACollection(PagePathError):
    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"'{alias}' is not a collection")


class UnknownSelectorType(PagePathError):
    def __init__(self, alias: str, selector_type: object) -> None:
        self.alias = alias
        self.selector_type = selector_type
        super().__init__(f"Selector type '{selector_type}' of '{alias}' is not defined")


class MissingText(PagePathError):
    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"Text is not defined for cssContainingText selector of '{alias}'")


class MalformedQualifier(PagePathError):
    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Malformed qualifier '{token}': {reason}")


class AmbiguousScope(PagePathError):
    """A plain hop was scoped under a collection while strict scoping is on."""

    def __init__(self, alias: str, scope: Optional[str] = None) -> None:
        self.alias = alias
        self.scope = scope
        super().__init__(
            f"'{alias}' is scoped under collection '{scope}'; "
            f"pick one element first (e.g. '#1 of {scope}')"
        )
