from __future__ import annotations

"""Hop qualifiers
-----------------
Parses one hop token into a plain alias reference or a qualified reference
into a collection:

    hop        := qualified | plain
    plain      := ALIAS
    qualified  := "#" VALUE WS ("in" | "of") WS ALIAS
    VALUE      := ["!" | "$"] CHAR+

"#2 of Items" picks the second element of Items (1-based), "#Save in Buttons"
picks the first element of Buttons whose text contains "Save".
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from pagepath.core.errors import MalformedQualifier
from pagepath.selectors.tokenizer import tokenize

QUALIFIER_PREFIX = "#"
INDEX_KEYWORD = "of"
TEXT_KEYWORD = "in"
# A leading "!" or "$" in VALUE is a reserved marker: kept verbatim, never interpreted.


# ---------- Parsed hops ----------


@dataclass(frozen=True)
class Index:
    """1-based position as written in the path."""
    n: int

    @property
    def zero_based(self) -> int:
        return self.n - 1


@dataclass(frozen=True)
class TextMatch:
    text: str


@dataclass(frozen=True)
class PlainHop:
    alias: str


@dataclass(frozen=True)
class QualifiedHop:
    alias: str
    by: Union[Index, TextMatch]


PathToken = Union[PlainHop, QualifiedHop]


# ---------- Parser ----------


def _split_qualifier(body: str) -> Optional[Tuple[str, str, str]]:
    """
    Find ``VALUE WS keyword WS ALIAS`` in ``body`` (the token without "#").

    The last keyword occurrence wins, so values may contain the words "in"
    and "of" ("#Sign in in Buttons"). Both sides must be non-blank.
    """
    for i in range(len(body) - 2, 0, -1):
        keyword = body[i:i + 2]
        if keyword not in (INDEX_KEYWORD, TEXT_KEYWORD):
            continue
        before, after = body[:i], body[i + 2:]
        if not before[-1].isspace() or not after or not after[0].isspace():
            continue
        value, alias = before.rstrip(), after.lstrip()
        if value and alias:
            return value, keyword, alias
    return None


def _parse_index(token: str, value: str) -> int:
    digits = value.strip()
    if not (digits.isascii() and digits.isdigit()):
        raise MalformedQualifier(token, f"index '{value}' is not an integer")
    n = int(digits)
    if n < 1:
        raise MalformedQualifier(token, "indices start at 1")
    return n


def parse_hop(token: str) -> PathToken:
    if not token.startswith(QUALIFIER_PREFIX):
        return PlainHop(token)

    parts = _split_qualifier(token[len(QUALIFIER_PREFIX):])
    if parts is None:
        # An alias that happens to start with "#"
        return PlainHop(token)

    value, keyword, alias = parts
    if keyword == INDEX_KEYWORD:
        return QualifiedHop(alias, Index(_parse_index(token, value)))
    return QualifiedHop(alias, TextMatch(value))


def parse_path(path: str) -> List[PathToken]:
    return [parse_hop(token) for token in tokenize(path)]


def describe_hop(hop: PathToken) -> dict:
    """JSON-friendly view of a parsed hop (CLI output)."""
    if isinstance(hop, PlainHop):
        return {"alias": hop.alias}
    if isinstance(hop.by, Index):
        return {"alias": hop.alias, "index": hop.by.n}
    return {"alias": hop.alias, "text": hop.by.text}
