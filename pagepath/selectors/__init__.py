"""
Selectors package
-----------------
The path DSL (hop tokenizer and qualifier grammar) and the translation of
node selectors into driver queries, including text matching over collections.
"""

from .tokenizer import tokenize
from .qualifier import Index, PathToken, PlainHop, QualifiedHop, TextMatch, parse_hop, parse_path
from .translator import translate
from .text_match import TextMatchOptimizer

__all__ = [
    "tokenize",
    "parse_hop",
    "parse_path",
    "PathToken",
    "PlainHop",
    "QualifiedHop",
    "Index",
    "TextMatch",
    "translate",
    "TextMatchOptimizer",
]
