from __future__ import annotations

import re
from typing import List

# "Header > NavList" and "Header>NavList" are the same path.
HOP_SEPARATOR = re.compile(r"\s*>\s*")


def tokenize(path: str) -> List[str]:
    """
    Split a path into raw hop tokens.

    Tokens are returned verbatim (leading whitespace of the first token and
    trailing whitespace of the last one are kept). A path without a separator,
    including the empty path, gives a single token.
    """
    return HOP_SEPARATOR.split(path)
