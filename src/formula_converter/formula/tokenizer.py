"""
Formula argument tokenizer.

Splits the argument text of a function call into its top-level
parameters.  Separators (``,`` or ``;``) inside parentheses or string
literals do not split; string literals use either quote style and escape
their own quote by doubling it (``"a""b"``, ``'it''s'``).
"""

import re
from typing import List, Optional

QUOTES = ('"', "'")
SEPARATORS = (",", ";")

_QUOTED_RE = re.compile(r"^([\"'])(.*)\1$", re.DOTALL)


def split_top_level_parameters(text: str) -> List[str]:
    """Split a function-call argument string into its top-level parameters.

    Nested calls keep their parentheses and arguments intact, so they can
    be evaluated recursively.  Each parameter is stripped of surrounding
    whitespace.  At least one parameter is always returned, even if empty.

    Args:
        text: The text between a call's outer parentheses

    Returns:
        List of raw parameter strings

    Example:
        >>> split_top_level_parameters('IMAGE("a,b", "c"), "d"')
        ['IMAGE("a,b", "c")', '"d"']
    """
    params: List[str] = []
    groups: List[str] = []
    start = 0
    i = 0

    while i < len(text):
        char = text[i]
        current = groups[-1] if groups else None

        if current in QUOTES:
            # Strings don't nest: only the matching quote is meaningful
            if char == current:
                if text[i + 1:i + 2] == current:
                    i += 2
                    continue
                groups.pop()
        elif char in SEPARATORS and not groups:
            params.append(text[start:i].strip())
            start = i + 1
        elif char == "(" or char in QUOTES:
            groups.append(char)
        elif char == ")" and current == "(":
            groups.pop()

        i += 1

    params.append(text[start:].strip())
    return params


def unquote(param: str) -> Optional[str]:
    """Return the content of a quoted string literal, or None if *param*
    is not one.  Doubled quotes are unescaped."""
    match = _QUOTED_RE.match(param)
    if match is None:
        return None
    quote, body = match.groups()
    return body.replace(quote * 2, quote)
