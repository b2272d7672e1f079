"""Turning free text into poll identifiers."""

from __future__ import annotations

import string

from pollhub.common import ID_LENGTH

_ALNUM = frozenset(string.ascii_letters + string.digits)
_SPACE = frozenset(" \t\n\v\f\r")


def slugify(text: str, max_len: int = ID_LENGTH) -> str:
    """Reduce text to lower-case ASCII letters, digits and single hyphens.

    Runs of whitespace become one hyphen, other characters are dropped,
    and the result holds at most ``max_len - 1`` characters with no
    trailing hyphen.
    """
    if max_len < 1:
        raise ValueError("max_len must be at least 1")
    limit = max_len - 1
    out: list[str] = []
    last_was_hyphen = False
    for ch in text:
        if len(out) >= limit:
            break
        if ch in _ALNUM:
            out.append(ch.lower())
            last_was_hyphen = False
        elif ch in _SPACE and not last_was_hyphen:
            out.append("-")
            last_was_hyphen = True
    if out and out[-1] == "-":
        out.pop()
    return "".join(out)