"""Glob-style event name patterns.

Event names are dot-separated paths such as ``user.profile.updated``. A
pattern may use ``*`` to stand for exactly one segment and ``**`` to stand for
one or more segments::

    matches("user.*", "user.created")             # True
    matches("user.*", "user.profile.updated")     # False
    matches("user.**", "user.profile.updated")    # True
"""

from __future__ import annotations

from functools import lru_cache
import re

WILDCARD = "*"

_SEGMENT = r"[^.]+"
_SEGMENTS = r"[^.]+(?:\.[^.]+)*"
_TOKEN_PATTERN = re.compile(r"(\*\*|\*)")


def is_pattern(name: str) -> bool:
    """Return True when ``name`` contains a wildcard."""
    return WILDCARD in name


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a wildcard pattern into a compiled regular expression."""
    parts: list[str] = []
    for token in _TOKEN_PATTERN.split(pattern):
        if token == "**":
            parts.append(_SEGMENTS)
        elif token == "*":
            parts.append(_SEGMENT)
        elif token:
            parts.append(re.escape(token))
    return re.compile("".join(parts))


def matches(pattern: str, name: str) -> bool:
    """Return True when ``name`` is fully matched by ``pattern``."""
    return compile_pattern(pattern).fullmatch(name) is not None
