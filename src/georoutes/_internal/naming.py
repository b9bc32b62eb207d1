"""Proxy-name helpers.

Callbacks are stored under ``"or" + studly(name)``. Lookups by bare name
only capitalize the first letter, so ``"myCallback"`` round-trips but
``"my_callback"`` does not.
"""

import re

PROXY_PREFIX = "or"

_SEPARATORS = re.compile(r"[-_]")
_WHITESPACE = re.compile(r"\s+")


def ucfirst(value: str) -> str:
    """Upper-case the first character, leave the rest unchanged."""
    return value[:1].upper() + value[1:]


def studly(value: str) -> str:
    """Convert ``my_callback`` / ``my-callback`` / ``my callback`` to ``MyCallback``.

    Each word keeps its inner casing, so ``"myCallback"`` becomes
    ``"MyCallback"`` rather than ``"Mycallback"``.
    """
    words = _WHITESPACE.split(_SEPARATORS.sub(" ", value))
    return "".join(ucfirst(word) for word in words)


def proxy_name(name: str) -> str:
    """Key a callback is stored under."""
    return PROXY_PREFIX + studly(name)


def lookup_name(name: str) -> str:
    """Key a bare callback name is looked up under."""
    return PROXY_PREFIX + ucfirst(name)
