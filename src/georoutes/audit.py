"""Denial events — who was turned away, from where, by which rule.

``GeoGuard.deny`` publishes a ``GeoDeniedEvent`` for every refused
request. Listeners are process-wide and opt-in; use them to feed logs,
metrics, or a SIEM::

    add_denial_listener(lambda event: metrics.incr(f"geo.denied.{event.country}"))

Listeners run synchronously in registration order on the request path.
Their errors propagate to the caller of ``GeoGuard.deny``.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any, TypeAlias

from georoutes.rules import GeoRule, Strategy


@dataclass(frozen=True, slots=True)
class GeoDeniedEvent:
    """One refused request."""

    country: str | None
    strategy: Strategy
    countries: tuple[str, ...]
    path: str | None = None
    method: str | None = None
    timestamp: float = field(default_factory=time)

    @classmethod
    def for_request(cls, request: Any, rule: GeoRule, country: str | None) -> "GeoDeniedEvent":
        """Describe *request* being refused by *rule*.

        ``path`` and ``method`` are read if the request object has them.
        """
        return cls(
            country=country,
            strategy=rule.strategy,
            countries=tuple(sorted(rule.countries)),
            path=getattr(request, "path", None),
            method=getattr(request, "method", None),
        )


DenialListener: TypeAlias = Callable[[GeoDeniedEvent], None]


_listeners_lock = threading.Lock()
_listeners: tuple[DenialListener, ...] = ()


def add_denial_listener(listener: DenialListener) -> None:
    """Subscribe *listener* to every future denial. Adding it twice is a no-op."""
    global _listeners
    with _listeners_lock:
        if listener not in _listeners:
            _listeners = (*_listeners, listener)


def remove_denial_listener(listener: DenialListener) -> None:
    """Unsubscribe *listener*; unknown listeners are ignored."""
    global _listeners
    with _listeners_lock:
        _listeners = tuple(existing for existing in _listeners if existing != listener)


def publish_denial(event: GeoDeniedEvent) -> None:
    """Hand *event* to every subscribed listener."""
    with _listeners_lock:
        listeners = _listeners
    for listener in listeners:
        listener(event)
