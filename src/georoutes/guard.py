"""GeoGuard — evaluate a GeoRule for a request and run the denial callback.

Attach rules to route handlers with the ``restrict`` decorator::

    guard = GeoGuard(registrar, HeaderLocationResolver())

    @app.route("/offers")
    @guard.restrict(GeoRoute(registrar).allow_from("US", "CA").rule())
    async def offers(request):
        ...

A permitted request reaches the handler unchanged. A denied one gets the
rule's callback, or the registrar's default callback when the rule has
none; whatever that callback returns (or raises) is the response.
"""

import inspect
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from georoutes.audit import GeoDeniedEvent, publish_denial
from georoutes.location import LocationResolver
from georoutes.registrar import CallbackRegistrar
from georoutes.rules import GeoRule

logger = logging.getLogger("georoutes.guard")


async def _settle(result: Any) -> Any:
    """Await *result* when a callback or handler was ``async def``."""
    if inspect.isawaitable(result):
        return await result
    return result


class GeoGuard:
    """Route-constraint evaluator bound to a registrar and a location resolver."""

    __slots__ = ("registrar", "resolver")

    def __init__(self, registrar: CallbackRegistrar, resolver: LocationResolver) -> None:
        self.registrar = registrar
        self.resolver = resolver

    def permits(self, request: Any, rule: GeoRule) -> bool:
        """Whether *rule* lets *request* through."""
        return rule.permits(self.resolver.country_code(request))

    async def deny(self, request: Any, rule: GeoRule) -> Any:
        """Run the denial callback for *request* and return its result.

        Uses the rule's callback, or the registrar default when the rule
        has none. Errors raised by the callback propagate.
        """
        event = GeoDeniedEvent.for_request(request, rule, self.resolver.country_code(request))
        logger.info(
            "Geo-denied %s %s from %s (%s %s)",
            event.method or "-",
            event.path or "-",
            event.country or "unknown",
            event.strategy,
            ",".join(event.countries),
        )
        publish_denial(event)

        if rule.callback is not None:
            return await _settle(rule.callback())
        return await _settle(self.registrar.invoke_default())

    def restrict(self, rule: GeoRule) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorate a route handler so *rule* is checked before it runs.

        The request is taken from the ``request`` keyword argument or,
        failing that, the first positional argument.
        """

        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            @wraps(handler)
            async def wrapper(*args: Any, **kwargs: Any) -> Any:
                request = kwargs.get("request", args[0] if args else None)
                if request is None:
                    msg = f"{handler.__qualname__} was called without a request"
                    raise TypeError(msg)

                if not self.permits(request, rule):
                    return await self.deny(request, rule)
                return await _settle(handler(*args, **kwargs))

            return wrapper

        return decorator
