"""Callback registrar — named denial callbacks plus one default.

Callbacks are stored under a proxy key: ``"or"`` followed by the studly
form of the registered name, so ``register("redirect_to", fn)`` is kept
as ``orRedirectTo``. Those keys double as the dynamic method names of
``GeoRoute`` (``route.orRedirectTo("/home")``).

Lookup by bare name only capitalizes the first letter::

    registrar.register("myCallback", fn)
    registrar.resolve("myCallback")    # orMyCallback -> fn

    registrar.register("my_callback", fn)
    registrar.resolve("orMyCallback")  # exact key -> fn
    registrar.resolve("my_callback")   # orMy_callback -> CallbackNotFoundError

Free-threading safety:
    - CallbackEntry and DefaultCallback are frozen dataclasses (immutable)
    - One ``threading.Lock`` guards the proxy table and the default slot
    - Callbacks are invoked outside the lock, so they may call back in
"""

import inspect
import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from georoutes._internal.imports import import_string
from georoutes._internal.naming import lookup_name, proxy_name
from georoutes.callbacks import DefaultCallbacks
from georoutes.errors import CallbackNotFoundError, InvalidArgumentError, ReflectionError

logger = logging.getLogger("georoutes.registrar")


@dataclass(frozen=True, slots=True)
class CallbackEntry:
    """A registered callback and the name it was registered under."""

    name: str
    proxy: str
    handler: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class DefaultCallback:
    """A callback with its bound positional arguments."""

    handler: Callable[..., Any]
    args: tuple[Any, ...] = ()

    def __call__(self) -> Any:
        return self.handler(*self.args)


class CallbackRegistrar:
    """Maps callback names to callables and holds the default callback."""

    __slots__ = ("_default", "_lock", "_proxies")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._proxies: dict[str, CallbackEntry] = {}
        self._default = DefaultCallback(DefaultCallbacks.unauthorized)

    # -- Registration --

    def register(self, name: str, handler: Callable[..., Any]) -> None:
        """Store *handler* under ``"or" + studly(name)``, replacing any previous entry."""
        if not callable(handler):
            raise InvalidArgumentError(("callable",), type(handler).__name__)
        with self._lock:
            self._add(name, handler)

    def load_many(self, handlers: Mapping[str, Callable[..., Any]]) -> None:
        """Register every ``name -> handler`` pair of *handlers*."""
        for name, handler in handlers.items():
            self.register(name, handler)

    def import_static_handlers(self, provider: type | str) -> None:
        """Register every static and class method of *provider* under its own name.

        *provider* is a class or a ``"module:Class"`` import string.
        Methods inherited from base classes are included; dunder methods
        are not. Raises ``ReflectionError`` if *provider* cannot be
        resolved to a class.
        """
        cls = _resolve_provider(provider)
        found: dict[str, Callable[..., Any]] = {}
        seen: set[str] = set()
        for klass in cls.__mro__:
            for attr, value in vars(klass).items():
                if attr.startswith("__") or attr in seen:
                    continue
                # the closest definition wins, so an instance-method override hides a static base
                seen.add(attr)
                if isinstance(value, (staticmethod, classmethod)):
                    # getattr binds classmethods to cls
                    found[attr] = getattr(cls, attr)

        logger.debug("Importing %d callbacks from %s", len(found), cls.__qualname__)
        self.load_many(found)

    def _add(self, name: str, handler: Callable[..., Any]) -> None:
        key = proxy_name(name)
        self._proxies[key] = CallbackEntry(name=name, proxy=key, handler=handler)
        logger.debug("Registered callback %r as %s", name, key)

    # -- Lookup --

    def resolve(
        self,
        name: str,
        handler: Callable[..., Any] | None = None,
    ) -> Callable[..., Any]:
        """Get or set the callback for *name*.

        With a callable *handler*, registers it and returns it. Otherwise
        looks *name* up as an exact proxy key, then as ``"or" + ucfirst(name)``.
        Raises ``CallbackNotFoundError`` when neither matches.
        """
        if callable(handler):
            with self._lock:
                self._add(name, handler)
            return handler

        with self._lock:
            return self._lookup(name)

    def _lookup(self, name: str) -> Callable[..., Any]:
        entry = self._proxies.get(name)
        if entry is None:
            entry = self._proxies.get(lookup_name(name))
        if entry is None:
            raise CallbackNotFoundError(name)
        return entry.handler

    def has_registered_name(self, name: str) -> bool:
        """True if ``"or" + ucfirst(name)`` is a registered proxy key."""
        with self._lock:
            return lookup_name(name) in self._proxies

    def has_proxy_key(self, key: str) -> bool:
        """True if *key* is a registered proxy key, taken literally."""
        with self._lock:
            return key in self._proxies

    def list_proxies(self) -> dict[str, Callable[..., Any]]:
        """Return a copy of the ``proxy key -> callback`` table."""
        with self._lock:
            return {key: entry.handler for key, entry in self._proxies.items()}

    def entries(self) -> list[CallbackEntry]:
        """Return the registered entries, including the names they were registered under."""
        with self._lock:
            return list(self._proxies.values())

    # -- Default callback --

    def set_default(self, target: str | Callable[..., Any], *args: Any) -> None:
        """Make *target* the default callback, bound to *args*.

        *target* is a registered callback name (resolved like
        ``resolve(name)``) or a callable.
        """
        if isinstance(target, str):
            with self._lock:
                self._default = DefaultCallback(self._lookup(target), args)
            return

        if callable(target):
            with self._lock:
                self._default = DefaultCallback(target, args)
            return

        raise InvalidArgumentError(("str", "callable"), type(target).__name__)

    def get_default(self) -> tuple[Callable[..., Any], tuple[Any, ...]]:
        """Return the default callback and its bound arguments."""
        with self._lock:
            default = self._default
        return default.handler, default.args

    def default_callback(self) -> DefaultCallback:
        """Return the default callback as a single invocable value."""
        with self._lock:
            return self._default

    def invoke_default(self) -> Any:
        """Call the default callback with its bound arguments and return the result."""
        with self._lock:
            default = self._default
        return default()

    # -- Container protocol --

    def __len__(self) -> int:
        with self._lock:
            return len(self._proxies)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._proxies


def _resolve_provider(provider: type | str) -> type:
    """Turn a class or ``"module:Class"`` string into a class."""
    if isinstance(provider, str):
        try:
            provider = import_string(provider)
        except (ImportError, AttributeError, ValueError) as exc:
            raise ReflectionError(provider, str(exc)) from exc

    if not inspect.isclass(provider):
        raise ReflectionError(provider, f"{type(provider).__name__} is not a class")
    return provider
