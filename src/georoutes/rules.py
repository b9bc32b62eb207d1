"""GeoRule and the GeoRoute builder.

A ``GeoRule`` is the frozen constraint attached to a route: a set of
country codes, whether they are allowed or denied, and the callback to
run when a visitor is turned away.

``GeoRoute`` builds one fluently. Besides the explicit methods it answers
every proxy key in the registrar as a method, so registered callbacks
read naturally at the call site::

    rule = (
        GeoRoute(registrar)
        .allow_from("US", "CA")
        .orRedirectTo("/unavailable")
        .rule()
    )
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from georoutes.errors import ConfigurationError, InvalidArgumentError
from georoutes.registrar import CallbackRegistrar, DefaultCallback

Strategy: TypeAlias = Literal["allow", "deny"]

_COUNTRY_CODE = re.compile(r"^[A-Za-z]{2}$")


def normalize_country(code: str | None) -> str | None:
    """Upper-case a country code; empty values become ``None``."""
    if not code:
        return None
    code = code.strip().upper()
    return code or None


@dataclass(frozen=True, slots=True)
class GeoRule:
    """A frozen country constraint for one route."""

    countries: frozenset[str]
    strategy: Strategy = "allow"
    callback: DefaultCallback | None = None

    def permits(self, country_code: str | None) -> bool:
        """Whether a visitor from *country_code* may use the route.

        An unknown country is never in ``countries``: it is refused by an
        allow rule and let through by a deny rule.
        """
        listed = normalize_country(country_code) in self.countries
        if self.strategy == "allow":
            return listed
        return not listed


class GeoRoute:
    """Fluent builder for a ``GeoRule``."""

    __slots__ = ("_callback", "_countries", "_registrar", "_strategy")

    def __init__(self, registrar: CallbackRegistrar) -> None:
        self._registrar = registrar
        self._countries: frozenset[str] = frozenset()
        self._strategy: Strategy = "allow"
        self._callback: DefaultCallback | None = None

    def allow_from(self, *countries: str) -> "GeoRoute":
        """Only visitors from *countries* may use the route."""
        return self._set_countries("allow", countries)

    def deny_from(self, *countries: str) -> "GeoRoute":
        """Visitors from *countries* are turned away."""
        return self._set_countries("deny", countries)

    def or_callback(self, target: str | Callable[..., Any], *args: Any) -> "GeoRoute":
        """Run *target* with *args* when a visitor is denied.

        *target* is a registered callback name or a callable.
        """
        if callable(target):
            handler = target
        elif isinstance(target, str):
            handler = self._registrar.resolve(target)
        else:
            raise InvalidArgumentError(("str", "callable"), type(target).__name__)
        self._callback = DefaultCallback(handler, args)
        return self

    def rule(self) -> GeoRule:
        """Freeze the builder."""
        if not self._countries:
            msg = "GeoRoute needs at least one country; call allow_from() or deny_from()"
            raise ConfigurationError(msg)
        return GeoRule(
            countries=self._countries,
            strategy=self._strategy,
            callback=self._callback,
        )

    def _set_countries(self, strategy: Strategy, countries: tuple[str, ...]) -> "GeoRoute":
        for code in countries:
            if not _COUNTRY_CODE.match(code):
                msg = f"Invalid country code {code!r}: expected two letters (ISO 3166-1 alpha-2)"
                raise ConfigurationError(msg)
        self._strategy = strategy
        self._countries = frozenset(code.upper() for code in countries)
        return self

    def __getattr__(self, name: str) -> Callable[..., "GeoRoute"]:
        # Only reached for names that are not regular attributes.
        if name.startswith("_") or not self._registrar.has_proxy_key(name):
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg)

        def set_callback(*args: Any) -> "GeoRoute":
            return self.or_callback(name, *args)

        set_callback.__name__ = name
        return set_callback

    def __repr__(self) -> str:
        countries = ", ".join(sorted(self._countries))
        return f"GeoRoute({self._strategy} [{countries}])"
