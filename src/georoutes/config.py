"""Add-on configuration.

GeoRoutesConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.

Callbacks are referenced by import string so configuration can live in
settings modules without importing application code::

    config = GeoRoutesConfig(
        callbacks={"blocked_page": "myapp.geo:Callbacks.blocked_page"},
        default_callback="blockedPage",
    )
    registrar = build_registrar(config)
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from georoutes._internal.imports import import_string
from georoutes.callbacks import DefaultCallbacks
from georoutes.errors import ConfigurationError
from georoutes.location import HeaderLocationResolver
from georoutes.registrar import CallbackRegistrar

logger = logging.getLogger("georoutes.config")


@dataclass(frozen=True, slots=True)
class GeoRoutesConfig:
    """georoutes configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = GeoRoutesConfig(default_callback="notFound")
    """

    # Callbacks: name -> "module:attr.path"
    callbacks: Mapping[str, str] = field(default_factory=dict)
    load_defaults: bool = True  # Import DefaultCallbacks (unauthorized, not_found, redirect_to)

    # Default callback, resolved like registrar.resolve(name). None keeps the built-in.
    default_callback: str | None = "unauthorized"
    default_args: tuple[Any, ...] = ()

    # Location
    country_header: str = "cf-ipcountry"


def resolve_reference(reference: str) -> Callable[..., Any]:
    """Resolve a ``"module:attr.path"`` callback reference to a callable.

    Raises:
        ConfigurationError: If the reference cannot be imported or does
            not name a callable.
    """
    try:
        obj = import_string(reference)
    except (ImportError, AttributeError, ValueError) as exc:
        msg = f"Cannot import callback {reference!r}: {exc}"
        raise ConfigurationError(msg) from exc

    if not callable(obj):
        msg = f"{reference!r} resolved to {type(obj).__name__}, not a callable"
        raise ConfigurationError(msg)
    return obj


def build_registrar(config: GeoRoutesConfig | None = None) -> CallbackRegistrar:
    """Create a registrar populated from *config*."""
    config = config or GeoRoutesConfig()
    registrar = CallbackRegistrar()

    if config.load_defaults:
        registrar.import_static_handlers(DefaultCallbacks)

    registrar.load_many(
        {name: resolve_reference(ref) for name, ref in config.callbacks.items()}
    )

    if config.default_callback is not None:
        registrar.set_default(config.default_callback, *config.default_args)

    logger.debug(
        "Built registrar with %d callbacks, default %r",
        len(registrar),
        config.default_callback,
    )
    return registrar


def build_resolver(config: GeoRoutesConfig | None = None) -> HeaderLocationResolver:
    """Create the header-based location resolver described by *config*."""
    config = config or GeoRoutesConfig()
    return HeaderLocationResolver(config.country_header)
