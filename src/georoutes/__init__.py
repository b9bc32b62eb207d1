"""georoutes — restrict routes to (or from) countries.

Named denial callbacks live in a ``CallbackRegistrar``; routes carry a
``GeoRule`` built with ``GeoRoute``; ``GeoGuard`` checks the rule against
the visitor's country and runs the callback on denial.

Basic usage::

    from georoutes import GeoGuard, GeoRoute, HeaderLocationResolver, build_registrar

    registrar = build_registrar()
    guard = GeoGuard(registrar, HeaderLocationResolver())

    @app.route("/offers")
    @guard.restrict(GeoRoute(registrar).allow_from("US", "CA").orNotFound().rule())
    async def offers(request):
        ...
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "CallbackEntry",
    "CallbackNotFoundError",
    "CallbackRegistrar",
    "ConfigurationError",
    "DefaultCallback",
    "DefaultCallbacks",
    "Forbidden",
    "GeoDeniedEvent",
    "GeoGuard",
    "GeoRoute",
    "GeoRoutesConfig",
    "GeoRoutesError",
    "GeoRule",
    "HTTPError",
    "HeaderLocationResolver",
    "InvalidArgumentError",
    "LocationResolver",
    "NotFound",
    "Redirect",
    "ReflectionError",
    "StaticLocationResolver",
    "Unauthorized",
    "add_denial_listener",
    "build_registrar",
    "build_resolver",
    "remove_denial_listener",
    "resolve_reference",
]


# Public name -> defining module. Kept in sync with __all__.
_LAZY_IMPORTS: dict[str, str] = {
    "CallbackEntry": "georoutes.registrar",
    "CallbackRegistrar": "georoutes.registrar",
    "DefaultCallback": "georoutes.registrar",
    "DefaultCallbacks": "georoutes.callbacks",
    "GeoGuard": "georoutes.guard",
    "GeoRoute": "georoutes.rules",
    "GeoRule": "georoutes.rules",
    "GeoRoutesConfig": "georoutes.config",
    "build_registrar": "georoutes.config",
    "build_resolver": "georoutes.config",
    "resolve_reference": "georoutes.config",
    "GeoDeniedEvent": "georoutes.audit",
    "add_denial_listener": "georoutes.audit",
    "remove_denial_listener": "georoutes.audit",
    "HeaderLocationResolver": "georoutes.location",
    "LocationResolver": "georoutes.location",
    "StaticLocationResolver": "georoutes.location",
    "Redirect": "georoutes.responses",
    "CallbackNotFoundError": "georoutes.errors",
    "ConfigurationError": "georoutes.errors",
    "Forbidden": "georoutes.errors",
    "GeoRoutesError": "georoutes.errors",
    "HTTPError": "georoutes.errors",
    "InvalidArgumentError": "georoutes.errors",
    "NotFound": "georoutes.errors",
    "ReflectionError": "georoutes.errors",
    "Unauthorized": "georoutes.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import georoutes`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_path), name)
