"""georoutes exception hierarchy.

Shared across the registrar, route builder, guard, and config loader so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class GeoRoutesError(Exception):
    """Base for all georoutes-specific errors."""


class ConfigurationError(GeoRoutesError):
    """Raised when add-on configuration is invalid.

    Typically surfaces at startup, from ``build_registrar()`` or when a
    ``GeoRoute`` is frozen into a rule.
    """


class CallbackNotFoundError(GeoRoutesError, LookupError):
    """No callback is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Undefined callback [{name}]")


class InvalidArgumentError(GeoRoutesError, TypeError):
    """A value of the wrong type was given where a callback was expected."""

    def __init__(self, expected: tuple[str, ...], actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {' or '.join(expected)}, got {actual}")


class ReflectionError(GeoRoutesError):
    """A handler provider could not be introspected."""

    def __init__(self, target: object, reason: str = "") -> None:
        self.target = target
        detail = f"Cannot introspect {target!r}"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)


@dataclass(frozen=True, slots=True)
class HTTPError(GeoRoutesError):
    """An error that maps directly to an HTTP status code.

    Raised by the built-in callbacks. The host framework catches these
    and renders the matching error response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class Unauthorized(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """401 — the visitor may not access this route."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(status=401, detail=detail)


class Forbidden(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """403 — access refused for this visitor."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — pretend the route does not exist."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
