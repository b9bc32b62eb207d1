"""Location resolvers — where a visitor's country code comes from.

Looking up an IP address is left to the deployment: a CDN or reverse
proxy that already knows the country (Cloudflare's ``CF-IPCountry``,
CloudFront's ``CloudFront-Viewer-Country``) or a custom resolver backed
by a GeoIP database. Anything with a ``country_code(request)`` method
works::

    class MaxMindResolver:
        def country_code(self, request) -> str | None:
            return reader.country(request.client[0]).country.iso_code
"""

from typing import Any, Protocol

# Values CDNs send when the country is unknown or the visitor uses Tor.
_UNKNOWN = frozenset({"XX", "T1"})


class LocationResolver(Protocol):
    """Protocol for country lookups. No base class required."""

    def country_code(self, request: Any) -> str | None: ...


class HeaderLocationResolver:
    """Read the country from a header set by a trusted proxy.

    Only use this behind a proxy that overwrites the header; clients can
    send it themselves otherwise.
    """

    __slots__ = ("header",)

    def __init__(self, header: str = "cf-ipcountry") -> None:
        self.header = header.lower()

    def country_code(self, request: Any) -> str | None:
        raw = request.headers.get(self.header)
        if not raw:
            return None
        code = raw.strip().upper()
        if not code or code in _UNKNOWN:
            return None
        return code


class StaticLocationResolver:
    """Answer the same country for every request (development, tests)."""

    __slots__ = ("code",)

    def __init__(self, code: str | None) -> None:
        self.code = code.upper() if code else None

    def country_code(self, request: Any) -> str | None:
        return self.code
