"""Response values returned by callbacks.

Denial callbacks either raise an ``HTTPError`` or return a value the host
framework knows how to send. Only redirects need a dedicated type.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect response."""

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()
