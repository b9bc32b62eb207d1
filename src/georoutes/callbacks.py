"""Built-in denial callbacks.

Load them into a registrar with::

    registrar.import_static_handlers(DefaultCallbacks)

which registers ``orUnauthorized``, ``orNotFound`` and ``orRedirectTo``.
"""

from georoutes.errors import NotFound, Unauthorized
from georoutes.responses import Redirect


class DefaultCallbacks:
    """Stateless handlers for a denied visitor."""

    @staticmethod
    def unauthorized() -> None:
        """Deny with a 401."""
        raise Unauthorized()

    @staticmethod
    def not_found() -> None:
        """Deny with a 404, hiding the route."""
        raise NotFound()

    @staticmethod
    def redirect_to(url: str, status: int = 302) -> Redirect:
        """Send the visitor elsewhere."""
        return Redirect(url=url, status=status)
