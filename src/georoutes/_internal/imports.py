"""Import-string resolution — ``"module:attr.path"`` to an object.

Shared by ``CallbackRegistrar.import_static_handlers`` and the config
loader. Callers translate failures into their own error types.
"""

import importlib
from typing import Any


def import_string(reference: str) -> Any:
    """Resolve ``"module:attr.path"`` to the named object.

    Args:
        reference: Dotted module path, a colon, then a dotted attribute
            path within the module (e.g. ``"myapp.geo:Callbacks"``,
            ``"myapp.geo:Callbacks.go_home"``).

    Raises:
        ValueError: If the ``:attr`` portion is missing or the module path is relative.
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If an attribute along the path does not exist.
    """
    module_path, _, attr_path = reference.partition(":")
    if not module_path or not attr_path:
        msg = f"Expected 'module:attribute', got {reference!r}"
        raise ValueError(msg)
    if module_path.startswith("."):
        msg = f"Relative module paths are not supported, got {reference!r}"
        raise ValueError(msg)

    obj: Any = importlib.import_module(module_path)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj
