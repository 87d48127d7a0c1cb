"""
Capability access for paint and composite objects.

Paints and composites from third-party libraries are recognized by the
accessors they expose rather than by their declared type. An accessor named
``colors`` is found as an attribute ``colors``, a zero-argument method
``colors()``, or a getter ``get_colors()``. Attribute values that are
themselves callable (tile nodes, for example) are returned, never called.
"""

from typing import Any, Iterable
import inspect
import logging

from utils.validation import MissingCapabilityError

logger = logging.getLogger(__name__)

_MISSING = object()


def _lookup(obj: Any, name: str) -> Any:
    for candidate in (name, f"get_{name}"):
        value = getattr(obj, candidate, _MISSING)
        if value is _MISSING:
            continue
        if inspect.ismethod(value):
            return value()
        return value
    return _MISSING


def has_capability(obj: Any, name: str) -> bool:
    """Check whether ``obj`` exposes accessor ``name`` (without calling it)."""
    return any(hasattr(obj, candidate) for candidate in (name, f"get_{name}"))


def has_capabilities(obj: Any, names: Iterable[str]) -> bool:
    return all(has_capability(obj, name) for name in names)


def get_property_value(obj: Any, name: str) -> Any:
    """
    Read a capability value from ``obj``.

    Raises:
        MissingCapabilityError: If no accessor named ``name`` exists
    """
    value = _lookup(obj, name)
    if value is _MISSING:
        raise MissingCapabilityError(
            f"{type(obj).__module__}.{type(obj).__qualname__} has no accessor '{name}'"
        )
    return value


def get_optional_property_value(obj: Any, name: str, default: Any = None) -> Any:
    """Read a capability value, returning ``default`` when absent or None."""
    value = _lookup(obj, name)
    if value is _MISSING or value is None:
        return default
    return value


def originates_from(obj: Any, module_prefixes: Iterable[str]) -> bool:
    """Check whether the class of ``obj`` is defined under any of the given packages."""
    module = type(obj).__module__ or ""
    for prefix in module_prefixes:
        if module == prefix or module.startswith(prefix + "."):
            return True
    return False
