"""Resolve ``[store:]selector`` references across the Lib and Field stores.

Unprefixed selectors go to Lib first. Only purely numeric selectors fall
back to Field when Lib fails or yields nothing; anything else fails
without fallback. An explicit prefix never falls back.
"""

from __future__ import annotations

import logging
import re

from vz_common.errors import ResolutionError, VzError
from vz_core.items import Item
from vz_core.store import Store

logger = logging.getLogger(__name__)

LIB_NAMES = frozenset({"lib", "l"})
FIELD_NAMES = frozenset({"field", "fld", "f"})

_SELECTOR_RE = re.compile(r"^(?:(?P<store>\w+):)?(?P<inner>.+)$")
_NUMERIC_RE = re.compile(r"^[0-9]+$")


def _from_explicit(store: Store, inner: str) -> list[Item]:
    try:
        items = store.resolve_selection(inner)
    except VzError as exc:
        raise ResolutionError(
            f"Selector '{inner}': search in explicitly specified '{store.name}' store failed: {exc}",
            context={"store": store.name, "selector": inner},
            cause=exc,
        ) from exc
    if not items:
        raise ResolutionError(
            f"Selector '{inner}': no items found in explicitly specified '{store.name}' store.",
            context={"store": store.name, "selector": inner},
        )
    return items


def _with_fallback(lib: Store, field: Store, inner: str) -> list[Item]:
    numeric = bool(_NUMERIC_RE.match(inner))
    try:
        items = lib.resolve_selection(inner)
    except VzError as exc:
        if not numeric:
            raise ResolutionError(
                f"Selector '{inner}': '{lib.name}' (default) search failed ({exc}). "
                "Non-numeric selectors do not fall back.",
                context={"selector": inner},
                cause=exc,
            ) from exc
        lib_error: VzError | None = exc
    else:
        if items:
            return items
        if not numeric:
            raise ResolutionError(
                f"Selector '{inner}': no items found in '{lib.name}' (default). "
                "Non-numeric selectors do not fall back.",
                context={"selector": inner},
            )
        lib_error = None

    logger.debug("Selector %r falling back to %s", inner, field.name)
    try:
        items = field.resolve_selection(inner)
    except VzError as exc:
        reason = f"failed ({lib_error})" if lib_error else "returned no items"
        raise ResolutionError(
            f"Selector '{inner}': '{lib.name}' (default) search {reason}, "
            f"and '{field.name}' (fallback) search also failed ({exc})",
            context={"selector": inner},
            cause=exc,
        ) from exc
    if not items:
        raise ResolutionError(
            f"Selector '{inner}': no items found in '{lib.name}' or '{field.name}'.",
            context={"selector": inner},
        )
    return items


def resolve(selector: str, *, lib: Store, field: Store) -> list[Item]:
    """Resolve a global selector to a non-empty list of items."""
    match = _SELECTOR_RE.match(selector.strip())
    if match is None:
        raise ResolutionError(f"Invalid selection format: {selector!r}")
    store_name, inner = match.group("store"), match.group("inner")
    if store_name is None:
        return _with_fallback(lib, field, inner)
    lowered = store_name.lower()
    if lowered in LIB_NAMES:
        return _from_explicit(lib, inner)
    if lowered in FIELD_NAMES:
        return _from_explicit(field, inner)
    raise ResolutionError(
        f"Unknown explicitly specified store: {store_name}", context={"store": store_name}
    )
