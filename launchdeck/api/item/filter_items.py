"""Scope filter, text search and ordering for item lists."""

import locale
from collections.abc import Iterable

from .Scope import Scope
from .ServiceItem import ServiceItem


def _sort_key(item: ServiceItem) -> tuple[str, str, str, str]:
    name = item.display_name
    return (locale.strxfrm(name.casefold()), name, item.label, str(item.path))


def matches_search(item: ServiceItem, search: str) -> bool:
    """Case-insensitive substring match on display name or label."""
    if not search:
        return True
    needle = search.casefold()
    return needle in item.display_name.casefold() or needle in item.label.casefold()


def filter_items(items: Iterable[ServiceItem], scope: Scope | None = None, search: str = "") -> list[ServiceItem]:
    """Items in ``scope`` (all scopes when None) matching ``search``, in display-name order.

    Ties are broken by label then path, so the result does not depend on input order.
    """
    selected = [item for item in items if (scope is None or item.scope is scope) and matches_search(item, search)]
    return sorted(selected, key=_sort_key)
