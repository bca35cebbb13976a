"""Bounded caches owned by the calendar page builder.

A :class:`~calendar_locale.locale_manager.Locale` only carries the cache
instances so that every page built for it can share them. Nothing in the
locale itself reads or writes these caches.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Callable, Hashable, Optional


class LocaleCache:
    """Least-recently-used mapping with a fixed maximum size."""

    def __init__(self, max_size: int = 12):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._items: "OrderedDict[Hashable, Any]" = OrderedDict()

    def get(self, key: Hashable, default: Optional[Any] = None) -> Any:
        if key not in self._items:
            return default
        self._items.move_to_end(key)
        return self._items[key]

    def set(self, key: Hashable, value: Any) -> None:
        self._items[key] = value
        self._items.move_to_end(key)
        while len(self._items) > self.max_size:
            self._items.popitem(last=False)

    def get_or_compute(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Return the cached value for ``key``, computing and storing it if missing."""
        if key in self._items:
            return self.get(key)
        value = factory()
        self.set(key, value)
        return value

    def clear(self) -> None:
        self._items.clear()

    def keys(self):
        return list(self._items.keys())

    def __contains__(self, key: Hashable) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
