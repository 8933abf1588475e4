"""Dict-based memoizing cache."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Optional

from .absent import ABSENT
from .errors import TypeInvalid

__all__ = ["SimpleCache", "Producer"]

logger = logging.getLogger(__name__)

Producer = Callable[[Any], Any]


class SimpleCache(dict):
    """A dict whose ``get`` can compute and remember missing values.

    Everything except :meth:`get` and :meth:`set_with` is plain ``dict``
    behaviour: ``key in cache``, ``cache[key] = value``, ``del cache[key]``,
    ``pop``, ``clear``, ``len`` and iteration all work as usual, which is
    also how a cached value is invalidated so the next ``get`` recomputes it.

    >>> cache = SimpleCache()
    >>> cache.get("k")
    ABSENT
    >>> cache.get("k", lambda key: 5)
    5
    >>> cache.get("k")
    5
    """

    def get(self, key: Hashable, producer: Optional[Producer] = None) -> Any:  # type: ignore[override]
        """Return the cached value for ``key``.

        On a miss, ``producer`` (when callable) is handed to
        :meth:`set_with` and its result returned. Without a producer a
        miss returns :data:`ABSENT`.
        """
        if key in self:
            return self[key]
        if callable(producer):
            return self.set_with(key, producer)
        return ABSENT

    def set_with(
        self, key: Hashable, producer: Producer, delete_on_absent: bool = False
    ) -> Any:
        """Store ``producer(key)`` under ``key`` and return it.

        An :data:`ABSENT` result is never stored. It removes any existing
        entry when ``delete_on_absent`` is true and leaves it alone otherwise.
        """
        if not callable(producer):
            raise TypeInvalid(
                f"producer must be callable, got {type(producer).__name__}"
            )

        value = producer(key)

        if value is not ABSENT:
            self[key] = value
        elif delete_on_absent and key in self:
            del self[key]
            logger.debug("evicted cache entry %r", key)

        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"
