"""Marker for "no value", distinct from ``None``."""

from __future__ import annotations

from typing import Any


class Absent:
    """Singleton type of :data:`ABSENT`.

    Getters, setters and cache producers return ``ABSENT`` to mean "do
    nothing". ``None`` stays an ordinary value that is stored and returned.
    """

    __slots__ = ()
    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"

    def __copy__(self) -> Absent:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Absent:
        return self


ABSENT = Absent()
