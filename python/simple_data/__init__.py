from __future__ import annotations

from .absent import ABSENT, Absent
from .cache import SimpleCache
from .errors import InvalidArgument, SimpleDataError, TypeInvalid
from .model import Accessor, SimpleModel
from .rules import Rule, RuleSet, default_rules, resolve_rules


def _resolve_version() -> str:
    try:
        from importlib.metadata import version

        return version("simple-data")
    except Exception:  # pragma: no cover - during development
        return "0.0.0"


def __getattr__(name: str):
    if name == "__version__":
        value = _resolve_version()
        globals()["__version__"] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["__version__"])


__all__ = [
    "ABSENT",
    "Absent",
    "Accessor",
    "InvalidArgument",
    "Rule",
    "RuleSet",
    "SimpleCache",
    "SimpleDataError",
    "SimpleModel",
    "TypeInvalid",
    "default_rules",
    "resolve_rules",
    "__version__",
]
