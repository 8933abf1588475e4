"""Base class for models that wrap a plain keyed record.

A :class:`SimpleModel` keeps a reference to the record it was built from
(it never copies it) and exposes every string-keyed field as an attribute
that reads and writes straight through to the record::

    >>> record = {"name": "Alice", "age": 30}
    >>> person = SimpleModel(record)
    >>> person.age = 31
    >>> record["age"]
    31
    >>> record["name"] = "Alicia"
    >>> person.name
    'Alicia'

Subclasses shape the generated attributes by overriding ``setup_props``,
which receives the default :class:`~simple_data.rules.Rule` for every
field and may edit or delete them before anything is installed, and run
their own initialization in ``setup_model``.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Callable, ClassVar, Optional

from .absent import ABSENT
from .cache import SimpleCache
from .errors import InvalidArgument
from .rules import Rule, RuleSet, default_rules, resolve_rules

__all__ = ["SimpleModel", "Accessor"]

logger = logging.getLogger(__name__)

_ACCESSORS = "_accessors"

# Default for `parent`, so an omitted parent is not forwarded to setup_model.
_NO_PARENT = object()

Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]


class Accessor:
    """Getter/setter pair generated for one record field."""

    __slots__ = ("field", "getter", "setter")

    def __init__(
        self, field: str, getter: Optional[Getter], setter: Optional[Setter]
    ) -> None:
        self.field = field
        self.getter = getter
        self.setter = setter

    def __repr__(self) -> str:
        mode = ("r" if self.getter else "") + ("w" if self.setter else "")
        return f"Accessor({self.field!r}, {mode!r})"


def _build_getter(
    field: str, rule: Rule, data: MutableMapping, store: SimpleCache
) -> Optional[Getter]:
    get = rule.get

    if callable(get):
        if rule.cache:

            def getter(model):
                return store.get(
                    field, lambda key: get(data.get(key, ABSENT), key, model)
                )

        else:

            def getter(model):
                return get(data.get(field, ABSENT), field, model)

        return getter

    if get:

        def getter(model):
            return data.get(field, ABSENT)

        return getter

    return None


def _build_setter(field: str, rule: Rule, data: MutableMapping) -> Optional[Setter]:
    set_ = rule.resolved_set()

    if callable(set_):

        def setter(model, value):
            result = set_(value, field, model)
            if result is not ABSENT:
                data[field] = result

        return setter

    if set_:

        def setter(model, value):
            data[field] = value

        return setter

    return None


def build_accessor(
    field: str, rule: Rule, data: MutableMapping, store: SimpleCache
) -> Optional[Accessor]:
    """Turn a resolved rule into an :class:`Accessor`, or ``None`` if inert."""
    if rule.is_inert():
        return None
    return Accessor(
        field, _build_getter(field, rule, data, store), _build_setter(field, rule, data)
    )


class SimpleModel:
    """Wraps a record and generates an attribute for each of its fields.

    Only ``data`` and ``parent`` are used by the constructor itself. The
    post-setup hook receives the constructor arguments exactly as given,
    so an omitted ``parent`` is not passed on. The record, parent, cache
    and accessor table attachments cannot be reassigned or deleted.

    The class attributes below configure the attachment names, the hook
    names and what :meth:`as_dict` includes. Override them in a subclass.
    """

    #: Instance attribute holding the memoization store for cached getters.
    cache_key: ClassVar[str] = "_cache"
    #: Instance attribute holding the record.
    data_key: ClassVar[str] = "data"
    #: Instance attribute holding the parent, set only when one is given.
    parent_key: ClassVar[str] = "parent"
    #: Method called with the default rule set before accessors are built.
    setup_props_key: ClassVar[str] = "setup_props"
    #: Method called with all constructor arguments once accessors exist.
    setup_model_key: ClassVar[str] = "setup_model"
    enumerable_data: ClassVar[bool] = False
    enumerable_parent: ClassVar[bool] = False
    enumerable_props: ClassVar[bool] = True

    prop_rules = staticmethod(default_rules)

    def __init__(
        self, data: Any, parent: Any = _NO_PARENT, *args: Any, **kwargs: Any
    ):
        if not isinstance(data, MutableMapping):
            raise InvalidArgument(
                f"data must be a mutable mapping, got {type(data).__name__}"
            )

        cls = type(self)
        store = SimpleCache()
        object.__setattr__(self, _ACCESSORS, {})
        object.__setattr__(self, cls.cache_key, store)
        object.__setattr__(self, cls.data_key, data)
        if parent is not _NO_PARENT and parent is not None:
            object.__setattr__(self, cls.parent_key, parent)

        rules = resolve_rules(data, self._hook(cls.setup_props_key))
        accessors = self._build_accessors(rules, data, store)
        object.__setattr__(self, _ACCESSORS, accessors)
        logger.debug("%s: installed %d accessors", cls.__name__, len(accessors))

        setup = self._hook(cls.setup_model_key)
        if setup is not None:
            given = (data,) if parent is _NO_PARENT else (data, parent)
            setup(*given, *args, **kwargs)

    def setup_props(self, rules: RuleSet) -> None:
        """Refinement hook. Edit or delete entries of ``rules`` in place."""

    def setup_model(self, data: Any, parent: Any = None, *args: Any, **kwargs: Any):
        """Post-setup hook, called once all accessors are installed."""

    def _hook(self, name: str) -> Optional[Callable[..., Any]]:
        hook = getattr(self, name, None)
        return hook if callable(hook) else None

    def _has_member(self, name: str) -> bool:
        return name in self.__dict__ or hasattr(type(self), name)

    def _build_accessors(
        self, rules: RuleSet, data: MutableMapping, store: SimpleCache
    ) -> dict[str, Accessor]:
        accessors: dict[str, Accessor] = {}
        for field, rule in rules.items():
            name = rule.key
            if name in accessors or self._has_member(name):
                logger.debug(
                    "%s: %r already defined, no accessor for field %r",
                    type(self).__name__,
                    name,
                    field,
                )
                continue
            accessor = build_accessor(field, rule, data, store)
            if accessor is not None:
                accessors[name] = accessor
        return accessors

    def _accessor(self, name: str) -> Optional[Accessor]:
        accessors = self.__dict__.get(_ACCESSORS)
        if not accessors:
            return None
        return accessors.get(name)

    def _is_attachment(self, name: str) -> bool:
        cls = type(self)
        attachments = (_ACCESSORS, cls.cache_key, cls.data_key, cls.parent_key)
        return name in attachments and name in self.__dict__

    def __getattr__(self, name: str) -> Any:
        accessor = self._accessor(name)
        if accessor is None:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
        if accessor.getter is None:
            raise AttributeError(
                f"attribute {name!r} of {type(self).__name__!r} object is write-only"
            )
        return accessor.getter(self)

    def __setattr__(self, name: str, value: Any) -> None:
        accessor = self._accessor(name)
        if accessor is None:
            if self._is_attachment(name):
                raise AttributeError(
                    f"attribute {name!r} of {type(self).__name__!r} object is read-only"
                )
            object.__setattr__(self, name, value)
            return
        if accessor.setter is None:
            raise AttributeError(
                f"attribute {name!r} of {type(self).__name__!r} object is read-only"
            )
        accessor.setter(self, value)

    def __delattr__(self, name: str) -> None:
        if self._accessor(name) is not None or self._is_attachment(name):
            raise AttributeError(
                f"cannot delete attribute {name!r} of {type(self).__name__!r} object"
            )
        object.__delattr__(self, name)

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        names.discard(_ACCESSORS)
        if type(self).enumerable_props:
            names.update(self.accessor_names())
        return sorted(names)

    def accessor_names(self) -> list[str]:
        """Public names of the generated accessors, in install order."""
        return list(self.__dict__.get(_ACCESSORS, ()))

    def as_dict(self) -> dict[str, Any]:
        """Snapshot of every enumerable member.

        Holds the record and parent attachments when their ``enumerable_*``
        flag is set, and the current value of each readable accessor when
        ``enumerable_props`` is set.
        """
        cls = type(self)
        out: dict[str, Any] = {}
        if cls.enumerable_data:
            out[cls.data_key] = self.__dict__[cls.data_key]
        if cls.enumerable_parent and cls.parent_key in self.__dict__:
            out[cls.parent_key] = self.__dict__[cls.parent_key]
        if cls.enumerable_props:
            out.update(self._accessor_values())
        return out

    def _accessor_values(self) -> dict[str, Any]:
        return {
            name: accessor.getter(self)
            for name, accessor in self.__dict__.get(_ACCESSORS, {}).items()
            if accessor.getter is not None
        }

    def __repr__(self) -> str:
        cls = type(self)
        if not cls.enumerable_props:
            return f"<{cls.__name__}>"
        fields = ", ".join(
            f"{name}={value!r}" for name, value in self._accessor_values().items()
        )
        return f"{cls.__name__}({fields})"
