"""Per-field accessor rules and how they are derived from a record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

__all__ = [
    "Rule",
    "RuleSet",
    "GetterFn",
    "SetterFn",
    "default_rules",
    "resolve_rules",
]

logger = logging.getLogger(__name__)

# (value, field, model) -> value
GetterFn = Callable[[Any, str, Any], Any]
SetterFn = Callable[[Any, str, Any], Any]


@dataclass
class Rule:
    """How one record field is exposed on a model.

    ``key`` is the public attribute name. ``get`` is ``True`` for a
    pass-through read, ``False`` for no getter, or a :data:`GetterFn`.
    ``set`` is ``True``, ``False``, a :data:`SetterFn`, or ``None`` which
    means "writable only if ``get is True``". ``cache`` memoizes the result
    of a getter function and is ignored otherwise.
    """

    key: str
    get: Union[bool, GetterFn] = True
    set: Union[bool, SetterFn, None] = None
    cache: bool = False

    def resolved_set(self) -> Union[bool, SetterFn]:
        if self.set is None:
            return self.get is True
        return self.set

    def is_inert(self) -> bool:
        return not (self.get or self.resolved_set())


RuleSet = dict[str, Rule]


def default_rules(record: Mapping[Any, Any]) -> RuleSet:
    """One default rule per string key of ``record``, in record order."""
    return {field: Rule(key=field) for field in record if isinstance(field, str)}


def resolve_rules(
    record: Mapping[Any, Any], refine: Optional[Callable[[RuleSet], Any]] = None
) -> RuleSet:
    """Build the default rules and let ``refine`` edit them in place.

    ``refine`` may delete entries or change any rule attribute. Whatever it
    returns is ignored.
    """
    rules = default_rules(record)
    if callable(refine):
        refine(rules)
    logger.debug("resolved %d accessor rules", len(rules))
    return rules
