from __future__ import annotations


class SimpleDataError(Exception):
    """Base class for errors raised by simple_data itself."""


class InvalidArgument(SimpleDataError, TypeError):
    """Raised when a model is built from something that is not a keyed record."""


class TypeInvalid(SimpleDataError, TypeError):
    """Raised when a producer that must be callable is not."""
