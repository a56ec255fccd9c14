"""Field selector resolution.

Lets configuration code name a field by writing the attribute read itself
instead of a string, so renames are caught by editors and type checkers.

Usage:
    resolve_field_name(lambda o: o.created_at)   # "created_at"
    resolve_field_name(lambda o: int(o.count))   # "count" (one conversion allowed)
    resolve_field_name(Order.total)              # "total" (property object)
    resolve_field_name("name")                   # "name"

Lambdas are run once against a recording stand-in for the subject instance;
the stand-in notes which attributes were read.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from clonecheck.core.errors import FieldSelectionError

type Selector = str | property | functools.cached_property[Any] | Callable[[Any], Any]


class _SelectionLog:
    __slots__ = ("reads", "conversions", "converted")

    def __init__(self) -> None:
        self.reads: list[_FieldRead] = []
        self.conversions = 0
        self.converted: Any = None

    def convert(self, value: Any) -> Any:
        self.conversions += 1
        self.converted = value
        return value


# Concatenating an empty str or bytes onto a subclass instance returns a copy
class _ConvertedStr(str):
    __slots__ = ()


class _ConvertedBytes(bytes):
    __slots__ = ()


# Large enough that arithmetic on it always allocates a new int
_CONVERTED_INT = -(2**80)


class _FieldRead:
    """Stand-in for the value of one field read off the recording subject."""

    __slots__ = ("_field", "_log")

    def __init__(self, field: str, log: _SelectionLog):
        self._field = field
        self._log = log

    def __getattr__(self, name: str) -> Any:
        raise FieldSelectionError(
            f"Selector reads {self._field}.{name}; only direct field reads are supported"
        )

    # Implicit conversions a selector may wrap around the read
    def __int__(self) -> int:
        return self._log.convert(_CONVERTED_INT)

    def __index__(self) -> int:
        return self._log.convert(_CONVERTED_INT)

    def __float__(self) -> float:
        return self._log.convert(float(_CONVERTED_INT))

    def __bool__(self) -> bool:
        return self._log.convert(False)

    def __str__(self) -> str:
        return self._log.convert(_ConvertedStr(f"<{self._field}>"))

    def __bytes__(self) -> bytes:
        return self._log.convert(_ConvertedBytes(b"<converted>"))


class _RecordingSubject:
    __slots__ = ("_log",)

    def __init__(self, log: _SelectionLog):
        self._log = log

    def __getattr__(self, name: str) -> _FieldRead:
        read = _FieldRead(name, self._log)
        self._log.reads.append(read)
        return read


def _describe(selector: Any) -> str:
    return getattr(selector, "__qualname__", None) or repr(selector)


def resolve_field_name(selector: Selector) -> str:
    """Resolve a field selector to the name of the field it reads.

    Args:
        selector: Field name, property object, or a one-argument callable whose
            body is a single direct attribute read on its argument, optionally
            wrapped in one conversion such as ``int()`` or ``str()``.

    Returns:
        The selected field name.

    Raises:
        FieldSelectionError: If the selector does not reduce to a direct field read.
    """
    if isinstance(selector, str):
        if not selector.isidentifier():
            raise FieldSelectionError(f"{selector!r} is not a valid field name")
        return selector
    if isinstance(selector, property):
        if selector.fget is None:
            raise FieldSelectionError("Property selector has no getter")
        return selector.fget.__name__
    if isinstance(selector, functools.cached_property):
        if selector.attrname is None:
            raise FieldSelectionError("cached_property selector is not bound to a class")
        return selector.attrname
    if not callable(selector):
        raise FieldSelectionError(f"Selector must be a name, property or callable, got {selector!r}")

    log = _SelectionLog()
    try:
        result = selector(_RecordingSubject(log))
    except FieldSelectionError:
        raise
    except Exception as e:
        raise FieldSelectionError(
            f"Selector {_describe(selector)} is not a direct field read: {e}"
        ) from e

    if len(log.reads) != 1:
        raise FieldSelectionError(
            f"Selector {_describe(selector)} must read exactly one field, "
            f"read {[r._field for r in log.reads]}"
        )
    read = log.reads[0]
    direct = result is read and log.conversions == 0
    converted = log.conversions == 1 and result is log.converted
    if not (direct or converted):
        raise FieldSelectionError(
            f"Selector {_describe(selector)} does not return the field {read._field!r} "
            f"itself (at most one conversion may wrap the read)"
        )
    return read._field
