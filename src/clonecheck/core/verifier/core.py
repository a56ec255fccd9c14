"""Copy verifier: per-field policy table and the single-pair comparison engine.

Usage:
    @dataclass
    class Order:
        id: int
        name: str
        created_at: datetime
        lines: list[Line]

    verifier = (
        CopyVerifier(Order)
        .exclude_from_copy(lambda o: o.id, expected=0, assert_expected=True)
        .with_verifier_for_sequence_field(lambda o: o.lines, CopyVerifier(Line))
    )

    verifier.assert_copy(original, clone(original))

A verifier is configured once and then reused read-only for any number of
(original, copy) pairs. It is itself a valid delegated verifier, so nested
types are verified by passing one verifier to another.
"""

from __future__ import annotations

import dataclasses
import functools
import operator
import types
import typing
import warnings
from collections.abc import Mapping
from typing import Any, ClassVar, get_origin

from clonecheck.config import VerifierSettings
from clonecheck.core.classification import FieldKind, classify, simple_sequence_element, unwrap
from clonecheck.core.errors import (
    ConfigurationError,
    CopyAssertionError,
    DefaultValueLeakError,
    FieldMismatchError,
    MissingVerifierError,
    UnknownFieldError,
)
from clonecheck.core.selector import Selector, resolve_field_name
from clonecheck.core.verifier.models import FieldDescriptor, Verifier
from clonecheck.core.verifier.operations import (
    equality_verifier,
    keyed_sequence_verifier,
    same_value,
    sequence_verifier,
    short_repr,
)

_UNSET: Any = object()


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def _declared_fields(cls: type) -> dict[str, Any]:
    """Public data fields of a class mapped to their declared types."""
    if dataclasses.is_dataclass(cls):
        hints = typing.get_type_hints(cls, include_extras=True)
        return {
            f.name: hints.get(f.name, f.type)
            for f in dataclasses.fields(cls)
            if not f.name.startswith("_")
        }
    if _is_pydantic(cls):
        result: dict[str, Any] = {
            name: info.annotation
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
        }
        for name, info in cls.model_computed_fields.items():  # type: ignore[attr-defined]
            result[name] = info.return_type
        return {name: tp for name, tp in result.items() if not name.startswith("_")}
    hints = typing.get_type_hints(cls, include_extras=True)
    return {
        name: tp
        for name, tp in hints.items()
        if not name.startswith("_") and get_origin(unwrap(tp)) is not ClassVar
    }


def _declared_properties(cls: type) -> dict[str, Any]:
    """Public properties of a class mapped to their getters' return types.

    Walks class dicts directly so no descriptor is triggered. Members of
    ``object`` and of pydantic's own base classes are skipped.
    """
    result: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object or klass.__module__.startswith("pydantic"):
            continue
        for name, member in vars(klass).items():
            if name.startswith("_"):
                continue
            if isinstance(member, property) and member.fget is not None:
                getter = member.fget
            elif isinstance(member, functools.cached_property):
                getter = member.func
            else:
                result.pop(name, None)  # overridden by a non-property
                continue
            result[name] = typing.get_type_hints(getter, include_extras=True).get("return", Any)
    return result


def _default_descriptor(cls: type, name: str, tp: Any, max_repr_length: int) -> FieldDescriptor:
    d = FieldDescriptor(
        name=name,
        accessor=operator.attrgetter(name),
        annotation=tp,
        type_info=classify(tp),
        declared_on=cls.__name__,
    )
    if simple_sequence_element(tp) is not None:
        # Ordered sequences of simple values compare element-wise out of the box
        d.verifier = sequence_verifier(equality_verifier(name, max_repr_length), field=name)
        d.is_sequence = True
    return d


def readable_fields(
    cls: type, include_properties: bool = True, max_repr_length: int = 120
) -> list[FieldDescriptor]:
    """Enumerate the publicly readable fields of a class as default descriptors.

    Args:
        cls: Subject type (dataclass, Pydantic model or annotated class).
        include_properties: Also treat public properties as fields.
        max_repr_length: Longest value repr in failure messages of seeded verifiers.

    Returns:
        One descriptor per field, in declaration order, with the default policy.
        Fields typed as ordered sequences of simple values come with a
        positional equality verifier already installed.

    Raises:
        ConfigurationError: If the class annotations cannot be resolved.
    """
    try:
        declared = _declared_fields(cls)
        if include_properties:
            for name, tp in _declared_properties(cls).items():
                declared.setdefault(name, tp)
        return [_default_descriptor(cls, name, tp, max_repr_length) for name, tp in declared.items()]
    except NameError as e:
        raise ConfigurationError(f"Cannot resolve field types of {cls.__name__}: {e}") from e


class CopyVerifier[T]:
    """Per-field copy policy for one subject type, plus the engine that applies it.

    Every readable field starts with the default policy: it must be copied and
    must equal the original. Configuration methods change one field's policy
    and return the verifier for chaining; the last call for a field wins.

    Args:
        subject: The type whose instances are compared.
        settings: Verifier settings. Loaded from the environment when omitted.
    """

    def __init__(self, subject: type[T], settings: VerifierSettings | None = None) -> None:
        self._subject = subject
        self._settings = settings if settings is not None else VerifierSettings()
        self._fields: dict[str, FieldDescriptor] = {
            d.name: d
            for d in readable_fields(
                subject,
                include_properties=self._settings.include_properties,
                max_repr_length=self._settings.max_repr_length,
            )
        }

    @property
    def subject(self) -> type[T]:
        return self._subject

    @property
    def settings(self) -> VerifierSettings:
        return self._settings

    @property
    def fields(self) -> Mapping[str, FieldDescriptor]:
        """Read-only view of the policy table, keyed by field name."""
        return types.MappingProxyType(self._fields)

    def descriptor(self, selector: Selector) -> FieldDescriptor:
        """Look up the descriptor for a field.

        Raises:
            FieldSelectionError: If the selector is not a direct field read.
            UnknownFieldError: If the subject type has no such field.
        """
        name = resolve_field_name(selector)
        try:
            return self._fields[name]
        except KeyError:
            raise UnknownFieldError(self._subject, name) from None

    # Configuration

    def exclude_from_copy(
        self,
        selector: Selector,
        expected: Any = _UNSET,
        assert_expected: bool = False,
    ) -> CopyVerifier[T]:
        """Mark a field as deliberately not copied.

        Args:
            selector: The field, e.g. ``lambda o: o.id``.
            expected: Value the copy must hold. Defaults to the field type's zero value.
            assert_expected: Check ``expected`` on the copy; otherwise skip the field.

        Returns:
            This verifier.
        """
        d = self.descriptor(selector)
        d.should_copy = False
        d.expected = d.default_expected if expected is _UNSET else expected
        d.assert_expected = assert_expected
        return self

    def with_verifier_for_field(self, selector: Selector, verifier: Verifier[Any]) -> CopyVerifier[T]:
        """Copy a composite field and compare it with a delegated verifier.

        Args:
            selector: The field.
            verifier: Called as ``verifier(original_value, copy_value)``.

        Returns:
            This verifier.
        """
        self._install(self.descriptor(selector), verifier, is_sequence=False)
        return self

    def with_verifier_for_sequence_field(
        self, selector: Selector, element_verifier: Verifier[Any]
    ) -> CopyVerifier[T]:
        """Copy an ordered collection field, comparing elements positionally."""
        d = self.descriptor(selector)
        self._install(d, sequence_verifier(element_verifier, field=d.name), is_sequence=True)
        return self

    def with_verifier_for_keyed_sequence_field(
        self, selector: Selector, element_verifier: Verifier[Any]
    ) -> CopyVerifier[T]:
        """Copy a mapping (or sequence of key/value pairs), comparing values positionally.

        Keys are not compared.
        """
        d = self.descriptor(selector)
        self._install(d, keyed_sequence_verifier(element_verifier, field=d.name), is_sequence=True)
        return self

    def _install(self, d: FieldDescriptor, verifier: Verifier[Any], is_sequence: bool) -> None:
        if d.kind is FieldKind.SIMPLE:
            warnings.warn(
                f"{d.qualified_name} is a simple field compared by equality. "
                f"The configured verifier will not be used.",
                stacklevel=3,
            )
        d.should_copy = True
        d.is_sequence = is_sequence
        d.verifier = verifier

    # Assertion

    def assert_copy(self, original: T | None, copy: T | None) -> None:
        """Assert that ``copy`` is a correct copy of ``original``.

        Fails fast on the first field that violates its policy.

        Raises:
            CopyAssertionError: On a mismatch, a default-value leak, or when only
                one side is None.
            MissingVerifierError: If a copied composite field has no verifier.
        """
        if self._both_absent(original, copy, index=None):
            return
        for d in self._fields.values():
            self._check_field(d, original, copy, index=None)

    def __call__(self, original: Any, copy: Any) -> None:
        self.assert_copy(original, copy)

    def _both_absent(self, original: Any, copy: Any, index: int | None) -> bool:
        if original is None and copy is None:
            return True
        if original is None or copy is None:
            missing = "original" if original is None else "copy"
            raise CopyAssertionError(
                f"{self._subject.__name__}{self._at(index)}: {missing} is None "
                f"but {'copy' if missing == 'original' else 'original'} is not"
            )
        return False

    @staticmethod
    def _at(index: int | None) -> str:
        return f" at index {index}" if index is not None else ""

    def _repr(self, value: Any) -> str:
        return short_repr(value, self._settings.max_repr_length)

    def _check_field(self, d: FieldDescriptor, original: Any, copy: Any, index: int | None) -> None:
        copy_value = d.accessor(copy)
        if d.should_copy:
            original_value = d.accessor(original)
            if self._settings.check_default_leaks:
                self._check_default_leak(d, copy_value, index)
            if d.kind is FieldKind.SIMPLE:
                if not same_value(original_value, copy_value):
                    raise FieldMismatchError(
                        f"{d.name}{self._at(index)} was not copied: "
                        f"expected {self._repr(original_value)}, got {self._repr(copy_value)}",
                        field=d.name,
                        expected=original_value,
                        actual=copy_value,
                        index=index,
                    )
            else:
                if d.verifier is None:
                    raise MissingVerifierError(d.name, index)
                d.verifier(original_value, copy_value)
        elif d.assert_expected and not same_value(d.expected, copy_value):
            raise FieldMismatchError(
                f"{d.name}{self._at(index)} was not equal to expected value "
                f"{self._repr(d.expected)}, got {self._repr(copy_value)}",
                field=d.name,
                expected=d.expected,
                actual=copy_value,
                index=index,
            )

    def _check_default_leak(self, d: FieldDescriptor, value: Any, index: int | None) -> None:
        """Fail if a copied value-type field still holds its zero value.

        For ``X | None`` value types the empty state is None rather than X's zero.
        """
        info = d.type_info
        if info.nullable_value:
            leaked = value is None
        elif info.is_value_type:
            leaked = value == info.zero
        else:
            return
        if leaked:
            self._raise_leak(d, value, index)

    def _raise_leak(self, d: FieldDescriptor, value: Any, index: int | None) -> None:
        raise DefaultValueLeakError(
            f"{d.qualified_name}{self._at(index)} had a default value "
            f"({self._repr(value)}) and was not ignored",
            field=d.name,
            value=value,
            index=index,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._subject.__name__}, fields={list(self._fields)})"
