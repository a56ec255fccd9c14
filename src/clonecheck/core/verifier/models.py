"""Verifier models: field descriptors and the delegated-verifier protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from clonecheck.core.classification import NO_ZERO, FieldKind, TypeInfo

type Verifier[V] = Callable[[V, V], None]
"""Delegated verifier: ``verifier(original_value, copy_value)`` raises on mismatch."""


@dataclass(slots=True)
class FieldDescriptor:
    """Copy policy for one readable field of the subject type.

    Type information is resolved when the descriptor is created and never
    re-classified afterwards; only the policy attributes change during
    configuration.

    Attributes:
        name: Field name, unique within the subject type.
        accessor: Reads the field off an instance.
        annotation: Declared type of the field.
        type_info: Cached classification of ``annotation``.
        should_copy: Whether the copy must reproduce the original's value.
        expected: Value the copy must hold when excluded and ``assert_expected``.
        assert_expected: Gate for checking ``expected`` on excluded fields.
        verifier: Delegated verifier for composite fields.
        is_sequence: True when ``verifier`` is a collection wrapper.
    """

    name: str
    accessor: Callable[[Any], Any]
    annotation: Any
    type_info: TypeInfo
    should_copy: bool = True
    expected: Any = None
    assert_expected: bool = False
    verifier: Verifier[Any] | None = None
    is_sequence: bool = False
    declared_on: str = field(default="", repr=False)

    @property
    def kind(self) -> FieldKind:
        return self.type_info.kind

    @property
    def zero(self) -> Any:
        return self.type_info.zero

    @property
    def default_expected(self) -> Any:
        """Expected value used when exclude_from_copy() is given none: the zero value."""
        zero = self.type_info.zero
        return None if zero is NO_ZERO else zero

    @property
    def qualified_name(self) -> str:
        return f"{self.declared_on}:{self.name}" if self.declared_on else self.name
