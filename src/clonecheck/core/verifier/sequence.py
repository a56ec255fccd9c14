"""Sequence-of-entities verifier: one policy table applied across two lists.

Usage:
    verifier = SequenceCopyVerifier(Line).exclude_from_copy(lambda line: line.id)
    verifier.assert_copy(original_lines, copied_lines)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from clonecheck.core.verifier.core import CopyVerifier
from clonecheck.core.verifier.models import FieldDescriptor
from clonecheck.core.verifier.operations import check_counts


class SequenceCopyVerifier[T](CopyVerifier[T]):
    """Asserts that an ordered list of ``T`` was copied item by item.

    Configured exactly like CopyVerifier (fields of ``T``). Elements are paired
    by position after the counts are checked, and every failure reports the
    index of the offending pair.

    The default-value-leak check here covers plain value types only;
    ``X | None`` fields are not leak-checked.
    """

    def assert_copy(self, original: Iterable[T] | None, copy: Iterable[T] | None) -> None:  # type: ignore[override]
        """Assert that ``copy`` is an element-wise copy of ``original``.

        Raises:
            LengthMismatchError: If the sequences differ in length.
            CopyAssertionError: On the first field failure, naming its index.
            MissingVerifierError: If a copied composite field has no verifier.
        """
        if self._both_absent(original, copy, index=None):
            return
        original_items = list(original)  # type: ignore[arg-type]
        copy_items = list(copy)  # type: ignore[arg-type]
        check_counts(None, original_items, copy_items)
        for index, (o, c) in enumerate(zip(original_items, copy_items, strict=True)):
            if self._both_absent(o, c, index=index):
                continue
            for d in self._fields.values():
                self._check_field(d, o, c, index=index)

    def _check_default_leak(self, d: FieldDescriptor, value: Any, index: int | None) -> None:
        info = d.type_info
        if not info.nullable_value and info.is_value_type and value == info.zero:
            self._raise_leak(d, value, index)
