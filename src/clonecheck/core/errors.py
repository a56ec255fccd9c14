"""Error taxonomy for copy verification.

Two families:
    ConfigurationError: the verifier itself was set up wrong (test-authoring bug).
    CopyAssertionError: the copy under test does not match its original.

CopyAssertionError subclasses AssertionError so any test runner reports it as
an ordinary test failure.
"""

from __future__ import annotations

from typing import Any


class ConfigurationError(Exception):
    """Raised when a verifier is configured incorrectly."""

    pass


class FieldSelectionError(ConfigurationError):
    """Raised when a selector does not reduce to a single direct field read."""

    pass


class UnknownFieldError(ConfigurationError, KeyError):
    """Raised when a selector names a field the subject type does not expose."""

    def __init__(self, subject: type, name: str):
        self.subject = subject
        self.name = name
        super().__init__(f"{subject.__name__} has no readable field {name!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class MissingVerifierError(ConfigurationError):
    """Raised when a copied composite field has no delegated verifier."""

    def __init__(self, field: str, index: int | None = None):
        self.field = field
        self.index = index
        where = f"{field} at index {index}" if index is not None else field
        super().__init__(
            f"{where}: Missing verifier. Configure one with with_verifier_for_field() "
            f"or exclude the field with exclude_from_copy()"
        )


class CopyAssertionError(AssertionError):
    """Raised when a copy does not have the expected relationship to its original."""

    pass


class FieldMismatchError(CopyAssertionError):
    """A field value on the copy differs from the original or expected value.

    Attributes:
        field: Name of the failing field.
        expected: Value the copy should have held.
        actual: Value the copy actually held.
        index: Position of the pair for sequence assertions, None otherwise.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str,
        expected: Any,
        actual: Any,
        index: int | None = None,
    ):
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.actual = actual
        self.index = index


class DefaultValueLeakError(CopyAssertionError):
    """A copied value-type field still holds its type's zero value."""

    def __init__(self, message: str, *, field: str, value: Any, index: int | None = None):
        super().__init__(message)
        self.field = field
        self.value = value
        self.index = index


class LengthMismatchError(CopyAssertionError):
    """Two paired sequences have different element counts."""

    def __init__(self, message: str, *, field: str | None, expected_count: int, actual_count: int):
        super().__init__(message)
        self.field = field
        self.expected_count = expected_count
        self.actual_count = actual_count
