"""Core functionalities: type classification, field selection and verifiers.

Architecture Note:
    classification and selector are pure, stateless helpers. The verifier
    package holds the per-type policy tables, which are mutable only while
    being configured.
"""

from clonecheck.core.classification import (
    NO_ZERO,
    FieldKind,
    TypeInfo,
    classify,
    is_simple_type,
    optional_inner,
    simple_sequence_element,
    zero_value,
)
from clonecheck.core.errors import (
    ConfigurationError,
    CopyAssertionError,
    DefaultValueLeakError,
    FieldMismatchError,
    FieldSelectionError,
    LengthMismatchError,
    MissingVerifierError,
    UnknownFieldError,
)
from clonecheck.core.selector import Selector, resolve_field_name
from clonecheck.core.verifier import (
    CopyVerifier,
    FieldDescriptor,
    SequenceCopyVerifier,
    Verifier,
    equality_verifier,
    keyed_sequence_verifier,
    readable_fields,
    sequence_verifier,
)

__all__ = [
    # Classification
    "NO_ZERO",
    "FieldKind",
    "TypeInfo",
    "classify",
    "is_simple_type",
    "optional_inner",
    "simple_sequence_element",
    "zero_value",
    # Selection
    "Selector",
    "resolve_field_name",
    # Verifiers
    "CopyVerifier",
    "SequenceCopyVerifier",
    "FieldDescriptor",
    "Verifier",
    "readable_fields",
    "equality_verifier",
    "sequence_verifier",
    "keyed_sequence_verifier",
    # Errors
    "ConfigurationError",
    "FieldSelectionError",
    "UnknownFieldError",
    "MissingVerifierError",
    "CopyAssertionError",
    "FieldMismatchError",
    "DefaultValueLeakError",
    "LengthMismatchError",
]
