"""clonecheck: field-by-field verification of copy and clone operations.

Usage:
    from clonecheck import CopyVerifier

    @dataclass
    class Address:
        street: str
        number: int

    @dataclass
    class Customer:
        id: int
        name: str
        address: Address
        tags: list[str]  # ordered sequence of simple values: compared positionally by default
        scores: dict[str, Score]

    verifier = (
        CopyVerifier(Customer)
        .exclude_from_copy(lambda c: c.id, expected=0, assert_expected=True)
        .with_verifier_for_field(lambda c: c.address, CopyVerifier(Address))
        .with_verifier_for_keyed_sequence_field(lambda c: c.scores, CopyVerifier(Score))
    )

    verifier.assert_copy(customer, customer.clone())
"""

__version__ = "0.1.0"

# Core primitives
from clonecheck.core import (
    NO_ZERO,
    FieldKind,
    Selector,
    classify,
    is_simple_type,
    resolve_field_name,
    zero_value,
)

# Errors
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

# Verifiers
from clonecheck.core.verifier import (
    CopyVerifier,
    FieldDescriptor,
    SequenceCopyVerifier,
    Verifier,
    equality_verifier,
    keyed_sequence_verifier,
    sequence_verifier,
)

# Configuration
from clonecheck.config import VerifierSettings

__all__ = [
    # Version
    "__version__",
    # Core
    "NO_ZERO",
    "FieldKind",
    "Selector",
    "classify",
    "is_simple_type",
    "zero_value",
    "resolve_field_name",
    # Verifiers
    "CopyVerifier",
    "SequenceCopyVerifier",
    "FieldDescriptor",
    "Verifier",
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
    # Config
    "VerifierSettings",
]
