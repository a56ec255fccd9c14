"""Copy verification: policy tables, the comparison engine and collection wrappers."""

from clonecheck.core.verifier.core import CopyVerifier, readable_fields
from clonecheck.core.verifier.models import FieldDescriptor, Verifier
from clonecheck.core.verifier.operations import (
    check_counts,
    equality_verifier,
    keyed_sequence_verifier,
    same_value,
    sequence_verifier,
    short_repr,
)
from clonecheck.core.verifier.sequence import SequenceCopyVerifier

__all__ = [
    # Models
    "FieldDescriptor",
    "Verifier",
    # Verifiers
    "CopyVerifier",
    "SequenceCopyVerifier",
    "readable_fields",
    # Operations
    "sequence_verifier",
    "keyed_sequence_verifier",
    "equality_verifier",
    "check_counts",
    "same_value",
    "short_repr",
]
