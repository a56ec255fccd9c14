"""Configuration module using Pydantic Settings.

Provides typed configuration for verifiers with environment variable support.

Usage:
    from clonecheck.config import VerifierSettings

    settings = VerifierSettings(max_repr_length=40)
    verifier = CopyVerifier(Order, settings=settings)
"""

from clonecheck.config.settings import VerifierSettings

__all__ = [
    "VerifierSettings",
]
