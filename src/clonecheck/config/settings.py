"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for verifiers.

Usage:
    from clonecheck.config import VerifierSettings

    # Load from environment variables (CLONECHECK_*)
    settings = VerifierSettings()

    # Or override with explicit values
    settings = VerifierSettings(check_default_leaks=False)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VerifierSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for copy verifiers.

    Attributes:
        check_default_leaks: Fail when a copied value-type field holds its zero value.
        include_properties: Treat public properties as readable fields.
        max_repr_length: Longest value repr placed in a failure message.

    Environment Variables:
        CLONECHECK_CHECK_DEFAULT_LEAKS
        CLONECHECK_INCLUDE_PROPERTIES
        CLONECHECK_MAX_REPR_LENGTH
    """

    model_config = SettingsConfigDict(
        env_prefix="CLONECHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    check_default_leaks: bool = True
    include_properties: bool = True
    max_repr_length: int = Field(default=120, ge=8)
