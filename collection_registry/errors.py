"""Exception hierarchy for the Collection Registry."""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for every error raised by the Collection Registry."""


class ConfigError(RegistryError):
    """Raised when a configuration file cannot be read or validated."""


class ExtractionError(RegistryError):
    """Raised when metadata extraction fails unexpectedly for one document.

    Distinct from the "not a schema" result (``None``), which is a normal
    skip and never an error.
    """

    def __init__(self, source_name: str, message: str) -> None:
        self.source_name = source_name
        super().__init__(f"{source_name}: {message}")
