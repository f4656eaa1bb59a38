"""graph_translate exception hierarchy.

All exceptions are graph_translate-specific. Errors raised by constructors,
converters or path backends are wrapped before they reach callers.
"""

from __future__ import annotations


class TranslationError(Exception):
    """Base exception for all graph_translate errors."""


# --- Configuration ---


class ConfigurationError(TranslationError):
    """Raised when a configuration or a type registration is invalid."""


class ExtensionUnavailableError(ConfigurationError):
    """Raised when an optional source dialect cannot be loaded.

    The configuration builder logs and discards this error: a missing
    dialect only removes that expression syntax.
    """

    def __init__(self, extension: str, detail: str) -> None:
        self.extension = extension
        super().__init__(f"Source dialect '{extension}' is unavailable: {detail}")


# --- Mapping ---


class MappingError(TranslationError):
    """Base for errors raised while translating an object graph."""


class MissingSourcePropertyError(MappingError):
    """Raised when no source provider can resolve a required expression."""

    def __init__(self, expression: str) -> None:
        self.expression = expression
        super().__init__(f"Missing source property: '{expression}'")


class NoDestinationError(MappingError):
    """Raised when an update is requested without a destination object."""

    def __init__(self) -> None:
        super().__init__("Cannot update: no destination object was supplied")


class TypeMismatchError(MappingError):
    """Raised when a value or destination is not assignable to the expected type."""

    def __init__(self, expected: str, actual: str, detail: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        message = f"Expected {expected}, got {actual}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InstantiationError(MappingError):
    """Raised when a zero-valued destination instance cannot be created."""

    def __init__(self, destination_class: str, detail: str) -> None:
        self.destination_class = destination_class
        super().__init__(f"Cannot instantiate {destination_class}: {detail}")
