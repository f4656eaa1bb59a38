"""graph_translate - object graph translation engine."""

from __future__ import annotations

import logging

from graph_translate.core.config import TranslationSettings
from graph_translate.core.configuration import (
    Configuration,
    ConfigurationBuilder,
    configure,
    parse_prefix,
)
from graph_translate.core.engine import TranslationEngine
from graph_translate.core.enums import AccessMode, Optionality
from graph_translate.core.exceptions import (
    ConfigurationError,
    ExtensionUnavailableError,
    InstantiationError,
    MappingError,
    MissingSourcePropertyError,
    NoDestinationError,
    TranslationError,
    TypeMismatchError,
)
from graph_translate.core.session import TranslationCache, TranslationSession
from graph_translate.mapping.plan import FieldDescriptor
from graph_translate.sources.protocol import MISSING, SourceProvider

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Engine
    "TranslationEngine",
    # Session
    "TranslationSession",
    "TranslationCache",
    # Configuration
    "Configuration",
    "ConfigurationBuilder",
    "TranslationSettings",
    "configure",
    "parse_prefix",
    "FieldDescriptor",
    # Sources
    "SourceProvider",
    "MISSING",
    # Enums
    "AccessMode",
    "Optionality",
    # Exceptions
    "TranslationError",
    "ConfigurationError",
    "ExtensionUnavailableError",
    "MappingError",
    "MissingSourcePropertyError",
    "NoDestinationError",
    "TypeMismatchError",
    "InstantiationError",
]
