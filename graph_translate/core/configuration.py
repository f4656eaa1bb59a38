"""Translation configuration.

A Configuration is immutable after it is built: build it once at startup with
``configure()...build()``, then share it read-only between sessions. It owns
the source provider chain, the value type registry, and one ObjectTranslator
per destination type.

Source expressions are either bare (``name``) or prefixed (``glom:a.b``).
Bare expressions go to every provider in order; prefixed expressions only to
providers claiming the prefix. The first provider that resolves wins.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar, get_origin

from graph_translate.core.config import TranslationSettings, load_extension
from graph_translate.core.enums import AccessMode
from graph_translate.core.exceptions import (
    ConfigurationError,
    ExtensionUnavailableError,
    MissingSourcePropertyError,
)
from graph_translate.mapping.array import ArrayTranslator
from graph_translate.mapping.collection import CollectionTranslator
from graph_translate.mapping.metadata import compile_plan, is_structured_class
from graph_translate.mapping.model import ObjectTranslator
from graph_translate.mapping.plan import FieldDescriptor, TypePlan
from graph_translate.mapping.values import (
    ENUM_TRANSLATOR,
    Converter,
    ValueTypeTranslator,
    default_value_types,
)
from graph_translate.sources.protocol import MISSING, SourceProvider
from graph_translate.sources.reflection import ReflectionSourceProvider
from graph_translate.sources.variables import VariableSourceProvider

T = TypeVar("T")

logger = logging.getLogger(__name__)


def parse_prefix(expression: str) -> tuple[str | None, str]:
    """Split ``prefix:remainder``; returns ``(None, expression)`` when unprefixed.

    A colon at the start or at the end of the expression is not a separator.
    """
    expression = expression.strip()
    colon = expression.find(":")
    if 0 < colon < len(expression) - 1:
        return expression[:colon], expression[colon + 1 :]
    return None, expression


class Configuration:
    """Shared, read-only translation policy.

    Args:
        settings: Policy flags. Defaults to TranslationSettings().
        providers: Source providers in lookup order. A reflection provider
                   is always placed first.
        value_types: Value type registry. Defaults to the built-in types.
        registrations: Explicit TypePlans keyed by destination class.
    """

    def __init__(
        self,
        settings: TranslationSettings | None = None,
        providers: Iterable[SourceProvider] = (),
        value_types: Mapping[type, ValueTypeTranslator] | None = None,
        registrations: Mapping[type, TypePlan] | None = None,
    ) -> None:
        self._settings = settings or TranslationSettings()
        chain = list(providers)
        if not chain or not isinstance(chain[0], ReflectionSourceProvider):
            chain.insert(0, ReflectionSourceProvider())
        self._providers: tuple[SourceProvider, ...] = tuple(chain)
        self._value_types = dict(value_types) if value_types is not None else default_value_types()
        self._registrations = dict(registrations or {})
        self._translators: dict[type, ObjectTranslator[Any]] = {}
        self._collection_translator = CollectionTranslator(self)
        self._array_translator = ArrayTranslator(self)

    @classmethod
    def default(cls) -> Configuration:
        """Configuration with default settings and every available dialect."""
        return configure().build()

    # --- Settings ---

    @property
    def settings(self) -> TranslationSettings:
        return self._settings

    @property
    def perform_defensive_copies(self) -> bool:
        """Whether collections and arrays are copied even when items are not translated."""
        return self._settings.perform_defensive_copies

    @property
    def source_property_required(self) -> bool:
        """Whether an unresolvable source expression fails the translation."""
        return self._settings.source_property_required

    @property
    def default_access_mode(self) -> AccessMode:
        return self._settings.default_access_mode

    @property
    def providers(self) -> tuple[SourceProvider, ...]:
        return self._providers

    # --- Translators ---

    @property
    def collection_translator(self) -> CollectionTranslator:
        return self._collection_translator

    @property
    def array_translator(self) -> ArrayTranslator:
        return self._array_translator

    def get_value_type_translator(self, cls: Any) -> ValueTypeTranslator | None:
        """Look up the value type translator for ``cls``, or None for object types."""
        if not inspect.isclass(cls) or get_origin(cls) is not None:
            return None
        translator = self._value_types.get(cls)
        if translator is not None:
            return translator
        if issubclass(cls, Enum):
            return ENUM_TRANSLATOR
        for base in cls.__mro__[1:]:
            if base in self._value_types:
                return self._value_types[base]
        return None

    def is_structured(self, cls: Any) -> bool:
        """True when ``cls`` is translated field by field."""
        if self.get_value_type_translator(cls) is not None:
            return False
        return cls in self._registrations or is_structured_class(cls)

    def get_plan(self, destination_class: type) -> TypePlan:
        """Compile the plan for a destination type (explicit or by convention)."""
        registration = self._registrations.get(destination_class) or TypePlan(destination_class)
        return compile_plan(registration, self.default_access_mode, self.is_structured)

    def get_translator(self, destination_class: type[T]) -> ObjectTranslator[T]:
        """Return the ObjectTranslator for ``destination_class``, built once and cached."""
        translator = self._translators.get(destination_class)
        if translator is None:
            plan = self.get_plan(destination_class)
            translator = ObjectTranslator(destination_class, self, plan)
            self._translators[destination_class] = translator
            logger.debug(
                "Compiled translator for %s (%d fields)",
                destination_class.__name__,
                len(plan.fields or ()),
            )
        return translator

    # --- Source resolution ---

    def find_source_value(
        self,
        expression: str,
        source: Any,
        variables: Mapping[str, Any] | None = None,
    ) -> Any:
        """Resolve ``expression`` through the provider chain; MISSING if unresolved."""
        prefix, remainder = parse_prefix(expression)
        for provider in self._providers:
            if prefix is None:
                value = provider.resolve(remainder, source, variables=variables)
            elif provider.supports_prefix(prefix):
                value = provider.resolve(remainder, source, prefix=prefix, variables=variables)
            else:
                continue
            if value is not MISSING:
                return value
        return MISSING

    def get_source_value(
        self,
        expression: str,
        source: Any,
        variables: Mapping[str, Any] | None = None,
    ) -> Any:
        """Resolve ``expression`` through the provider chain.

        Raises:
            MissingSourcePropertyError: If no provider resolves the expression.
        """
        value = self.find_source_value(expression, source, variables)
        if value is MISSING:
            raise MissingSourcePropertyError(expression.strip())
        return value


def configure(
    settings: TranslationSettings | Mapping[str, Any] | None = None,
) -> ConfigurationBuilder:
    """Entry point for building a Configuration.

    Args:
        settings: Initial settings, as a TranslationSettings model or a plain
                  mapping validated into one.

    Returns:
        A builder for chaining configuration declarations.
    """
    if settings is None:
        settings = TranslationSettings()
    elif not isinstance(settings, TranslationSettings):
        settings = TranslationSettings.from_mapping(settings)
    return ConfigurationBuilder(settings)


class ConfigurationBuilder:
    """Fluent builder for Configuration."""

    def __init__(self, settings: TranslationSettings) -> None:
        self._settings = settings
        self._providers: list[SourceProvider] = []
        self._value_types: dict[type, ValueTypeTranslator] = {}
        self._registrations: dict[type, TypePlan] = {}

    def _update_settings(self, **changes: Any) -> ConfigurationBuilder:
        self._settings = self._settings.model_copy(update=changes)
        return self

    def settings(self, settings: TranslationSettings) -> ConfigurationBuilder:
        """Replace all settings at once."""
        self._settings = settings
        return self

    def defensive_copies(self, enabled: bool = True) -> ConfigurationBuilder:
        """Copy collections and arrays even when their items are not translated."""
        return self._update_settings(perform_defensive_copies=enabled)

    def source_properties_required(self, required: bool = True) -> ConfigurationBuilder:
        """Fail when a destination field has no resolvable source property."""
        return self._update_settings(source_property_required=required)

    def access_mode(self, mode: AccessMode) -> ConfigurationBuilder:
        """Set the default access mode for destination types."""
        if mode is None:
            raise ConfigurationError("Default access mode cannot be None")
        return self._update_settings(default_access_mode=AccessMode(mode))

    def extensions(self, *names: str) -> ConfigurationBuilder:
        """Choose which optional source dialects are probed at build time."""
        return self._update_settings(extensions=tuple(names))

    def provider(self, provider: SourceProvider) -> ConfigurationBuilder:
        """Append a source provider after the built-in ones."""
        if not isinstance(provider, SourceProvider):
            raise ConfigurationError(
                f"{type(provider).__name__} does not implement the SourceProvider protocol"
            )
        self._providers.append(provider)
        return self

    def value_type(self, cls: type, converter: Converter | None = None) -> ConfigurationBuilder:
        """Register a value type, optionally with a ``(value, cls) -> value`` converter.

        Without a converter, only instances of ``cls`` are accepted and they
        are copied by reference.
        """
        self._value_types[cls] = ValueTypeTranslator(cls, converter)
        return self

    def register(
        self,
        cls: type,
        fields: Iterable[FieldDescriptor | str] | None = None,
        *,
        access_mode: AccessMode | None = None,
        factory: Callable[[], Any] | None = None,
    ) -> ConfigurationBuilder:
        """Declare the field table for a destination type.

        Args:
            cls: Destination class.
            fields: FieldDescriptors or plain field names. Defaults to every
                    discovered field.
            access_mode: Overrides the default access mode for ``cls``.
            factory: Zero-argument callable creating empty instances.
        """
        if cls in self._registrations:
            raise ConfigurationError(f"Destination type {cls.__name__} is already registered")

        descriptors = None
        if fields is not None:
            descriptors = tuple(
                FieldDescriptor(item) if isinstance(item, str) else item for item in fields
            )
        self._registrations[cls] = TypePlan(
            target_class=cls,
            fields=descriptors,
            access_mode=access_mode,
            factory=factory,
        )
        return self

    def build(self) -> Configuration:
        """Resolve the provider chain and compile the Configuration."""
        providers: list[SourceProvider] = [ReflectionSourceProvider(), VariableSourceProvider()]
        for name in self._settings.extensions:
            try:
                providers.append(load_extension(name))
            except ExtensionUnavailableError as e:
                logger.debug("Skipping source dialect: %s", e)
        providers.extend(self._providers)

        value_types = default_value_types()
        value_types.update(self._value_types)

        configuration = Configuration(
            settings=self._settings,
            providers=providers,
            value_types=value_types,
            registrations=self._registrations,
        )
        # Registered plans compile eagerly
        for cls in self._registrations:
            configuration.get_translator(cls)
        return configuration
