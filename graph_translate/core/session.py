"""Translation sessions.

A session holds the state of one translation pass: the identity-keyed cache
of destinations already created, and the variables visible to source
expressions. Destinations are cached before their fields are populated, so
a reference back to an object still being translated receives the
in-progress destination instead of recursing forever.

Sessions are not thread-safe. Use one session per translation pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from collections.abc import Set as AbstractSet
from types import MappingProxyType
from typing import Any, TypeVar

from graph_translate.core.configuration import Configuration
from graph_translate.core.exceptions import NoDestinationError, TypeMismatchError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class TranslationCache:
    """Destinations created in one session, keyed by source identity.

    Lookups use ``id()``, never equality: equal but distinct sources get
    distinct destinations. Each source is retained for the life of the cache
    so its id cannot be reused by another object.
    """

    def __init__(self) -> None:
        self._sources: dict[int, Any] = {}
        self._translations: dict[int, list[Any]] = {}

    def get_translation(self, source: Any, destination_class: type[T]) -> T | None:
        """Return the destination already created for ``source`` as ``destination_class``."""
        for translated in self._translations.get(id(source), ()):
            if isinstance(translated, destination_class):
                return translated
        return None

    def put_translation(self, source: Any, translated: Any) -> None:
        key = id(source)
        self._sources[key] = source
        self._translations.setdefault(key, []).append(translated)

    def __contains__(self, source: Any) -> bool:
        return id(source) in self._translations

    def __len__(self) -> int:
        """Number of distinct sources translated."""
        return len(self._translations)


class TranslationSession:
    """One translation pass over an object graph.

    Args:
        configuration: Shared Configuration.
        variables: Optional variables for ``var:`` expressions. Exposed as a
                   read-only view shared with every nested translation.
    """

    def __init__(
        self,
        configuration: Configuration,
        variables: Mapping[str, Any] | None = None,
    ) -> None:
        self._configuration = configuration
        self._variables = MappingProxyType(variables) if variables is not None else None
        self._cache = TranslationCache()

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def variables(self) -> Mapping[str, Any] | None:
        return self._variables

    @property
    def cache(self) -> TranslationCache:
        return self._cache

    def translate(self, source: Any, destination_class: type[T]) -> T | None:
        """Translate ``source`` into ``destination_class``.

        Returns None for a None source. Value types are converted directly;
        object types reuse the destination already created for the same
        source object in this session, if any.
        """
        if source is None:
            return None

        translated = self._cache.get_translation(source, destination_class)
        if translated is not None:
            logger.debug(
                "Reusing %s translated from %s",
                destination_class.__name__,
                type(source).__name__,
            )
            return translated

        value_translator = self._configuration.get_value_type_translator(destination_class)
        if value_translator is not None:
            translated = value_translator.get_translation(source, destination_class)
            return translated  # type: ignore[no-any-return]

        return self._get_object_translation(source, destination_class)

    get_translation = translate

    def _get_object_translation(self, source: Any, destination_class: type[T]) -> T:
        translator = self._configuration.get_translator(destination_class)
        translated = translator.create()
        self._cache.put_translation(source, translated)
        translator.update(source, translated, self, self._variables)
        return translated

    def update(self, source: Any, destination: Any) -> None:
        """Update an existing ``destination`` from ``source``.

        Raises:
            NoDestinationError: If ``destination`` is None.
        """
        self._assure_destination(destination)
        translator = self._configuration.get_translator(type(destination))
        translator.cast_and_update(source, destination, self, self._variables)

    def update_as(self, source: Any, destination: Any, destination_class: type) -> None:
        """Update ``destination`` using the plan of ``destination_class``.

        Raises:
            NoDestinationError: If ``destination`` is None.
            TypeMismatchError: If ``destination`` is not a ``destination_class``.
        """
        self._assure_destination(destination)
        translator = self._configuration.get_translator(destination_class)
        translator.cast_and_update(source, destination, self, self._variables)

    def _assure_destination(self, destination: Any) -> None:
        if destination is None:
            raise NoDestinationError()

    def get_each_translation(
        self,
        sources: Iterable[Any],
        destination_class: type[T],
        item_expression: str | None = None,
    ) -> list[T | None] | set[T | None]:
        """Translate every item of ``sources``.

        Sets produce a set; sequences and other iterables produce a list in
        iteration order. ``item_expression`` is resolved on each item first.

        Raises:
            TypeMismatchError: If a set is requested and the translated items
                               are unhashable.
        """
        translated = [
            self.translate(self._apply_expression(item, item_expression), destination_class)
            for item in sources
        ]
        if isinstance(sources, AbstractSet):
            try:
                return set(translated)
            except TypeError as e:
                raise TypeMismatchError(
                    "set item", destination_class.__name__, f"set items must be hashable: {e}"
                ) from e
        return translated

    def _apply_expression(self, item: Any, item_expression: str | None) -> Any:
        if item_expression is None:
            return item
        return self._configuration.get_source_value(item_expression, item, self._variables)
