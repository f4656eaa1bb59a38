"""Collection translator.

Copies or translates the contents of lists, sets, tuples, deques, mappings
and sorted containers. The result keeps the family of the source container:
sorted containers are rebuilt with the same key function, so the copy keeps
ordering items inserted after translation.
"""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Callable, Collection, Iterable, Mapping
from collections.abc import Set as AbstractSet
from typing import TYPE_CHECKING, Any

from sortedcontainers import SortedDict, SortedList, SortedSet

from graph_translate.core.exceptions import TypeMismatchError
from graph_translate.mapping.plan import CollectionDescriptor

if TYPE_CHECKING:
    from graph_translate.core.configuration import Configuration
    from graph_translate.core.session import TranslationSession

_TEXT_TYPES = (str, bytes, bytearray, memoryview)
_UNHASHABLE = "set items must be hashable"


def is_collection(value: Any) -> bool:
    """True for containers handled by the collection translator."""
    return isinstance(value, Collection) and not isinstance(value, _TEXT_TYPES)


def _collect(factory: Callable[..., Any], items: Iterable[Any], detail: str, **kwargs: Any) -> Any:
    items = list(items)
    try:
        return factory(items, **kwargs)
    except TypeError as e:
        actual = type(items[0]).__name__ if items else "item"
        raise TypeMismatchError(f"{factory.__name__} item", actual, f"{detail}: {e}") from e


def rebuild(source: Any, items: Iterable[Any]) -> Any:
    """Build a new container of the same family as ``source`` from ``items``.

    For mappings ``items`` are (key, value) pairs.

    Raises:
        TypeMismatchError: If set items are unhashable or sorted items unorderable.
    """
    # Sorted containers first: SortedDict is also a dict
    if isinstance(source, SortedDict):
        return SortedDict(source.key, items)
    if isinstance(source, SortedSet):
        return _collect(SortedSet, items, _UNHASHABLE, key=source.key)
    if isinstance(source, SortedList):
        return _collect(SortedList, items, "sorted items must be comparable", key=source.key)

    if isinstance(source, defaultdict):
        return defaultdict(source.default_factory, items)
    if isinstance(source, Mapping):
        try:
            return type(source)(items)
        except TypeError:
            return dict(items)

    if isinstance(source, deque):
        return deque(items, maxlen=source.maxlen)
    if isinstance(source, frozenset):
        return _collect(frozenset, items, _UNHASHABLE)
    if isinstance(source, AbstractSet):
        return _collect(set, items, _UNHASHABLE)
    if isinstance(source, tuple):
        return tuple(items)
    return list(items)


def coerce(value: Any, container_type: type | None) -> Any:
    """Convert a translated container into the declared concrete container type."""
    if container_type is None or isinstance(value, container_type):
        return value
    try:
        return container_type(value)
    except (TypeError, ValueError) as e:
        raise TypeMismatchError(container_type.__name__, type(value).__name__, str(e)) from e


class CollectionTranslator:
    """Translates collections, honouring the defensive copy policy."""

    def __init__(self, configuration: Configuration) -> None:
        self._configuration = configuration

    def translate(
        self,
        value: Any,
        descriptor: CollectionDescriptor,
        session: TranslationSession,
    ) -> Any:
        """Copy or translate ``value``.

        Without item translation the source is returned untouched when
        defensive copies are disabled, and copied otherwise.
        """
        if not descriptor.items_should_be_translated:
            if not self._configuration.perform_defensive_copies:
                return value
            return self._copy(value)

        item_class = descriptor.item_class
        if isinstance(value, Mapping):
            return rebuild(
                value,
                [(key, session.translate(item, item_class)) for key, item in value.items()],
            )
        return rebuild(value, [session.translate(item, item_class) for item in value])

    def _copy(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return rebuild(value, value.items())
        return rebuild(value, iter(value))
