"""Array translator for typed ``array.array`` values."""

from __future__ import annotations

import array
from typing import TYPE_CHECKING, Any

from graph_translate.core.exceptions import MappingError, TypeMismatchError
from graph_translate.mapping.plan import CollectionDescriptor

if TYPE_CHECKING:
    from graph_translate.core.configuration import Configuration
    from graph_translate.core.session import TranslationSession

# Component type -> array typecode
_TYPECODES: dict[type, str] = {
    int: "q",
    float: "d",
}


class ArrayTranslator:
    """Copies arrays or translates them element by element.

    Element translation allocates a new array whose typecode matches the
    descriptor's item class, falling back to the source array's typecode and
    then to the type of the first element.
    """

    def __init__(self, configuration: Configuration) -> None:
        self._configuration = configuration

    def translate(
        self,
        value: Any,
        descriptor: CollectionDescriptor,
        session: TranslationSession,
    ) -> Any:
        if not descriptor.items_should_be_translated:
            if isinstance(value, array.array):
                if not self._configuration.perform_defensive_copies:
                    return value
                return array.array(value.typecode, value)
            return self._allocate(value, descriptor.item_class, list(value))

        item_class = descriptor.item_class
        items = [session.translate(item, item_class) for item in value]
        return self._allocate(value, item_class, items)

    def _allocate(
        self, value: Any, item_class: type | None, items: list[Any]
    ) -> array.array:  # type: ignore[type-arg]
        typecode = _TYPECODES.get(item_class) if item_class is not None else None
        if typecode is None:
            typecode = getattr(value, "typecode", None)
        if typecode is None and items:
            # Undeclared component: inferred from the first element
            typecode = _TYPECODES.get(type(items[0]))
        if typecode is None:
            raise MappingError(
                f"Cannot allocate an array for {type(value).__name__}: no component type declared"
            )
        try:
            return array.array(typecode, items)
        except (TypeError, OverflowError) as e:
            raise TypeMismatchError(
                f"array('{typecode}') item", type(value).__name__, str(e)
            ) from e
