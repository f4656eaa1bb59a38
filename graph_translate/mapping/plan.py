"""Translation plan data classes.

Frozen dataclasses describing how each destination type is populated.
A plan is built once per destination type and shared by every session
using the same configuration.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from graph_translate.core.enums import AccessMode, Optionality


@dataclass(frozen=True)
class CollectionDescriptor:
    """How a collection or array valued field is copied."""

    item_class: type | None = None
    items_should_be_translated: bool = False
    container_type: type | None = None  # concrete declared container, e.g. list
    is_array: bool = False


@dataclass(frozen=True)
class FieldDescriptor:
    """Translation rule for a single destination field.

    Args:
        name: Destination attribute name.
        source: Source expression; defaults to ``name``. May carry a
                dialect prefix such as ``glom:address.city``.
        field_type: Declared destination type; filled from type hints
                    when omitted.
        translate: Always translate the value into ``field_type`` (or,
                   for collections, translate every item).
        update: Update the destination's existing value in place instead
                of replacing it.
        optionality: Whether an unresolvable source is an error.
        item_class: Item type for collection fields, overriding hints.
        translate_items: Explicit element translation switch for
                         collection fields.
    """

    name: str
    source: str | None = None
    field_type: Any = None
    translate: bool = False
    update: bool = False
    optionality: Optionality = Optionality.DEFAULT
    item_class: type | None = None
    translate_items: bool | None = None
    collection: CollectionDescriptor | None = None

    @property
    def source_expression(self) -> str:
        return (self.source or self.name).strip()


@dataclass(frozen=True)
class TypePlan:
    """Compiled field rules for one destination type.

    ``fields`` is None on an unresolved registration, meaning the fields
    are discovered by convention when the plan is compiled.
    """

    target_class: type
    fields: tuple[FieldDescriptor, ...] | None = None
    access_mode: AccessMode | None = None
    factory: Callable[[], Any] | None = None
