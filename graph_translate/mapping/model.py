"""Object translator.

Populates one destination type from arbitrary source objects, following the
type's compiled plan. Supports dataclasses, Pydantic models, and plain classes.
"""

from __future__ import annotations

import array
import inspect
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from graph_translate.core.enums import AccessMode, Optionality
from graph_translate.core.exceptions import MissingSourcePropertyError, TypeMismatchError
from graph_translate.mapping.collection import coerce, is_collection
from graph_translate.mapping.metadata import create_instance
from graph_translate.mapping.plan import CollectionDescriptor, FieldDescriptor, TypePlan
from graph_translate.sources.protocol import MISSING

if TYPE_CHECKING:
    from graph_translate.core.configuration import Configuration
    from graph_translate.core.session import TranslationSession

T = TypeVar("T")

_UNTRANSLATED = CollectionDescriptor()


class ObjectTranslator(Generic[T]):
    """Translation policy for one destination type.

    For each field: resolve the source expression, then dispatch in order:
    1. None -> assigned as None
    2. update=True with an existing value -> updated in place
    3. collection / array -> collection or array translator
    4. translate=True -> translated into the declared type
    5. value type -> converted by its value type translator
    6. undeclared or non-class type -> assigned by reference
    7. instance of the declared type -> assigned by reference
    8. structured declared type -> translated recursively
    9. anything else -> TypeMismatchError

    Args:
        destination_class: The class instances are created from.
        configuration: The owning Configuration.
        plan: The compiled TypePlan for ``destination_class``.
    """

    def __init__(
        self,
        destination_class: type[T],
        configuration: Configuration,
        plan: TypePlan,
    ) -> None:
        self._destination_class = destination_class
        self._configuration = configuration
        self._plan = plan
        self._fields: tuple[FieldDescriptor, ...] = plan.fields or ()
        self._use_setattr = plan.access_mode is AccessMode.PROPERTY

    @property
    def destination_class(self) -> type[T]:
        return self._destination_class

    @property
    def plan(self) -> TypePlan:
        return self._plan

    def create(self) -> T:
        """Create an empty destination instance, before any field is populated."""
        if self._plan.factory is not None:
            return self._plan.factory()  # type: ignore[no-any-return]
        return create_instance(  # type: ignore[no-any-return]
            self._destination_class, (field.name for field in self._fields)
        )

    def update(
        self,
        source: Any,
        destination: T,
        session: TranslationSession,
        variables: Mapping[str, Any] | None = None,
    ) -> None:
        """Populate every planned field of ``destination`` from ``source``."""
        for field in self._fields:
            self._update_field(field, source, destination, session, variables)

    def cast_and_update(
        self,
        source: Any,
        destination: Any,
        session: TranslationSession,
        variables: Mapping[str, Any] | None = None,
    ) -> None:
        """Check ``destination`` is a ``destination_class`` instance, then update it."""
        if not isinstance(destination, self._destination_class):
            raise TypeMismatchError(
                self._destination_class.__name__,
                type(destination).__name__,
                "destination cannot be updated by this translator",
            )
        self.update(source, destination, session, variables)

    def _is_required(self, field: FieldDescriptor) -> bool:
        if field.optionality is Optionality.REQUIRED:
            return True
        if field.optionality is Optionality.OPTIONAL:
            return False
        return self._configuration.source_property_required

    def _update_field(
        self,
        field: FieldDescriptor,
        source: Any,
        destination: Any,
        session: TranslationSession,
        variables: Mapping[str, Any] | None,
    ) -> None:
        expression = field.source_expression
        value = self._configuration.find_source_value(expression, source, variables)
        if value is MISSING:
            if self._is_required(field):
                raise MissingSourcePropertyError(expression)
            return

        translated = self._translate_value(field, value, destination, session)
        self._write(destination, field.name, translated)

    def _translate_value(
        self,
        field: FieldDescriptor,
        value: Any,
        destination: Any,
        session: TranslationSession,
    ) -> Any:
        if value is None:
            return None

        field_type = field.field_type

        if field.update:
            current = getattr(destination, field.name, None)
            if current is not None and self._configuration.is_structured(type(current)):
                session.update(value, current)
                return current

        collection = field.collection
        if collection is None and field_type is None and is_collection(value):
            collection = _UNTRANSLATED
        if collection is not None or isinstance(value, array.array):
            return self._translate_container(value, collection or _UNTRANSLATED, session)

        if field.translate and field_type is not None:
            return session.translate(value, field_type)

        value_translator = self._configuration.get_value_type_translator(field_type)
        if value_translator is not None:
            return value_translator.get_translation(value, field_type)

        if not inspect.isclass(field_type) or isinstance(value, field_type):
            return value

        if self._configuration.is_structured(field_type):
            return session.translate(value, field_type)

        raise TypeMismatchError(
            field_type.__name__,
            type(value).__name__,
            f"field '{self._destination_class.__name__}.{field.name}'",
        )

    def _translate_container(
        self,
        value: Any,
        descriptor: CollectionDescriptor,
        session: TranslationSession,
    ) -> Any:
        if not is_collection(value):
            raise TypeMismatchError(
                getattr(descriptor.container_type, "__name__", "collection"),
                type(value).__name__,
            )
        if descriptor.is_array or isinstance(value, array.array):
            translated = self._configuration.array_translator.translate(value, descriptor, session)
        else:
            translated = self._configuration.collection_translator.translate(
                value, descriptor, session
            )
        return coerce(translated, descriptor.container_type)

    def _write(self, destination: Any, name: str, value: Any) -> None:
        if self._use_setattr:
            setattr(destination, name, value)
        else:
            # Field access also writes to frozen dataclasses and skips Pydantic validation
            object.__setattr__(destination, name, value)
