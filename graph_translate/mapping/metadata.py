"""Destination type metadata.

Discovers fields, declared types and container shapes for dataclasses,
Pydantic models and plain classes, compiles them into TypePlans, and builds
zero-valued destination instances.
"""

from __future__ import annotations

import array
import dataclasses
import inspect
import types
import typing
from collections.abc import Callable, Collection, Iterable, Mapping
from enum import Enum
from typing import Annotated, Any, ClassVar, Union

from pydantic import BaseModel

from graph_translate.core.enums import AccessMode
from graph_translate.core.exceptions import ConfigurationError, InstantiationError
from graph_translate.mapping.plan import CollectionDescriptor, FieldDescriptor, TypePlan

_TEXT_TYPES = (str, bytes, bytearray, memoryview)


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return inspect.isclass(cls) and issubclass(cls, BaseModel)


def _settable_properties(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and attr.fset is not None and not name.startswith("_"):
                if name not in names:
                    names.append(name)
    return names


def _safe_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj)
    except (NameError, TypeError):
        return {}


def field_names(cls: type, access_mode: AccessMode = AccessMode.FIELD) -> list[str]:
    """Extract destination field names from a class (Pydantic, dataclass, or plain)."""
    if _is_pydantic_model(cls):
        names = list(cls.model_fields.keys())
    elif dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls)]
    else:
        # Plain class - __init__ parameters, then class annotations
        names = []
        try:
            sig = inspect.signature(cls.__init__)  # type: ignore[misc]
            names = [
                name
                for name, param in sig.parameters.items()
                if name != "self"
                and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
            ]
        except (ValueError, TypeError):
            pass
        for name, hint in _safe_hints(cls).items():
            if name not in names and typing.get_origin(hint) is not ClassVar:
                names.append(name)

    if access_mode is AccessMode.PROPERTY:
        names += [name for name in _settable_properties(cls) if name not in names]
    return names


def field_types(cls: type) -> dict[str, Any]:
    """Declared types of a class's fields and settable properties."""
    if _is_pydantic_model(cls):
        return {name: info.annotation for name, info in cls.model_fields.items()}

    hints: dict[str, Any] = {}
    if not dataclasses.is_dataclass(cls):
        hints.update(_init_hints(cls))
    hints.update(_safe_hints(cls))

    for name in _settable_properties(cls):
        if name not in hints:
            prop = inspect.getattr_static(cls, name)
            returned = _safe_hints(prop.fget).get("return") if prop.fget else None
            if returned is not None:
                hints[name] = returned
    return hints


def unwrap_optional(tp: Any) -> Any:
    """Reduce ``X | None`` and ``Annotated[X, ...]`` to ``X``."""
    origin = typing.get_origin(tp)
    if origin is Annotated:
        return unwrap_optional(typing.get_args(tp)[0])
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return unwrap_optional(args[0])
    return tp


def is_structured_class(cls: Any) -> bool:
    """True for classes translated field by field rather than copied."""
    if not inspect.isclass(cls) or cls.__module__ == "builtins":
        return False
    if issubclass(cls, (Enum, Collection)):
        return False
    if _is_pydantic_model(cls) or dataclasses.is_dataclass(cls):
        return True
    if any(inspect.get_annotations(klass) for klass in cls.__mro__[:-1]):
        return True
    return bool(_init_hints(cls))


def _init_hints(cls: type) -> dict[str, Any]:
    """Typed ``__init__`` parameters of a plain class, without the return hint."""
    init = getattr(cls, "__init__", None)
    if not inspect.isfunction(init):
        return {}
    hints = _safe_hints(init)
    hints.pop("return", None)
    return hints


def container_origin(tp: Any) -> type | None:
    """The container class behind a declared type, or None if it is not one."""
    origin = typing.get_origin(tp) or tp
    if not inspect.isclass(origin) or issubclass(origin, _TEXT_TYPES):
        return None
    if origin is array.array or origin is Iterable or issubclass(origin, Collection):
        return origin
    return None


def _item_class(origin: type, args: tuple[Any, ...]) -> type | None:
    if not args:
        return None
    if issubclass(origin, Mapping):
        candidate = args[1] if len(args) == 2 else None
    elif origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            candidate = args[0]
        else:
            candidate = args[0] if len(set(args)) == 1 else None
    else:
        candidate = args[0]
    candidate = unwrap_optional(candidate)
    return candidate if inspect.isclass(candidate) else None


def describe_container(
    field_type: Any,
    descriptor: FieldDescriptor,
    is_structured: Callable[[Any], bool],
) -> CollectionDescriptor | None:
    """Build the CollectionDescriptor for a container-typed field."""
    origin = container_origin(field_type)
    if origin is None:
        return None

    item_class = descriptor.item_class or _item_class(origin, typing.get_args(field_type))
    if descriptor.translate_items is not None:
        translate_items = descriptor.translate_items
    else:
        translate_items = item_class is not None and (
            descriptor.translate or is_structured(item_class)
        )

    if translate_items and item_class is None:
        raise ConfigurationError(
            f"Field '{descriptor.name}' translates its items but declares no item class"
        )

    concrete = not inspect.isabstract(origin) and origin.__module__ != "collections.abc"
    return CollectionDescriptor(
        item_class=item_class,
        items_should_be_translated=translate_items,
        container_type=origin if concrete else None,
        is_array=origin is array.array,
    )


def compile_plan(
    registration: TypePlan,
    default_access_mode: AccessMode,
    is_structured: Callable[[Any], bool],
) -> TypePlan:
    """Resolve field types and container descriptors for a destination type."""
    cls = registration.target_class
    access_mode = registration.access_mode or default_access_mode
    hints = field_types(cls)

    if registration.fields is None:
        descriptors = [FieldDescriptor(name) for name in field_names(cls, access_mode)]
    else:
        descriptors = list(registration.fields)

    compiled = []
    for descriptor in descriptors:
        field_type = descriptor.field_type
        if field_type is None:
            field_type = hints.get(descriptor.name)
        if field_type is not None:
            field_type = unwrap_optional(field_type)
        compiled.append(
            dataclasses.replace(
                descriptor,
                field_type=field_type,
                collection=describe_container(field_type, descriptor, is_structured),
            )
        )

    return TypePlan(
        target_class=cls,
        fields=tuple(compiled),
        access_mode=access_mode,
        factory=registration.factory,
    )


def _field_default(f: dataclasses.Field) -> Any:  # type: ignore[type-arg]
    if f.default is not dataclasses.MISSING:
        return f.default
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return None


def create_instance(cls: type, names: Iterable[str] = ()) -> Any:
    """Create a zero-valued instance: defaults where declared, None elsewhere.

    Detection order:
    1. Pydantic BaseModel -> model_construct() with None for required fields
    2. dataclass -> __new__ plus field defaults (no __init__/__post_init__)
    3. Plain class -> cls(), else __new__ plus None for undeclared fields
    """
    if _is_pydantic_model(cls):
        required = {name: None for name, info in cls.model_fields.items() if info.is_required()}
        return cls.model_construct(**required)

    if dataclasses.is_dataclass(cls):
        instance = cls.__new__(cls)
        for f in dataclasses.fields(cls):
            object.__setattr__(instance, f.name, _field_default(f))
        return instance

    try:
        return cls()
    except TypeError:
        pass

    try:
        instance = cls.__new__(cls)
    except TypeError as e:
        raise InstantiationError(cls.__name__, str(e)) from e
    for name in names:
        if not hasattr(cls, name):
            object.__setattr__(instance, name, None)
    return instance
