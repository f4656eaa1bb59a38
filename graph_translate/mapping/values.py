"""Value type translators.

Value types are converted directly, without recursion and without touching
the translation cache. Conversions are strict: a value that cannot be
represented in the destination type raises TypeMismatchError rather than
being assigned as-is.
"""

from __future__ import annotations

import datetime
import numbers
import uuid
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from graph_translate.core.exceptions import TypeMismatchError

Converter = Callable[[Any, type], Any]


def _mismatch(value: Any, destination_class: type, detail: str | None = None) -> TypeMismatchError:
    return TypeMismatchError(destination_class.__name__, type(value).__name__, detail)


def _to_str(value: Any, destination_class: type) -> Any:
    if isinstance(value, Enum):
        return destination_class(value.name)
    if isinstance(value, (datetime.date, datetime.time)):
        return destination_class(value.isoformat())
    if isinstance(value, (str, numbers.Number, uuid.UUID)):
        return destination_class(value)
    if isinstance(value, (bytes, bytearray)):
        return destination_class(bytes(value).decode("utf-8"))
    raise _mismatch(value, destination_class)


def _to_int(value: Any, destination_class: type) -> Any:
    if isinstance(value, (str, bytes, numbers.Integral)):
        return destination_class(value)
    if isinstance(value, (float, Decimal)) and value == int(value):
        return destination_class(int(value))
    raise _mismatch(value, destination_class, "not an integral value")


def _to_float(value: Any, destination_class: type) -> Any:
    if isinstance(value, (str, bytes, numbers.Real, Decimal)):
        return destination_class(value)
    raise _mismatch(value, destination_class)


def _to_complex(value: Any, destination_class: type) -> Any:
    if isinstance(value, (str, numbers.Number)):
        return destination_class(value)
    raise _mismatch(value, destination_class)


def _to_decimal(value: Any, destination_class: type) -> Any:
    if isinstance(value, float):
        return destination_class(str(value))
    if isinstance(value, (str, numbers.Rational, Decimal)):
        return destination_class(value)
    raise _mismatch(value, destination_class)


def _to_bool(value: Any, destination_class: type) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    if isinstance(value, numbers.Integral) and value in (0, 1):
        return bool(value)
    raise _mismatch(value, destination_class)


def _to_bytes(value: Any, destination_class: type) -> Any:
    if isinstance(value, str):
        return destination_class(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray, memoryview)):
        return destination_class(value)
    raise _mismatch(value, destination_class)


def _to_uuid(value: Any, destination_class: type) -> Any:
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, str):
        return destination_class(value)
    raise _mismatch(value, destination_class)


def _from_isoformat(value: Any, destination_class: type) -> Any:
    if isinstance(value, str):
        return destination_class.fromisoformat(value)
    if destination_class is datetime.date and isinstance(value, datetime.datetime):
        return value.date()
    raise _mismatch(value, destination_class)


def _to_enum(value: Any, destination_class: type) -> Any:
    if isinstance(value, Enum):
        return destination_class[value.name]
    if isinstance(value, str) and value in destination_class.__members__:
        return destination_class[value]
    return destination_class(value)


class ValueTypeTranslator:
    """Converts a value into one value type.

    Values that are already instances of the destination class pass through
    unchanged; everything else goes through the converter.
    """

    def __init__(self, value_type: type, converter: Converter | None = None) -> None:
        self.value_type = value_type
        self._converter = converter

    def get_translation(self, value: Any, destination_class: type) -> Any:
        if isinstance(value, destination_class) and not (
            destination_class is int and isinstance(value, bool)
        ):
            return value
        if self._converter is None:
            raise _mismatch(value, destination_class)
        try:
            return self._converter(value, destination_class)
        except TypeMismatchError:
            raise
        except (ValueError, TypeError, KeyError, InvalidOperation) as e:
            raise _mismatch(value, destination_class, str(e)) from e

    def __repr__(self) -> str:
        return f"ValueTypeTranslator({self.value_type.__name__})"


_CONVERTERS: dict[type, Converter] = {
    str: _to_str,
    int: _to_int,
    float: _to_float,
    complex: _to_complex,
    bool: _to_bool,
    Decimal: _to_decimal,
    bytes: _to_bytes,
    uuid.UUID: _to_uuid,
    datetime.date: _from_isoformat,
    datetime.datetime: _from_isoformat,
    datetime.time: _from_isoformat,
}


ENUM_TRANSLATOR = ValueTypeTranslator(Enum, _to_enum)


def default_value_types() -> dict[type, ValueTypeTranslator]:
    """Built-in value type registry."""
    return {cls: ValueTypeTranslator(cls, converter) for cls, converter in _CONVERTERS.items()}
