"""Translation policy enumerations."""

from __future__ import annotations

from enum import Enum


class AccessMode(Enum):
    """How destination attributes are discovered and written."""

    FIELD = "field"
    PROPERTY = "property"


class Optionality(Enum):
    """Whether a destination field demands a resolvable source property."""

    DEFAULT = "default"
    REQUIRED = "required"
    OPTIONAL = "optional"
