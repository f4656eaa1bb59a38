"""Mapping layer - plans and translators for destination types."""

from __future__ import annotations

from graph_translate.mapping.array import ArrayTranslator
from graph_translate.mapping.collection import CollectionTranslator
from graph_translate.mapping.model import ObjectTranslator
from graph_translate.mapping.plan import CollectionDescriptor, FieldDescriptor, TypePlan
from graph_translate.mapping.values import ValueTypeTranslator

__all__ = [
    "ObjectTranslator",
    "CollectionTranslator",
    "ArrayTranslator",
    "ValueTypeTranslator",
    "FieldDescriptor",
    "CollectionDescriptor",
    "TypePlan",
]
