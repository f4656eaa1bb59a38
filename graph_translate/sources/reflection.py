"""Attribute / key lookup source provider.

Always registered first. Resolves plain identifiers only: dotted paths and
other expression syntaxes are left for later providers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from graph_translate.sources.protocol import MISSING


class ReflectionSourceProvider:
    """Resolves a name as a mapping key, an attribute, or a ``get_<name>()`` accessor."""

    def supports_prefix(self, prefix: str) -> bool:
        return False

    def resolve(
        self,
        expression: str,
        source: Any,
        *,
        prefix: str | None = None,
        variables: Mapping[str, Any] | None = None,
    ) -> Any:
        if prefix is not None or not expression.isidentifier():
            return MISSING

        # Row-like sources (dicts, mappings) are read by key
        if isinstance(source, Mapping):
            return source.get(expression, MISSING)

        try:
            return getattr(source, expression)
        except AttributeError:
            pass

        accessor = getattr(source, f"get_{expression}", None)
        if callable(accessor):
            return accessor()
        return MISSING
