"""Session variable source provider.

``var:name`` reads a session variable; ``var:name.attr.key`` walks into it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from graph_translate.sources.protocol import MISSING


def _step(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name, MISSING)
    return getattr(value, name, MISSING)


class VariableSourceProvider:
    """Resolves ``var:`` expressions against the session's variables."""

    PREFIX = "var"

    def supports_prefix(self, prefix: str) -> bool:
        return prefix == self.PREFIX

    def resolve(
        self,
        expression: str,
        source: Any,
        *,
        prefix: str | None = None,
        variables: Mapping[str, Any] | None = None,
    ) -> Any:
        if prefix != self.PREFIX or not variables:
            return MISSING

        name, *path = expression.split(".")
        value = variables.get(name, MISSING)
        for part in path:
            if value is MISSING or value is None:
                return MISSING
            value = _step(value, part)
        return value
