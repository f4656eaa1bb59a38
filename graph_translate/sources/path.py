"""glom path source provider.

Optional dialect: only registered when ``glom`` is importable. Handles
``glom:`` prefixed expressions as well as bare dotted paths such as
``address.city`` or ``orders.0.total`` that the reflection provider declines.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from glom import PathAccessError, glom

from graph_translate.sources.protocol import MISSING


class PathSourceProvider:
    """Evaluates glom path specs against the source object."""

    PREFIX = "glom"

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
        if prefix is not None and prefix != self.PREFIX:
            return MISSING
        try:
            return glom(source, expression)
        except PathAccessError:
            return MISSING
