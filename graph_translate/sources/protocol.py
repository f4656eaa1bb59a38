"""Source provider protocol.

Every source dialect MUST implement this protocol. Providers are consulted in
configuration order and the first one that resolves an expression wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


# Returned by providers when an expression cannot be resolved. ``None`` is a
# legitimate source value and cannot play this role.
MISSING = _Missing.MISSING


@runtime_checkable
class SourceProvider(Protocol):
    """Reads a value out of a source object given an expression."""

    def supports_prefix(self, prefix: str) -> bool:
        """Whether this provider claims ``prefix:expression`` expressions."""
        ...

    def resolve(
        self,
        expression: str,
        source: Any,
        *,
        prefix: str | None = None,
        variables: Mapping[str, Any] | None = None,
    ) -> Any:
        """Return the value for ``expression`` on ``source``, or MISSING.

        ``prefix`` is the claimed prefix when the expression carried one;
        ``expression`` is then the remainder after the colon.
        """
        ...
