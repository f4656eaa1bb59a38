"""Translation engine.

The TranslationEngine is the embedding entry point: each call runs in a
fresh TranslationSession built from one shared Configuration.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from graph_translate.core.config import TranslationSettings
from graph_translate.core.configuration import Configuration, configure
from graph_translate.core.session import TranslationSession

T = TypeVar("T")


class TranslationEngine:
    """Translates object graphs using a shared Configuration."""

    def __init__(self, configuration: Configuration | None = None) -> None:
        self._configuration = configuration or Configuration.default()

    @classmethod
    def from_settings(
        cls,
        settings: TranslationSettings | Mapping[str, Any],
    ) -> TranslationEngine:
        """Create an engine from settings (a model or a plain mapping).

        Args:
            settings: TranslationSettings instance or its dict form

        Returns:
            TranslationEngine instance
        """
        return cls(configure(settings).build())

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def session(self, variables: Mapping[str, Any] | None = None) -> TranslationSession:
        """Start a session to share one translation cache across several calls."""
        return TranslationSession(self._configuration, variables)

    def translate(
        self,
        source: Any,
        destination_class: type[T],
        *,
        variables: Mapping[str, Any] | None = None,
    ) -> T | None:
        """Translate ``source`` into a new ``destination_class`` instance."""
        return self.session(variables).translate(source, destination_class)

    def update(
        self,
        source: Any,
        destination: Any,
        *,
        variables: Mapping[str, Any] | None = None,
    ) -> None:
        """Update ``destination`` in place from ``source``."""
        self.session(variables).update(source, destination)

    def get_each_translation(
        self,
        sources: Iterable[Any],
        destination_class: type[T],
        item_expression: str | None = None,
        *,
        variables: Mapping[str, Any] | None = None,
    ) -> list[T | None] | set[T | None]:
        """Translate every item of ``sources`` within a single session."""
        return self.session(variables).get_each_translation(
            sources, destination_class, item_expression
        )
