"""Translation settings and optional source dialect loading.

TranslationSettings is a Pydantic model holding the policy flags shared by
every session built from one configuration. Optional source dialects are
loaded by name and only exist when their backing library is installed.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from graph_translate.core.enums import AccessMode
from graph_translate.core.exceptions import ConfigurationError, ExtensionUnavailableError

logger = logging.getLogger(__name__)


class TranslationSettings(BaseModel):
    """Policy flags for translation sessions."""

    model_config = ConfigDict(frozen=True)

    perform_defensive_copies: bool = True
    source_property_required: bool = True
    default_access_mode: AccessMode = AccessMode.FIELD
    extensions: tuple[str, ...] = ("glom",)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TranslationSettings:
        """Validate a plain mapping (e.g. a settings file section)."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid translation settings: {e}") from e


# Dialect name -> (module_path, provider_class)
_EXTENSION_MAP: dict[str, tuple[str, str]] = {
    "glom": ("graph_translate.sources.path", "PathSourceProvider"),
}


def load_extension(name: str) -> Any:
    """Instantiate the source provider for an optional dialect.

    Raises:
        ConfigurationError: If the dialect name is unknown.
        ExtensionUnavailableError: If the dialect's backing library is missing.
    """
    if name not in _EXTENSION_MAP:
        raise ConfigurationError(f"Unknown source dialect: {name}")

    module_path, cls_name = _EXTENSION_MAP[name]
    try:
        module = importlib.import_module(module_path)
        provider_cls = getattr(module, cls_name)
    except (ImportError, AttributeError) as e:
        raise ExtensionUnavailableError(name, str(e)) from e

    logger.debug("Loaded source dialect %s from %s", name, module_path)
    return provider_cls()
