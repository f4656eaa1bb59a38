"""Shared test fixtures."""

from __future__ import annotations

import pytest

from graph_translate.core.configuration import Configuration, configure
from graph_translate.core.engine import TranslationEngine
from graph_translate.core.session import TranslationSession


@pytest.fixture
def configuration() -> Configuration:
    """Default configuration with every available dialect."""
    return configure().build()


@pytest.fixture
def lenient_configuration() -> Configuration:
    """Configuration that leaves unresolvable fields untouched."""
    return configure().source_properties_required(False).build()


@pytest.fixture
def session(configuration: Configuration) -> TranslationSession:
    return TranslationSession(configuration)


@pytest.fixture
def engine(configuration: Configuration) -> TranslationEngine:
    return TranslationEngine(configuration)
