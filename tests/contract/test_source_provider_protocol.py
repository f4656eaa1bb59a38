"""Contract tests for source provider protocol compliance."""

from __future__ import annotations

import pytest

from graph_translate.core.configuration import configure
from graph_translate.sources.protocol import MISSING, SourceProvider
from graph_translate.sources.reflection import ReflectionSourceProvider
from graph_translate.sources.variables import VariableSourceProvider


class Record:
    value = 1


class TestBuiltinProvidersProtocol:
    @pytest.mark.parametrize("provider_cls", [ReflectionSourceProvider, VariableSourceProvider])
    def test_implements_protocol(self, provider_cls: type) -> None:
        assert isinstance(provider_cls(), SourceProvider)

    def test_path_provider_implements_protocol(self) -> None:
        pytest.importorskip("glom")
        from graph_translate.sources.path import PathSourceProvider

        assert isinstance(PathSourceProvider(), SourceProvider)

    def test_every_configured_provider_returns_missing_for_unknown(self) -> None:
        configuration = configure().build()
        for provider in configuration.providers:
            assert provider.resolve("unknown_name", Record()) is MISSING


class TestMissingSentinel:
    def test_is_falsy(self) -> None:
        assert not MISSING

    def test_is_not_none(self) -> None:
        assert MISSING is not None

    def test_repr(self) -> None:
        assert repr(MISSING) == "MISSING"
