"""Unit tests for Configuration, ConfigurationBuilder and prefix dispatch."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import ValidationError

from graph_translate.core import config
from graph_translate.core.config import TranslationSettings
from graph_translate.core.configuration import Configuration, configure, parse_prefix
from graph_translate.core.enums import AccessMode
from graph_translate.core.exceptions import (
    ConfigurationError,
    ExtensionUnavailableError,
    MissingSourcePropertyError,
)
from graph_translate.mapping.plan import FieldDescriptor
from graph_translate.sources.protocol import MISSING
from graph_translate.sources.reflection import ReflectionSourceProvider
from graph_translate.sources.variables import VariableSourceProvider


class RecordingProvider:
    """Resolves every expression to a fixed value and records the calls."""

    def __init__(self, value: Any, prefix: str | None = None) -> None:
        self.value = value
        self.prefix = prefix
        self.calls: list[tuple[str, str | None]] = []

    def supports_prefix(self, prefix: str) -> bool:
        return prefix == self.prefix

    def resolve(
        self,
        expression: str,
        source: Any,
        *,
        prefix: str | None = None,
        variables: Mapping[str, Any] | None = None,
    ) -> Any:
        self.calls.append((expression, prefix))
        return self.value


@dataclass
class Holder:
    items: list


class Source:
    name = "source"


class TestParsePrefix:
    def test_prefixed(self) -> None:
        assert parse_prefix("foo:bar.baz") == ("foo", "bar.baz")

    def test_bare(self) -> None:
        assert parse_prefix("name") == (None, "name")

    def test_leading_colon_is_bare(self) -> None:
        assert parse_prefix(":bar") == (None, ":bar")

    def test_trailing_colon_is_bare(self) -> None:
        assert parse_prefix("bar:") == (None, "bar:")

    def test_only_first_colon_splits(self) -> None:
        assert parse_prefix("a:b:c") == ("a", "b:c")

    def test_expression_is_trimmed(self) -> None:
        assert parse_prefix("  foo:bar  ") == ("foo", "bar")


class TestPrefixDispatch:
    def test_prefixed_expression_only_reaches_claiming_providers(self) -> None:
        foo = RecordingProvider("from foo", prefix="foo")
        other = RecordingProvider("from other")
        configuration = configure().extensions().provider(other).provider(foo).build()

        value = configuration.find_source_value("foo:bar.baz", Source())

        assert value == "from foo"
        assert foo.calls == [("bar.baz", "foo")]
        assert other.calls == []

    def test_colon_edges_are_bare_expressions(self) -> None:
        foo = RecordingProvider("from foo", prefix="foo")
        other = RecordingProvider("from other")
        configuration = configure().extensions().provider(other).provider(foo).build()

        assert configuration.find_source_value(":bar", Source()) == "from other"
        assert configuration.find_source_value("bar:", Source()) == "from other"
        assert other.calls == [(":bar", None), ("bar:", None)]
        assert foo.calls == []

    def test_first_provider_wins(self) -> None:
        first = RecordingProvider("first")
        second = RecordingProvider("second")
        configuration = configure().extensions().provider(first).provider(second).build()

        assert configuration.find_source_value("a.b", Source()) == "first"
        assert second.calls == []

    def test_reflection_resolves_before_custom_providers(self) -> None:
        custom = RecordingProvider("custom")
        configuration = configure().extensions().provider(custom).build()
        assert configuration.find_source_value("name", Source()) == "source"
        assert custom.calls == []

    def test_unclaimed_prefix_is_missing(self, configuration: Configuration) -> None:
        assert configuration.find_source_value("nobody:name", Source()) is MISSING
        with pytest.raises(MissingSourcePropertyError) as exc_info:
            configuration.get_source_value("nobody:name", Source())
        assert exc_info.value.expression == "nobody:name"


class TestProviderChain:
    def test_reflection_is_always_first(self) -> None:
        configuration = Configuration(providers=[RecordingProvider("x")])
        assert isinstance(configuration.providers[0], ReflectionSourceProvider)
        assert len(configuration.providers) == 2

    def test_builder_order(self) -> None:
        custom = RecordingProvider("x")
        configuration = configure().extensions().provider(custom).build()
        providers = configuration.providers
        assert isinstance(providers[0], ReflectionSourceProvider)
        assert isinstance(providers[1], VariableSourceProvider)
        assert providers[-1] is custom

    def test_unavailable_extension_is_omitted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(
            config._EXTENSION_MAP,
            "ghost",
            ("graph_translate.sources.does_not_exist", "GhostSourceProvider"),
        )
        configuration = configure().extensions("ghost").build()
        assert len(configuration.providers) == 2

    def test_unknown_extension_fails(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown source dialect"):
            configure().extensions("nonsense").build()

    def test_glom_dialect_registered_when_available(self) -> None:
        pytest.importorskip("glom")
        from graph_translate.sources.path import PathSourceProvider

        configuration = configure().build()
        assert any(isinstance(p, PathSourceProvider) for p in configuration.providers)

    def test_loaded_dialect_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        pytest.importorskip("glom")
        with caplog.at_level(logging.DEBUG, logger="graph_translate.core.config"):
            configure().build()
        assert "Loaded source dialect glom" in caplog.text

    def test_unavailable_dialect_is_logged(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setitem(
            config._EXTENSION_MAP,
            "ghost",
            ("graph_translate.sources.does_not_exist", "GhostSourceProvider"),
        )
        with pytest.raises(ExtensionUnavailableError) as exc_info:
            config.load_extension("ghost")
        assert exc_info.value.extension == "ghost"

        with caplog.at_level(logging.DEBUG, logger="graph_translate"):
            configure().extensions("ghost").build()
        assert "Skipping source dialect" in caplog.text

    def test_provider_must_implement_protocol(self) -> None:
        with pytest.raises(ConfigurationError):
            configure().provider(object())  # type: ignore[arg-type]


class TestSettings:
    def test_defaults(self, configuration: Configuration) -> None:
        assert configuration.perform_defensive_copies is True
        assert configuration.source_property_required is True
        assert configuration.default_access_mode is AccessMode.FIELD

    def test_builder_flags(self) -> None:
        configuration = (
            configure()
            .defensive_copies(False)
            .source_properties_required(False)
            .access_mode(AccessMode.PROPERTY)
            .build()
        )
        assert configuration.perform_defensive_copies is False
        assert configuration.source_property_required is False
        assert configuration.default_access_mode is AccessMode.PROPERTY

    def test_from_mapping(self) -> None:
        configuration = configure(
            {"perform_defensive_copies": False, "default_access_mode": "property"}
        ).build()
        assert configuration.perform_defensive_copies is False
        assert configuration.default_access_mode is AccessMode.PROPERTY

    def test_invalid_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid translation settings"):
            configure({"default_access_mode": "telepathy"})

    def test_settings_are_frozen(self) -> None:
        settings = TranslationSettings()
        with pytest.raises(ValidationError):
            settings.perform_defensive_copies = False  # type: ignore[misc]

    def test_access_mode_cannot_be_none(self) -> None:
        with pytest.raises(ConfigurationError):
            configure().access_mode(None)  # type: ignore[arg-type]


class TestRegistration:
    def test_duplicate_registration(self) -> None:
        with pytest.raises(ConfigurationError, match="already registered"):
            configure().register(Holder).register(Holder)

    def test_item_translation_requires_item_class(self) -> None:
        builder = configure().register(Holder, [FieldDescriptor("items", translate_items=True)])
        with pytest.raises(ConfigurationError, match="no item class"):
            builder.build()

    def test_translators_are_cached(self, configuration: Configuration) -> None:
        assert configuration.get_translator(Holder) is configuration.get_translator(Holder)

    def test_plain_names_become_descriptors(self) -> None:
        configuration = configure().register(Holder, ["items"]).build()
        plan = configuration.get_translator(Holder).plan
        assert [f.name for f in plan.fields] == ["items"]
        assert plan.fields[0].field_type is list

    def test_registered_value_type(self) -> None:
        class Money:
            def __init__(self, amount: str) -> None:
                self.amount = amount

        configuration = configure().value_type(Money, lambda v, cls: cls(str(v))).build()
        translator = configuration.get_value_type_translator(Money)
        assert translator is not None
        assert translator.get_translation(5, Money).amount == "5"
        assert configuration.is_structured(Money) is False
