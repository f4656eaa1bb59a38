"""Integration tests translating a customer/order graph end to end."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel

from graph_translate.core.configuration import configure
from graph_translate.core.engine import TranslationEngine
from graph_translate.core.exceptions import MissingSourcePropertyError, NoDestinationError
from graph_translate.mapping.plan import FieldDescriptor

# Source model


@dataclass(eq=False)
class Address:
    street: str
    city: str


@dataclass(eq=False)
class Line:
    sku: str
    quantity: int


@dataclass(eq=False)
class Customer:
    name: str
    address: Address
    orders: list[Order] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Order:
    number: int
    customer: Customer
    lines: list[Line] = field(default_factory=list)


# Destination model


class LineDto(BaseModel):
    sku: str
    quantity: int


@dataclass(eq=False)
class CustomerDto:
    name: str
    orders: list[OrderDto] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass(eq=False)
class OrderDto:
    number: int
    customer: CustomerDto | None = None
    lines: tuple[LineDto, ...] = ()


@dataclass
class Invoice:
    number: int
    currency: str
    city: str


@pytest.fixture
def customer() -> Customer:
    shared = Line("pen", 2)
    ona = Customer("Ona", Address("Gedimino 1", "Vilnius"), tags=["vip"])
    ona.orders = [
        Order(1, ona, [shared, Line("ink", 1)]),
        Order(2, ona, [shared]),
    ]
    return ona


class TestGraph:
    def test_nested_collections(self, engine: TranslationEngine, customer: Customer) -> None:
        dto = engine.translate(customer, CustomerDto)

        assert dto is not None
        assert dto.name == "Ona"
        assert [order.number for order in dto.orders] == [1, 2]
        first = dto.orders[0]
        assert isinstance(first.lines, tuple)
        assert [line.sku for line in first.lines] == ["pen", "ink"]
        assert all(isinstance(line, LineDto) for line in first.lines)

    def test_cycle_closes_on_same_instance(
        self, engine: TranslationEngine, customer: Customer
    ) -> None:
        dto = engine.translate(customer, CustomerDto)

        assert dto is not None
        assert all(order.customer is dto for order in dto.orders)

    def test_shared_source_translates_once(
        self, engine: TranslationEngine, customer: Customer
    ) -> None:
        dto = engine.translate(customer, CustomerDto)

        assert dto is not None
        assert dto.orders[0].lines[0] is dto.orders[1].lines[0]

    def test_value_lists_are_copied(self, engine: TranslationEngine, customer: Customer) -> None:
        dto = engine.translate(customer, CustomerDto)

        assert dto is not None
        assert dto.tags == ["vip"]
        assert dto.tags is not customer.tags

    def test_separate_calls_do_not_share_cache(
        self, engine: TranslationEngine, customer: Customer
    ) -> None:
        assert engine.translate(customer, CustomerDto) is not engine.translate(
            customer, CustomerDto
        )

    def test_each_translation_shares_one_session(
        self, engine: TranslationEngine, customer: Customer
    ) -> None:
        orders = engine.get_each_translation(customer.orders, OrderDto)

        assert isinstance(orders, list)
        assert orders[0] is not None and orders[1] is not None
        assert orders[0].customer is orders[1].customer

    def test_each_translation_with_item_expression(
        self, engine: TranslationEngine, customer: Customer
    ) -> None:
        names = engine.get_each_translation(customer.orders, str, "number")
        assert names == ["1", "2"]

    def test_missing_property(self, engine: TranslationEngine) -> None:
        with pytest.raises(MissingSourcePropertyError, match="number"):
            engine.translate({"customer": None}, OrderDto)


class TestUpdate:
    def test_update_existing_destination(
        self, engine: TranslationEngine, customer: Customer
    ) -> None:
        dto = CustomerDto("stale")

        engine.update(customer, dto)

        assert dto.name == "Ona"
        assert len(dto.orders) == 2
        # The updated destination is not cached, so the back reference is a new translation
        back_reference = dto.orders[0].customer
        assert back_reference is not dto
        assert back_reference is dto.orders[1].customer

    def test_update_requires_destination(self, engine: TranslationEngine) -> None:
        with pytest.raises(NoDestinationError):
            engine.update({"name": "x"}, None)


class TestSourceDialects:
    def test_variables(self) -> None:
        engine = TranslationEngine(
            configure()
            .extensions()
            .register(
                Invoice,
                [
                    "number",
                    FieldDescriptor("currency", source="var:currency"),
                    FieldDescriptor("city", source="var:customer.address.city"),
                ],
            )
            .build()
        )
        order = {"number": 7}
        customer = Customer("Ona", Address("Gedimino 1", "Vilnius"))

        invoice = engine.translate(
            order, Invoice, variables={"currency": "EUR", "customer": customer}
        )

        assert invoice == Invoice(7, "EUR", "Vilnius")

    def test_glom_paths(self, customer: Customer) -> None:
        pytest.importorskip("glom")
        engine = TranslationEngine(
            configure()
            .register(
                Invoice,
                [
                    FieldDescriptor("number", source="glom:orders.1.number"),
                    FieldDescriptor("currency", source="var:currency"),
                    FieldDescriptor("city", source="address.city"),
                ],
            )
            .build()
        )

        invoice = engine.translate(customer, Invoice, variables={"currency": "EUR"})

        assert invoice == Invoice(2, "EUR", "Vilnius")


class TestSettings:
    def test_from_settings_without_defensive_copies(self, customer: Customer) -> None:
        engine = TranslationEngine.from_settings({"perform_defensive_copies": False})

        dto = engine.translate(customer, CustomerDto)

        assert dto is not None
        assert dto.tags is customer.tags

    def test_lenient_engine_skips_missing_fields(self) -> None:
        engine = TranslationEngine.from_settings({"source_property_required": False})

        dto = engine.translate({"number": 3}, OrderDto)

        assert dto is not None
        assert dto.number == 3
        assert dto.customer is None
        assert dto.lines == ()
