"""
Example 03: Source Expressions

This example demonstrates explicit field registration with source
expressions: renamed properties, session variables (``var:``) and glom paths
(``glom:``, available when glom is installed).
"""

from dataclasses import dataclass

from graph_translate import FieldDescriptor, Optionality, TranslationEngine, configure


@dataclass
class Address:
    street: str
    city: str


@dataclass
class Customer:
    full_name: str
    address: Address
    orders: list[dict]


@dataclass
class Invoice:
    """Invoice assembled from a customer and session variables"""
    customer: str
    city: str
    first_total: float
    currency: str
    note: str = "-"


def main():
    configuration = (
        configure()
        .register(
            Invoice,
            [
                FieldDescriptor("customer", source="full_name"),
                FieldDescriptor("city", source="glom:address.city"),
                FieldDescriptor("first_total", source="orders.0.total"),
                FieldDescriptor("currency", source="var:currency"),
                FieldDescriptor("note", optionality=Optionality.OPTIONAL),
            ],
        )
        .build()
    )
    engine = TranslationEngine(configuration)

    print("=== Source Expressions ===\n")

    customer = Customer(
        full_name="Alice Smith",
        address=Address("Main St 1", "Springfield"),
        orders=[{"total": 99.99}, {"total": 149.5}],
    )
    invoice = engine.translate(customer, Invoice, variables={"currency": "EUR"})
    print(f"translate result: {invoice}")


if __name__ == "__main__":
    main()
