"""
Example 02: Object Graphs

This example demonstrates translating nested collections and cyclic
references. Every source object is translated at most once per session, so
shared and cyclic references survive the translation.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel
from sortedcontainers import SortedSet

from graph_translate import TranslationEngine


@dataclass(eq=False)
class Order:
    """Order entity"""
    id: int
    total: float
    customer: Customer | None = None


@dataclass(eq=False)
class Customer:
    """Customer aggregate root with orders collection"""
    name: str
    orders: list[Order] = field(default_factory=list)
    tags: SortedSet = field(default_factory=SortedSet)


class OrderSummary(BaseModel):
    """Pydantic destination"""
    id: int
    total: float


@dataclass(eq=False)
class OrderDto:
    id: int
    total: str
    customer: CustomerDto | None = None


@dataclass(eq=False)
class CustomerDto:
    name: str
    orders: tuple[OrderDto, ...] = ()
    tags: SortedSet = field(default_factory=SortedSet)


def main():
    engine = TranslationEngine()

    customer = Customer(name="Alice", tags=SortedSet(["vip", "early"]))
    customer.orders = [Order(1, 99.99, customer), Order(2, 149.5, customer)]

    print("=== Object Graphs ===\n")

    dto = engine.translate(customer, CustomerDto)
    print(f"Customer: {dto.name}")
    print(f"Orders ({len(dto.orders)}):")
    for order in dto.orders:
        print(f"  - Order #{order.id}: ${order.total}")
    print(f"Back references close the cycle: {all(o.customer is dto for o in dto.orders)}")

    # Sorted containers stay sorted after translation
    dto.tags.add("churn-risk")
    print(f"Tags (copied, still sorted): {list(dto.tags)}")
    print(f"Source tags untouched: {list(customer.tags)}\n")

    # Pydantic models are valid destinations
    summaries = engine.get_each_translation(customer.orders, OrderSummary)
    for summary in summaries:
        print(f"summary: {summary.model_dump()}")


if __name__ == "__main__":
    main()
