"""
Example 01: Basic Translation

This example demonstrates translating a domain object into a DTO with
graph_translate's TranslationEngine.
"""

from dataclasses import dataclass
from enum import Enum

from graph_translate import TranslationEngine


class Status(Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


@dataclass
class User:
    """Domain entity"""
    id: int
    name: str
    email: str
    status: str


@dataclass
class UserDto:
    """Destination DTO: matching field names are copied, values are converted"""
    id: str
    name: str
    status: Status


def main():
    engine = TranslationEngine()

    print("=== Basic Translation ===\n")

    user = User(id=1, name="Alice", email="alice@example.com", status="ACTIVE")
    dto = engine.translate(user, UserDto)
    print(f"translate result: {dto}")
    print(f"id converted to str: {dto.id!r}")
    print(f"status converted to enum: {dto.status}\n")

    # Mappings are valid sources too
    dto = engine.translate({"id": 2, "name": "Bob", "status": "suspended"}, UserDto)
    print(f"from a dict: {dto}\n")

    # update: populate an existing destination in place
    existing = UserDto(id="0", name="stale", status=Status.SUSPENDED)
    engine.update(user, existing)
    print(f"update result: {existing}\n")

    # get_each_translation: translate a batch within one session
    users = [user, User(id=3, name="Charlie", email="charlie@example.com", status="ACTIVE")]
    dtos = engine.get_each_translation(users, UserDto)
    print(f"get_each_translation result ({len(dtos)} items):")
    for item in dtos:
        print(f"  - {item.name} ({item.status.value})")

    # An item expression selects one property of each source first
    names = engine.get_each_translation(users, str, "email")
    print(f"emails: {names}")


if __name__ == "__main__":
    main()
