# Overview: Existence checks for the entities an accounting record may reference.

from __future__ import annotations

from enum import Enum
from typing import Iterable

from ..validation import InvalidArgumentError, require_positive_id
from . import entity_store


class EntityKind(str, Enum):
    EMPLOYEE = "Employee"
    SUPPLY = "Supply"
    STORAGE_ZONE = "StorageZone"


_STORES = {
    EntityKind.EMPLOYEE: entity_store.employees,
    EntityKind.SUPPLY: entity_store.supplies,
    EntityKind.STORAGE_ZONE: entity_store.storage_zones,
}


def exists(kind: EntityKind, entity_id: int) -> bool:
    """
    Return True if the referenced entity is present right now.

    "Not found" is a normal False result. Only a malformed id
    (non-integer or <= 0) or an unknown kind raises InvalidArgumentError.
    Read-only: safe to call repeatedly and concurrently.
    """
    try:
        kind = EntityKind(kind)
    except ValueError:
        raise InvalidArgumentError(f"Unknown entity kind: {kind!r}")
    require_positive_id(entity_id, f"{kind.value} id")
    return _STORES[kind].exists(entity_id)


def missing_references(references: Iterable[tuple[EntityKind, int]]) -> list[str]:
    """
    Check every (kind, id) pair and describe the ones that do not exist.

    All references are checked, so a caller gets the full list of absent
    entities in one error instead of only the first.
    """
    return [f"{EntityKind(kind).value} {entity_id}" for kind, entity_id in references if not exists(kind, entity_id)]
