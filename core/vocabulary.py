# core/vocabulary.py
from enum import Enum


class RequestKind(str, Enum):
    """
    The four things a voice command can create.
    """

    TASK = "task"
    INVENTORY = "inventory"
    PROJECT = "project"
    BUSINESS_PLAN = "business_plan"

    # -----------------------------
    # Semantic helpers (SAFE)
    # -----------------------------
    def is_persisted(self) -> bool:
        """Business-plan requests only navigate; everything else is written."""
        return self is not RequestKind.BUSINESS_PLAN


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ItemType(str, Enum):
    NEEDED_SUPPLY = "needed_supply"
    OWNED_RESOURCE = "owned_resource"
    BORROWED_OR_RENTAL = "borrowed_or_rental"

    @property
    def quantity_field(self) -> str:
        """Name of the only quantity column populated for this item type."""
        return _QUANTITY_FIELDS[self]


_QUANTITY_FIELDS = {
    ItemType.NEEDED_SUPPLY: "quantity_needed",
    ItemType.OWNED_RESOURCE: "quantity_owned",
    ItemType.BORROWED_OR_RENTAL: "quantity_borrowed",
}

QUANTITY_FIELDS = tuple(_QUANTITY_FIELDS.values())


class PropertyStatus(str, Enum):
    OWNED_LAND = "owned_land"
    POTENTIAL_PROPERTY = "potential_property"
