# FILE: models/requests.py
from datetime import date
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.vocabulary import (
    ItemType,
    PropertyStatus,
    QUANTITY_FIELDS,
    RequestKind,
    TaskPriority,
    TaskStatus,
)

PRICE_CURRENCY = "USD"
PRICE_SOURCE = "Voice Input"


class _CreationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_record(self) -> dict:
        """Column values for the persistence layer (the discriminator is not a column)."""
        return self.model_dump(exclude={"kind"})


# -----------------------------
# Task
# -----------------------------
class TaskRequest(_CreationRequest):
    kind: Literal[RequestKind.TASK] = RequestKind.TASK

    title: str = Field(..., min_length=1)
    description: Optional[str] = Field(None)
    status: TaskStatus = Field(default=TaskStatus.TODO)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    due_date: Optional[date] = Field(None, description="Day the task is due")
    is_project_task: bool = Field(default=False)
    project_id: Optional[str] = Field(None)
    created_by: str
    assignees: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def project_task_flag_matches_project(self):
        if self.is_project_task != (self.project_id is not None):
            raise ValueError("is_project_task must be set exactly when project_id is set")
        return self


# -----------------------------
# Inventory item
# -----------------------------
class InventoryRequest(_CreationRequest):
    kind: Literal[RequestKind.INVENTORY] = RequestKind.INVENTORY

    title: str = Field(..., min_length=1)
    description: Optional[str] = Field(None)
    item_type: ItemType = Field(default=ItemType.NEEDED_SUPPLY)
    fundraiser: bool = Field(default=False)
    tags: Optional[List[str]] = Field(None, description="Unset rather than empty")

    quantity_needed: Optional[int] = Field(None, ge=0)
    quantity_owned: Optional[int] = Field(None, ge=0)
    quantity_borrowed: Optional[int] = Field(None, ge=0)

    price: Optional[float] = Field(None, ge=0)
    estimated_price: Optional[bool] = Field(None)
    price_currency: Literal["USD"] = PRICE_CURRENCY
    price_date: Optional[date] = Field(None)
    price_source: str = PRICE_SOURCE

    project_id: Optional[str] = Field(None)
    added_by: str
    assignees: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def single_quantity_for_item_type(self):
        expected = self.item_type.quantity_field
        for name in QUANTITY_FIELDS:
            if name != expected and getattr(self, name) is not None:
                raise ValueError(
                    f"{name} cannot be set for a {self.item_type.value} item"
                )
        return self

    @model_validator(mode="after")
    def price_metadata_follows_price(self):
        if self.price is None and (self.estimated_price or self.price_date):
            raise ValueError("estimated_price and price_date require a price")
        return self


# -----------------------------
# Project
# -----------------------------
class ProjectRequest(_CreationRequest):
    kind: Literal[RequestKind.PROJECT] = RequestKind.PROJECT

    title: str = Field(..., min_length=1)
    location: Optional[str] = Field(None)
    property_status: PropertyStatus = Field(default=PropertyStatus.POTENTIAL_PROPERTY)
    values_mission_goals: Optional[str] = Field(None)
    created_by: str


# -----------------------------
# Business plan
# -----------------------------
class BusinessPlanRequest(_CreationRequest):
    """Only ever built when a project is bound; project_id is therefore mandatory."""

    kind: Literal[RequestKind.BUSINESS_PLAN] = RequestKind.BUSINESS_PLAN

    project_id: str = Field(..., min_length=1)
    project_title: Optional[str] = Field(None)
    query: str = Field(..., min_length=1)


CreationRequest = Annotated[
    Union[TaskRequest, InventoryRequest, ProjectRequest, BusinessPlanRequest],
    Field(discriminator="kind"),
]
