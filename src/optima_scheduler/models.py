"""
Data models for weekly slot allocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# One slot per working day
CAPACITY = 5


class WorkItemStatus(str, Enum):
    """Lifecycle status of a work item. The engine only consumes PENDING."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


@dataclass(frozen=True)
class WorkItem:
    id: int
    deadline: int
    revenue: Decimal
    status: WorkItemStatus = WorkItemStatus.PENDING
    title: str = ""


class SchedulableItem(BaseModel):
    """Preconditions a work item must meet before it can be scheduled."""

    model_config = ConfigDict(strict=True, frozen=True)

    deadline: int = Field(..., ge=1, description="Working days until due")
    revenue: (
        Annotated[Decimal, Field(ge=0, allow_inf_nan=False)]
        | Annotated[int, Field(ge=0)]
    ) = Field(..., description="Exact amount; floats are rejected")
    status: Literal[WorkItemStatus.PENDING]


@dataclass(frozen=True)
class StrategyInfo:
    """Key and display name of a registered strategy."""

    key: str
    name: str


@dataclass
class ScheduleResult:
    assignment: dict[int, WorkItem] = field(default_factory=dict)
    total_value: Decimal = Decimal("0")
    strategy: str = ""
    unscheduled_ids: list[int] = field(default_factory=list)

    @property
    def assigned_count(self) -> int:
        return len(self.assignment)

    def slot_of(self, item_id: int) -> int | None:
        """Return the slot holding ``item_id``, or None if it was not scheduled."""
        for slot, item in self.assignment.items():
            if item.id == item_id:
                return slot
        return None
