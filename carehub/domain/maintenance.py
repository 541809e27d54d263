"""Maintenance task domain models and enums."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class MaintenanceFrequency(StrEnum):
    """How often a recurring maintenance task comes due."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUALLY = "semi-annually"
    ANNUALLY = "annually"


class DerivedStatus(StrEnum):
    """Urgency computed from the next due date on every read."""

    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"


class MaintenanceStatus(StrEnum):
    """Status shown to users: a derived urgency or the sticky completion."""

    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


class DerivedState(BaseModel):
    """Task status is recomputed from its next due date."""

    kind: Literal["derived"] = "derived"


class CompletedState(BaseModel):
    """Task was explicitly marked complete; overrides the derived status until reverted."""

    kind: Literal["completed"] = "completed"
    completed_at: datetime = Field(..., description="When the task was marked complete")


TaskState = Annotated[DerivedState | CompletedState, Field(discriminator="kind")]


class MaintenanceTask(BaseModel):
    """Maintenance task data transfer object (as persisted)."""

    id: str = Field(..., description="Unique task ID")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")
    house_id: str = Field(..., description="ID of the house the task belongs to")
    task_name: str = Field(..., description="Task name (e.g., 'HVAC Filter Replacement')")
    description: str = Field(default="", description="Detailed task description")
    frequency: MaintenanceFrequency = Field(..., description="Recurrence interval")
    last_completed_date: datetime = Field(..., description="When the task was last performed")
    next_due_date: datetime = Field(..., description="Derived: last completed date plus one period")
    state: TaskState = Field(default_factory=DerivedState, description="Derived or sticky completed state")


class MaintenanceTaskView(MaintenanceTask):
    """Maintenance task with its status resolved for a given day."""

    status: MaintenanceStatus = Field(..., description="Current status at read time")


class HouseMaintenanceSummary(BaseModel):
    """Per-house maintenance counts for the schedule overview."""

    house_id: str
    house_name: str
    total_tasks: int
    attention_count: int = Field(..., description="Tasks that are overdue, due today or due soon")
