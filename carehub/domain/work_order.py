"""Work order domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, Field


class WorkOrderStatus(StrEnum):
    """Work order progress."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WorkOrderPriority(StrEnum):
    """How urgent a work order is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


OPEN_WORK_ORDER_STATUSES = frozenset({WorkOrderStatus.OPEN, WorkOrderStatus.IN_PROGRESS})


class WorkOrder(BaseModel):
    """Work order data transfer object."""

    id: str = Field(..., description="Unique work order ID")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")
    title: str = Field(..., description="Short summary (e.g., 'Fix leaky faucet')")
    description: str = Field(default="")
    house_id: str = Field(..., description="ID of the house needing the work")
    status: WorkOrderStatus = Field(default=WorkOrderStatus.OPEN)
    priority: WorkOrderPriority = Field(default=WorkOrderPriority.MEDIUM)
    created_by: str = Field(..., description="Name of the person who reported it")
    assigned_to: str | None = Field(default=None, description="Name of the person doing the work")
