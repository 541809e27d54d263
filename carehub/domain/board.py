"""Assignment board and dashboard read models."""

from pydantic import BaseModel, Field

from carehub.domain.inventory import InventoryItem
from carehub.domain.maintenance import MaintenanceTaskView
from carehub.domain.member import Member
from carehub.domain.work_order import WorkOrder


class HouseOccupancy(BaseModel):
    """How full a house is."""

    house_id: str
    member_count: int = Field(..., description="Non-archived members assigned to the house")
    capacity: int
    over_capacity: bool


class BoardColumn(BaseModel):
    """One drop target on the assignment board: a house or the unassigned pool."""

    house_id: str | None = Field(..., description="None for the unassigned column")
    title: str
    member_count: int = Field(..., description="Non-archived members in the column, ignoring board filters")
    capacity: int | None = Field(default=None, description="House capacity; None for the unassigned column")
    over_capacity: bool = False
    members: list[Member] = Field(default_factory=list, description="Members matching the board filters")


class AssignmentBoard(BaseModel):
    """Unassigned column followed by one column per active house."""

    columns: list[BoardColumn]


class DashboardSummary(BaseModel):
    """Headline counts for the dashboard."""

    active_member_count: int
    urgent_maintenance: list[MaintenanceTaskView] = Field(..., description="Overdue or due today")
    due_soon_maintenance: list[MaintenanceTaskView]
    open_work_orders: list[WorkOrder] = Field(..., description="Open or in progress")
    high_priority_work_orders: list[WorkOrder]
    low_stock_items: list[InventoryItem]
    out_of_stock_items: list[InventoryItem]
