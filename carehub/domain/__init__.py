"""Domain models and DTOs."""

from carehub.domain.appointment import Appointment, AppointmentStatus, CalendarDay, MonthView
from carehub.domain.board import AssignmentBoard, BoardColumn, DashboardSummary, HouseOccupancy
from carehub.domain.house import Address, GeoPoint, House, HouseStatus
from carehub.domain.inventory import HouseInventorySummary, InventoryItem, InventoryItemStatus
from carehub.domain.maintenance import (
    CompletedState,
    DerivedState,
    DerivedStatus,
    HouseMaintenanceSummary,
    MaintenanceFrequency,
    MaintenanceStatus,
    MaintenanceTask,
    MaintenanceTaskView,
)
from carehub.domain.member import BranchOfService, Member, MemberLabel, MemberStatus, PaymentType, VeteranStatus
from carehub.domain.work_order import WorkOrder, WorkOrderPriority, WorkOrderStatus


__all__ = [
    "Address",
    "Appointment",
    "AppointmentStatus",
    "AssignmentBoard",
    "BoardColumn",
    "BranchOfService",
    "CalendarDay",
    "CompletedState",
    "DashboardSummary",
    "DerivedState",
    "DerivedStatus",
    "GeoPoint",
    "House",
    "HouseInventorySummary",
    "HouseMaintenanceSummary",
    "HouseOccupancy",
    "HouseStatus",
    "InventoryItem",
    "InventoryItemStatus",
    "MaintenanceFrequency",
    "MaintenanceStatus",
    "MaintenanceTask",
    "MaintenanceTaskView",
    "Member",
    "MemberLabel",
    "MemberStatus",
    "MonthView",
    "PaymentType",
    "VeteranStatus",
    "WorkOrder",
    "WorkOrderPriority",
    "WorkOrderStatus",
]
