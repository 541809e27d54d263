"""Dashboard headline figures across every collection."""

import logging
from datetime import date

from carehub.core.db_client import RecordStore
from carehub.core.logging import span
from carehub.domain.board import DashboardSummary
from carehub.domain.inventory import InventoryItemStatus
from carehub.domain.maintenance import MaintenanceStatus
from carehub.domain.member import MemberStatus
from carehub.domain.work_order import OPEN_WORK_ORDER_STATUSES, WorkOrderPriority
from carehub.services import inventory_service, maintenance_service, member_service, work_order_service


logger = logging.getLogger(__name__)


async def get_summary(*, store: RecordStore, today: date) -> DashboardSummary:
    """Collect the dashboard figures, resolving maintenance statuses for ``today``."""
    with span("dashboard_service.get_summary"):
        members = await member_service.list_members(store=store, status=MemberStatus.ACTIVE)
        tasks = await maintenance_service.list_tasks(store=store, today=today)
        work_orders = await work_order_service.list_work_orders(store=store)
        items = await inventory_service.list_items(store=store)

        open_work_orders = [wo for wo in work_orders if wo.status in OPEN_WORK_ORDER_STATUSES]

        summary = DashboardSummary(
            active_member_count=len(members),
            urgent_maintenance=[
                t for t in tasks if t.status in {MaintenanceStatus.OVERDUE, MaintenanceStatus.DUE_TODAY}
            ],
            due_soon_maintenance=[t for t in tasks if t.status == MaintenanceStatus.DUE_SOON],
            open_work_orders=open_work_orders,
            high_priority_work_orders=[wo for wo in open_work_orders if wo.priority == WorkOrderPriority.HIGH],
            low_stock_items=[i for i in items if i.status == InventoryItemStatus.LOW_STOCK],
            out_of_stock_items=[i for i in items if i.status == InventoryItemStatus.OUT_OF_STOCK],
        )
        logger.debug(
            "Built dashboard summary",
            extra={
                "active_members": summary.active_member_count,
                "urgent_maintenance": len(summary.urgent_maintenance),
                "open_work_orders": len(summary.open_work_orders),
            },
        )
        return summary
