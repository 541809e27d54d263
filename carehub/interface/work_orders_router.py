"""Work order endpoints."""

from fastapi import APIRouter, Depends, Query, status

from carehub.core.db_client import RecordStore
from carehub.domain.create_models import WorkOrderCreate
from carehub.domain.update_models import WorkOrderUpdate
from carehub.domain.work_order import WorkOrder, WorkOrderPriority, WorkOrderStatus
from carehub.interface.deps import get_store
from carehub.services import work_order_service


router = APIRouter(prefix="/api/work-orders", tags=["work_orders"])


@router.get("")
async def list_work_orders(
    status_filter: WorkOrderStatus | None = Query(default=None, alias="status"),
    priority: WorkOrderPriority | None = None,
    house_id: str | None = None,
    search: str | None = None,
    store: RecordStore = Depends(get_store),
) -> list[WorkOrder]:
    """List work orders, newest first."""
    return await work_order_service.list_work_orders(
        store=store,
        status=status_filter,
        priority=priority,
        house_id=house_id,
        search=search,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_work_order(data: WorkOrderCreate, store: RecordStore = Depends(get_store)) -> WorkOrder:
    """Report a work order for an active house."""
    return await work_order_service.create_work_order(store=store, data=data)


@router.get("/{work_order_id}")
async def get_work_order(work_order_id: str, store: RecordStore = Depends(get_store)) -> WorkOrder:
    """Get a work order by ID."""
    return await work_order_service.get_work_order(store=store, work_order_id=work_order_id)


@router.patch("/{work_order_id}")
async def update_work_order(
    work_order_id: str,
    changes: WorkOrderUpdate,
    store: RecordStore = Depends(get_store),
) -> WorkOrder:
    """Edit a work order or move it through its statuses."""
    return await work_order_service.update_work_order(store=store, work_order_id=work_order_id, changes=changes)
