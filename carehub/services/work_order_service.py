"""Work order service for CRUD operations and filtering."""

import logging

from carehub.core.db_client import RecordStore, sanitize_param
from carehub.core.logging import span
from carehub.core.search import matches_term
from carehub.domain.create_models import WorkOrderCreate
from carehub.domain.update_models import WorkOrderUpdate
from carehub.domain.work_order import WorkOrder, WorkOrderPriority, WorkOrderStatus
from carehub.services import house_service


logger = logging.getLogger(__name__)

COLLECTION = "work_orders"


async def create_work_order(*, store: RecordStore, data: WorkOrderCreate) -> WorkOrder:
    """Create a new work order for an active house.

    Raises:
        RecordNotFoundError: If the house does not exist
        ValueError: If the house is archived
    """
    with span("work_order_service.create_work_order"):
        await house_service.require_active_house(store=store, house_id=data.house_id)

        record = await store.create_record(collection=COLLECTION, data=data.model_dump(mode="json"))
        logger.info(
            "Created work order",
            extra={"work_order_id": record["id"], "house_id": data.house_id, "priority": str(data.priority)},
        )
        return WorkOrder.model_validate(record)


async def get_work_order(*, store: RecordStore, work_order_id: str) -> WorkOrder:
    """Get a work order by ID.

    Raises:
        RecordNotFoundError: If the work order does not exist
    """
    record = await store.get_record(collection=COLLECTION, record_id=work_order_id)
    return WorkOrder.model_validate(record)


async def update_work_order(*, store: RecordStore, work_order_id: str, changes: WorkOrderUpdate) -> WorkOrder:
    """Apply the fields set in ``changes`` to a work order.

    Moving a work order to another house requires that house to be active.

    Raises:
        RecordNotFoundError: If the work order or new house does not exist
        ValueError: If the new house is archived
    """
    with span("work_order_service.update_work_order"):
        current = await store.get_record(collection=COLLECTION, record_id=work_order_id)
        data = changes.model_dump(mode="json", exclude_unset=True)
        if not data:
            return WorkOrder.model_validate(current)

        if "house_id" in data and data["house_id"] != current["house_id"]:
            await house_service.require_active_house(store=store, house_id=data["house_id"])

        merged = WorkOrder.model_validate({**current, **data})
        record = await store.update_record(
            collection=COLLECTION,
            record_id=work_order_id,
            data=merged.model_dump(mode="json", exclude={"id", "created", "updated"}),
        )
        logger.info("Updated work order", extra={"work_order_id": work_order_id, "fields": sorted(data)})
        return WorkOrder.model_validate(record)


async def list_work_orders(
    *,
    store: RecordStore,
    status: WorkOrderStatus | None = None,
    priority: WorkOrderPriority | None = None,
    house_id: str | None = None,
    search: str | None = None,
) -> list[WorkOrder]:
    """List work orders, newest first, with optional filters.

    The search term matches title, description, house name, assignee and creator.
    """
    with span("work_order_service.list_work_orders"):
        filters = []
        if status:
            filters.append(f'status = "{sanitize_param(status)}"')
        if priority:
            filters.append(f'priority = "{sanitize_param(priority)}"')
        if house_id:
            filters.append(f'house_id = "{sanitize_param(house_id)}"')

        records = await store.list_records(
            collection=COLLECTION,
            filter_query=" && ".join(filters),
            sort="-created",
        )
        work_orders = [WorkOrder.model_validate(r) for r in records]

        if not search:
            return work_orders

        house_names = {h.id: h.name for h in await house_service.list_houses(store=store)}
        return [
            wo
            for wo in work_orders
            if matches_term(
                search,
                wo.title,
                wo.description,
                house_names.get(wo.house_id),
                wo.assigned_to,
                wo.created_by,
            )
        ]
