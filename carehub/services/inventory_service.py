"""Inventory service for per-house stock tracking."""

import logging
from datetime import UTC, datetime

from carehub.core.db_client import RecordStore, sanitize_param
from carehub.core.logging import span
from carehub.core.search import matches_term
from carehub.domain.create_models import InventoryItemCreate
from carehub.domain.inventory import HouseInventorySummary, InventoryItem, InventoryItemStatus
from carehub.domain.update_models import InventoryItemUpdate
from carehub.services import house_service


logger = logging.getLogger(__name__)

COLLECTION = "inventory_items"

SHORTAGE_STATUSES = frozenset({InventoryItemStatus.LOW_STOCK, InventoryItemStatus.OUT_OF_STOCK})


async def create_item(*, store: RecordStore, data: InventoryItemCreate) -> InventoryItem:
    """Add an item to a house's inventory.

    Raises:
        RecordNotFoundError: If the house does not exist
        ValueError: If the house is archived
    """
    with span("inventory_service.create_item"):
        await house_service.require_active_house(store=store, house_id=data.house_id)

        record = await store.create_record(
            collection=COLLECTION,
            data={**data.model_dump(mode="json"), "last_updated": datetime.now(UTC)},
        )
        logger.info("Added inventory item %s to house %s", data.name, data.house_id)
        return InventoryItem.model_validate(record)


async def get_item(*, store: RecordStore, item_id: str) -> InventoryItem:
    """Get an inventory item by ID.

    Raises:
        RecordNotFoundError: If the item does not exist
    """
    record = await store.get_record(collection=COLLECTION, record_id=item_id)
    return InventoryItem.model_validate(record)


async def update_item(*, store: RecordStore, item_id: str, changes: InventoryItemUpdate) -> InventoryItem:
    """Apply the fields set in ``changes`` and stamp the item as updated.

    Raises:
        RecordNotFoundError: If the item or new house does not exist
        ValueError: If the new house is archived
    """
    with span("inventory_service.update_item"):
        current = await store.get_record(collection=COLLECTION, record_id=item_id)
        data = changes.model_dump(mode="json", exclude_unset=True, exclude_none=True)

        if "house_id" in data and data["house_id"] != current["house_id"]:
            await house_service.require_active_house(store=store, house_id=data["house_id"])

        merged = InventoryItem.model_validate({**current, **data})
        merged.last_updated = datetime.now(UTC)

        record = await store.update_record(
            collection=COLLECTION,
            record_id=item_id,
            data=merged.model_dump(mode="json", exclude={"id", "created", "updated"}),
        )
        logger.info("Updated inventory item %s", item_id)
        return InventoryItem.model_validate(record)


async def list_items(
    *,
    store: RecordStore,
    house_id: str | None = None,
    status: InventoryItemStatus | None = None,
    search: str | None = None,
) -> list[InventoryItem]:
    """List inventory items by name, optionally for one house, one status or matching a name search."""
    with span("inventory_service.list_items"):
        filters = []
        if house_id:
            filters.append(f'house_id = "{sanitize_param(house_id)}"')
        if status:
            filters.append(f'status = "{sanitize_param(status)}"')

        records = await store.list_records(collection=COLLECTION, filter_query=" && ".join(filters), sort="name")
        items = [InventoryItem.model_validate(r) for r in records]
        return [i for i in items if matches_term(search, i.name)]


async def summarize_houses(*, store: RecordStore, search: str | None = None) -> list[HouseInventorySummary]:
    """Per active house: item count and how many items are low or out of stock.

    Args:
        store: Session record store
        search: Case-insensitive match on the house name
    """
    with span("inventory_service.summarize_houses"):
        houses = [h for h in await house_service.list_active_houses(store=store) if matches_term(search, h.name)]
        items = await list_items(store=store)

        summaries = []
        for house in houses:
            house_items = [i for i in items if i.house_id == house.id]
            summaries.append(
                HouseInventorySummary(
                    house_id=house.id,
                    house_name=house.name,
                    total_items=len(house_items),
                    low_stock_count=sum(1 for i in house_items if i.status in SHORTAGE_STATUSES),
                )
            )
        return summaries
