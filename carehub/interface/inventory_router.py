"""Inventory endpoints."""

from fastapi import APIRouter, Depends, Query, status

from carehub.core.db_client import RecordStore
from carehub.domain.create_models import InventoryItemCreate
from carehub.domain.inventory import HouseInventorySummary, InventoryItem, InventoryItemStatus
from carehub.domain.update_models import InventoryItemUpdate
from carehub.interface.deps import get_store
from carehub.services import inventory_service


router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("/items")
async def list_items(
    house_id: str | None = None,
    status_filter: InventoryItemStatus | None = Query(default=None, alias="status"),
    search: str | None = None,
    store: RecordStore = Depends(get_store),
) -> list[InventoryItem]:
    """List inventory items by name."""
    return await inventory_service.list_items(store=store, house_id=house_id, status=status_filter, search=search)


@router.post("/items", status_code=status.HTTP_201_CREATED)
async def create_item(data: InventoryItemCreate, store: RecordStore = Depends(get_store)) -> InventoryItem:
    """Add an item to an active house."""
    return await inventory_service.create_item(store=store, data=data)


@router.get("/items/{item_id}")
async def get_item(item_id: str, store: RecordStore = Depends(get_store)) -> InventoryItem:
    """Get an inventory item by ID."""
    return await inventory_service.get_item(store=store, item_id=item_id)


@router.patch("/items/{item_id}")
async def update_item(
    item_id: str,
    changes: InventoryItemUpdate,
    store: RecordStore = Depends(get_store),
) -> InventoryItem:
    """Edit quantity, status or name of an item."""
    return await inventory_service.update_item(store=store, item_id=item_id, changes=changes)


@router.get("/houses")
async def summarize_houses(
    search: str | None = None,
    store: RecordStore = Depends(get_store),
) -> list[HouseInventorySummary]:
    """Per active house: item count and items low or out of stock."""
    return await inventory_service.summarize_houses(store=store, search=search)
