"""Inventory domain models and enums."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class InventoryItemStatus(StrEnum):
    """Inventory item stock status."""

    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


class InventoryItem(BaseModel):
    """Inventory item data transfer object."""

    id: str = Field(..., description="Unique item ID")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")
    house_id: str = Field(..., description="ID of the house stocking the item")
    name: str = Field(..., description="Item name (e.g., 'Paper Towels')")
    quantity: int = Field(default=0, ge=0)
    status: InventoryItemStatus = Field(default=InventoryItemStatus.IN_STOCK)
    last_updated: datetime = Field(..., description="When the item was last created or edited")


class HouseInventorySummary(BaseModel):
    """Per-house inventory counts."""

    house_id: str
    house_name: str
    total_items: int
    low_stock_count: int = Field(..., description="Items that are low or out of stock")
