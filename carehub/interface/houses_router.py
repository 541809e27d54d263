"""House endpoints."""

from fastapi import APIRouter, Depends, Query, status

from carehub.core.db_client import RecordStore
from carehub.domain.board import HouseOccupancy
from carehub.domain.create_models import HouseCreate
from carehub.domain.house import House, HouseStatus
from carehub.domain.update_models import HouseUpdate
from carehub.interface.deps import get_store
from carehub.services import house_service


router = APIRouter(prefix="/api/houses", tags=["houses"])


@router.get("")
async def list_houses(
    status_filter: HouseStatus | None = Query(default=None, alias="status"),
    search: str | None = None,
    store: RecordStore = Depends(get_store),
) -> list[House]:
    """List houses by name."""
    return await house_service.list_houses(store=store, status=status_filter, search=search)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_house(data: HouseCreate, store: RecordStore = Depends(get_store)) -> House:
    """Create a house."""
    return await house_service.create_house(store=store, data=data)


@router.get("/{house_id}")
async def get_house(house_id: str, store: RecordStore = Depends(get_store)) -> House:
    """Get a house by ID."""
    return await house_service.get_house(store=store, house_id=house_id)


@router.patch("/{house_id}")
async def update_house(house_id: str, changes: HouseUpdate, store: RecordStore = Depends(get_store)) -> House:
    """Edit a house; archive it by setting status to archived."""
    return await house_service.update_house(store=store, house_id=house_id, changes=changes)


@router.get("/{house_id}/occupancy")
async def get_occupancy(house_id: str, store: RecordStore = Depends(get_store)) -> HouseOccupancy:
    """Members assigned to a house against its capacity."""
    return await house_service.get_occupancy(store=store, house_id=house_id)
