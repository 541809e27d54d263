"""House service for CRUD operations and occupancy."""

import logging

from carehub.core.db_client import RecordStore, sanitize_param
from carehub.core.logging import log_audit_event, span
from carehub.core.search import matches_term
from carehub.domain.board import HouseOccupancy
from carehub.domain.create_models import HouseCreate
from carehub.domain.house import House, HouseStatus
from carehub.domain.member import MemberStatus
from carehub.domain.update_models import HouseUpdate


logger = logging.getLogger(__name__)

COLLECTION = "houses"


async def create_house(*, store: RecordStore, data: HouseCreate) -> House:
    """Create a new house.

    Args:
        store: Session record store
        data: Validated house fields

    Returns:
        Created house
    """
    with span("house_service.create_house"):
        record = await store.create_record(collection=COLLECTION, data=data.model_dump(mode="json"))
        log_audit_event("house_created", entity=COLLECTION, entity_id=record["id"], house_name=data.name)
        return House.model_validate(record)


async def get_house(*, store: RecordStore, house_id: str) -> House:
    """Get a house by ID.

    Raises:
        RecordNotFoundError: If the house does not exist
    """
    record = await store.get_record(collection=COLLECTION, record_id=house_id)
    return House.model_validate(record)


async def require_active_house(*, store: RecordStore, house_id: str) -> House:
    """Get a house and check it is in service.

    Raises:
        RecordNotFoundError: If the house does not exist
        ValueError: If the house is archived
    """
    house = await get_house(store=store, house_id=house_id)
    if house.status != HouseStatus.ACTIVE:
        msg = f"House {house.name} is archived"
        raise ValueError(msg)
    return house


async def update_house(*, store: RecordStore, house_id: str, changes: HouseUpdate) -> House:
    """Apply the fields set in ``changes`` to a house.

    Raises:
        RecordNotFoundError: If the house does not exist
        pydantic.ValidationError: If the merged house is invalid
    """
    with span("house_service.update_house"):
        current = await store.get_record(collection=COLLECTION, record_id=house_id)
        data = changes.model_dump(mode="json", exclude_unset=True)
        if not data:
            return House.model_validate(current)

        merged = House.model_validate({**current, **data})
        record = await store.update_record(
            collection=COLLECTION,
            record_id=house_id,
            data=merged.model_dump(mode="json", exclude={"id", "created", "updated"}),
        )
        log_audit_event("house_updated", entity=COLLECTION, entity_id=house_id, fields=sorted(data))
        return House.model_validate(record)


async def list_houses(
    *,
    store: RecordStore,
    status: HouseStatus | None = None,
    search: str | None = None,
) -> list[House]:
    """List houses, optionally filtered by status and a search term.

    The search term matches name, street, city, zip and tags.
    """
    with span("house_service.list_houses"):
        filter_query = f'status = "{sanitize_param(status)}"' if status else ""
        records = await store.list_records(collection=COLLECTION, filter_query=filter_query, sort="name")
        houses = [House.model_validate(r) for r in records]

        return [
            h
            for h in houses
            if matches_term(search, h.name, h.address.street, h.address.city, h.address.zip, h.tags)
        ]


async def list_active_houses(*, store: RecordStore, search: str | None = None) -> list[House]:
    """List houses that are in service."""
    return await list_houses(store=store, status=HouseStatus.ACTIVE, search=search)


async def get_occupancy(*, store: RecordStore, house_id: str) -> HouseOccupancy:
    """Count non-archived members assigned to a house against its capacity.

    Raises:
        RecordNotFoundError: If the house does not exist
    """
    house = await get_house(store=store, house_id=house_id)
    member_count = await store.count_records(
        collection="members",
        filter_query=f'house_id = "{sanitize_param(house_id)}" && status != "{MemberStatus.ARCHIVED}"',
    )
    return HouseOccupancy(
        house_id=house.id,
        member_count=member_count,
        capacity=house.capacity,
        over_capacity=member_count > house.capacity,
    )
