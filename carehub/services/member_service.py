"""Member service for CRUD operations and archiving."""

import logging

from carehub.core.db_client import RecordStore, sanitize_param
from carehub.core.logging import log_audit_event, span
from carehub.core.search import matches_term
from carehub.domain.create_models import MemberCreate
from carehub.domain.member import Member, MemberStatus
from carehub.domain.update_models import MemberUpdate
from carehub.services import house_service


logger = logging.getLogger(__name__)

COLLECTION = "members"

_SERVER_FIELDS = {"id", "created", "updated"}


async def create_member(*, store: RecordStore, data: MemberCreate) -> Member:
    """Create a new member.

    A member may be created already assigned to a house; the house must be active.

    Raises:
        RecordNotFoundError: If the assigned house does not exist
        ValueError: If the assigned house is archived
    """
    with span("member_service.create_member"):
        if data.house_id:
            await house_service.require_active_house(store=store, house_id=data.house_id)

        record = await store.create_record(collection=COLLECTION, data=data.model_dump(mode="json"))
        log_audit_event(
            "member_created",
            entity=COLLECTION,
            entity_id=record["id"],
            house_id=data.house_id,
            label=str(data.label),
        )
        return Member.model_validate(record)


async def get_member(*, store: RecordStore, member_id: str) -> Member:
    """Get a member by ID.

    Raises:
        RecordNotFoundError: If the member does not exist
    """
    record = await store.get_record(collection=COLLECTION, record_id=member_id)
    return Member.model_validate(record)


async def update_member(*, store: RecordStore, member_id: str, changes: MemberUpdate) -> Member:
    """Apply the fields set in ``changes`` to a member profile.

    House assignment is not changed here; use assignment_service.move_member.

    Raises:
        RecordNotFoundError: If the member does not exist
        pydantic.ValidationError: If the merged profile is invalid
    """
    with span("member_service.update_member"):
        current = await store.get_record(collection=COLLECTION, record_id=member_id)
        data = changes.model_dump(mode="json", exclude_unset=True)
        if not data:
            return Member.model_validate(current)

        merged = Member.model_validate({**current, **data})
        if merged.status == MemberStatus.ARCHIVED:
            merged.house_id = None

        record = await store.update_record(
            collection=COLLECTION,
            record_id=member_id,
            data=merged.model_dump(mode="json", exclude=_SERVER_FIELDS),
        )
        log_audit_event("member_updated", entity=COLLECTION, entity_id=member_id, fields=sorted(data))
        return Member.model_validate(record)


async def archive_member(*, store: RecordStore, member_id: str) -> Member:
    """Archive a member and release their bed.

    Raises:
        RecordNotFoundError: If the member does not exist
    """
    with span("member_service.archive_member"):
        current = await get_member(store=store, member_id=member_id)
        record = await store.update_record(
            collection=COLLECTION,
            record_id=member_id,
            data={"status": MemberStatus.ARCHIVED.value, "house_id": None},
        )
        log_audit_event(
            "member_archived",
            entity=COLLECTION,
            entity_id=member_id,
            previous_house_id=current.house_id,
        )
        return Member.model_validate(record)


async def list_members(
    *,
    store: RecordStore,
    status: MemberStatus | None = None,
    search: str | None = None,
) -> list[Member]:
    """List members, optionally filtered by status and a search term.

    The search term matches name, email, phone and the name of the assigned house.
    """
    with span("member_service.list_members"):
        filter_query = f'status = "{sanitize_param(status)}"' if status else ""
        records = await store.list_records(collection=COLLECTION, filter_query=filter_query, sort="full_name")
        members = [Member.model_validate(r) for r in records]

        if not search:
            return members

        house_names = {h.id: h.name for h in await house_service.list_houses(store=store)}
        return [
            m
            for m in members
            if matches_term(search, m.full_name, m.email, m.phone, house_names.get(m.house_id or ""))
        ]


async def list_non_archived_members(*, store: RecordStore) -> list[Member]:
    """List every member that is not archived."""
    records = await store.list_records(
        collection=COLLECTION,
        filter_query=f'status != "{MemberStatus.ARCHIVED}"',
        sort="full_name",
    )
    return [Member.model_validate(r) for r in records]
