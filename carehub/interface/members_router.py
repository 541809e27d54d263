"""Member and assignment board endpoints."""

from fastapi import APIRouter, Depends, Query, status

from carehub.core.db_client import RecordStore
from carehub.domain.board import AssignmentBoard
from carehub.domain.create_models import MemberCreate
from carehub.domain.member import Member, MemberLabel, MemberStatus, VeteranStatus
from carehub.domain.update_models import MemberMove, MemberUpdate
from carehub.interface.deps import get_store
from carehub.services import assignment_service, member_service


router = APIRouter(prefix="/api", tags=["members"])


@router.get("/members")
async def list_members(
    status_filter: MemberStatus | None = Query(default=None, alias="status"),
    search: str | None = None,
    store: RecordStore = Depends(get_store),
) -> list[Member]:
    """List members by name."""
    return await member_service.list_members(store=store, status=status_filter, search=search)


@router.post("/members", status_code=status.HTTP_201_CREATED)
async def create_member(data: MemberCreate, store: RecordStore = Depends(get_store)) -> Member:
    """Create a member, optionally assigned to an active house."""
    return await member_service.create_member(store=store, data=data)


@router.get("/members/{member_id}")
async def get_member(member_id: str, store: RecordStore = Depends(get_store)) -> Member:
    """Get a member by ID."""
    return await member_service.get_member(store=store, member_id=member_id)


@router.patch("/members/{member_id}")
async def update_member(member_id: str, changes: MemberUpdate, store: RecordStore = Depends(get_store)) -> Member:
    """Edit a member profile."""
    return await member_service.update_member(store=store, member_id=member_id, changes=changes)


@router.post("/members/{member_id}/archive")
async def archive_member(member_id: str, store: RecordStore = Depends(get_store)) -> Member:
    """Archive a member and release their bed."""
    return await member_service.archive_member(store=store, member_id=member_id)


@router.get("/assignments")
async def get_board(
    search: str | None = None,
    label: MemberLabel | None = None,
    veteran_status: VeteranStatus | None = None,
    store: RecordStore = Depends(get_store),
) -> AssignmentBoard:
    """Assignment board: unassigned column then one column per active house."""
    return await assignment_service.build_board(
        store=store,
        search=search,
        label=label,
        veteran_status=veteran_status,
    )


@router.post("/assignments/{member_id}")
async def move_member(member_id: str, move: MemberMove, store: RecordStore = Depends(get_store)) -> Member:
    """Drop a member on a house column, or on the unassigned column with a null house."""
    return await assignment_service.move_member(store=store, member_id=member_id, house_id=move.house_id)
