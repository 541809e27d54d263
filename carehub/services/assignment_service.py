"""Assignment board: members grouped by house and drag-and-drop moves."""

import logging

from carehub.core.db_client import RecordStore
from carehub.core.errors import InvalidStateTransitionError
from carehub.core.logging import log_audit_event, span
from carehub.core.search import matches_term
from carehub.domain.board import AssignmentBoard, BoardColumn
from carehub.domain.member import Member, MemberLabel, MemberStatus, VeteranStatus
from carehub.services import house_service, member_service


logger = logging.getLogger(__name__)

UNASSIGNED_TITLE = "Unassigned"


def _matches_board_filters(
    member: Member,
    *,
    search: str | None,
    label: MemberLabel | None,
    veteran_status: VeteranStatus | None,
) -> bool:
    if label and member.label != label:
        return False
    if veteran_status and member.veteran_status != veteran_status:
        return False
    return matches_term(search, member.full_name, member.email, member.phone, member.description)


async def build_board(
    *,
    store: RecordStore,
    search: str | None = None,
    label: MemberLabel | None = None,
    veteran_status: VeteranStatus | None = None,
) -> AssignmentBoard:
    """Group non-archived members into an unassigned column and one column per active house.

    Filters narrow the members shown in each column; column counts always
    reflect every non-archived member in that column. Members assigned to
    an archived house do not appear on the board.
    """
    with span("assignment_service.build_board"):
        houses = await house_service.list_active_houses(store=store)
        members = await member_service.list_non_archived_members(store=store)

        def column_members(house_id: str | None) -> list[Member]:
            return [m for m in members if m.house_id == house_id]

        unassigned = column_members(None)
        columns = [
            BoardColumn(
                house_id=None,
                title=UNASSIGNED_TITLE,
                member_count=len(unassigned),
                members=[
                    m
                    for m in unassigned
                    if _matches_board_filters(m, search=search, label=label, veteran_status=veteran_status)
                ],
            )
        ]

        for house in houses:
            assigned = column_members(house.id)
            columns.append(
                BoardColumn(
                    house_id=house.id,
                    title=house.name,
                    member_count=len(assigned),
                    capacity=house.capacity,
                    over_capacity=len(assigned) > house.capacity,
                    members=[
                        m
                        for m in assigned
                        if _matches_board_filters(m, search=search, label=label, veteran_status=veteran_status)
                    ],
                )
            )

        return AssignmentBoard(columns=columns)


async def move_member(*, store: RecordStore, member_id: str, house_id: str | None) -> Member:
    """Move a member to another house, or to the unassigned pool when ``house_id`` is None.

    Dropping a member on the column they are already in changes nothing.

    Raises:
        RecordNotFoundError: If the member or the target house does not exist
        InvalidStateTransitionError: If the member is archived
        ValueError: If the target house is archived
    """
    with span("assignment_service.move_member"):
        member = await member_service.get_member(store=store, member_id=member_id)

        if member.house_id == house_id:
            logger.debug("Member already in target column", extra={"member_id": member_id, "house_id": house_id})
            return member

        if member.status == MemberStatus.ARCHIVED:
            msg = f"Cannot move archived member {member_id}"
            raise InvalidStateTransitionError(msg)

        if house_id is not None:
            await house_service.require_active_house(store=store, house_id=house_id)

        record = await store.update_record(
            collection=member_service.COLLECTION,
            record_id=member_id,
            data={"house_id": house_id},
        )
        log_audit_event(
            "member_moved",
            entity=member_service.COLLECTION,
            entity_id=member_id,
            from_house_id=member.house_id,
            to_house_id=house_id,
        )
        return Member.model_validate(record)
