"""Appointment service for CRUD operations and the month calendar."""

import logging
from collections import defaultdict
from datetime import date

from carehub.core.calendar import generate_calendar_days, month_name, to_local
from carehub.core.db_client import RecordStore
from carehub.core.logging import span
from carehub.core.search import matches_term
from carehub.domain.appointment import Appointment, CalendarDay, MonthView
from carehub.domain.create_models import AppointmentCreate
from carehub.domain.member import MemberStatus
from carehub.domain.update_models import AppointmentUpdate
from carehub.services import member_service


logger = logging.getLogger(__name__)

COLLECTION = "appointments"


async def _require_active_member(*, store: RecordStore, member_id: str) -> None:
    member = await member_service.get_member(store=store, member_id=member_id)
    if member.status != MemberStatus.ACTIVE:
        msg = f"Member {member.full_name} is {member.status} and cannot be booked"
        raise ValueError(msg)


async def create_appointment(*, store: RecordStore, data: AppointmentCreate) -> Appointment:
    """Book an appointment for an active member.

    Raises:
        RecordNotFoundError: If the member does not exist
        ValueError: If the member is not active
    """
    with span("appointment_service.create_appointment"):
        await _require_active_member(store=store, member_id=data.member_id)

        record = await store.create_record(collection=COLLECTION, data=data.model_dump(mode="json"))
        logger.info(
            "Created appointment",
            extra={"appointment_id": record["id"], "member_id": data.member_id},
        )
        return Appointment.model_validate(record)


async def get_appointment(*, store: RecordStore, appointment_id: str) -> Appointment:
    """Get an appointment by ID.

    Raises:
        RecordNotFoundError: If the appointment does not exist
    """
    record = await store.get_record(collection=COLLECTION, record_id=appointment_id)
    return Appointment.model_validate(record)


async def update_appointment(
    *,
    store: RecordStore,
    appointment_id: str,
    changes: AppointmentUpdate,
) -> Appointment:
    """Apply the fields set in ``changes`` to an appointment.

    Raises:
        RecordNotFoundError: If the appointment or new member does not exist
        ValueError: If the times end up out of order or the new member is not active
    """
    with span("appointment_service.update_appointment"):
        current = await store.get_record(collection=COLLECTION, record_id=appointment_id)
        data = changes.model_dump(mode="json", exclude_unset=True)
        if not data:
            return Appointment.model_validate(current)

        if "member_id" in data and data["member_id"] != current["member_id"]:
            await _require_active_member(store=store, member_id=data["member_id"])

        merged = Appointment.model_validate({**current, **data})
        if merged.end_date_time < merged.start_date_time:
            msg = "Appointment cannot end before it starts"
            raise ValueError(msg)

        record = await store.update_record(
            collection=COLLECTION,
            record_id=appointment_id,
            data=merged.model_dump(mode="json", exclude={"id", "created", "updated"}),
        )
        logger.info("Updated appointment", extra={"appointment_id": appointment_id, "fields": sorted(data)})
        return Appointment.model_validate(record)


async def list_appointments(*, store: RecordStore, search: str | None = None) -> list[Appointment]:
    """List appointments by start time.

    The search term matches title, description and the member's name.
    """
    with span("appointment_service.list_appointments"):
        records = await store.list_records(collection=COLLECTION, sort="start_date_time")
        appointments = [Appointment.model_validate(r) for r in records]

        if not search:
            return appointments

        member_names = {m.id: m.full_name for m in await member_service.list_members(store=store)}
        return [
            a
            for a in appointments
            if matches_term(search, a.title, a.description, member_names.get(a.member_id))
        ]


def group_by_day(appointments: list[Appointment]) -> dict[date, list[Appointment]]:
    """Group appointments by the local calendar day they start on, in start order."""
    grouped: dict[date, list[Appointment]] = defaultdict(list)
    for appointment in sorted(appointments, key=lambda a: a.start_date_time):
        grouped[to_local(appointment.start_date_time).date()].append(appointment)
    return dict(grouped)


async def month_view(
    *,
    store: RecordStore,
    year: int,
    month: int,
    today: date,
    search: str | None = None,
) -> MonthView:
    """Build the calendar grid for a month with each day's appointments.

    Raises:
        ValueError: If ``month`` is not 1-12
    """
    if not 1 <= month <= 12:  # noqa: PLR2004
        msg = f"Invalid month: {month}"
        raise ValueError(msg)

    with span("appointment_service.month_view"):
        by_day = group_by_day(await list_appointments(store=store, search=search))
        days = [
            CalendarDay(
                day=day,
                is_current_month=is_current_month,
                is_today=is_today,
                appointments=by_day.get(day, []),
            )
            for day, is_current_month, is_today in generate_calendar_days(year, month, today)
        ]
        return MonthView(year=year, month=month, month_name=month_name(month), days=days)
