"""Appointment and calendar endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, status

from carehub.core.db_client import RecordStore
from carehub.domain.appointment import Appointment, MonthView
from carehub.domain.create_models import AppointmentCreate
from carehub.domain.update_models import AppointmentUpdate
from carehub.interface.deps import get_store, get_today
from carehub.services import appointment_service


router = APIRouter(prefix="/api", tags=["appointments"])


@router.get("/appointments")
async def list_appointments(search: str | None = None, store: RecordStore = Depends(get_store)) -> list[Appointment]:
    """List appointments by start time."""
    return await appointment_service.list_appointments(store=store, search=search)


@router.post("/appointments", status_code=status.HTTP_201_CREATED)
async def create_appointment(data: AppointmentCreate, store: RecordStore = Depends(get_store)) -> Appointment:
    """Book an appointment for an active member."""
    return await appointment_service.create_appointment(store=store, data=data)


@router.get("/appointments/{appointment_id}")
async def get_appointment(appointment_id: str, store: RecordStore = Depends(get_store)) -> Appointment:
    """Get an appointment by ID."""
    return await appointment_service.get_appointment(store=store, appointment_id=appointment_id)


@router.patch("/appointments/{appointment_id}")
async def update_appointment(
    appointment_id: str,
    changes: AppointmentUpdate,
    store: RecordStore = Depends(get_store),
) -> Appointment:
    """Reschedule or edit an appointment."""
    return await appointment_service.update_appointment(
        store=store,
        appointment_id=appointment_id,
        changes=changes,
    )


@router.get("/calendar/{year}/{month}")
async def get_month_view(
    year: int,
    month: int,
    search: str | None = None,
    store: RecordStore = Depends(get_store),
    today: date = Depends(get_today),
) -> MonthView:
    """Month grid of Sunday-first weeks with each day's appointments."""
    return await appointment_service.month_view(store=store, year=year, month=month, today=today, search=search)
