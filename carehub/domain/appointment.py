"""Appointment and calendar domain models."""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class AppointmentStatus(StrEnum):
    """Appointment outcome."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class Appointment(BaseModel):
    """Appointment data transfer object."""

    id: str = Field(..., description="Unique appointment ID")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")
    member_id: str = Field(..., description="ID of the member the appointment is for")
    title: str = Field(..., description="Appointment title (e.g., 'Therapy Session')")
    description: str = Field(default="")
    start_date_time: datetime
    end_date_time: datetime
    status: AppointmentStatus = Field(default=AppointmentStatus.SCHEDULED)


class CalendarDay(BaseModel):
    """One cell of a month calendar grid."""

    day: date
    is_current_month: bool
    is_today: bool
    appointments: list[Appointment] = Field(default_factory=list)


class MonthView(BaseModel):
    """A month of calendar cells, Sunday-first weeks."""

    year: int
    month: int
    month_name: str
    days: list[CalendarDay]
