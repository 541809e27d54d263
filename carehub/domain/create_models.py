"""Pydantic models for creating records in the store."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from carehub.core.config import settings
from carehub.domain.appointment import AppointmentStatus
from carehub.domain.house import Address, GeoPoint, HouseStatus, normalize_tags
from carehub.domain.inventory import InventoryItemStatus
from carehub.domain.maintenance import MaintenanceFrequency
from carehub.domain.member import MemberProfile
from carehub.domain.work_order import WorkOrderPriority, WorkOrderStatus


def ensure_aware(v: datetime) -> datetime:
    """Normalize to UTC; naive datetimes (e.g. a bare form date) are local wall time."""
    if v.tzinfo is None:
        return v.replace(tzinfo=settings.tzinfo).astimezone(UTC)
    return v.astimezone(UTC)


class HouseCreate(BaseModel):
    """Pydantic model for creating a house record."""

    name: str = Field(..., min_length=1, description="House name")
    address: Address = Field(default_factory=Address)
    geo: GeoPoint | None = None
    capacity: int = Field(default=0, ge=0)
    status: HouseStatus = Field(default=HouseStatus.ACTIVE)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: list[str] | str) -> list[str]:
        """Accept a list or a comma-separated string of tags."""
        return normalize_tags(v)


class MemberCreate(MemberProfile):
    """Pydantic model for creating a member record."""


class WorkOrderCreate(BaseModel):
    """Pydantic model for creating a work order record."""

    title: str = Field(..., min_length=1)
    description: str = Field(default="")
    house_id: str = Field(..., min_length=1)
    status: WorkOrderStatus = Field(default=WorkOrderStatus.OPEN)
    priority: WorkOrderPriority = Field(default=WorkOrderPriority.MEDIUM)
    created_by: str = Field(..., min_length=1)
    assigned_to: str | None = None


class AppointmentCreate(BaseModel):
    """Pydantic model for creating an appointment record."""

    member_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = Field(default="")
    start_date_time: datetime
    end_date_time: datetime
    status: AppointmentStatus = Field(default=AppointmentStatus.SCHEDULED)

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def validate_aware(cls, v: datetime) -> datetime:
        """Store appointment times as aware instants."""
        return ensure_aware(v)

    @model_validator(mode="after")
    def validate_time_order(self) -> "AppointmentCreate":
        """Validate the appointment does not end before it starts."""
        if self.end_date_time < self.start_date_time:
            msg = "Appointment cannot end before it starts"
            raise ValueError(msg)
        return self


class MaintenanceTaskCreate(BaseModel):
    """Pydantic model for scheduling a recurring maintenance task.

    The next due date is always derived and is not accepted here.
    """

    house_id: str = Field(..., min_length=1)
    task_name: str = Field(..., min_length=1)
    description: str = Field(default="")
    frequency: MaintenanceFrequency = Field(default=MaintenanceFrequency.MONTHLY)
    last_completed_date: datetime

    @field_validator("last_completed_date")
    @classmethod
    def validate_aware(cls, v: datetime) -> datetime:
        """Store the last completed date as an aware instant."""
        return ensure_aware(v)


class InventoryItemCreate(BaseModel):
    """Pydantic model for creating an inventory item record."""

    house_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    quantity: int = Field(default=0, ge=0)
    status: InventoryItemStatus = Field(default=InventoryItemStatus.IN_STOCK)
