"""Update models for store operations.

Every field is optional; only the fields a caller sets are applied, and the
merged record is validated again by the service before it is written.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from carehub.domain.appointment import AppointmentStatus
from carehub.domain.create_models import ensure_aware
from carehub.domain.house import Address, GeoPoint, HouseStatus, normalize_tags
from carehub.domain.inventory import InventoryItemStatus
from carehub.domain.maintenance import MaintenanceFrequency
from carehub.domain.member import BranchOfService, MemberLabel, MemberStatus, PaymentType, VeteranStatus
from carehub.domain.work_order import WorkOrderPriority, WorkOrderStatus


class HouseUpdate(BaseModel):
    """Update payload for a house."""

    name: str | None = Field(default=None, min_length=1)
    address: Address | None = None
    geo: GeoPoint | None = None
    capacity: int | None = Field(default=None, ge=0)
    status: HouseStatus | None = None
    tags: list[str] | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: list[str] | str | None) -> list[str] | None:
        """Accept a list or a comma-separated string of tags."""
        return None if v is None else normalize_tags(v)


class MemberUpdate(BaseModel):
    """Update payload for a member profile."""

    full_name: str | None = None
    dob: date | None = None
    insurance_provider: str | None = None
    phone: str | None = None
    email: str | None = None
    status: MemberStatus | None = None
    veteran_status: VeteranStatus | None = None
    branch_of_service: BranchOfService | None = None
    label: MemberLabel | None = None
    description: str | None = None
    photo_url: str | None = None
    monthly_bedspace_fee: float | None = None
    income_amount: float | None = None
    income_source: str | None = None
    payment_type: PaymentType | None = None
    sponsor_name: str | None = None
    sponsorship_length: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    media_release_completed: bool | None = None
    on_medication: bool | None = None
    medications: str | None = None


class MemberMove(BaseModel):
    """Assignment board drop: the target house, or None for unassigned."""

    house_id: str | None = None


class WorkOrderUpdate(BaseModel):
    """Update payload for a work order."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    house_id: str | None = Field(default=None, min_length=1)
    status: WorkOrderStatus | None = None
    priority: WorkOrderPriority | None = None
    assigned_to: str | None = None


class AppointmentUpdate(BaseModel):
    """Update payload for an appointment."""

    member_id: str | None = Field(default=None, min_length=1)
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    start_date_time: datetime | None = None
    end_date_time: datetime | None = None
    status: AppointmentStatus | None = None

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def validate_aware(cls, v: datetime | None) -> datetime | None:
        """Store appointment times as aware instants."""
        return None if v is None else ensure_aware(v)


class MaintenanceTaskUpdate(BaseModel):
    """Update payload for a maintenance task; the next due date is recomputed, never set."""

    house_id: str | None = Field(default=None, min_length=1)
    task_name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    frequency: MaintenanceFrequency | None = None
    last_completed_date: datetime | None = None

    @field_validator("last_completed_date")
    @classmethod
    def validate_aware(cls, v: datetime | None) -> datetime | None:
        """Store the last completed date as an aware instant."""
        return None if v is None else ensure_aware(v)


class InventoryItemUpdate(BaseModel):
    """Update payload for an inventory item."""

    house_id: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1)
    quantity: int | None = Field(default=None, ge=0)
    status: InventoryItemStatus | None = None
