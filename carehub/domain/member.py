"""Member domain models and enums."""

import re
from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator


MAX_NAME_LENGTH = 100


class MemberStatus(StrEnum):
    """Member record status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class VeteranStatus(StrEnum):
    """Whether the member served in the armed forces."""

    VETERAN = "veteran"
    CIVILIAN = "civilian"


class BranchOfService(StrEnum):
    """Armed forces branch for veterans."""

    ARMY = "army"
    NAVY = "navy"
    AIR_FORCE = "air_force"
    MARINE_CORPS = "marine_corps"
    COAST_GUARD = "coast_guard"
    SPACE_FORCE = "space_force"


class MemberLabel(StrEnum):
    """Role of the member within a house."""

    HOUSE_LEAD = "house_lead"
    MEMBER = "member"
    STAFF = "staff"
    PATIENT = "patient"
    OTHER = "other"


class PaymentType(StrEnum):
    """How the bedspace fee is paid."""

    SELF_PAY = "self_pay"
    SPONSORED = "sponsored"


class MemberProfile(BaseModel):
    """Editable member fields shared by the DTO and the create payload."""

    full_name: str = Field(..., description="Display name of the member")
    dob: date | None = Field(default=None, description="Date of birth")
    insurance_provider: str = Field(default="", description="Health insurance provider")
    phone: str = Field(default="", description="Contact phone number")
    email: str = Field(default="", description="Contact email address")
    status: MemberStatus = Field(default=MemberStatus.ACTIVE)
    veteran_status: VeteranStatus = Field(default=VeteranStatus.CIVILIAN)
    branch_of_service: BranchOfService | None = Field(default=None, description="Only kept for veterans")
    label: MemberLabel = Field(default=MemberLabel.MEMBER)
    description: str = Field(default="", description="Free-form notes")
    house_id: str | None = Field(default=None, description="Assigned house ID, None when unassigned")
    photo_url: str = Field(default="", description="Avatar URL")

    monthly_bedspace_fee: float | None = Field(default=None, ge=0)
    income_amount: float | None = Field(default=None, ge=0)
    income_source: str | None = None
    payment_type: PaymentType | None = None
    sponsor_name: str | None = None
    sponsorship_length: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    media_release_completed: bool = False

    on_medication: bool = False
    medications: str | None = None

    @field_validator("full_name")
    @classmethod
    def validate_name_usable(cls, v: str) -> str:
        """Validate name is non-empty and reasonably short."""
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Name too long (max {MAX_NAME_LENGTH} characters)")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_shape(cls, v: str) -> str:
        """Validate email looks like an address when provided."""
        v = v.strip()
        if v and not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", v):
            raise ValueError("Email must look like name@example.com")
        return v

    @model_validator(mode="after")
    def clear_branch_for_civilians(self) -> "MemberProfile":
        """Civilians have no branch of service."""
        if self.veteran_status == VeteranStatus.CIVILIAN:
            self.branch_of_service = None
        return self


class Member(MemberProfile):
    """Member data transfer object."""

    id: str = Field(..., description="Unique member ID")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")
