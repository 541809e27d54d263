"""Demo dataset loaded into a fresh record store.

Records keep stable ids (house-1, member-1, ...) so the dataset can be
referenced from the UI and from tests. Every payload goes through the
create DTOs, and maintenance due dates are derived by the recurrence
rules, so seeded records look exactly like ones created through the API.
"""

import logging
from datetime import UTC, datetime, timedelta

from dateutil.relativedelta import relativedelta

from carehub.core.calendar import local_now
from carehub.core.db_client import RecordStore
from carehub.domain.create_models import (
    AppointmentCreate,
    HouseCreate,
    InventoryItemCreate,
    MaintenanceTaskCreate,
    MemberCreate,
    WorkOrderCreate,
)
from carehub.domain.maintenance import DerivedState
from carehub.services import (
    appointment_service,
    house_service,
    inventory_service,
    maintenance_service,
    member_service,
    work_order_service,
)


logger = logging.getLogger(__name__)


def _address(street: str, zip_code: str) -> dict:
    return {"street": street, "city": "Metropolis", "state": "NY", "zip": zip_code}


HOUSES = {
    "house-1": HouseCreate(
        name="Oakwood Residence",
        address=_address("123 Oak Ave", "10001"),
        capacity=8,
        tags=["Sober Living", "Male"],
    ),
    "house-2": HouseCreate(
        name="Maple Creek Manor",
        address=_address("456 Maple Dr", "10002"),
        capacity=6,
        tags=["Transitional", "Female"],
    ),
    "house-3": HouseCreate(
        name="Pine Ridge Place",
        address=_address("789 Pine St", "10003"),
        capacity=10,
        tags=["Veteran", "Male"],
    ),
    "house-4": HouseCreate(
        name="Willow Creek Cottage",
        address=_address("101 Willow Ln", "10004"),
        capacity=4,
        status="archived",
        tags=["Sober Living"],
    ),
}

MEMBERS = {
    "member-1": MemberCreate(
        full_name="John Doe",
        dob="1985-05-15",
        insurance_provider="Blue Cross",
        phone="555-0101",
        email="john.doe@email.com",
        veteran_status="veteran",
        branch_of_service="army",
        label="house_lead",
        description="Lead at Oakwood.",
        house_id="house-1",
        photo_url="https://picsum.photos/seed/member-1/100",
        monthly_bedspace_fee=750,
        income_amount=1200,
        income_source="VA Disability",
        payment_type="self_pay",
        emergency_contact_name="Sarah Doe",
        emergency_contact_phone="555-0111",
        media_release_completed=True,
        on_medication=True,
        medications="Lisinopril 10mg, Metformin 500mg",
    ),
    "member-2": MemberCreate(
        full_name="Jane Smith",
        dob="1990-08-22",
        insurance_provider="Aetna",
        phone="555-0102",
        email="jane.smith@email.com",
        description="New resident.",
        house_id="house-2",
        photo_url="https://picsum.photos/seed/member-2/100",
        monthly_bedspace_fee=700,
        income_amount=800,
        income_source="Part-time job",
        payment_type="sponsored",
        sponsor_name="Local Charity Foundation",
        sponsorship_length="6 months",
        emergency_contact_name="Robert Smith",
        emergency_contact_phone="555-0112",
    ),
    "member-3": MemberCreate(
        full_name="Peter Jones",
        dob="1978-11-30",
        insurance_provider="Cigna",
        phone="555-0103",
        email="peter.jones@email.com",
        veteran_status="veteran",
        branch_of_service="marine_corps",
        house_id="house-1",
        photo_url="https://picsum.photos/seed/member-3/100",
        media_release_completed=True,
        on_medication=True,
        medications="Aspirin 81mg daily",
    ),
    "member-4": MemberCreate(
        full_name="Mary Williams",
        dob="1992-02-10",
        insurance_provider="UnitedHealth",
        phone="555-0104",
        email="mary.w@email.com",
        house_id="house-2",
        photo_url="https://picsum.photos/seed/member-4/100",
    ),
    "member-5": MemberCreate(
        full_name="David Brown",
        dob="1988-07-19",
        insurance_provider="Humana",
        phone="555-0105",
        email="david.b@email.com",
        veteran_status="veteran",
        branch_of_service="air_force",
        house_id="house-3",
        photo_url="https://picsum.photos/seed/member-5/100",
        media_release_completed=True,
        on_medication=True,
        medications="Ibuprofen as needed",
    ),
    "member-6": MemberCreate(
        full_name="Susan Garcia",
        dob="1995-01-05",
        insurance_provider="Kaiser",
        phone="555-0106",
        email="susan.g@email.com",
        status="inactive",
        label="staff",
        description="On leave.",
        house_id="house-3",
        photo_url="https://picsum.photos/seed/member-6/100",
    ),
    "member-7": MemberCreate(
        full_name="Unassigned Patient",
        dob="2000-01-01",
        insurance_provider="None",
        phone="555-0107",
        email="unassigned@email.com",
        label="patient",
        description="Waiting for assignment.",
        photo_url="https://picsum.photos/seed/member-7/100",
        media_release_completed=True,
    ),
}

WORK_ORDERS = {
    "wo-1": WorkOrderCreate(
        title="Fix leaky faucet in kitchen",
        description="The main kitchen sink has a constant drip.",
        house_id="house-1",
        priority="high",
        created_by="John Doe",
    ),
    "wo-2": WorkOrderCreate(
        title="Replace porch lightbulb",
        house_id="house-2",
        status="in_progress",
        priority="low",
        created_by="Susan Garcia",
        assigned_to="John Doe",
    ),
    "wo-3": WorkOrderCreate(
        title="Mow the lawn",
        description="Front and back yards need mowing.",
        house_id="house-1",
        status="completed",
        created_by="John Doe",
        assigned_to="Peter Jones",
    ),
    "wo-4": WorkOrderCreate(
        title="Test smoke detectors",
        description="Test all smoke and CO detectors in the house.",
        house_id="house-3",
        status="cancelled",
        created_by="David Brown",
    ),
}

INVENTORY_ITEMS = {
    "inv-1": InventoryItemCreate(house_id="house-1", name="Paper Towels", quantity=10),
    "inv-2": InventoryItemCreate(house_id="house-1", name="Toilet Paper", quantity=2, status="low_stock"),
    "inv-3": InventoryItemCreate(house_id="house-2", name="Cleaning Spray", quantity=5),
    "inv-4": InventoryItemCreate(house_id="house-2", name="Trash Bags", quantity=0, status="out_of_stock"),
    "inv-5": InventoryItemCreate(house_id="house-3", name="Light Bulbs", quantity=20),
}


def _appointments(now: datetime) -> dict[str, AppointmentCreate]:
    therapy_start = now + timedelta(days=2)
    doctor_start = now - timedelta(days=1)
    follow_up_start = now + timedelta(days=1)
    return {
        "appt-1": AppointmentCreate(
            member_id="member-1",
            title="Therapy Session",
            start_date_time=therapy_start,
            end_date_time=therapy_start + timedelta(hours=1),
        ),
        "appt-2": AppointmentCreate(
            member_id="member-2",
            title="Doctor's Appointment",
            start_date_time=doctor_start,
            end_date_time=doctor_start + timedelta(minutes=45),
            status="completed",
        ),
        "appt-3": AppointmentCreate(
            member_id="member-3",
            title="VA Follow-up",
            start_date_time=follow_up_start,
            end_date_time=follow_up_start + timedelta(hours=1),
        ),
    }


def _maintenance_tasks(now: datetime) -> dict[str, MaintenanceTaskCreate]:
    return {
        "mt-1": MaintenanceTaskCreate(
            house_id="house-1",
            task_name="HVAC Filter Replacement",
            frequency="quarterly",
            last_completed_date=datetime(2024, 7, 1, 10, tzinfo=UTC),
        ),
        # One period ago, so it comes due about now
        "mt-2": MaintenanceTaskCreate(
            house_id="house-1",
            task_name="Smoke Detector Test",
            frequency="monthly",
            last_completed_date=now - relativedelta(months=1),
        ),
        "mt-3": MaintenanceTaskCreate(
            house_id="house-2",
            task_name="Gutter Cleaning",
            frequency="semi-annually",
            last_completed_date=datetime(2024, 3, 20, 10, tzinfo=UTC),
        ),
        "mt-4": MaintenanceTaskCreate(
            house_id="house-2",
            task_name="Fire Extinguisher Check",
            frequency="annually",
            last_completed_date=datetime(2024, 1, 10, 10, tzinfo=UTC),
        ),
        "mt-5": MaintenanceTaskCreate(
            house_id="house-3",
            task_name="Yard Pest Control",
            frequency="quarterly",
            last_completed_date=now + timedelta(days=3) - relativedelta(months=3),
        ),
        "mt-6": MaintenanceTaskCreate(
            house_id="house-1",
            task_name="Plumbing Inspection",
            frequency="annually",
            last_completed_date=datetime(2023, 5, 1, 10, tzinfo=UTC),
        ),
    }


async def _insert(store: RecordStore, collection: str, records: dict[str, dict]) -> None:
    for record_id, data in records.items():
        await store.create_record(collection=collection, data={"id": record_id, **data})


async def seed_demo_data(store: RecordStore, now: datetime | None = None) -> None:
    """Load the demo houses, members, work orders, appointments, maintenance tasks and inventory.

    Args:
        store: Empty record store to fill
        now: Reference instant for relative dates; defaults to the local clock
    """
    now = now or local_now()

    await _insert(store, house_service.COLLECTION, {k: v.model_dump(mode="json") for k, v in HOUSES.items()})
    await _insert(store, member_service.COLLECTION, {k: v.model_dump(mode="json") for k, v in MEMBERS.items()})
    await _insert(
        store,
        work_order_service.COLLECTION,
        {k: v.model_dump(mode="json") for k, v in WORK_ORDERS.items()},
    )
    await _insert(
        store,
        appointment_service.COLLECTION,
        {k: v.model_dump(mode="json") for k, v in _appointments(now).items()},
    )
    await _insert(
        store,
        maintenance_service.COLLECTION,
        {
            k: {
                **v.model_dump(mode="json"),
                "next_due_date": maintenance_service.calculate_next_due_date(v.last_completed_date, v.frequency),
                "state": DerivedState().model_dump(mode="json"),
            }
            for k, v in _maintenance_tasks(now).items()
        },
    )
    await _insert(
        store,
        inventory_service.COLLECTION,
        {k: {**v.model_dump(mode="json"), "last_updated": now.astimezone(UTC)} for k, v in INVENTORY_ITEMS.items()},
    )

    logger.info(
        "Seeded demo data",
        extra={"houses": len(HOUSES), "members": len(MEMBERS), "work_orders": len(WORK_ORDERS)},
    )
