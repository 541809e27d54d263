"""Maintenance schedule service: recurring tasks, completion and urgency.

Persisted tasks store only the derived-or-completed state. The urgency
status (overdue, due today, due soon, upcoming) is resolved on every read
against the caller's ``today``; only a completion sticks between reads.
"""

import logging
from datetime import UTC, date, datetime

from carehub.core.calendar import to_local
from carehub.core.db_client import RecordStore, sanitize_param
from carehub.core.errors import InvalidStateTransitionError
from carehub.core.logging import span
from carehub.core.recurrence import compute_next_due_date, resolve_status
from carehub.core.search import matches_term
from carehub.domain.create_models import MaintenanceTaskCreate
from carehub.domain.maintenance import (
    CompletedState,
    DerivedState,
    HouseMaintenanceSummary,
    MaintenanceFrequency,
    MaintenanceStatus,
    MaintenanceTask,
    MaintenanceTaskView,
)
from carehub.domain.update_models import MaintenanceTaskUpdate
from carehub.services import house_service


logger = logging.getLogger(__name__)

COLLECTION = "maintenance_tasks"

ATTENTION_STATUSES = frozenset(
    {MaintenanceStatus.OVERDUE, MaintenanceStatus.DUE_TODAY, MaintenanceStatus.DUE_SOON},
)


def calculate_next_due_date(last_completed: datetime, frequency: MaintenanceFrequency) -> datetime:
    """Next due instant in UTC, with calendar arithmetic done in the local timezone."""
    return compute_next_due_date(to_local(last_completed), frequency).astimezone(UTC)


def _to_view(record: dict, today: date) -> MaintenanceTaskView:
    task = MaintenanceTask.model_validate(record)
    status = resolve_status(task.state, to_local(task.next_due_date), today)
    return MaintenanceTaskView(**task.model_dump(), status=status)


async def create_task(*, store: RecordStore, data: MaintenanceTaskCreate, today: date) -> MaintenanceTaskView:
    """Schedule a new recurring task for an active house.

    Args:
        store: Session record store
        data: Task name, house, frequency and initial last completed date
        today: Calendar day used to resolve the returned status

    Returns:
        Created task with its derived next due date and status

    Raises:
        RecordNotFoundError: If the house does not exist
        ValueError: If the house is archived
    """
    with span("maintenance_service.create_task"):
        await house_service.require_active_house(store=store, house_id=data.house_id)

        next_due_date = calculate_next_due_date(data.last_completed_date, data.frequency)
        task_data = {
            **data.model_dump(mode="json"),
            "next_due_date": next_due_date,
            "state": DerivedState().model_dump(mode="json"),
        }

        record = await store.create_record(collection=COLLECTION, data=task_data)
        logger.info(
            "Created maintenance task: %s (house: %s, next due: %s)",
            data.task_name,
            data.house_id,
            next_due_date.isoformat(),
        )
        return _to_view(record, today)


async def get_task(*, store: RecordStore, task_id: str, today: date) -> MaintenanceTaskView:
    """Get a task with its status resolved for ``today``.

    Raises:
        RecordNotFoundError: If the task does not exist
    """
    record = await store.get_record(collection=COLLECTION, record_id=task_id)
    return _to_view(record, today)


async def list_tasks(
    *,
    store: RecordStore,
    today: date,
    house_id: str | None = None,
    search: str | None = None,
) -> list[MaintenanceTaskView]:
    """List tasks by next due date with statuses freshly resolved for ``today``.

    Args:
        store: Session record store
        today: Calendar day to classify against
        house_id: Only tasks for this house
        search: Case-insensitive match on the task name

    Returns:
        Tasks sorted by next due date
    """
    with span("maintenance_service.list_tasks"):
        filter_query = f'house_id = "{sanitize_param(house_id)}"' if house_id else ""
        records = await store.list_records(collection=COLLECTION, filter_query=filter_query)

        tasks = [_to_view(r, today) for r in records]
        tasks = [t for t in tasks if matches_term(search, t.task_name)]
        return sorted(tasks, key=lambda t: t.next_due_date)


async def update_task(
    *,
    store: RecordStore,
    task_id: str,
    changes: MaintenanceTaskUpdate,
    today: date,
) -> MaintenanceTaskView:
    """Edit a task and recompute its next due date.

    A completed task stays completed; only its dates change.

    Raises:
        RecordNotFoundError: If the task or new house does not exist
        ValueError: If the new house is archived
    """
    with span("maintenance_service.update_task"):
        current = MaintenanceTask.model_validate(await store.get_record(collection=COLLECTION, record_id=task_id))
        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        if not data:
            return _to_view(current.model_dump(mode="json"), today)

        if "house_id" in data and data["house_id"] != current.house_id:
            await house_service.require_active_house(store=store, house_id=data["house_id"])

        merged = current.model_copy(update=data)
        merged.next_due_date = calculate_next_due_date(merged.last_completed_date, merged.frequency)

        record = await store.update_record(
            collection=COLLECTION,
            record_id=task_id,
            data=merged.model_dump(mode="json", exclude={"id", "created", "updated"}),
        )
        logger.info(
            "Updated maintenance task %s, next due: %s",
            task_id,
            merged.next_due_date.isoformat(),
        )
        return _to_view(record, today)


async def mark_complete(*, store: RecordStore, task_id: str, now: datetime) -> MaintenanceTaskView:
    """Record that a task was performed at ``now``.

    Sets the last completed date to ``now``, schedules the next due date one
    period later and makes the COMPLETED status stick until reverted.
    Completing an already completed task schedules again from ``now``.

    Raises:
        RecordNotFoundError: If the task does not exist
    """
    with span("maintenance_service.mark_complete"):
        current = MaintenanceTask.model_validate(await store.get_record(collection=COLLECTION, record_id=task_id))

        completed_at = now.astimezone(UTC)
        next_due_date = calculate_next_due_date(completed_at, current.frequency)

        record = await store.update_record(
            collection=COLLECTION,
            record_id=task_id,
            data={
                "last_completed_date": completed_at,
                "next_due_date": next_due_date,
                "state": CompletedState(completed_at=completed_at).model_dump(mode="json"),
            },
        )
        logger.info(f"Completed maintenance task {task_id}, next due: {next_due_date.isoformat()}")
        return _to_view(record, to_local(now).date())


async def revert_completion(*, store: RecordStore, task_id: str, today: date) -> MaintenanceTaskView:
    """Undo the sticky completion so the status is derived from the next due date again.

    The dates set by the completion are kept.

    Raises:
        RecordNotFoundError: If the task does not exist
        InvalidStateTransitionError: If the task is not completed
    """
    with span("maintenance_service.revert_completion"):
        current = MaintenanceTask.model_validate(await store.get_record(collection=COLLECTION, record_id=task_id))
        if not isinstance(current.state, CompletedState):
            msg = f"Cannot revert: maintenance task {task_id} is not completed"
            raise InvalidStateTransitionError(msg)

        record = await store.update_record(
            collection=COLLECTION,
            record_id=task_id,
            data={"state": DerivedState().model_dump(mode="json")},
        )
        logger.info(f"Reverted completion of maintenance task {task_id}")
        return _to_view(record, today)


async def summarize_houses(
    *,
    store: RecordStore,
    today: date,
    search: str | None = None,
) -> list[HouseMaintenanceSummary]:
    """Per active house: how many tasks exist and how many need attention.

    Args:
        store: Session record store
        today: Calendar day to classify against
        search: Case-insensitive match on the house name
    """
    with span("maintenance_service.summarize_houses"):
        houses = [h for h in await house_service.list_active_houses(store=store) if matches_term(search, h.name)]
        tasks = await list_tasks(store=store, today=today)

        summaries = []
        for house in houses:
            house_tasks = [t for t in tasks if t.house_id == house.id]
            summaries.append(
                HouseMaintenanceSummary(
                    house_id=house.id,
                    house_name=house.name,
                    total_tasks=len(house_tasks),
                    attention_count=sum(1 for t in house_tasks if t.status in ATTENTION_STATUSES),
                )
            )
        return summaries
