"""Maintenance schedule endpoints."""

from datetime import date, datetime

from fastapi import APIRouter, Depends, status

from carehub.core.db_client import RecordStore
from carehub.domain.create_models import MaintenanceTaskCreate
from carehub.domain.maintenance import HouseMaintenanceSummary, MaintenanceTaskView
from carehub.domain.update_models import MaintenanceTaskUpdate
from carehub.interface.deps import get_now, get_store, get_today
from carehub.services import maintenance_service


router = APIRouter(prefix="/api/maintenance", tags=["maintenance"])


@router.get("/tasks")
async def list_tasks(
    house_id: str | None = None,
    search: str | None = None,
    store: RecordStore = Depends(get_store),
    today: date = Depends(get_today),
) -> list[MaintenanceTaskView]:
    """List tasks by next due date with statuses resolved for today."""
    return await maintenance_service.list_tasks(store=store, today=today, house_id=house_id, search=search)


@router.post("/tasks", status_code=status.HTTP_201_CREATED)
async def create_task(
    data: MaintenanceTaskCreate,
    store: RecordStore = Depends(get_store),
    today: date = Depends(get_today),
) -> MaintenanceTaskView:
    """Schedule a recurring task; the next due date is derived."""
    return await maintenance_service.create_task(store=store, data=data, today=today)


@router.get("/tasks/{task_id}")
async def get_task(
    task_id: str,
    store: RecordStore = Depends(get_store),
    today: date = Depends(get_today),
) -> MaintenanceTaskView:
    """Get a task with its current status."""
    return await maintenance_service.get_task(store=store, task_id=task_id, today=today)


@router.patch("/tasks/{task_id}")
async def update_task(
    task_id: str,
    changes: MaintenanceTaskUpdate,
    store: RecordStore = Depends(get_store),
    today: date = Depends(get_today),
) -> MaintenanceTaskView:
    """Edit a task; the next due date is recomputed."""
    return await maintenance_service.update_task(store=store, task_id=task_id, changes=changes, today=today)


@router.post("/tasks/{task_id}/complete")
async def complete_task(
    task_id: str,
    store: RecordStore = Depends(get_store),
    now: datetime = Depends(get_now),
) -> MaintenanceTaskView:
    """Mark a task done now and schedule the next occurrence."""
    return await maintenance_service.mark_complete(store=store, task_id=task_id, now=now)


@router.post("/tasks/{task_id}/revert")
async def revert_task(
    task_id: str,
    store: RecordStore = Depends(get_store),
    today: date = Depends(get_today),
) -> MaintenanceTaskView:
    """Undo a completion so the status is derived again."""
    return await maintenance_service.revert_completion(store=store, task_id=task_id, today=today)


@router.get("/houses")
async def summarize_houses(
    search: str | None = None,
    store: RecordStore = Depends(get_store),
    today: date = Depends(get_today),
) -> list[HouseMaintenanceSummary]:
    """Per active house: task count and tasks needing attention."""
    return await maintenance_service.summarize_houses(store=store, today=today, search=search)
