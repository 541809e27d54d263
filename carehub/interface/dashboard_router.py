"""Dashboard endpoint."""

from datetime import date

from fastapi import APIRouter, Depends

from carehub.core.db_client import RecordStore
from carehub.domain.board import DashboardSummary
from carehub.interface.deps import get_store, get_today
from carehub.services import dashboard_service


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(
    store: RecordStore = Depends(get_store),
    today: date = Depends(get_today),
) -> DashboardSummary:
    """Headline figures: active members, urgent maintenance, open work orders and stock shortages."""
    return await dashboard_service.get_summary(store=store, today=today)
