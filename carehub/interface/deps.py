"""FastAPI dependencies shared by the API routers."""

from datetime import date, datetime

from fastapi import Request

from carehub.core.calendar import local_now, local_today
from carehub.core.db_client import RecordStore


def get_store(request: Request) -> RecordStore:
    """Session record store created at startup."""
    return request.app.state.store


def get_today() -> date:
    """Current calendar day in the configured timezone."""
    return local_today()


def get_now() -> datetime:
    """Current instant in the configured timezone."""
    return local_now()
