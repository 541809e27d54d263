"""Observability for carehub: Logfire setup, service spans and the audit trail.

Modules log through ``logging.getLogger(__name__)``; once ``configure_logfire``
has run, those records are forwarded to Logfire alongside the request spans
from ``instrument_fastapi``. Without a token nothing leaves the process.

Changes staff make to houses and members (creation, edits, archiving and
board moves) are also written to the ``carehub.audit`` logger:

    log_audit_event("member_moved", entity="members", entity_id="member-3", to_house_id="house-2")

Service functions wrap their work in a span named after the operation:

    with span("maintenance_service.mark_complete"):
        record = await store.update_record(...)
"""

import logging

import logfire
from fastapi import FastAPI

from carehub.core.config import settings


logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("carehub.audit")


def configure_logfire() -> None:
    """Set up Logfire for this deployment; records stay local unless a token is configured."""
    logfire.configure(
        token=settings.logfire_token,
        service_name=settings.app_name,
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logger.info(
        "Logfire ready",
        extra={"environment": settings.environment, "remote": settings.logfire_token is not None},
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request of the carehub app."""
    logfire.instrument_fastapi(app)
    logger.info("Request tracing enabled", extra={"app": app.title})


def span(name: str) -> logfire.LogfireSpan:
    """Open a span for one service operation, e.g. ``"house_service.update_house"``."""
    return logfire.span(name)


def log_with_context(
    target: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Emit ``message`` at ``level`` with record ids and other fields attached as ``extra``.

    Args:
        target: Logger to write to
        level: Level name such as "info" or "warning"
        message: Event name or message
        **context: Fields such as house_id, member_id or task_id
    """
    getattr(target, level.lower())(message, extra=context)


def log_audit_event(action: str, *, entity: str, entity_id: str, **details: object) -> None:
    """Append an entry to the audit trail for a change to a house or member.

    Args:
        action: What happened, e.g. "member_moved" or "house_updated"
        entity: Collection of the changed record
        entity_id: Id of the changed record
        **details: Fields describing the change
    """
    log_with_context(audit_logger, "info", action, entity=entity, entity_id=entity_id, **details)
