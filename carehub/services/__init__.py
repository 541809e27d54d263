from carehub.services import (
    appointment_service,
    assignment_service,
    dashboard_service,
    house_service,
    inventory_service,
    maintenance_service,
    member_service,
    work_order_service,
)


__all__ = [
    "appointment_service",
    "assignment_service",
    "dashboard_service",
    "house_service",
    "inventory_service",
    "maintenance_service",
    "member_service",
    "work_order_service",
]
