# app/models/__init__.py
from .base import Base
from .tenant import Tenant, TenantPlan, TenantStatus
from .service_item import ServiceItem, ServiceCategory
from .appointment import Appointment, AppointmentStatus

__all__ = [
    "Base",
    "Tenant",
    "TenantPlan",
    "TenantStatus",
    "ServiceItem",
    "ServiceCategory",
    "Appointment",
    "AppointmentStatus",
]
