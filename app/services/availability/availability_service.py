# ===== app/services/availability/availability_service.py =====
from typing import List, Optional
from datetime import date, datetime
from sqlalchemy.orm import Session
from app.models.tenant import Tenant
from app.models.service_item import ServiceItem
from app.schemas.availability import AvailabilityRules
from app.schemas.booking import CalendarMonth, TimeSlot
from app.services.availability.slot_generator import generate_time_slots
from app.services.availability.calendar_service import build_calendar_month
from app.services.tenant.tenant_service import TenantService
import logging

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Loads tenant data from the database and runs the availability computations"""

    @staticmethod
    def get_available_slots(
            db: Session,
            tenant: Tenant,
            service: ServiceItem,
            day: date,
            rules: AvailabilityRules,
            now: Optional[datetime] = None
    ) -> List[TimeSlot]:
        """Bookable slots for one day, checked against all of the tenant's appointments"""
        appointments = TenantService.get_tenant_appointments(db, tenant.id)

        slots = generate_time_slots(day, service, rules, appointments, now or datetime.now())

        logger.info(
            f"Tenant {tenant.slug}: {len(slots)} slots on {day.isoformat()} for service {service.id}"
        )
        return slots

    @staticmethod
    def get_calendar_month(
            db: Session,
            tenant: Tenant,
            year: int,
            month: int,
            rules: AvailabilityRules,
            service: Optional[ServiceItem] = None,
            now: Optional[datetime] = None
    ) -> CalendarMonth:
        """Month summary; appointments are only loaded when slot counts are needed"""
        appointments = TenantService.get_tenant_appointments(db, tenant.id) if service else []

        return build_calendar_month(
            year,
            month,
            tenant,
            rules,
            service=service,
            appointments=appointments,
            now=now or datetime.now()
        )

    @staticmethod
    def is_slot_available(
            db: Session,
            tenant: Tenant,
            service: ServiceItem,
            start_time: datetime,
            rules: AvailabilityRules,
            now: Optional[datetime] = None
    ) -> bool:
        """True when start_time is exactly one of the offered slot starts"""
        slots = AvailabilityService.get_available_slots(
            db, tenant, service, start_time.date(), rules, now
        )
        return any(slot.start_time == start_time for slot in slots)
