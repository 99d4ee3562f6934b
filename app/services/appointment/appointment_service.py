# ============================================================================
# app/services/appointment/appointment_service.py
# ============================================================================
"""Service for managing appointments"""
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import AvailabilityRulesError, SlotUnavailableError
from app.models.appointment import Appointment, AppointmentStatus
from app.models.service_item import ServiceItem
from app.models.tenant import Tenant
from app.services.availability.availability_service import AvailabilityService
from app.services.tenant.tenant_service import TenantService

logger = logging.getLogger(__name__)


class AppointmentService:
    """Handles appointment operations"""

    @staticmethod
    def create_appointment(
            db: Session,
            tenant_id: int,
            scheduled_date: datetime,
            service_type: str,
            service_item_id: Optional[int] = None,
            customer_name: Optional[str] = None,
            customer_phone: Optional[str] = None,
            customer_email: Optional[str] = None,
            description: Optional[str] = None,
            notes: Optional[str] = None,
            booking_source: str = "staff"
    ) -> Appointment:
        """Create a new appointment; scheduled_date is stored as naive shop-local time"""
        appointment = Appointment(
            tenant_id=tenant_id,
            service_item_id=service_item_id,
            scheduled_date=scheduled_date.replace(tzinfo=None),
            service_type=service_type,
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_email=customer_email,
            description=description,
            notes=notes,
            status=AppointmentStatus.SCHEDULED,
            booking_source=booking_source,
        )

        db.add(appointment)
        db.commit()
        db.refresh(appointment)

        logger.info(f"Created appointment {appointment.id} for tenant {tenant_id} at {appointment.scheduled_date}")
        return appointment

    @staticmethod
    def list_appointments(
            db: Session,
            tenant_id: int,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            status: Optional[AppointmentStatus] = None,
            skip: int = 0,
            limit: int = 50
    ) -> List[Appointment]:
        query = db.query(Appointment).filter(Appointment.tenant_id == tenant_id)

        if start_date:
            query = query.filter(Appointment.scheduled_date >= datetime.combine(start_date, time.min))
        if end_date:
            query = query.filter(Appointment.scheduled_date < datetime.combine(end_date + timedelta(days=1), time.min))
        if status:
            query = query.filter(Appointment.status == status)

        return query.order_by(Appointment.scheduled_date).offset(skip).limit(limit).all()

    @staticmethod
    def get_appointment(db: Session, tenant_id: int, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.tenant_id == tenant_id
        ).first()

    @staticmethod
    def update_status(
            db: Session,
            tenant_id: int,
            appointment_id: int,
            status: AppointmentStatus
    ) -> Optional[Appointment]:
        """Change status; completing stamps completed_at"""
        appointment = AppointmentService.get_appointment(db, tenant_id, appointment_id)
        if not appointment:
            return None

        appointment.status = status
        if status == AppointmentStatus.COMPLETED:
            appointment.completed_at = datetime.now(timezone.utc)

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def request_public_booking(
            db: Session,
            tenant: Tenant,
            service: ServiceItem,
            start_time: datetime,
            customer_name: str,
            customer_phone: str,
            customer_email: Optional[str] = None,
            notes: Optional[str] = None,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Book a slot from the public page.

        The tenant row is locked first, so concurrent requests for the same shop
        run the check and the insert one at a time. The slot list for the day is
        then recomputed and the requested start must be one of the offered starts.

        Raises:
            AvailabilityRulesError: rules missing or unreadable
            SlotUnavailableError: start_time is not an available slot
        """
        tenant = TenantService.lock_tenant(db, tenant.id)

        try:
            rules = tenant.get_availability_rules()
        except AvailabilityRulesError:
            db.rollback()
            raise

        if rules is None:
            db.rollback()
            raise AvailabilityRulesError("Availability rules not configured")

        start_time = start_time.replace(tzinfo=None, second=0, microsecond=0)

        if not AvailabilityService.is_slot_available(db, tenant, service, start_time, rules, now):
            db.rollback()
            logger.warning(f"Tenant {tenant.slug}: requested slot {start_time} is not available")
            raise SlotUnavailableError("The selected time is no longer available")

        return AppointmentService.create_appointment(
            db,
            tenant_id=tenant.id,
            scheduled_date=start_time,
            service_type=service.name,
            service_item_id=service.id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_email=customer_email,
            notes=notes,
            booking_source="web"
        )
