# app/services/tenant/tenant_service.py
"""Tenant, service-item and appointment lookups used by the booking flow"""
from typing import List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.appointment import Appointment
from app.models.service_item import ServiceItem
from app.models.tenant import Tenant

logger = logging.getLogger(__name__)


class TenantService:
    """Read access to tenant-scoped rows"""

    @staticmethod
    def get_tenant_by_slug(db: Session, slug: str) -> Optional[Tenant]:
        """Case-insensitive slug lookup"""
        if not slug:
            return None
        return db.query(Tenant).filter(
            func.lower(Tenant.slug) == slug.lower()
        ).first()

    @staticmethod
    def get_tenant_by_id(db: Session, tenant_id: int) -> Optional[Tenant]:
        return db.query(Tenant).filter(Tenant.id == tenant_id).first()

    @staticmethod
    def lock_tenant(db: Session, tenant_id: int) -> Tenant:
        """
        Re-read the tenant row with SELECT ... FOR UPDATE.

        Bookings for one tenant are serialized until the caller commits or
        rolls back. SQLite has no row locks and runs the plain SELECT.
        """
        return db.query(Tenant).filter(
            Tenant.id == tenant_id
        ).with_for_update().populate_existing().one()

    @staticmethod
    def get_bookable_services(db: Session, tenant_id: int) -> List[ServiceItem]:
        """Active, online-bookable service items for a tenant"""
        return db.query(ServiceItem).filter(
            ServiceItem.tenant_id == tenant_id,
            ServiceItem.is_active.is_(True),
            ServiceItem.is_bookable_online.is_(True)
        ).order_by(ServiceItem.name).all()

    @staticmethod
    def get_bookable_service(db: Session, tenant_id: int, service_id: int) -> Optional[ServiceItem]:
        """A single service item, or None if missing or not bookable online"""
        service = db.query(ServiceItem).filter(
            ServiceItem.id == service_id,
            ServiceItem.tenant_id == tenant_id
        ).first()

        if service is None or not service.is_bookable:
            return None
        return service

    @staticmethod
    def get_tenant_appointments(db: Session, tenant_id: int) -> List[Appointment]:
        """All appointments for a tenant, any status, unfiltered by date"""
        return db.query(Appointment).filter(
            Appointment.tenant_id == tenant_id
        ).order_by(Appointment.scheduled_date).all()
