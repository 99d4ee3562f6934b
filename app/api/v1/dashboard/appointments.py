# ============================================================================
# FILE: app/api/v1/dashboard/appointments.py
# Tenant-scoped appointment endpoints - thin HTTP layer
# ============================================================================
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Path
from pydantic import BaseModel, Field, EmailStr
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_tenant
from app.config.database import get_db
from app.models.appointment import AppointmentStatus
from app.models.tenant import Tenant
from app.services.appointment.appointment_service import AppointmentService
from app.services.tenant.tenant_service import TenantService

router = APIRouter(prefix="/appointments", tags=["dashboard-appointments"])


class AppointmentCreateInput(BaseModel):
    scheduled_date: datetime
    service_type: Optional[str] = Field(None, max_length=100)
    service_item_id: Optional[int] = None
    customer_name: Optional[str] = Field(None, max_length=200)
    customer_phone: Optional[str] = Field(None, max_length=30)
    customer_email: Optional[EmailStr] = None
    description: Optional[str] = None
    notes: Optional[str] = None


class AppointmentStatusInput(BaseModel):
    status: AppointmentStatus


@router.get("")
def list_appointments(
        start_date: Optional[date] = Query(None, description="Filter appointments on or after this date"),
        end_date: Optional[date] = Query(None, description="Filter appointments on or before this date"),
        status: Optional[AppointmentStatus] = Query(None, description="Filter by status"),
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(50, ge=1, le=100, description="Number of records to return"),
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Get a list of the shop's appointments.
    """
    appointments = AppointmentService.list_appointments(
        db=db,
        tenant_id=tenant.id,
        start_date=start_date,
        end_date=end_date,
        status=status,
        skip=skip,
        limit=limit
    )

    return {
        "total": len(appointments),
        "appointments": [a.to_dict() for a in appointments]
    }


@router.post("", status_code=201)
def create_appointment(
        data: AppointmentCreateInput,
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Staff-created appointment. Not checked against availability rules.
    """
    service_type = data.service_type
    if data.service_item_id is not None:
        service = TenantService.get_bookable_service(db, tenant.id, data.service_item_id)
        if service is None:
            raise HTTPException(status_code=404, detail="Service not found")
        service_type = service_type or service.name

    if not service_type:
        raise HTTPException(status_code=400, detail="service_type or service_item_id is required")

    appointment = AppointmentService.create_appointment(
        db,
        tenant_id=tenant.id,
        scheduled_date=data.scheduled_date,
        service_type=service_type,
        service_item_id=data.service_item_id,
        customer_name=data.customer_name,
        customer_phone=data.customer_phone,
        customer_email=data.customer_email,
        description=data.description,
        notes=data.notes,
        booking_source="staff"
    )
    return appointment.to_dict()


@router.get("/{appointment_id}")
def get_appointment(
        appointment_id: int = Path(..., description="The appointment ID"),
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Get detailed information about a specific appointment.
    """
    appointment = AppointmentService.get_appointment(db, tenant.id, appointment_id)
    if not appointment:
        raise HTTPException(
            status_code=404,
            detail="Appointment not found or you don't have access to it"
        )

    return appointment.to_dict()


@router.patch("/{appointment_id}/status")
def update_appointment_status(
        data: AppointmentStatusInput,
        appointment_id: int = Path(..., description="The appointment ID"),
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Move an appointment through scheduled -> in_progress -> completed (or cancel / no-show).
    """
    appointment = AppointmentService.update_status(db, tenant.id, appointment_id, data.status)
    if not appointment:
        raise HTTPException(
            status_code=404,
            detail="Appointment not found or you don't have access to it"
        )

    return appointment.to_dict()
