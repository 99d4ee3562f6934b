# app/models/appointment.py
import enum

from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.models.base import Base


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # References
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    service_item_id = Column(Integer, ForeignKey("service_items.id", ondelete="SET NULL"), nullable=True)

    # Customer info
    customer_name = Column(String(200), nullable=True)
    customer_phone = Column(String(30), nullable=True)
    customer_email = Column(String(255), nullable=True)

    # Appointment details; scheduled_date is naive shop-local time
    scheduled_date = Column(DateTime, nullable=False, index=True)
    service_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(SQLEnum(AppointmentStatus), default=AppointmentStatus.SCHEDULED, nullable=False)
    booking_source = Column(String(20), default="staff")  # staff, web

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)

    tenant = relationship("Tenant", back_populates="appointments")
    service_item = relationship("ServiceItem")

    def __repr__(self):
        return f"<Appointment(id={self.id}, tenant_id={self.tenant_id}, at={self.scheduled_date})>"

    def to_dict(self):
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "service_item_id": self.service_item_id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_email": self.customer_email,
            "scheduled_date": self.scheduled_date.isoformat() if self.scheduled_date else None,
            "service_type": self.service_type,
            "description": self.description,
            "notes": self.notes,
            "status": self.status.value if self.status else None,
            "booking_source": self.booking_source,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }
