# app/models/tenant.py
"""
Tenant Model - one shop/business account.
All shop data (service items, appointments) is scoped by tenant_id.
"""
import enum
from typing import Optional

from sqlalchemy import Column, String, Boolean, DateTime, JSON, Text, Integer, BigInteger, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.models.base import Base
from app.schemas.availability import AvailabilityRules


class TenantPlan(str, enum.Enum):
    FREE = "free"
    BASIC = "basic"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


class TenantStatus(str, enum.Enum):
    ACTIVE = "active"
    TRIAL = "trial"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # URL-safe identifier, e.g. "precision-auto"
    slug = Column(String(30), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)

    # Business profile
    business_address = Column(String(200), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zip_code = Column(String(20), nullable=True)
    country = Column(String(50), default="US")
    phone = Column(String(30), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    logo_url = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)

    # IANA name; advisory for slot generation
    timezone = Column(String(50), default="America/Chicago")

    # Subscription
    plan = Column(SQLEnum(TenantPlan), default=TenantPlan.BASIC, nullable=False)
    status = Column(SQLEnum(TenantStatus), default=TenantStatus.ACTIVE, nullable=False)
    trial_ends_at = Column(DateTime(timezone=True), nullable=True)

    # Onboarding wizard progress
    onboarding_completed = Column(Boolean, default=False, nullable=False)
    onboarding_completed_at = Column(DateTime(timezone=True), nullable=True)
    onboarding_step = Column(Integer, default=0, nullable=False)

    # Availability & booking
    availability_rules = Column(JSON, nullable=True)  # AvailabilityRules.to_storage()
    booking_enabled = Column(Boolean, default=False, nullable=False)

    media_storage_path = Column(String(255), nullable=True)
    storage_used_bytes = Column(BigInteger, default=0)

    created_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    service_items = relationship("ServiceItem", back_populates="tenant", cascade="all, delete-orphan")
    appointments = relationship("Appointment", back_populates="tenant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Tenant(id={self.id}, slug={self.slug})>"

    def get_availability_rules(self) -> Optional[AvailabilityRules]:
        """Typed rules parsed from the JSON column (None when not configured)"""
        return AvailabilityRules.from_storage(self.availability_rules)

    def set_availability_rules(self, rules: AvailabilityRules) -> None:
        self.availability_rules = rules.to_storage()

    @property
    def full_address(self) -> Optional[str]:
        if not self.business_address:
            return None
        return f"{self.business_address}, {self.city}, {self.state} {self.zip_code}".strip()

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "business_address": self.business_address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "country": self.country,
            "phone": self.phone,
            "email": self.email,
            "website": self.website,
            "logo_url": self.logo_url,
            "description": self.description,
            "timezone": self.timezone,
            "plan": self.plan.value if self.plan else None,
            "status": self.status.value if self.status else None,
            "booking_enabled": self.booking_enabled,
            "onboarding_completed": self.onboarding_completed,
            "onboarding_step": self.onboarding_step,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
