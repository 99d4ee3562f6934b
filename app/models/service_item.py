# app/models/service_item.py
"""
ServiceItem Model - catalog entry a customer can book.
Only active, online-bookable items take part in slot generation.
"""
import enum

from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.models.base import Base


class ServiceCategory(str, enum.Enum):
    GENERAL = "general"
    OIL_CHANGE = "oil_change"
    BRAKE_SERVICE = "brake_service"
    TIRE_SERVICE = "tire_service"
    ENGINE = "engine"
    TRANSMISSION = "transmission"
    ELECTRICAL = "electrical"
    DIAGNOSTIC = "diagnostic"
    INSPECTION = "inspection"
    MAINTENANCE = "maintenance"


class ServiceItem(Base):
    __tablename__ = "service_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Numeric(10, 2), nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=False, default=60)

    is_active = Column(Boolean, default=True, index=True)
    is_bookable_online = Column(Boolean, default=True)

    category = Column(SQLEnum(ServiceCategory), default=ServiceCategory.GENERAL, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    tenant = relationship("Tenant", back_populates="service_items")

    def __repr__(self):
        return f"<ServiceItem(id={self.id}, name={self.name}, tenant_id={self.tenant_id})>"

    @property
    def is_bookable(self) -> bool:
        return bool(self.is_active and self.is_bookable_online)

    @property
    def formatted_price(self) -> str:
        """Return human-readable price string"""
        if self.base_price is None:
            return "Contact for pricing"
        if self.base_price == 0:
            return "Free"
        return f"${self.base_price:,.2f}"

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        if not self.duration_minutes:
            return "Duration varies"

        hours = self.duration_minutes // 60
        minutes = self.duration_minutes % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "name": self.name,
            "description": self.description,
            "base_price": float(self.base_price) if self.base_price is not None else None,
            "formatted_price": self.formatted_price,
            "duration_minutes": self.duration_minutes,
            "formatted_duration": self.formatted_duration,
            "category": self.category.value if self.category else None,
            "is_active": self.is_active,
            "is_bookable_online": self.is_bookable_online,
        }
