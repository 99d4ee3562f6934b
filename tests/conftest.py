from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import get_db
from app.main import app
from app.models import Base, ServiceCategory, ServiceItem, Tenant, TenantStatus
from app.schemas.availability import AvailabilityRules

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def tenant(db):
    shop = Tenant(
        slug="precision-auto",
        name="Precision Auto",
        business_address="12 Main St",
        city="Austin",
        state="TX",
        zip_code="78701",
        phone="+1 512 555 0100",
        status=TenantStatus.ACTIVE,
        onboarding_step=3,
        onboarding_completed=True,
        booking_enabled=True,
    )
    shop.set_availability_rules(AvailabilityRules())
    db.add(shop)
    db.commit()
    db.refresh(shop)
    return shop


@pytest.fixture
def service(db, tenant):
    item = ServiceItem(
        tenant_id=tenant.id,
        name="Oil Change",
        description="Synthetic oil and filter",
        base_price=Decimal("49.99"),
        duration_minutes=60,
        category=ServiceCategory.OIL_CHANGE,
        is_active=True,
        is_bookable_online=True,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@pytest.fixture
def next_monday():
    """A Monday 7 to 13 days out, inside the default 30-day booking window"""
    day = date.today() + timedelta(days=7)
    return day + timedelta(days=(7 - day.weekday()) % 7)


@pytest.fixture
def tenant_headers(tenant):
    return {"X-Tenant-Slug": tenant.slug}
