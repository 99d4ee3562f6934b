from datetime import datetime, time, timedelta

import pytest

from app.core.exceptions import AvailabilityRulesError, SlotUnavailableError
from app.models import Appointment
from app.services.appointment.appointment_service import AppointmentService
from app.services.tenant.tenant_service import TenantService


def request_booking(db, tenant, service, day, hour, minute=0):
    return AppointmentService.request_public_booking(
        db,
        tenant=tenant,
        service=service,
        start_time=datetime.combine(day, time(hour, minute)),
        customer_name="Dana Reyes",
        customer_phone="512-555-0199",
        now=datetime.combine(day - timedelta(days=7), time(8, 0))
    )


def test_lock_tenant_returns_the_row(db, tenant):
    locked = TenantService.lock_tenant(db, tenant.id)

    assert locked.id == tenant.id
    assert locked.slug == "precision-auto"


def test_public_booking_takes_the_tenant_lock_before_checking(db, tenant, service, next_monday, monkeypatch):
    calls = []
    real_lock = TenantService.lock_tenant

    def recording_lock(session, tenant_id):
        calls.append((tenant_id, session.query(Appointment).count()))
        return real_lock(session, tenant_id)

    monkeypatch.setattr(TenantService, "lock_tenant", staticmethod(recording_lock))

    appointment = request_booking(db, tenant, service, next_monday, 9)

    assert calls == [(tenant.id, 0)]
    assert appointment.scheduled_date == datetime.combine(next_monday, time(9, 0))
    assert appointment.booking_source == "web"


def test_second_booking_for_the_same_start_is_refused(db, tenant, service, next_monday):
    request_booking(db, tenant, service, next_monday, 9)

    with pytest.raises(SlotUnavailableError):
        request_booking(db, tenant, service, next_monday, 9)

    assert db.query(Appointment).count() == 1


def test_refused_booking_leaves_the_session_usable(db, tenant, service, next_monday):
    with pytest.raises(SlotUnavailableError):
        request_booking(db, tenant, service, next_monday, 9, 15)

    assert db.query(Appointment).count() == 0


def test_booking_without_rules_is_refused(db, tenant, service, next_monday):
    tenant.availability_rules = None
    db.commit()

    with pytest.raises(AvailabilityRulesError):
        request_booking(db, tenant, service, next_monday, 9)

    assert db.query(Appointment).count() == 0
