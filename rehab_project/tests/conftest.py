"""
Shared pytest fixtures: users, a rehab case, and an appointment factory.
"""

from datetime import datetime, time

import pytest
from django.utils import timezone

from accounts.models import User
from appointments.models import Appointment
from cases.models import Case


@pytest.fixture
def zoom_info():
    return {"zoom_meeting": {"join_url": "https://zoom.us/j/123456789", "meeting_id": "123456789"}}


@pytest.fixture
def today_at():
    """Aware datetime for today (current time zone) at hour:minute."""

    def _at(hour, minute=0):
        today = timezone.localdate()
        return timezone.make_aware(datetime.combine(today, time(hour, minute)))

    return _at


@pytest.fixture
def worker(db):
    return User.objects.create_user(
        username="wanda.worker",
        first_name="Wanda",
        last_name="Worker",
        email="wanda@example.com",
        role=User.Role.WORKER,
    )


@pytest.fixture
def clinician(db):
    return User.objects.create_user(
        username="carl.clinician",
        first_name="Carl",
        last_name="Clinician",
        email="carl@example.com",
        role=User.Role.CLINICIAN,
    )


@pytest.fixture
def rehab_case(db, worker):
    return Case.objects.create(
        case_number="CASE-2024-001",
        worker=worker,
        status=Case.Status.IN_REHAB,
    )


@pytest.fixture
def make_appointment(db, worker, clinician, rehab_case):
    """Factory: defaults to a scheduled in-clinic appointment for worker + clinician."""

    def _make(scheduled_date, **overrides):
        fields = {
            "scheduled_date": scheduled_date,
            "status": Appointment.Status.SCHEDULED,
            "appointment_type": Appointment.Type.CONSULTATION,
            "location": Appointment.Location.CLINIC,
            "worker": worker,
            "clinician": clinician,
            "case": rehab_case,
        }
        fields.update(overrides)
        return Appointment.objects.create(**fields)

    return _make
