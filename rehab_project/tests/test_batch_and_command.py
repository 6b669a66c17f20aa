from datetime import timedelta
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.db import DatabaseError
from django.utils import timezone

from notifications.models import Notification
from notifications.services.batch import create_batch_notifications

pytestmark = pytest.mark.django_db


class TestCreateBatchNotifications:

    def test_empty_batch_writes_nothing(self):
        assert create_batch_notifications([]) == []
        assert Notification.objects.count() == 0

    def test_batch_is_written(self, worker, clinician):
        batch = [
            Notification(recipient=worker, type=Notification.Type.SYSTEM, title="a", message="a"),
            Notification(recipient=clinician, type=Notification.Type.SYSTEM, title="b", message="b"),
        ]

        created = create_batch_notifications(batch)

        assert len(created) == 2
        assert Notification.objects.count() == 2

    def test_store_errors_propagate(self, worker):
        batch = [Notification(recipient=worker, type=Notification.Type.SYSTEM, title="a", message="a")]

        with patch.object(Notification.objects, "bulk_create", side_effect=DatabaseError("down")):
            with pytest.raises(DatabaseError):
                create_batch_notifications(batch)


class TestSendAppointmentRemindersCommand:

    def test_runs_both_pipelines_by_default(self, make_appointment, today_at):
        make_appointment(today_at(0, 0))
        make_appointment(timezone.now() + timedelta(minutes=30))
        out = StringIO()

        call_command("send_appointment_reminders", stdout=out)

        assert "Completed:" in out.getvalue()
        assert Notification.objects.filter(priority=Notification.Priority.URGENT).count() == 2
        assert Notification.objects.filter(priority=Notification.Priority.HIGH).count() >= 2

    def test_window_option_selects_pipeline(self):
        with patch("notifications.scheduler.send_todays_appointment_notifications", return_value=0) as today, \
                patch("notifications.scheduler.send_upcoming_appointment_reminders", return_value=0) as soon:
            call_command("send_appointment_reminders", "--window", "soon", stdout=StringIO())

        today.assert_not_called()
        soon.assert_called_once()

    def test_reports_counts(self):
        out = StringIO()

        with patch("notifications.scheduler.send_todays_appointment_notifications", return_value=6), \
                patch("notifications.scheduler.send_upcoming_appointment_reminders", return_value=2):
            call_command("send_appointment_reminders", stdout=out)

        assert "6 today reminders" in out.getvalue()
        assert "2 starting-soon reminders" in out.getvalue()
