from unittest.mock import patch

import pytest

from notifications.scheduler import AppointmentReminderScheduler, start_scheduler


@pytest.fixture
def background_scheduler():
    with patch("notifications.scheduler.BackgroundScheduler") as scheduler_cls:
        yield scheduler_cls


@pytest.fixture
def reminder_scheduler():
    return AppointmentReminderScheduler()


class TestLifecycle:

    def test_start_registers_daily_and_hourly_cron_jobs(self, background_scheduler, reminder_scheduler, settings):
        settings.TIME_ZONE = "Australia/Sydney"
        settings.APPOINTMENT_DAILY_REMINDER_HOUR = 8
        settings.APPOINTMENT_DAILY_REMINDER_MINUTE = 0

        reminder_scheduler.start()

        background_scheduler.assert_called_once_with(timezone="Australia/Sydney")
        scheduler = background_scheduler.return_value
        assert scheduler.add_job.call_count == 2

        jobs = {c.kwargs["id"]: c for c in scheduler.add_job.call_args_list}

        daily = jobs[AppointmentReminderScheduler.DAILY_JOB_ID]
        assert daily.args[0] == reminder_scheduler.run_todays_notifications
        assert daily.kwargs["trigger"] == "cron"
        assert daily.kwargs["hour"] == 8
        assert daily.kwargs["minute"] == 0

        hourly = jobs[AppointmentReminderScheduler.HOURLY_JOB_ID]
        assert hourly.args[0] == reminder_scheduler.run_upcoming_reminders
        assert hourly.kwargs["trigger"] == "cron"
        assert hourly.kwargs["minute"] == 0
        assert "hour" not in hourly.kwargs

        scheduler.start.assert_called_once()
        assert reminder_scheduler.is_running

    def test_start_twice_is_noop(self, background_scheduler, reminder_scheduler):
        reminder_scheduler.start()
        reminder_scheduler.start()

        background_scheduler.assert_called_once()
        assert background_scheduler.return_value.add_job.call_count == 2

    def test_stop_does_not_wait_for_running_jobs(self, background_scheduler, reminder_scheduler):
        reminder_scheduler.start()
        reminder_scheduler.stop()

        background_scheduler.return_value.shutdown.assert_called_once_with(wait=False)
        assert not reminder_scheduler.is_running

    def test_stop_when_not_running_is_noop(self, background_scheduler, reminder_scheduler):
        reminder_scheduler.stop()

        background_scheduler.return_value.shutdown.assert_not_called()
        assert not reminder_scheduler.is_running

    def test_restart_after_stop(self, background_scheduler, reminder_scheduler):
        reminder_scheduler.start()
        reminder_scheduler.stop()
        reminder_scheduler.start()

        assert background_scheduler.call_count == 2
        assert reminder_scheduler.is_running


class TestStartScheduler:

    def test_disabled_by_setting(self, settings):
        settings.ENABLE_SCHEDULER = False

        with patch("notifications.scheduler.reminder_scheduler") as instance:
            start_scheduler()

        instance.start.assert_not_called()

    def test_enabled_by_setting(self, settings):
        settings.ENABLE_SCHEDULER = True

        with patch("notifications.scheduler.reminder_scheduler") as instance:
            start_scheduler()

        instance.start.assert_called_once()


class TestJobsAndManualTriggers:

    def test_manual_triggers_run_pipelines(self, reminder_scheduler):
        with patch("notifications.scheduler.send_todays_appointment_notifications", return_value=4) as today, \
                patch("notifications.scheduler.send_upcoming_appointment_reminders", return_value=2) as soon:
            assert reminder_scheduler.trigger_todays_notifications() == 4
            assert reminder_scheduler.trigger_upcoming_reminders() == 2

        today.assert_called_once_with()
        soon.assert_called_once_with()

    def test_manual_triggers_work_while_stopped(self, reminder_scheduler):
        assert not reminder_scheduler.is_running

        with patch("notifications.scheduler.send_todays_appointment_notifications", return_value=0) as today:
            reminder_scheduler.trigger_todays_notifications()

        today.assert_called_once()

    def test_jobs_close_stale_connections(self, reminder_scheduler):
        with patch("notifications.scheduler.close_old_connections") as close, \
                patch("notifications.scheduler.send_upcoming_appointment_reminders", return_value=1):
            assert reminder_scheduler.run_upcoming_reminders() == 1

        assert close.call_count == 2

    def test_daily_job_runs_today_pipeline(self, reminder_scheduler):
        with patch("notifications.scheduler.close_old_connections"), \
                patch("notifications.scheduler.send_todays_appointment_notifications", return_value=3) as today:
            assert reminder_scheduler.run_todays_notifications() == 3

        today.assert_called_once_with()
