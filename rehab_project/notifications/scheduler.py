from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings
from django.db import close_old_connections
from django.utils import timezone
import logging

from notifications.services.reminders import (
    send_todays_appointment_notifications,
    send_upcoming_appointment_reminders,
)

logger = logging.getLogger(__name__)


class AppointmentReminderScheduler:
    """
    Owns the APScheduler instance that drives appointment reminders.

    States: stopped (no scheduler) / running (scheduler started).
    start() and stop() are no-ops in the wrong state.
    """

    DAILY_JOB_ID = "send_todays_appointment_notifications"
    HOURLY_JOB_ID = "send_upcoming_appointment_reminders"

    def __init__(self):
        self._scheduler = None

    @property
    def is_running(self):
        return self._scheduler is not None

    # --------------------------------------------
    # LIFECYCLE
    # --------------------------------------------
    def start(self):
        if self.is_running:
            logger.info("Notification scheduler is already running")
            return

        logger.info("Starting notification scheduler...")

        scheduler = BackgroundScheduler(
            timezone=settings.TIME_ZONE
        )

        # DAILY: today's appointments at a fixed wall-clock time
        scheduler.add_job(
            self.run_todays_notifications,
            trigger="cron",
            hour=settings.APPOINTMENT_DAILY_REMINDER_HOUR,
            minute=settings.APPOINTMENT_DAILY_REMINDER_MINUTE,
            id=self.DAILY_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        # HOURLY: appointments starting within the next 60 minutes
        scheduler.add_job(
            self.run_upcoming_reminders,
            trigger="cron",
            minute=0,
            id=self.HOURLY_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        scheduler.start()
        self._scheduler = scheduler

        logger.info(
            "Notification scheduler started: daily at %02d:%02d, hourly on the hour (%s)",
            settings.APPOINTMENT_DAILY_REMINDER_HOUR,
            settings.APPOINTMENT_DAILY_REMINDER_MINUTE,
            settings.TIME_ZONE,
        )

    def stop(self):
        if not self.is_running:
            logger.info("Notification scheduler is not running")
            return

        # In-flight runs finish; only future firings are cancelled
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Notification scheduler stopped")

    # --------------------------------------------
    # JOBS (run on scheduler worker threads)
    # --------------------------------------------
    def run_todays_notifications(self):
        logger.info(
            "Checking for appointments scheduled for today at %s",
            f"{timezone.localtime():%Y-%m-%d %H:%M:%S}",
        )
        close_old_connections()
        try:
            return send_todays_appointment_notifications()
        finally:
            close_old_connections()

    def run_upcoming_reminders(self):
        logger.info("Checking for appointments starting soon...")
        close_old_connections()
        try:
            return send_upcoming_appointment_reminders()
        finally:
            close_old_connections()

    # --------------------------------------------
    # MANUAL TRIGGERS (ops / tests)
    # --------------------------------------------
    def trigger_todays_notifications(self):
        logger.info("Manually triggering today's appointment notifications...")
        return send_todays_appointment_notifications()

    def trigger_upcoming_reminders(self):
        logger.info("Manually triggering upcoming reminders...")
        return send_upcoming_appointment_reminders()


# ============================================================
# PROCESS-WIDE INSTANCE
# ============================================================
reminder_scheduler = AppointmentReminderScheduler()


def start_scheduler():
    """
    Start the reminder scheduler safely.

    - Respects ENABLE_SCHEDULER setting
    - Double start is a logged no-op
    """
    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("Notification scheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return

    reminder_scheduler.start()
