"""
notifications/services/reminders/appointments.py

Scheduled appointment reminders for workers and clinicians.

Two pipelines share the same shape:
    window query -> duplicate check -> build -> one batch insert

- TODAY:  appointments in [start of local day, start of next day), priority HIGH
- SOON:   appointments in [now, now + 60 min], priority URGENT

Duplicate checks look at reminders created since the start of the
local day. TODAY skips an appointment if any reminder exists for it;
SOON only counts earlier URGENT reminders, so the morning HIGH digest
never suppresses the one-hour reminder.

Any error aborts the run, is logged, and is NOT re-raised;
the next scheduled tick simply runs the window query again.
"""

import logging
import math
from datetime import datetime, time, timedelta

from django.db import DatabaseError, connection
from django.utils import timezone

from appointments.models import Appointment
from notifications.models import Notification
from notifications.services.batch import create_batch_notifications

logger = logging.getLogger(__name__)


# ============================================================
# WINDOW DEFINITIONS
# ============================================================

SOON_WINDOW_MINUTES = 60

ACTION_URL = "/appointments"

# (title, worker message, clinician message)
TODAY_TEMPLATES = {
    "zoom": (
        "Zoom Meeting Today",
        "You have a Zoom meeting scheduled for today at {time}. "
        "Please join 5 minutes before the scheduled time.",
        "You have a Zoom meeting with {worker} scheduled for today at {time}.",
    ),
    "in_person": (
        "Appointment Today",
        "You have an appointment scheduled for today at {time}. "
        "Please arrive 10 minutes early.",
        "You have an appointment with {worker} scheduled for today at {time}.",
    ),
}

SOON_TEMPLATES = {
    "zoom": (
        "Zoom Meeting Starting Soon",
        "Your Zoom meeting starts in {minutes} minutes. Please join now.",
        "Your Zoom meeting with {worker} starts in {minutes} minutes.",
    ),
    "in_person": (
        "Appointment Starting Soon",
        "Your appointment starts in {minutes} minutes. Please prepare to arrive.",
        "Your appointment with {worker} starts in {minutes} minutes.",
    ),
}


# ============================================================
# HELPERS
# ============================================================

def store_is_configured():
    """False when Django runs without a usable database (dummy backend)."""
    return connection.settings_dict.get("ENGINE") not in (None, "", "django.db.backends.dummy")


def today_window(now=None):
    """
    Half-open [start of today, start of tomorrow) in the current
    time zone, returned as aware datetimes.
    """
    now = now or timezone.now()
    today = timezone.localtime(now).date()

    start = timezone.make_aware(datetime.combine(today, time.min))
    end = timezone.make_aware(datetime.combine(today + timedelta(days=1), time.min))
    return start, end


def soon_window(now=None):
    """Closed [now, now + 60 minutes]."""
    now = now or timezone.now()
    return now, now + timedelta(minutes=SOON_WINDOW_MINUTES)


def minutes_until(scheduled_date, now):
    """Whole minutes until start, rounded half up."""
    return math.floor((scheduled_date - now).total_seconds() / 60 + 0.5)


def upcoming_appointments():
    """Appointments still expecting attendance, with display fields joined."""
    return (
        Appointment.objects
        .select_related("worker", "clinician", "case")
        .filter(status__in=Appointment.UPCOMING_STATUSES)
        .order_by("scheduled_date", "id")
    )


def already_notified(appointment, since, priority=None):
    """
    True if either party already has a reminder for this
    appointment created at or after `since`.
    """
    recipient_ids = [
        pk for pk in (appointment.worker_id, appointment.clinician_id)
        if pk is not None
    ]
    if not recipient_ids:
        return False

    qs = Notification.objects.filter(
        recipient_id__in=recipient_ids,
        related_appointment_id=appointment.id,
        type__in=Notification.APPOINTMENT_REMINDER_TYPES,
        created_at__gte=since,
    )

    if priority:
        qs = qs.filter(priority=priority)

    return qs.exists()


def build_appointment_notifications(appointment, *, templates, priority, context):
    """
    Build (unsaved) reminder notifications for one appointment.

    - Worker: whenever a worker is linked
    - Clinician: only when a clinician is linked AND the worker
      resolved (the clinician text names the worker)
    """
    is_zoom = appointment.is_zoom_meeting
    title, worker_template, clinician_template = templates["zoom" if is_zoom else "in_person"]

    notification_type = (
        Notification.Type.ZOOM_MEETING_REMINDER
        if is_zoom
        else Notification.Type.APPOINTMENT_REMINDER
    )

    common = {
        "type": notification_type,
        "title": title,
        "priority": priority,
        "action_url": ACTION_URL,
        "related_appointment_id": appointment.id,
        "related_case_id": appointment.case_id,
    }

    worker = appointment.worker
    notifications = []

    if appointment.worker_id:
        notifications.append(Notification(
            recipient_id=appointment.worker_id,
            message=worker_template.format(**context),
            **common,
        ))

    if appointment.clinician_id and worker:
        notifications.append(Notification(
            recipient_id=appointment.clinician_id,
            message=clinician_template.format(worker=worker.display_name, **context),
            **common,
        ))

    return notifications


# ============================================================
# TODAY'S APPOINTMENTS (DAILY)
# ============================================================

def send_todays_appointment_notifications(now=None):
    """
    Remind workers and clinicians about appointments later today.
    Returns the number of notifications created.
    """
    if not store_is_configured():
        logger.info("Database not configured, skipping appointment notifications")
        return 0

    now = now or timezone.now()
    start, end = today_window(now)

    logger.info("Checking appointments scheduled for %s", timezone.localtime(now).date())

    try:
        appointments = list(
            upcoming_appointments().filter(
                scheduled_date__gte=start,
                scheduled_date__lt=end,
            )
        )

        logger.info("Found %d appointments scheduled for today", len(appointments))

        if not appointments:
            return 0

        notifications = []

        for appointment in appointments:
            if already_notified(appointment, since=start):
                logger.info(
                    "Notification already sent today for appointment %s, skipping",
                    appointment.id,
                )
                continue

            local_start = timezone.localtime(appointment.scheduled_date)

            notifications.extend(build_appointment_notifications(
                appointment,
                templates=TODAY_TEMPLATES,
                priority=Notification.Priority.HIGH,
                context={"time": f"{local_start:%H:%M}"},
            ))

        if not notifications:
            logger.info("No notifications to send for today's appointments")
            return 0

        create_batch_notifications(notifications)

    except (DatabaseError, Exception):
        logger.exception("Error sending today's appointment notifications")
        return 0

    logger.info(
        "Sent %d notifications for appointments scheduled for today",
        len(notifications),
    )
    return len(notifications)


# ============================================================
# APPOINTMENTS STARTING SOON (HOURLY)
# ============================================================

def send_upcoming_appointment_reminders(now=None):
    """
    Remind both parties about appointments starting within the next hour.
    Returns the number of notifications created.
    """
    if not store_is_configured():
        logger.info("Database not configured, skipping appointment reminders")
        return 0

    now = now or timezone.now()
    window_start, window_end = soon_window(now)
    day_start, _ = today_window(now)

    try:
        appointments = list(
            upcoming_appointments().filter(
                scheduled_date__gte=window_start,
                scheduled_date__lte=window_end,
            )
        )

        if not appointments:
            return 0

        notifications = []

        for appointment in appointments:
            minutes = minutes_until(appointment.scheduled_date, now)

            # Re-check against the clock; the query boundary may be stale
            if not 0 < minutes <= SOON_WINDOW_MINUTES:
                continue

            # Only an earlier URGENT reminder counts; the morning
            # digest must not suppress the one-hour reminder.
            if already_notified(appointment, since=day_start, priority=Notification.Priority.URGENT):
                logger.info(
                    "Upcoming reminder already sent for appointment %s, skipping",
                    appointment.id,
                )
                continue

            notifications.extend(build_appointment_notifications(
                appointment,
                templates=SOON_TEMPLATES,
                priority=Notification.Priority.URGENT,
                context={"minutes": minutes},
            ))

        if not notifications:
            return 0

        create_batch_notifications(notifications)

    except (DatabaseError, Exception):
        logger.exception("Error sending upcoming appointment reminders")
        return 0

    logger.info("Sent %d upcoming appointment reminders", len(notifications))
    return len(notifications)
