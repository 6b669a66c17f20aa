"""
Reminder notification service layer.

This package contains time-based reminder emitters
that are triggered by the scheduler (or the
send_appointment_reminders management command).

Reminder logic is:
- service-layer only
- window-based
- deduplicated per day
- written in one batch per run
"""

# =====================================================
# APPOINTMENT REMINDERS
# =====================================================
from .appointments import (
    send_todays_appointment_notifications,
    send_upcoming_appointment_reminders,
)

__all__ = [
    "send_todays_appointment_notifications",
    "send_upcoming_appointment_reminders",
]
