"""
Notification service layer.

Functions here emit notifications WITHOUT delivering them;
push/email/SMS transport is outside this package.
"""

# =====================================================
# BATCH
# =====================================================
from .batch import (
    create_batch_notifications,
)

# =====================================================
# REMINDERS
# =====================================================
from .reminders import (
    send_todays_appointment_notifications,
    send_upcoming_appointment_reminders,
)

# =====================================================
# PUBLIC EXPORTS
# =====================================================
__all__ = [
    # Batch
    "create_batch_notifications",

    # Reminders
    "send_todays_appointment_notifications",
    "send_upcoming_appointment_reminders",
]
