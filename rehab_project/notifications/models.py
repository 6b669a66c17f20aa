from django.db import models
from django.conf import settings
from django.utils import timezone


class Notification(models.Model):
    """
    A derived, user-facing notification.
    Notifications are NOT the source of truth; they reflect
    events happening in Appointment, Case, etc.
    """

    # =====================================================
    # TYPE
    # =====================================================
    class Type(models.TextChoices):
        APPOINTMENT_REMINDER = "appointment_reminder", "Appointment Reminder"
        ZOOM_MEETING_REMINDER = "zoom_meeting_reminder", "Zoom Meeting Reminder"
        CASE_UPDATE = "case_update", "Case Update"
        CHECK_IN_REMINDER = "check_in_reminder", "Check-in Reminder"
        SYSTEM = "system", "System"

    # Types that count as "already reminded" for an appointment
    APPOINTMENT_REMINDER_TYPES = (
        Type.APPOINTMENT_REMINDER,
        Type.ZOOM_MEETING_REMINDER,
    )

    # =====================================================
    # PRIORITY (UI + sorting)
    # =====================================================
    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"
        URGENT = "urgent", "Urgent"

    # =====================================================
    # CORE RELATIONSHIPS
    # =====================================================
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        help_text="User who receives this notification"
    )

    # =====================================================
    # CLASSIFICATION
    # =====================================================
    type = models.CharField(
        max_length=40,
        choices=Type.choices,
        db_index=True
    )

    priority = models.CharField(
        max_length=20,
        choices=Priority.choices,
        default=Priority.MEDIUM,
        db_index=True
    )

    # =====================================================
    # CONTENT
    # =====================================================
    title = models.CharField(
        max_length=200,
        help_text="Short headline shown in notification list"
    )

    message = models.TextField(
        help_text="Detailed message shown when expanded"
    )

    action_url = models.CharField(
        max_length=255,
        blank=True,
        help_text="Optional URL the notification should link to"
    )

    # =====================================================
    # OPTIONAL CONTEXT
    # =====================================================
    related_appointment = models.ForeignKey(
        "appointments.Appointment",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications"
    )

    related_case = models.ForeignKey(
        "cases.Case",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications"
    )

    # =====================================================
    # STATE
    # =====================================================
    is_read = models.BooleanField(
        default=False,
        db_index=True
    )

    read_at = models.DateTimeField(
        null=True,
        blank=True
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True
    )

    # =====================================================
    # DJANGO META
    # =====================================================
    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
            models.Index(
                fields=["related_appointment", "type", "created_at"],
                name="notif_appt_type_created_idx",
            ),
        ]

    def __str__(self):
        return (
            f"{self.recipient} | "
            f"{self.type.upper()} | "
            f"{self.title}"
        )
