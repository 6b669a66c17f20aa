from django.db import models
from django.conf import settings


class Appointment(models.Model):
    """
    A scheduled session between a worker and a clinician.

    Lifecycle is owned by appointment management; the reminder
    pipeline only reads these rows.
    """

    # =====================================================
    # CHOICES
    # =====================================================
    class Status(models.TextChoices):
        SCHEDULED = "scheduled", "Scheduled"
        CONFIRMED = "confirmed", "Confirmed"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"
        NO_SHOW = "no_show", "No Show"

    class Type(models.TextChoices):
        ASSESSMENT = "assessment", "Assessment"
        CONSULTATION = "consultation", "Consultation"
        FOLLOW_UP = "follow_up", "Follow Up"
        TREATMENT = "treatment", "Treatment"
        REVIEW = "review", "Review"

    class Location(models.TextChoices):
        CLINIC = "clinic", "Clinic"
        TELEHEALTH = "telehealth", "Telehealth"
        WORKPLACE = "workplace", "Workplace"
        HOME = "home", "Home"

    # Statuses that still expect attendance
    UPCOMING_STATUSES = (Status.SCHEDULED, Status.CONFIRMED)

    # =====================================================
    # SCHEDULE
    # =====================================================
    scheduled_date = models.DateTimeField(db_index=True)

    duration = models.PositiveIntegerField(
        default=60,
        help_text="Length in minutes"
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.SCHEDULED,
        db_index=True,
    )

    appointment_type = models.CharField(
        max_length=20,
        choices=Type.choices,
        default=Type.CONSULTATION,
    )

    location = models.CharField(
        max_length=20,
        choices=Location.choices,
        default=Location.CLINIC,
    )

    telehealth_info = models.JSONField(
        null=True,
        blank=True,
        help_text='Remote meeting metadata, e.g. {"zoom_meeting": {"join_url": ...}}'
    )

    # =====================================================
    # PARTIES
    # =====================================================
    worker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="worker_appointments",
    )

    clinician = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="clinician_appointments",
    )

    case = models.ForeignKey(
        "cases.Case",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointments",
    )

    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["scheduled_date"]
        indexes = [
            models.Index(fields=["status", "scheduled_date"], name="appt_status_date_idx"),
        ]

    def __str__(self):
        return f"{self.get_appointment_type_display()} @ {self.scheduled_date:%Y-%m-%d %H:%M}"

    @property
    def is_zoom_meeting(self):
        """Telehealth location with meeting details attached."""
        return (
            self.location == self.Location.TELEHEALTH
            and isinstance(self.telehealth_info, dict)
            and bool(self.telehealth_info.get("zoom_meeting"))
        )
