from django.db import models
from django.conf import settings
from django.utils import timezone


class Case(models.Model):
    """
    A rehabilitation case for one injured worker.
    Flow: new -> triaged -> assessed -> in_rehab -> return_to_work -> closed
    """

    class Status(models.TextChoices):
        NEW = "new", "New"
        TRIAGED = "triaged", "Triaged"
        ASSESSED = "assessed", "Assessed"
        IN_REHAB = "in_rehab", "In Rehab"
        RETURN_TO_WORK = "return_to_work", "Return to Work"
        CLOSED = "closed", "Closed"

    case_number = models.CharField(max_length=50, unique=True)

    worker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="cases",
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.NEW,
        db_index=True,
    )

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.case_number
