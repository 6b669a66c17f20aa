from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    class Role(models.TextChoices):
        WORKER = "worker", "Worker"
        CLINICIAN = "clinician", "Clinician"
        CASE_MANAGER = "case_manager", "Case Manager"
        SITE_SUPERVISOR = "site_supervisor", "Site Supervisor"
        TEAM_LEADER = "team_leader", "Team Leader"
        ADMIN = "admin", "Admin"

    role = models.CharField(
        max_length=30,
        choices=Role.choices,
        default=Role.WORKER,
        db_index=True,
    )

    phone = models.CharField(max_length=20, blank=True)

    @property
    def display_name(self):
        full = self.get_full_name()
        return full if full else self.username

    def __str__(self):
        full = self.get_full_name()
        return f"{full} ({self.username})" if full else self.username
