import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("cases", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Appointment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("scheduled_date", models.DateTimeField(db_index=True)),
                ("duration", models.PositiveIntegerField(default=60, help_text="Length in minutes")),
                ("status", models.CharField(choices=[("scheduled", "Scheduled"), ("confirmed", "Confirmed"), ("completed", "Completed"), ("cancelled", "Cancelled"), ("no_show", "No Show")], db_index=True, default="scheduled", max_length=20)),
                ("appointment_type", models.CharField(choices=[("assessment", "Assessment"), ("consultation", "Consultation"), ("follow_up", "Follow Up"), ("treatment", "Treatment"), ("review", "Review")], default="consultation", max_length=20)),
                ("location", models.CharField(choices=[("clinic", "Clinic"), ("telehealth", "Telehealth"), ("workplace", "Workplace"), ("home", "Home")], default="clinic", max_length=20)),
                ("telehealth_info", models.JSONField(blank=True, help_text='Remote meeting metadata, e.g. {"zoom_meeting": {"join_url": ...}}', null=True)),
                ("notes", models.TextField(blank=True)),
                ("case", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appointments", to="cases.case")),
                ("clinician", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="clinician_appointments", to=settings.AUTH_USER_MODEL)),
                ("worker", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="worker_appointments", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["scheduled_date"],
                "indexes": [models.Index(fields=["status", "scheduled_date"], name="appt_status_date_idx")],
            },
        ),
    ]
