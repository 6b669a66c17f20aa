import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("appointments", "0001_initial"),
        ("cases", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("appointment_reminder", "Appointment Reminder"), ("zoom_meeting_reminder", "Zoom Meeting Reminder"), ("case_update", "Case Update"), ("check_in_reminder", "Check-in Reminder"), ("system", "System")], db_index=True, max_length=40)),
                ("priority", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("urgent", "Urgent")], db_index=True, default="medium", max_length=20)),
                ("title", models.CharField(help_text="Short headline shown in notification list", max_length=200)),
                ("message", models.TextField(help_text="Detailed message shown when expanded")),
                ("action_url", models.CharField(blank=True, help_text="Optional URL the notification should link to", max_length=255)),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("recipient", models.ForeignKey(help_text="User who receives this notification", on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
                ("related_appointment", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to="appointments.appointment")),
                ("related_case", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to="cases.case")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
                    models.Index(fields=["related_appointment", "type", "created_at"], name="notif_appt_type_created_idx"),
                ],
            },
        ),
    ]
