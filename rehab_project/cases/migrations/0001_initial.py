import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Case",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("case_number", models.CharField(max_length=50, unique=True)),
                ("status", models.CharField(choices=[("new", "New"), ("triaged", "Triaged"), ("assessed", "Assessed"), ("in_rehab", "In Rehab"), ("return_to_work", "Return to Work"), ("closed", "Closed")], db_index=True, default="new", max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("worker", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="cases", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
