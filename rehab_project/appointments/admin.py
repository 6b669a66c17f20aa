from django.contrib import admin

from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "scheduled_date",
        "appointment_type",
        "status",
        "location",
        "worker",
        "clinician",
        "case",
    )

    list_filter = (
        "status",
        "appointment_type",
        "location",
        "scheduled_date",
    )

    search_fields = (
        "case__case_number",
        "worker__first_name",
        "worker__last_name",
        "clinician__first_name",
        "clinician__last_name",
    )

    list_select_related = ("worker", "clinician", "case")
    ordering = ("-scheduled_date",)
    list_per_page = 25
