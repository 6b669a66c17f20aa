from django.contrib import admin

from .models import Case


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("case_number", "worker", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("case_number", "worker__first_name", "worker__last_name")
    ordering = ("-created_at",)
