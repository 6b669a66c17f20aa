from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """
    Admin configuration for appointment and case notifications
    """

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "id",
        "recipient",
        "type",
        "colored_priority",
        "title",
        "related_appointment",
        "is_read",
        "created_at",
    )

    list_filter = (
        "type",
        "priority",
        "is_read",
        "created_at",
    )

    search_fields = (
        "title",
        "message",
        "recipient__username",
        "recipient__first_name",
        "recipient__last_name",
    )

    list_select_related = ("recipient", "related_appointment")
    ordering = ("-created_at",)
    list_per_page = 25

    # =====================================================
    # FIELDSETS (DETAIL VIEW)
    # =====================================================
    fieldsets = (
        ("Recipient", {
            "fields": ("recipient",),
        }),
        ("Classification", {
            "fields": ("type", "priority"),
        }),
        ("Content", {
            "fields": ("title", "message", "action_url"),
        }),
        ("Context", {
            "fields": ("related_appointment", "related_case"),
        }),
        ("Status", {
            "fields": ("is_read", "read_at", "created_at"),
        }),
    )

    readonly_fields = (
        "created_at",
        "read_at",
    )

    actions = (
        "mark_as_read",
        "mark_as_unread",
    )

    # =====================================================
    # CUSTOM DISPLAY HELPERS
    # =====================================================
    def colored_priority(self, obj):
        color_map = {
            Notification.Priority.LOW: "#6b7280",       # gray
            Notification.Priority.MEDIUM: "#2563eb",    # blue
            Notification.Priority.HIGH: "#f59e0b",      # orange
            Notification.Priority.URGENT: "#dc2626",    # red
        }

        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            color_map.get(obj.priority, "#000000"),
            obj.get_priority_display(),
        )

    colored_priority.short_description = "Priority"

    # =====================================================
    # ADMIN ACTIONS
    # =====================================================
    @admin.action(description="Mark selected notifications as READ")
    def mark_as_read(self, request, queryset):
        queryset.update(is_read=True, read_at=timezone.now())

    @admin.action(description="Mark selected notifications as UNREAD")
    def mark_as_unread(self, request, queryset):
        queryset.update(is_read=False, read_at=None)
