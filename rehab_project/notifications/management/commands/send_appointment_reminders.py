"""
notifications/management/commands/send_appointment_reminders.py

Manual trigger for the appointment reminder pipelines.

Runs the same code as the scheduled jobs, synchronously,
outside the schedule. Safe to re-run: both pipelines skip
appointments that were already reminded today.
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from notifications.scheduler import reminder_scheduler


class Command(BaseCommand):
    help = "Send appointment reminders now (today's appointments and/or those starting soon)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--window",
            choices=["today", "soon", "all"],
            default="all",
            help="Which pipeline to run (default: all)",
        )

    def handle(self, *args, **options):
        window = options["window"]
        now = timezone.localtime()

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting appointment reminders ({window})"
            )
        )

        today_count = 0
        soon_count = 0

        if window in ("today", "all"):
            today_count = reminder_scheduler.trigger_todays_notifications()

        if window in ("soon", "all"):
            soon_count = reminder_scheduler.trigger_upcoming_reminders()

        self.stdout.write(
            self.style.SUCCESS(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: "
                f"{today_count} today reminders, "
                f"{soon_count} starting-soon reminders"
            )
        )
