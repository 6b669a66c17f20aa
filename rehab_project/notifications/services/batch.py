import logging

from django.db import transaction

from notifications.models import Notification

logger = logging.getLogger(__name__)


# ============================================================
# BATCH CREATE (ONE ROUND-TRIP PER PIPELINE RUN)
# ============================================================

def create_batch_notifications(notifications):
    """
    Persist a batch of unsaved Notification instances.

    - Single bulk INSERT inside one transaction
    - All-or-nothing: a failure leaves no partial batch
    - Errors propagate to the caller
    """
    notifications = list(notifications)

    if not notifications:
        return []

    with transaction.atomic():
        created = Notification.objects.bulk_create(notifications)

    logger.info("Created %d notifications in one batch", len(created))
    return created
