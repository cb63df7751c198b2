"""Signal handlers for files app."""

import logging

from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from server.apps.files.models import File

logger = logging.getLogger(__name__)


def _delete_blob(storage_name: str) -> None:
    try:
        if default_storage.exists(storage_name):
            default_storage.delete(storage_name)
        else:
            logger.warning(
                'Blob not found in storage (already deleted?): %s',
                storage_name,
            )
    except Exception:
        # Log error but don't raise - DB delete already committed
        logger.exception(
            'Failed to delete blob from storage (orphaned): %s',
            storage_name,
        )


@receiver(post_delete, sender=File)
def delete_blob_from_storage(
    sender: type[File],
    instance: File,
    **kwargs: object,
) -> None:
    """Delete the blob from storage when a File record is deleted.

    Runs after the surrounding transaction commits, so a rolled back
    delete never loses content.

    Args:
        sender: The File model class.
        instance: The File instance being deleted.
        **kwargs: Additional signal arguments.
    """
    if not instance.blob:
        return

    storage_name = instance.blob.name
    logger.info(
        'Scheduling blob delete after DB delete: %s',
        storage_name,
    )
    transaction.on_commit(lambda: _delete_blob(storage_name))
