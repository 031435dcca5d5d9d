import logging
from cloudspace.config import get_settings
from cloudspace.core.errors import StorageError
from cloudspace.services.storage import create_storage_service
from cloudspace.workers.celery_app import celery_app

logger = logging.getLogger(__name__)

@celery_app.task(
    name="purge_storage_object",
    autoretry_for=(StorageError,),
    retry_backoff=30,
    max_retries=5,
)
def purge_storage_object(storage_key: str):
    """
    Remove a blob that no metadata row references any more: an upload whose
    row insert failed, or a delete whose blob removal failed.
    """
    logger.info(f"Purging storage object {storage_key}")
    create_storage_service(get_settings()).delete_file(storage_key)
    logger.info(f"Purged storage object {storage_key}")

def broker_configured() -> bool:
    """False for the in-process memory transport, which no worker ever consumes"""
    broker_url = celery_app.conf.broker_url or ""
    return not broker_url.startswith("memory://")

def schedule_storage_purge(storage_key: str) -> None:
    """Queue a purge. A blob that cannot be queued is left behind and logged for manual cleanup."""
    if not broker_configured():
        logger.error(f"No purge broker configured (CELERY_BROKER_URL), blob left behind: {storage_key}")
        return
    try:
        purge_storage_object.delay(storage_key)
    except Exception as e:
        logger.error(f"Could not queue purge of {storage_key}, blob left behind: {e}")
