from celery import Celery
from cloudspace.config import get_settings

settings = get_settings()

celery_app = Celery(
    "cloudspace",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["cloudspace.workers.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    task_ignore_result=True,
    task_acks_late=True,
    timezone="UTC",
)
