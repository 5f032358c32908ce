"""
Celery application for async task processing
"""
from celery import Celery
from jobboard.core.config import settings

celery_app = Celery(
    "jobboard",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=[
        "jobboard.tasks.email_tasks",
    ],
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    task_ignore_result=True,
    task_time_limit=60,
    task_soft_time_limit=45,
    worker_prefetch_multiplier=4,
    worker_max_tasks_per_child=1000,
)
