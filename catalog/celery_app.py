"""Celery application configuration."""
import os

from celery import Celery
from dotenv import load_dotenv

from catalog.config import settings

load_dotenv()

# Create Celery app
celery_app = Celery(
    "catalog",
    broker=settings.CELERY_BROKER_URL,
    include=[
        "catalog.tasks.email_tasks",
    ],
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    timezone=os.getenv("CELERY_TIMEZONE", "UTC"),
    enable_utc=True,
    # Keep retrying broker connection on startup (Celery 6+ change)
    broker_connection_retry_on_startup=bool(
        int(os.getenv("CELERY_BROKER_RETRY_ON_STARTUP", "1"))
    ),
    # Fire-and-forget email delivery; nobody reads the results
    task_ignore_result=True,
    task_time_limit=int(os.getenv("CELERY_TASK_TIME_LIMIT_SECONDS", "120")),
    task_always_eager=settings.CELERY_ALWAYS_EAGER,
    worker_prefetch_multiplier=1,
)

celery_app.conf.task_routes = {
    "catalog.tasks.email_tasks.*": {
        "queue": "email",
        "routing_key": "email",
    },
}

if __name__ == "__main__":
    celery_app.start()
