"""Celery application configuration"""

from celery import Celery
from app.config import settings

# Create Celery app
celery_app = Celery(
    "tablebook",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "app.jobs.tasks",
    ],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Beat schedule for periodic tasks (used when sweeper_mode == "celery")
    beat_schedule={
        "cancel-overdue-reservations": {
            "task": "cancel_overdue_reservations",
            "schedule": settings.sweeper_cancel_interval_seconds,  # Every 5 minutes
        },
        "send-reservation-reminders": {
            "task": "send_reservation_reminders",
            "schedule": settings.sweeper_reminder_interval_seconds,  # Every 10 minutes
        },
    },
)
