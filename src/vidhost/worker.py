"""Celery worker for the processor stub.

Run with `celery -A vidhost.worker worker -Q processing`.
"""

from celery import Celery

from vidhost.config import settings
from vidhost.logging import setup_logging

setup_logging()

PROCESSING_QUEUE = "processing"

celery_app = Celery(
    "vidhost",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # A processing run only touches the database and one object lookup
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=120,
    task_soft_time_limit=90,
    worker_prefetch_multiplier=1,
    worker_hijack_root_logger=False,
    result_expires=3600,
    task_default_queue=PROCESSING_QUEUE,
    task_routes={
        "processor.process_video": {"queue": PROCESSING_QUEUE},
    },
)

celery_app.autodiscover_tasks(["vidhost.jobs"], related_name="processing")
