from __future__ import annotations

from celery import Celery

from curator.core.config import settings

CURATION_QUEUE = "curation"
DISCOVERY_QUEUE = "discovery"

celery = Celery(
    "curator",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["curator.tasks.curation_tasks", "curator.tasks.index_tasks"],
)

celery.conf.update(
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    task_eager_propagates=True,
    task_default_queue=CURATION_QUEUE,
    # Metadata writes and index rebuilds scale independently.
    task_routes={
        "curate_items": {"queue": CURATION_QUEUE},
        "index_items": {"queue": DISCOVERY_QUEUE},
    },
)
