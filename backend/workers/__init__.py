"""
Celery workers module.

Background ingestion of messages and PDFs, plus the periodic sweeps that
pick up sources which were never embedded.

Dependencies: celery, backend.configs
System role: Background task processing
"""

from celery import Celery

from backend.configs import get_settings

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    "teamchat_rag",
    broker=celery_config.broker_url,
    backend=celery_config.result_backend_url,
    include=["backend.workers.tasks.document_ingestion"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    result_serializer=celery_config.result_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
    beat_schedule={
        "sweep-unembedded-messages": {
            "task": "backend.workers.tasks.document_ingestion.sweep_unembedded",
            "schedule": float(celery_config.message_sweep_interval),
            "args": ("messages",),
        },
        "sweep-unembedded-attachments": {
            "task": "backend.workers.tasks.document_ingestion.sweep_unembedded",
            "schedule": float(celery_config.document_sweep_interval),
            "args": ("attachments",),
        },
        "sweep-unembedded-user-documents": {
            "task": "backend.workers.tasks.document_ingestion.sweep_unembedded",
            "schedule": float(celery_config.document_sweep_interval),
            "args": ("user_documents",),
        },
    },
)
