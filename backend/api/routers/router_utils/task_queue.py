"""
Background task enqueueing for routers.

Dependencies: celery, kombu, fastapi
System role: Fire-and-forget hand-off from HTTP handlers to workers
"""

import logging

from celery import Task
from fastapi import HTTPException
from kombu.exceptions import OperationalError

logger = logging.getLogger(__name__)


def enqueue(task: Task, *args) -> str:
    """
    Queue a Celery task and return its ID.

    Args:
        task: Celery task to send
        *args: Task arguments

    Returns:
        str: Task ID

    Raises:
        HTTPException(503): Broker unreachable
    """
    try:
        return task.delay(*args).id
    except OperationalError as e:
        logger.error(
            f"{__name__}:enqueue - Broker unavailable for {task.name}",
            extra={"task_args": [str(arg) for arg in args], "error": str(e)},
        )
        raise HTTPException(status_code=503, detail="Ingestion queue unavailable") from e
