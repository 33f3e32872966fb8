"""
Router utility functions.

Contains helpers shared by router endpoints to keep them clean.
"""

from backend.api.routers.router_utils.http_errors import ANSWER_UNAVAILABLE, to_http_exception
from backend.api.routers.router_utils.task_queue import enqueue

__all__ = [
    "ANSWER_UNAVAILABLE",
    "enqueue",
    "to_http_exception",
]
