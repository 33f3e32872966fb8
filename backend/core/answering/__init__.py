"""
Answer generation package.

Exports: AnswerGenerator, GeneratedAnswer, default personas
"""

from backend.core.answering.answer_generator import AnswerGenerator
from backend.core.answering.answer_prompt import (
    DEFAULT_CHANNEL_PERSONA,
    DEFAULT_DOCUMENT_PERSONA,
    DEFAULT_USER_PERSONA,
    build_system_prompt,
)
from backend.core.answering.answer_schema import GeneratedAnswer

__all__ = [
    "AnswerGenerator",
    "DEFAULT_CHANNEL_PERSONA",
    "DEFAULT_DOCUMENT_PERSONA",
    "DEFAULT_USER_PERSONA",
    "GeneratedAnswer",
    "build_system_prompt",
]
