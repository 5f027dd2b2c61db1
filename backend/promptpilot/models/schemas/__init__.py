"""Shared Pydantic schemas for API requests and responses."""

from .enhancement import (
    EnhanceRequest,
    EnhanceResponse,
    EnhancementStatus,
    ExamplePrompt,
)
from .history import SavePromptRequest, SavedPromptResponse

__all__ = [
    "EnhanceRequest",
    "EnhanceResponse",
    "EnhancementStatus",
    "ExamplePrompt",
    "SavePromptRequest",
    "SavedPromptResponse",
]
