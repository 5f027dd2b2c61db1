"""Saved prompt history (the persistence collaborator)."""

from .store import PromptHistoryStore

__all__ = ["PromptHistoryStore"]
