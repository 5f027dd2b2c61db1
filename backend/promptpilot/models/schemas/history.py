"""Saved prompt history schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SavePromptRequest(BaseModel):
    """Request to save an input/output pair."""
    input_prompt: str = Field(default="", max_length=5000)
    output_response: str = Field(default="", max_length=20000)


class SavedPromptResponse(BaseModel):
    """A saved prompt."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    input_prompt: str
    output_response: str
    created_at: datetime
    preview: str = ""
