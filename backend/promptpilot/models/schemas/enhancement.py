"""Enhancement request and response schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from promptpilot.core.enhancement import ComplexityLevel, EnhancementOutcome


class EnhanceRequest(BaseModel):
    """Request to enhance a prompt."""
    text: str = Field(default="", max_length=5000)
    complexity_level: ComplexityLevel = ComplexityLevel.INTERMEDIATE


class EnhanceResponse(EnhancementOutcome):
    """Enhancement outcome returned to the client."""
    pass


class EnhancementStatus(BaseModel):
    """Point-in-time view of the caller's pipeline."""
    state: str
    in_flight: bool
    cooldown_remaining_ms: int
    progress: int
    progress_message: str


class ExamplePrompt(BaseModel):
    """Ready-made prompt shown as a starting point."""
    text: str
    label: str
    language: str = "en"
    complexity_level: Optional[ComplexityLevel] = None
