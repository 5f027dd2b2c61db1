"""Enhancement pipeline data models.

This module provides the data structures passed between the pipeline
stages, plus the outcome contract returned to the API layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class ComplexityLevel(str, Enum):
    """Target verbosity of the enhanced prompt."""

    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def from_slider(cls, position: int) -> "ComplexityLevel":
        """Map a 0-2 slider position to a level (clamped)."""
        levels = [cls.BASIC, cls.INTERMEDIATE, cls.ADVANCED]
        return levels[max(0, min(position, len(levels) - 1))]


class PromptType(str, Enum):
    """Coarse category inferred from surface patterns in the prompt."""

    CREATIVE = "creative"
    EXPLANATORY = "explanatory"
    COMPARATIVE = "comparative"
    ANALYTICAL = "analytical"
    STRUCTURED = "structured"
    GENERAL = "general"


class PipelineState(str, Enum):
    """Lifecycle of a single submission."""

    IDLE = "idle"
    VALIDATING = "validating"
    RATE_LIMITING = "rate_limiting"
    INVOKING = "invoking"


class ErrorKind(str, Enum):
    """Every user-distinguishable failure a submission can end with."""

    # Rejected locally before any network call
    EMPTY_PROMPT = "empty_prompt"
    NOT_AUTHENTICATED = "not_authenticated"
    SUBMISSION_IN_PROGRESS = "submission_in_progress"
    COOLDOWN = "cooldown"

    # Classified model failures
    INVALID_CREDENTIALS = "invalid_credentials"
    QUOTA_EXCEEDED = "quota_exceeded"
    TIMEOUT = "timeout"
    BAD_REQUEST = "bad_request"
    AUTH_FAILURE = "auth_failure"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UNKNOWN = "unknown"


# =============================================================================
# Stage payloads
# =============================================================================


@dataclass(frozen=True)
class PromptRequest:
    """One user submission. Discarded once the pipeline returns."""

    raw_text: str
    complexity_level: ComplexityLevel = ComplexityLevel.INTERMEDIATE


@dataclass(frozen=True)
class PreprocessedPrompt:
    """Preprocessor output: substituted text and its detected category."""

    translated_text: str
    detected_type: PromptType


@dataclass(frozen=True)
class EnhancementResult:
    """Raw model output for a successful enhancement."""

    text: str
    latency_ms: int = 0


# =============================================================================
# Outcome contract
# =============================================================================


class EnhancementOutcome(BaseModel):
    """Result of one submission as seen by the caller.

    Exactly one of ``text`` or ``error_kind`` is set.
    """

    success: bool = Field(..., description="Whether an enhanced prompt was produced")
    text: Optional[str] = Field(default=None, description="Enhanced prompt text")
    error_kind: Optional[ErrorKind] = Field(default=None, description="Failure category")
    error_message: Optional[str] = Field(
        default=None, description="Human-readable failure message"
    )
    retry_after_ms: Optional[int] = Field(
        default=None, description="Suggested wait before resubmitting"
    )

    # Preprocessing metadata (success only)
    detected_type: Optional[PromptType] = None
    translated_text: Optional[str] = None

    @classmethod
    def ok(
        cls, result: EnhancementResult, prompt: PreprocessedPrompt
    ) -> "EnhancementOutcome":
        return cls(
            success=True,
            text=result.text,
            detected_type=prompt.detected_type,
            translated_text=prompt.translated_text,
        )
