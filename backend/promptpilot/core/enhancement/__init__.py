"""Prompt enhancement pipeline.

This package provides the pipeline components:
- PromptPreprocessor: Hindi phrase substitution and prompt classification
- RateLimiter: Per-session cooldown between requests
- PromptEngine: Builds the model instruction from complexity presets
- EnhancementInvoker: Timeout-bounded model call with error classification
- EnhancementPipeline: Sequences the stages for one submission
- SessionRegistry: One pipeline per client session
"""

from .errors import (
    PromptPilotError,
    PromptValidationError,
    CooldownError,
    EnhancementError,
    classify_failure,
)
from .invoker import EnhancementInvoker
from .models import (
    ComplexityLevel,
    PromptType,
    PipelineState,
    ErrorKind,
    PromptRequest,
    PreprocessedPrompt,
    EnhancementResult,
    EnhancementOutcome,
)
from .pipeline import EnhancementPipeline
from .preprocessor import PromptPreprocessor, preprocessor
from .progress import ProgressTracker
from .prompt_engine import PromptEngine
from .rate_limiter import RateLimiter
from .session import EnhancementSession, SessionRegistry, session_key

__all__ = [
    # Errors
    "PromptPilotError",
    "PromptValidationError",
    "CooldownError",
    "EnhancementError",
    "classify_failure",
    # Models
    "ComplexityLevel",
    "PromptType",
    "PipelineState",
    "ErrorKind",
    "PromptRequest",
    "PreprocessedPrompt",
    "EnhancementResult",
    "EnhancementOutcome",
    # Stages
    "PromptPreprocessor",
    "preprocessor",
    "RateLimiter",
    "PromptEngine",
    "EnhancementInvoker",
    "ProgressTracker",
    "EnhancementPipeline",
    # Sessions
    "EnhancementSession",
    "SessionRegistry",
    "session_key",
]
