"""Enhancement pipeline orchestrator.

This module provides the EnhancementPipeline class that sequences the
stages for one submission:

    Validating -> Preprocessor -> Rate Limiter -> Invoker -> Idle

and turns every failure into an EnhancementOutcome. Nothing raised by a
stage escapes ``submit``.
"""

import asyncio
import contextlib
import logging
from typing import Optional

from promptpilot.core.history import PromptHistoryStore
from promptpilot.models.database.saved_prompt import SavedPrompt

from .errors import PromptPilotError, PromptValidationError, classify_failure
from .invoker import EnhancementInvoker
from .models import EnhancementOutcome, PipelineState, PromptRequest
from .preprocessor import PromptPreprocessor, preprocessor as default_preprocessor
from .progress import ProgressTracker
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class EnhancementPipeline:
    """Main orchestrator for one session's enhancement submissions.

    Owns the session's rate limiter, lifecycle state and progress side
    channel. A submission is rejected while another one is not idle.
    """

    def __init__(
        self,
        invoker: EnhancementInvoker,
        rate_limiter: RateLimiter,
        preprocessor: PromptPreprocessor = default_preprocessor,
        progress_tick_ms: int = 0,
    ):
        """Initialize enhancement pipeline.

        Args:
            invoker: Model invocation stage
            rate_limiter: Cooldown state for this session
            preprocessor: Phrase substitution and classification stage
            progress_tick_ms: Progress tick interval (0 disables ticking)
        """
        self.invoker = invoker
        self.rate_limiter = rate_limiter
        self.preprocessor = preprocessor
        self.progress = ProgressTracker()
        self.progress_tick_ms = progress_tick_ms
        self._state = PipelineState.IDLE

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._state == PipelineState.INVOKING

    async def submit(
        self,
        request: PromptRequest,
        user_id: Optional[str],
        now_ms: Optional[float] = None,
    ) -> EnhancementOutcome:
        """Execute the full pipeline for one submission.

        Args:
            request: Raw text and complexity level
            user_id: Authenticated user, or None
            now_ms: Clock override for the rate limiter

        Returns:
            EnhancementOutcome describing success or the classified failure
        """
        if self._state != PipelineState.IDLE:
            logger.info(f"Submission rejected: pipeline is {self._state.value}")
            return PromptValidationError.in_progress().to_outcome()

        try:
            self._state = PipelineState.VALIDATING
            if not user_id:
                raise PromptValidationError.not_authenticated()
            if not request.raw_text or not request.raw_text.strip():
                raise PromptValidationError.empty_prompt()

            prompt = self.preprocessor.process(request.raw_text)
            logger.info(
                f"Submission accepted: user={user_id}, chars={len(request.raw_text)}, "
                f"type={prompt.detected_type.value}, "
                f"level={request.complexity_level.value}"
            )

            self._state = PipelineState.RATE_LIMITING
            self.rate_limiter.try_acquire(now_ms)

            self._state = PipelineState.INVOKING
            ticker = self.progress.start(self.progress_tick_ms)
            try:
                result = await self.invoker.invoke(prompt, request.complexity_level)
            except BaseException:
                self.progress.reset()
                raise
            finally:
                if ticker is not None:
                    ticker.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await ticker

            self.progress.complete()
            return EnhancementOutcome.ok(result, prompt)

        except PromptPilotError as e:
            return e.to_outcome()
        except Exception as e:
            logger.exception(f"Unexpected enhancement failure: {e}")
            return classify_failure(e).to_outcome()
        finally:
            self._state = PipelineState.IDLE

    async def save(
        self,
        store: PromptHistoryStore,
        user_id: Optional[str],
        input_prompt: str,
        output_response: str,
    ) -> SavedPrompt:
        """Persist an input/output pair on explicit user request.

        Raises:
            PromptValidationError: If no user is present or nothing to save
        """
        if not user_id:
            raise PromptValidationError.not_authenticated()
        if not input_prompt.strip() or not output_response.strip():
            raise PromptValidationError.nothing_to_save()
        return await store.create(user_id, input_prompt, output_response)
