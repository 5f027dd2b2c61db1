"""Enhancement invoker.

Builds the model instruction, races the model call against a timeout and
classifies any failure into an EnhancementError.
"""

import asyncio
import logging
import time

from promptpilot.core.llm import GenerationConfig, TextGenerator

from .errors import DEFAULT_QUOTA_RETRY_MS, EnhancementError, classify_failure
from .models import ComplexityLevel, EnhancementResult, PreprocessedPrompt
from .prompt_engine import PromptEngine

logger = logging.getLogger(__name__)


def _discard_abandoned(task: "asyncio.Future[str]") -> None:
    """Consume the outcome of a call that lost the timeout race."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"Abandoned LLM call failed after timeout: {exc}")
    else:
        logger.debug("Abandoned LLM call completed after timeout; result discarded")


class EnhancementInvoker:
    """Produces an enhanced prompt through the generative-text collaborator."""

    def __init__(
        self,
        generator: TextGenerator,
        generation_config: GenerationConfig = GenerationConfig(),
        timeout_ms: int = 15000,
        quota_retry_after_ms: int = DEFAULT_QUOTA_RETRY_MS,
    ):
        self.generator = generator
        self.generation_config = generation_config
        self.timeout_ms = timeout_ms
        self.quota_retry_after_ms = quota_retry_after_ms

    async def invoke(
        self, prompt: PreprocessedPrompt, level: ComplexityLevel
    ) -> EnhancementResult:
        """Run one model call bounded by the timeout.

        The call and the timer race; the first to settle decides the
        outcome. A call that loses is cancelled and its eventual outcome is
        discarded.

        Raises:
            EnhancementError: Classified failure (including Timeout)
        """
        instruction = PromptEngine.build(prompt, level)
        start_time = time.time()

        call = asyncio.ensure_future(
            self.generator.generate(instruction, self.generation_config)
        )
        try:
            done, _ = await asyncio.wait({call}, timeout=self.timeout_ms / 1000)
        except asyncio.CancelledError:
            call.cancel()
            raise

        if call not in done:
            call.add_done_callback(_discard_abandoned)
            call.cancel()
            logger.warning(
                f"LLM call timed out after {self.timeout_ms}ms: "
                f"model={self.generator.model}, type={prompt.detected_type.value}"
            )
            raise EnhancementError.timeout()

        latency_ms = int((time.time() - start_time) * 1000)
        try:
            text = call.result()
        except Exception as e:
            error = classify_failure(e, quota_retry_after_ms=self.quota_retry_after_ms)
            logger.error(
                f"Enhancement failed: kind={error.kind.value}, "
                f"latency={latency_ms}ms, error={error.raw_message}"
            )
            raise error from e

        logger.info(
            f"Enhancement complete: type={prompt.detected_type.value}, "
            f"level={level.value}, latency={latency_ms}ms"
        )
        return EnhancementResult(text=text, latency_ms=latency_ms)
