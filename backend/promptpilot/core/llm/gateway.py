"""Generative-text gateway.

This module provides an abstract interface for the generative-text
collaborator, along with a unified implementation using LiteLLM.
"""

import logging
import time
from abc import ABC, abstractmethod

import litellm
from litellm import acompletion

from .runtime_config import GenerationConfig, LLMRuntimeConfig

logger = logging.getLogger(__name__)


class TextGenerator(ABC):
    """Abstract generative-text collaborator.

    A single opaque remote call: instruction in, text out. Implementations
    raise whatever their transport raises; classification happens in the
    enhancement invoker.
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Get model identifier."""
        pass

    @abstractmethod
    async def generate(self, instruction: str, config: GenerationConfig) -> str:
        """Generate text for an instruction.

        Args:
            instruction: Complete instruction text
            config: Sampling parameters

        Returns:
            Generated text
        """
        pass


class LiteLLMTextGenerator(TextGenerator):
    """Text generator for any provider LiteLLM can route to."""

    def __init__(self, runtime: LLMRuntimeConfig):
        """Initialize LiteLLM generator.

        Args:
            runtime: Provider, model, credentials and optional base URL
        """
        # Auto-drop unsupported parameters (e.g. top_k on OpenAI)
        litellm.drop_params = True
        self._runtime = runtime

        logger.info(
            f"[LLM Gateway] Initialized: provider={runtime.provider}, "
            f"model={runtime.get_litellm_model()}, base_url={runtime.base_url}"
        )

    @property
    def model(self) -> str:
        return self._runtime.model

    async def generate(self, instruction: str, config: GenerationConfig) -> str:
        start_time = time.time()

        kwargs = self._runtime.to_litellm_kwargs()
        kwargs.update(config.to_litellm_kwargs())
        kwargs["messages"] = [{"role": "user", "content": instruction}]

        logger.info(
            f"LLM call: model={kwargs['model']}, temperature={config.temperature}, "
            f"max_tokens={config.max_output_tokens}"
        )

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            logger.error(f"LLM call failed: model={kwargs['model']}, error={e}")
            raise

        latency_ms = int((time.time() - start_time) * 1000)
        content = response.choices[0].message.content or ""
        logger.info(f"LLM response: chars={len(content)}, latency={latency_ms}ms")
        return content
