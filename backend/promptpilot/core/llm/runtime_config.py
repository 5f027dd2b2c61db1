"""LLM runtime configuration.

Connection parameters and fixed generation parameters for the model call,
resolved once from Settings and passed to the text generator.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from promptpilot.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters sent with every enhancement request."""

    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 512

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "top_k": self.top_k,
            "top_p": self.top_p,
            "max_tokens": self.max_output_tokens,
        }


@dataclass
class LLMRuntimeConfig:
    """Connection parameters for the generative-text provider."""

    provider: str
    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None

    def get_litellm_model(self) -> str:
        """Get model string in LiteLLM format (provider/model)."""
        provider_prefixes = {
            "openai": "",  # No prefix for OpenAI
            "anthropic": "anthropic/",
            "gemini": "gemini/",
        }
        if "/" in self.model:
            return self.model
        prefix = provider_prefixes.get(self.provider, f"{self.provider}/")
        return f"{prefix}{self.model}"

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"model": self.get_litellm_model()}
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.base_url:
            kwargs["api_base"] = self.base_url
        return kwargs


def resolve_runtime_config(settings: Settings) -> LLMRuntimeConfig:
    """Build the provider config from application settings."""
    api_key = settings.get_api_key()
    if not api_key:
        logger.warning(
            f"No API key configured for provider={settings.llm_provider}; "
            f"litellm will fall back to its own environment lookup"
        )
    return LLMRuntimeConfig(
        provider=settings.llm_provider,
        model=settings.llm_model,
        api_key=api_key,
        base_url=settings.llm_base_url,
    )


def resolve_generation_config(settings: Settings) -> GenerationConfig:
    """Build the fixed generation parameters from application settings."""
    return GenerationConfig(
        temperature=settings.temperature,
        top_k=settings.top_k,
        top_p=settings.top_p,
        max_output_tokens=settings.max_output_tokens,
    )
