"""LLM integration package.

This package provides:
- The generative-text collaborator interface (TextGenerator)
- A LiteLLM-backed implementation (LiteLLMTextGenerator)
- Runtime and generation configuration resolved from Settings
"""

from .gateway import TextGenerator, LiteLLMTextGenerator
from .runtime_config import (
    GenerationConfig,
    LLMRuntimeConfig,
    resolve_generation_config,
    resolve_runtime_config,
)

__all__ = [
    "TextGenerator",
    "LiteLLMTextGenerator",

    "GenerationConfig",
    "LLMRuntimeConfig",
    "resolve_generation_config",
    "resolve_runtime_config",
]
