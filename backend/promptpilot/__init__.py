"""PromptPilot: prompt enhancement backend."""

__version__ = "0.1.0"
