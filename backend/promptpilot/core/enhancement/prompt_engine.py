"""Instruction builder for prompt enhancement.

Combines a complexity preset, type-specific guidance and the preprocessed
user text into the single instruction sent to the model.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .models import ComplexityLevel, PreprocessedPrompt, PromptType


@dataclass(frozen=True)
class ComplexityPreset:
    """Fixed output profile for one complexity level."""

    description: str
    word_limit: int
    structure: str
    tone: str


COMPLEXITY_PRESETS: Dict[ComplexityLevel, ComplexityPreset] = {
    ComplexityLevel.BASIC: ComplexityPreset(
        description="basic prompt: concise with minimal details",
        word_limit=100,
        structure="A single focused paragraph stating the task and the expected result.",
        tone="Concise and direct.",
    ),
    ComplexityLevel.INTERMEDIATE: ComplexityPreset(
        description="intermediate prompt: detailed with clear requirements",
        word_limit=200,
        structure="Short sections covering the task, key requirements and the desired output format.",
        tone="Clear and professional.",
    ),
    ComplexityLevel.ADVANCED: ComplexityPreset(
        description="advanced prompt: comprehensive with extensive context",
        word_limit=350,
        structure=(
            "Detailed sections covering context, role, requirements, constraints, "
            "edge cases and the exact output format."
        ),
        tone="Comprehensive and expert-level.",
    ),
}


TYPE_GUIDANCE: Dict[PromptType, str] = {
    PromptType.CREATIVE: (
        "This is a creative request. Specify genre, mood, audience, length and any "
        "stylistic elements the response should include."
    ),
    PromptType.EXPLANATORY: (
        "This is an explanatory request. Ask for a clear explanation with the target "
        "audience's level, key concepts to cover and concrete examples."
    ),
    PromptType.COMPARATIVE: (
        "This is a comparative request. Name the criteria for comparison and ask for "
        "a balanced view of similarities, differences and a conclusion."
    ),
    PromptType.ANALYTICAL: (
        "This is an analytical request. Ask for a structured analysis with evidence, "
        "reasoning and actionable conclusions."
    ),
    PromptType.STRUCTURED: (
        "This is a step-by-step request. Ask for numbered steps, prerequisites or "
        "ingredients, and tips for common mistakes."
    ),
    PromptType.GENERAL: (
        "Clarify the goal, add relevant context and state what a good answer looks like."
    ),
}


class PromptEngine:
    """Builds model instructions from preprocessed prompts."""

    TEMPLATE = (
        'Transform this prompt into a {description}: "{text}"\n'
        "\n"
        "{guidance}\n"
        "Structure: {structure}\n"
        "Tone: {tone}\n"
        "\n"
        "Make it clear, specific, and well-structured. "
        "Keep it under {word_limit} words. "
        "Return only the enhanced prompt."
    )

    @classmethod
    def get_preset(cls, level: ComplexityLevel) -> ComplexityPreset:
        return COMPLEXITY_PRESETS[level]

    @classmethod
    def get_template_variables(
        cls, prompt: PreprocessedPrompt, level: ComplexityLevel
    ) -> Dict[str, Any]:
        """Variables substituted into the instruction template."""
        preset = cls.get_preset(level)
        return {
            "description": preset.description,
            "text": prompt.translated_text,
            "guidance": TYPE_GUIDANCE[prompt.detected_type],
            "structure": preset.structure,
            "tone": preset.tone,
            "word_limit": preset.word_limit,
        }

    @classmethod
    def build(cls, prompt: PreprocessedPrompt, level: ComplexityLevel) -> str:
        """Render the instruction for the model.

        Args:
            prompt: Preprocessor output
            level: Target complexity

        Returns:
            Instruction text
        """
        return cls.TEMPLATE.format(**cls.get_template_variables(prompt, level))
