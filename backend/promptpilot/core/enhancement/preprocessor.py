"""Prompt preprocessor.

Normalizes raw user text before it is sent to the model: fixed Hindi
phrases are substituted with English equivalents, then the prompt is
classified into a coarse type that selects the guidance text used in the
model instruction.
"""

import re

from .models import PreprocessedPrompt, PromptType


class PromptPreprocessor:
    """Substitute Hindi phrases and classify prompts by intent."""

    # Hindi phrase -> English phrase
    TRANSLATION_RULES: dict[str, str] = {
        "बनाओ": "create",
        "लिखो": "write",
        "समझाओ": "explain",
        "क्या है": "what is",
        "विधि बताएं": "explain how to make",
        "कैसे बनाएं": "how to make",
    }

    # Ordered (pattern, type) rules - first match wins
    TYPE_PATTERNS: list[tuple[str, PromptType]] = [
        (
            r"\b(how to|steps?|list|ways?|methods?|guide|recipe|procedure|tutorial)\b",
            PromptType.STRUCTURED,
        ),
        (
            r"\b(compare|comparison|versus|vs\.?|difference between|pros and cons|better than)\b",
            PromptType.COMPARATIVE,
        ),
        (
            r"\b(analy[sz]e|analysis|evaluate|assess|critique|review|examine)\b",
            PromptType.ANALYTICAL,
        ),
        (
            r"\b(write|story|poem|create|design|imagine|compose|generate|invent)\b",
            PromptType.CREATIVE,
        ),
        (
            r"\b(explain|what is|what are|why|describe|define|meaning of)\b",
            PromptType.EXPLANATORY,
        ),
    ]

    # Compile patterns for efficiency
    _type_re = [(re.compile(p, re.IGNORECASE), t) for p, t in TYPE_PATTERNS]

    def translate(self, text: str) -> str:
        """Apply the phrase substitution table.

        Each rule is evaluated against the original text and replaces only
        its first case-insensitive occurrence. When several rules match,
        the last one applied determines the result.
        """
        translated = text
        text_lower = text.lower()
        for hindi, english in self.TRANSLATION_RULES.items():
            if hindi.lower() in text_lower:
                translated = re.sub(
                    re.escape(hindi),
                    lambda _match, english=english: english,
                    text,
                    count=1,
                    flags=re.IGNORECASE,
                )
        return translated

    def classify(self, text: str) -> PromptType:
        """Return the first matching prompt type, or GENERAL."""
        for pattern, prompt_type in self._type_re:
            if pattern.search(text):
                return prompt_type
        return PromptType.GENERAL

    def process(self, text: str) -> PreprocessedPrompt:
        """Substitute phrases, then classify the substituted text.

        Args:
            text: Raw user text (already validated as non-empty)

        Returns:
            PreprocessedPrompt with translated text and detected type
        """
        translated = self.translate(text)
        return PreprocessedPrompt(
            translated_text=translated,
            detected_type=self.classify(translated),
        )


# Module-level instance for convenience
preprocessor = PromptPreprocessor()
