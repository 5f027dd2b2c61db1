"""Error taxonomy for the enhancement pipeline.

Failures are classified from the exception's status code (when it carries
one, as litellm exceptions do) and from substrings of its message.
"""

import re
from typing import Optional, Set

from .models import EnhancementOutcome, ErrorKind


class PromptPilotError(Exception):
    """Base class for every failure the pipeline turns into an outcome."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, retry_after_ms: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.retry_after_ms = retry_after_ms

    def to_outcome(self) -> EnhancementOutcome:
        return EnhancementOutcome(
            success=False,
            error_kind=self.kind,
            error_message=self.message,
            retry_after_ms=self.retry_after_ms,
        )


class PromptValidationError(PromptPilotError):
    """Submission rejected before reaching the rate limiter."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    @classmethod
    def empty_prompt(cls) -> "PromptValidationError":
        return cls(ErrorKind.EMPTY_PROMPT, "Please enter a prompt to enhance")

    @classmethod
    def not_authenticated(cls) -> "PromptValidationError":
        return cls(ErrorKind.NOT_AUTHENTICATED, "Please login to enhance prompts")

    @classmethod
    def nothing_to_save(cls) -> "PromptValidationError":
        return cls(ErrorKind.EMPTY_PROMPT, "No prompt to save")

    @classmethod
    def in_progress(cls) -> "PromptValidationError":
        return cls(
            ErrorKind.SUBMISSION_IN_PROGRESS,
            "An enhancement is already in progress. Please wait for it to finish.",
        )


class CooldownError(PromptPilotError):
    """Submission arrived inside the cooldown window of the previous one."""

    kind = ErrorKind.COOLDOWN

    def __init__(self, remaining_ms: int):
        seconds = max(1, -(-remaining_ms // 1000))
        unit = "second" if seconds == 1 else "seconds"
        super().__init__(
            f"Please wait {seconds} {unit} before enhancing another prompt.",
            retry_after_ms=remaining_ms,
        )
        self.remaining_ms = remaining_ms


class EnhancementError(PromptPilotError):
    """Classified failure of the model call."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        raw_message: Optional[str] = None,
        retry_after_ms: Optional[int] = None,
    ):
        super().__init__(message, retry_after_ms=retry_after_ms)
        self.kind = kind
        self.raw_message = raw_message if raw_message is not None else message

    @property
    def retryable(self) -> bool:
        return self.kind != ErrorKind.INVALID_CREDENTIALS

    @classmethod
    def timeout(cls) -> "EnhancementError":
        return cls(
            ErrorKind.TIMEOUT,
            "Request timed out. Please try again with a simpler prompt.",
            raw_message="API request timed out",
        )


# Credential problems reported inside the message body
_CREDENTIAL_MARKERS = ("API key expired", "API_KEY_INVALID")

# HTTP-like status codes mentioned in a message, e.g. "[429 Too Many Requests]"
_STATUS_IN_MESSAGE = re.compile(r"\b([45]\d{2})\b")

DEFAULT_QUOTA_RETRY_MS = 60000


def extract_status_codes(exc: BaseException) -> Set[int]:
    """Candidate HTTP statuses of a provider failure.

    A status attribute (as litellm exceptions carry) is authoritative.
    Otherwise every 4xx/5xx number in the message is a candidate, since
    messages also mention token counts and request ids.
    """
    for attr in ("status_code", "status", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and 100 <= value <= 599:
            return {value}

    return {int(code) for code in _STATUS_IN_MESSAGE.findall(str(exc))}


def classify_failure(
    exc: BaseException,
    quota_retry_after_ms: int = DEFAULT_QUOTA_RETRY_MS,
) -> EnhancementError:
    """Map any exception raised by the model call to an EnhancementError.

    Rows are checked in order: credentials, quota, 400, 401/403, 5xx.
    Never raises; unrecognised failures become ErrorKind.UNKNOWN with the
    original message preserved.
    """
    if isinstance(exc, EnhancementError):
        return exc
    if isinstance(exc, TimeoutError):
        return EnhancementError.timeout()

    message = str(exc)
    statuses = extract_status_codes(exc)

    if any(marker in message for marker in _CREDENTIAL_MARKERS):
        return EnhancementError(ErrorKind.INVALID_CREDENTIALS, message)

    if 429 in statuses and "quota" in message.lower():
        return EnhancementError(
            ErrorKind.QUOTA_EXCEEDED,
            "API quota exceeded. Please wait a minute before trying again.",
            raw_message=message,
            retry_after_ms=quota_retry_after_ms,
        )

    if 400 in statuses:
        return EnhancementError(
            ErrorKind.BAD_REQUEST,
            "Invalid request. Please simplify your prompt and try again.",
            raw_message=message,
        )

    if statuses & {401, 403}:
        return EnhancementError(
            ErrorKind.AUTH_FAILURE,
            "Authentication with the AI service failed. Please try again later.",
            raw_message=message,
        )

    if any(500 <= status <= 599 for status in statuses):
        return EnhancementError(
            ErrorKind.UPSTREAM_UNAVAILABLE,
            "The AI service is experiencing issues. Please try again later.",
            raw_message=message,
        )

    return EnhancementError(
        ErrorKind.UNKNOWN,
        message or "Failed to enhance prompt. Please try again.",
        raw_message=message,
    )
