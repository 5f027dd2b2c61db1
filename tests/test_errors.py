"""
Tests for failure classification.

Tests validate:
- Credential, quota, status-code and fallback classification
- Status codes read from exception attributes or the message
- Outcome conversion
"""

import pytest

from promptpilot.core.enhancement import (
    EnhancementError,
    ErrorKind,
    PromptValidationError,
    classify_failure,
)
from promptpilot.core.enhancement.errors import extract_status_codes


class ProviderError(Exception):
    """Stand-in for a provider SDK exception carrying an HTTP status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class TestClassifyFailure:
    """Tests for classify_failure."""

    def test_quota_exceeded(self):
        error = classify_failure(
            Exception("[429 Too Many Requests] You exceeded your current quota")
        )
        assert error.kind == ErrorKind.QUOTA_EXCEEDED
        assert error.retry_after_ms == 60000
        assert "quota exceeded" in error.message.lower()

    def test_quota_retry_is_configurable(self):
        error = classify_failure(ProviderError("quota exhausted", 429), quota_retry_after_ms=5000)
        assert error.retry_after_ms == 5000

    def test_rate_limit_without_quota_is_unknown(self):
        error = classify_failure(ProviderError("Too many requests", 429))
        assert error.kind == ErrorKind.UNKNOWN

    def test_invalid_credentials_surfaces_raw_message(self):
        raw = "400 API_KEY_INVALID: API key not valid. Please pass a valid API key."
        error = classify_failure(Exception(raw))
        assert error.kind == ErrorKind.INVALID_CREDENTIALS
        assert error.message == raw
        assert not error.retryable

    def test_expired_key_checked_before_status(self):
        error = classify_failure(ProviderError("API key expired. Please renew.", 400))
        assert error.kind == ErrorKind.INVALID_CREDENTIALS

    @pytest.mark.parametrize(
        "status,expected",
        [
            (400, ErrorKind.BAD_REQUEST),
            (401, ErrorKind.AUTH_FAILURE),
            (403, ErrorKind.AUTH_FAILURE),
            (500, ErrorKind.UPSTREAM_UNAVAILABLE),
            (503, ErrorKind.UPSTREAM_UNAVAILABLE),
        ],
    )
    def test_status_codes(self, status, expected):
        error = classify_failure(ProviderError("provider said no", status))
        assert error.kind == expected
        assert error.raw_message == "provider said no"
        assert error.retryable

    def test_unknown_preserves_message(self):
        error = classify_failure(RuntimeError("socket closed unexpectedly"))
        assert error.kind == ErrorKind.UNKNOWN
        assert error.message == "socket closed unexpectedly"

    def test_unknown_with_empty_message(self):
        error = classify_failure(RuntimeError())
        assert error.kind == ErrorKind.UNKNOWN
        assert error.message == "Failed to enhance prompt. Please try again."

    def test_timeout_error(self):
        error = classify_failure(TimeoutError())
        assert error.kind == ErrorKind.TIMEOUT
        assert "simpler prompt" in error.message

    def test_already_classified_passes_through(self):
        original = EnhancementError.timeout()
        assert classify_failure(original) is original


class TestClassifyWithUnrelatedNumbers:
    """Numbers such as token counts or request ids must not hide the real status."""

    def test_quota_after_token_count(self):
        error = classify_failure(
            Exception("Prompt of 450 tokens rejected: 429 You exceeded your current quota")
        )
        assert error.kind == ErrorKind.QUOTA_EXCEEDED

    def test_quota_after_request_id(self):
        error = classify_failure(Exception("request 503 failed with 429: quota exhausted"))
        assert error.kind == ErrorKind.QUOTA_EXCEEDED

    def test_bad_request_after_token_count(self):
        error = classify_failure(Exception("Input of 412 tokens: 400 Invalid argument"))
        assert error.kind == ErrorKind.BAD_REQUEST

    def test_forbidden_after_token_count(self):
        error = classify_failure(Exception("Used 450 tokens, then 403 Permission denied"))
        assert error.kind == ErrorKind.AUTH_FAILURE

    def test_attribute_wins_over_message_numbers(self):
        error = classify_failure(ProviderError("retry after 400 ms", 503))
        assert error.kind == ErrorKind.UPSTREAM_UNAVAILABLE

    def test_unrelated_numbers_only(self):
        error = classify_failure(Exception("Prompt of 450 tokens is too long"))
        assert error.kind == ErrorKind.UNKNOWN


class TestExtractStatusCodes:
    """Tests for status code discovery."""

    def test_from_attribute(self):
        assert extract_status_codes(ProviderError("boom 400", 502)) == {502}

    def test_from_message(self):
        assert extract_status_codes(Exception("Error 503: overloaded")) == {503}

    def test_every_code_in_message(self):
        assert extract_status_codes(Exception("450 tokens, 429 quota")) == {450, 429}

    def test_empty_when_absent(self):
        assert extract_status_codes(Exception("no code here")) == set()


class TestOutcomes:
    """Tests for converting errors into outcomes."""

    def test_validation_outcome(self):
        outcome = PromptValidationError.empty_prompt().to_outcome()
        assert outcome.success is False
        assert outcome.text is None
        assert outcome.error_kind == ErrorKind.EMPTY_PROMPT
        assert outcome.error_message == "Please enter a prompt to enhance"

    def test_quota_outcome_carries_retry_after(self):
        outcome = classify_failure(ProviderError("quota", 429)).to_outcome()
        assert outcome.error_kind == ErrorKind.QUOTA_EXCEEDED
        assert outcome.retry_after_ms == 60000
