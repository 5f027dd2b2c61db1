"""Prompt enhancement API routes."""

import logging
import math

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from promptpilot.api.dependencies import CurrentSession, CurrentUser
from promptpilot.core.enhancement import ErrorKind, PromptRequest
from promptpilot.models.schemas import (
    EnhanceRequest,
    EnhanceResponse,
    EnhancementStatus,
    ExamplePrompt,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# HTTP status for each failure kind; the body always carries the outcome
ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.EMPTY_PROMPT: 400,
    ErrorKind.NOT_AUTHENTICATED: 401,
    ErrorKind.SUBMISSION_IN_PROGRESS: 409,
    ErrorKind.COOLDOWN: 429,
    ErrorKind.QUOTA_EXCEEDED: 429,
    ErrorKind.BAD_REQUEST: 502,
    ErrorKind.INVALID_CREDENTIALS: 502,
    ErrorKind.AUTH_FAILURE: 502,
    ErrorKind.UPSTREAM_UNAVAILABLE: 503,
    ErrorKind.TIMEOUT: 504,
    ErrorKind.UNKNOWN: 500,
}


EXAMPLE_PROMPTS: list[ExamplePrompt] = [
    ExamplePrompt(
        text="write a story about a magical forest",
        label="Story about magical forest",
    ),
    ExamplePrompt(
        text="explain quantum computing",
        label="Explain quantum computing",
    ),
    ExamplePrompt(
        text="एक केक बनाने की विधि बताएं",
        label="एक केक बनाने की विधि",
        language="hi",
    ),
]


@router.post("/enhance", response_model=EnhanceResponse)
async def enhance_prompt(
    request: EnhanceRequest,
    session: CurrentSession,
    user: CurrentUser,
):
    """Enhance a prompt.

    Returns the enhancement outcome. Failures keep the same body shape
    with ``success: false``, an ``error_kind`` and a human-readable
    ``error_message``; cooldown and quota failures also set
    ``Retry-After``.
    """
    outcome = await session.pipeline.submit(
        PromptRequest(raw_text=request.text, complexity_level=request.complexity_level),
        user_id=user.id if user else None,
    )
    body = EnhanceResponse(**outcome.model_dump())

    if outcome.success:
        return body

    status_code = ERROR_STATUS_CODES.get(outcome.error_kind, 500)
    headers = {}
    if outcome.retry_after_ms:
        headers["Retry-After"] = str(max(1, math.ceil(outcome.retry_after_ms / 1000)))

    logger.info(
        f"Enhancement rejected: session={session.key}, "
        f"kind={outcome.error_kind.value}, status={status_code}"
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


@router.get("/enhance/status")
async def get_enhancement_status(session: CurrentSession) -> EnhancementStatus:
    """Current pipeline state, remaining cooldown and progress for the caller."""
    return EnhancementStatus(**session.status())


@router.get("/enhance/examples")
async def list_example_prompts() -> list[ExamplePrompt]:
    """Example prompts (English and Hindi)."""
    return EXAMPLE_PROMPTS
