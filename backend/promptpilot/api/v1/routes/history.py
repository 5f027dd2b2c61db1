"""Saved prompt history API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from promptpilot.api.dependencies import CurrentSession, HistoryStore, RequireUser
from promptpilot.core.enhancement import PromptValidationError
from promptpilot.models.database.saved_prompt import SavedPrompt
from promptpilot.models.schemas import SavePromptRequest, SavedPromptResponse
from promptpilot.utils.text import preview

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(record: SavedPrompt) -> SavedPromptResponse:
    response = SavedPromptResponse.model_validate(record)
    response.preview = preview(record.input_prompt)
    return response


@router.post("/history", status_code=201)
async def save_prompt(
    request: SavePromptRequest,
    user: RequireUser,
    session: CurrentSession,
    store: HistoryStore,
) -> SavedPromptResponse:
    """Save an input/output pair to the user's history."""
    try:
        record = await session.pipeline.save(
            store, user.id, request.input_prompt, request.output_response
        )
    except PromptValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return _to_response(record)


@router.get("/history")
async def list_history(
    user: RequireUser,
    store: HistoryStore,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
) -> list[SavedPromptResponse]:
    """List the user's saved prompts, newest first (optionally only the latest ``limit``)."""
    records = await store.list(user.id, limit=limit)
    return [_to_response(r) for r in records]


@router.get("/history/{prompt_id}")
async def get_saved_prompt(
    prompt_id: str, user: RequireUser, store: HistoryStore
) -> SavedPromptResponse:
    """Load one saved prompt."""
    record = await store.get(user.id, prompt_id)
    if not record:
        raise HTTPException(status_code=404, detail="Saved prompt not found")
    return _to_response(record)


@router.delete("/history/{prompt_id}")
async def delete_saved_prompt(prompt_id: str, user: RequireUser, store: HistoryStore):
    """Delete a saved prompt owned by the user."""
    deleted = await store.delete(user.id, prompt_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Saved prompt not found")
    return {"status": "deleted", "id": prompt_id}
