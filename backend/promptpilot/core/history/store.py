"""Per-user prompt history store."""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from promptpilot.models.database.saved_prompt import SavedPrompt

logger = logging.getLogger(__name__)


class PromptHistoryStore:
    """Create, list and delete saved prompts scoped to one user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, user_id: str, input_prompt: str, output_response: str
    ) -> SavedPrompt:
        """Save an input/output pair for a user.

        Raises:
            ValueError: If user_id is missing
        """
        if not user_id:
            raise ValueError("user_id is required to save a prompt")

        record = SavedPrompt(
            user_id=user_id,
            input_prompt=input_prompt,
            output_response=output_response,
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)

        logger.info(f"Saved prompt {record.id} for user {user_id}")
        return record

    async def list(self, user_id: str, limit: Optional[int] = None) -> list[SavedPrompt]:
        """List a user's saved prompts, newest first."""
        query = (
            select(SavedPrompt)
            .where(SavedPrompt.user_id == user_id)
            .order_by(SavedPrompt.created_at.desc())
        )
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, user_id: str, record_id: str) -> Optional[SavedPrompt]:
        result = await self.db.execute(
            select(SavedPrompt).where(
                SavedPrompt.id == record_id, SavedPrompt.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def delete(self, user_id: str, record_id: str) -> bool:
        """Delete a saved prompt owned by the user.

        Returns:
            True if a record was deleted, False if none matched
        """
        result = await self.db.execute(
            delete(SavedPrompt).where(
                SavedPrompt.id == record_id, SavedPrompt.user_id == user_id
            )
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted prompt {record_id} for user {user_id}")
        return deleted
