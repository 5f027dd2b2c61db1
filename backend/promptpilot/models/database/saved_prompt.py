"""Saved prompt history database model."""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from promptpilot.models.database.base import Base


class SavedPrompt(Base):
    """An input/output pair the user explicitly saved to their history."""

    __tablename__ = "saved_prompts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # Prompt content
    input_prompt: Mapped[str] = mapped_column(Text, nullable=False)
    output_response: Mapped[str] = mapped_column(Text, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )

    __table_args__ = (
        Index("ix_saved_prompts_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<SavedPrompt {self.id} user={self.user_id}>"
