"""API dependencies for authentication and per-session pipelines.

This module provides:
- Optional and required user resolution from the identity provider token
- The per-session enhancement context, owned by the application
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from promptpilot.core.auth import AuthenticatedUser, TokenVerifier, extract_bearer_token
from promptpilot.core.enhancement import EnhancementSession, SessionRegistry
from promptpilot.core.history import PromptHistoryStore
from promptpilot.models.database import get_db

logger = logging.getLogger(__name__)


# =============================================================================
# Authentication Dependencies
# =============================================================================


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


async def get_current_user(
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> Optional[AuthenticatedUser]:
    """Resolve the signed-in user, or None for anonymous requests.

    Supports ``Authorization: Bearer <token>``. Invalid or expired tokens
    are treated as anonymous.
    """
    return verifier.verify(extract_bearer_token(authorization))


async def require_user(
    user: Annotated[Optional[AuthenticatedUser], Depends(get_current_user)],
) -> AuthenticatedUser:
    """Require a signed-in user.

    Raises:
        HTTPException: 401 if no valid token was supplied
    """
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Authentication required. Please login.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[Optional[AuthenticatedUser], Depends(get_current_user)]
RequireUser = Annotated[AuthenticatedUser, Depends(require_user)]


# =============================================================================
# Enhancement Session Dependencies
# =============================================================================


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.session_registry


async def get_enhancement_session(
    user: CurrentUser,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    x_session_id: Annotated[
        Optional[str], Header(alias="X-Session-Id", max_length=64)
    ] = None,
) -> EnhancementSession:
    """Pipeline context for the caller's session (user plus optional tab id).

    Anonymous callers get a detached idle session that is not kept.
    """
    return registry.get(user.id if user else None, x_session_id)


async def get_history_store(db: AsyncSession = Depends(get_db)) -> PromptHistoryStore:
    return PromptHistoryStore(db)


CurrentSession = Annotated[EnhancementSession, Depends(get_enhancement_session)]
HistoryStore = Annotated[PromptHistoryStore, Depends(get_history_store)]
