"""Auth session API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from promptpilot.api.dependencies import CurrentUser, RequireUser, get_session_registry
from promptpilot.core.enhancement import SessionRegistry

router = APIRouter()


@router.get("/auth/session")
async def get_session(user: CurrentUser):
    """Who is signed in, if anyone."""
    if user is None:
        return {"authenticated": False, "user_id": None, "email": None, "name": None}
    return {
        "authenticated": True,
        "user_id": user.id,
        "email": user.email,
        "name": user.name,
    }


@router.post("/auth/logout")
async def logout(
    user: RequireUser,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
):
    """Drop the user's pipeline sessions after sign-out at the identity provider."""
    discarded = registry.discard_user(user.id)
    return {"status": "logged_out", "sessions_discarded": discarded}
