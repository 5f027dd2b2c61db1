"""Identity provider token verification.

Users sign in through the OAuth identity provider in the browser; the API
only receives the provider-issued access token (an HS256 JWT whose ``sub``
is the user id) and verifies it with the project's JWT secret.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt

from promptpilot.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """The signed-in user behind a request."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "AuthenticatedUser":
        metadata = claims.get("user_metadata") or {}
        return cls(
            id=str(claims.get("sub") or claims.get("user_id")),
            email=claims.get("email"),
            name=metadata.get("full_name") or metadata.get("name"),
        )


class TokenVerifier:
    """Verifies access tokens issued by the identity provider."""

    def __init__(
        self,
        secret: Optional[str],
        audience: Optional[str] = "authenticated",
        algorithm: str = "HS256",
        dev_user_id: Optional[str] = None,
    ):
        self.secret = secret
        self.audience = audience
        self.algorithm = algorithm
        self.dev_user_id = dev_user_id

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenVerifier":
        return cls(
            secret=settings.auth_jwt_secret,
            audience=settings.auth_jwt_audience,
            algorithm=settings.auth_jwt_algorithm,
            dev_user_id=settings.dev_user_id,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.secret)

    def verify(self, token: Optional[str]) -> Optional[AuthenticatedUser]:
        """Resolve a token to a user, or None if absent or invalid."""
        if not self.enabled:
            # Local development without an identity provider
            if self.dev_user_id:
                return AuthenticatedUser(id=self.dev_user_id, name="Local Developer")
            return None

        if not token:
            return None

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
            )
        except jwt.ExpiredSignatureError:
            logger.info("[AUTH] Expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"[AUTH] Invalid token: {e}")
            return None

        if not (claims.get("sub") or claims.get("user_id")):
            logger.warning("[AUTH] Token has no subject")
            return None
        return AuthenticatedUser.from_claims(claims)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Strip the ``Bearer`` prefix from an Authorization header."""
    if not authorization:
        return None
    if authorization.startswith("Bearer "):
        return authorization[7:].strip() or None
    return authorization.strip() or None
