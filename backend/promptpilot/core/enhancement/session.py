"""Per-session pipeline contexts.

Each signed-in user gets one EnhancementPipeline per client session (the
user alone, or narrowed by a client-supplied session id such as a browser
tab). The cooldown belongs to the user: every tab of that user shares one
RateLimiter, so opening a new tab never skips the wait. Nothing is shared
across users.

Anonymous callers are never stored; they get a detached idle session whose
pipeline rejects submissions before any async work.

Sessions idle for longer than ``session_idle_ttl_ms`` are dropped, and a user
holds at most ``max_sessions_per_user`` tab sessions (least recently used
evicted first).
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from promptpilot.config import Settings
from promptpilot.core.llm import (
    LiteLLMTextGenerator,
    TextGenerator,
    resolve_generation_config,
    resolve_runtime_config,
)

from .invoker import EnhancementInvoker
from .models import PipelineState
from .pipeline import EnhancementPipeline
from .rate_limiter import RateLimiter, monotonic_ms

logger = logging.getLogger(__name__)

ANONYMOUS_KEY = "anonymous"


def session_key(user_id: Optional[str], client_session_id: Optional[str] = None) -> str:
    """Key identifying one session's pipeline."""
    base = user_id or ANONYMOUS_KEY
    if client_session_id:
        return f"{base}:{client_session_id}"
    return base


@dataclass
class EnhancementSession:
    """Pipeline context owned by one client session."""

    key: str
    user_id: Optional[str]
    pipeline: EnhancementPipeline
    last_used_ms: float = 0.0

    @property
    def busy(self) -> bool:
        return self.pipeline.state != PipelineState.IDLE

    def status(self) -> dict:
        """Point-in-time view for status polling."""
        return {
            "state": self.pipeline.state.value,
            "in_flight": self.pipeline.in_flight,
            "cooldown_remaining_ms": self.pipeline.rate_limiter.remaining_ms(),
            "progress": self.pipeline.progress.value,
            "progress_message": self.pipeline.progress.message,
        }


class SessionRegistry:
    """Creates, hands out and expires per-session pipelines.

    The text generator is stateless and shared. Rate-limit state lives in one
    RateLimiter per user; lifecycle and progress state live in each session's
    pipeline.
    """

    def __init__(
        self,
        generator: TextGenerator,
        settings: Settings,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.generator = generator
        self.settings = settings
        self.clock = clock
        self.idle_ttl_ms = settings.session_idle_ttl_ms
        self.max_sessions_per_user = max(1, settings.max_sessions_per_user)
        self._generation_config = resolve_generation_config(settings)
        self._sessions: Dict[str, EnhancementSession] = {}
        self._limiters: Dict[str, RateLimiter] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionRegistry":
        """Registry backed by the configured LiteLLM provider."""
        generator = LiteLLMTextGenerator(resolve_runtime_config(settings))
        return cls(generator, settings)

    def _create_limiter(self) -> RateLimiter:
        return RateLimiter(
            min_interval_ms=self.settings.enhancement_cooldown_ms,
            clock=self.clock,
        )

    def _create_pipeline(self, rate_limiter: RateLimiter) -> EnhancementPipeline:
        invoker = EnhancementInvoker(
            self.generator,
            generation_config=self._generation_config,
            timeout_ms=self.settings.enhancement_timeout_ms,
            quota_retry_after_ms=self.settings.quota_retry_after_ms,
        )
        return EnhancementPipeline(
            invoker,
            rate_limiter,
            progress_tick_ms=self.settings.progress_tick_ms,
        )

    def get(
        self, user_id: Optional[str], client_session_id: Optional[str] = None
    ) -> EnhancementSession:
        """Get the caller's session, creating it on first use.

        Anonymous callers receive a fresh detached session that is not stored.
        """
        if not user_id:
            return EnhancementSession(
                key=ANONYMOUS_KEY,
                user_id=None,
                pipeline=self._create_pipeline(self._create_limiter()),
            )

        key = session_key(user_id, client_session_id)
        now = self.clock()
        with self._lock:
            self._prune(now)
            session = self._sessions.get(key)
            if session is None:
                self._make_room_for(user_id)
                limiter = self._limiters.get(user_id)
                if limiter is None:
                    limiter = self._limiters[user_id] = self._create_limiter()
                session = EnhancementSession(
                    key=key, user_id=user_id, pipeline=self._create_pipeline(limiter)
                )
                self._sessions[key] = session
                logger.debug(f"Created enhancement session: {key}")
            session.last_used_ms = now
            return session

    def peek(self, key: str) -> Optional[EnhancementSession]:
        with self._lock:
            return self._sessions.get(key)

    def discard(self, key: str) -> bool:
        """Forget a session (e.g. on sign-out)."""
        with self._lock:
            return self._sessions.pop(key, None) is not None

    def discard_user(self, user_id: str) -> int:
        """Forget every session belonging to a user.

        The user's rate limiter survives until its cooldown has passed, so
        signing out and back in does not reset the wait.
        """
        with self._lock:
            keys = [k for k, s in self._sessions.items() if s.user_id == user_id]
            for k in keys:
                del self._sessions[k]
            return len(keys)

    def prune(self) -> int:
        """Drop expired sessions now; returns how many were removed."""
        with self._lock:
            return self._prune(self.clock())

    def _user_sessions(self, user_id: str) -> List[EnhancementSession]:
        return [s for s in self._sessions.values() if s.user_id == user_id]

    def _make_room_for(self, user_id: str) -> None:
        sessions = self._user_sessions(user_id)
        while len(sessions) >= self.max_sessions_per_user:
            # Idle sessions go first, oldest use first
            victim = min(sessions, key=lambda s: (s.busy, s.last_used_ms))
            del self._sessions[victim.key]
            sessions.remove(victim)
            logger.info(f"Evicted enhancement session {victim.key}: per-user limit reached")

    def _prune(self, now: float) -> int:
        expired = [
            key
            for key, s in self._sessions.items()
            if not s.busy and now - s.last_used_ms >= self.idle_ttl_ms
        ]
        for key in expired:
            del self._sessions[key]

        active_users = {s.user_id for s in self._sessions.values()}
        for user_id in list(self._limiters):
            if user_id not in active_users and self._limiters[user_id].remaining_ms(now) == 0:
                del self._limiters[user_id]

        if expired:
            logger.debug(f"Pruned {len(expired)} idle enhancement sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
