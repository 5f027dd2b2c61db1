"""
Pytest configuration and shared fixtures.

Provides fake text generators, a controllable clock, pipeline factories,
JWT helpers and a FastAPI TestClient wired to a temporary SQLite database.
"""

import asyncio
import os
import tempfile
import time
from pathlib import Path

# Settings are read at import time, so the environment must be prepared first
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="promptpilot-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'test.db'}"
os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ.pop("DEV_USER_ID", None)

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from promptpilot.api.dependencies import get_session_registry  # noqa: E402
from promptpilot.config import Settings  # noqa: E402
from promptpilot.core.enhancement import (  # noqa: E402
    EnhancementInvoker,
    EnhancementPipeline,
    RateLimiter,
    SessionRegistry,
)
from promptpilot.core.llm import GenerationConfig, TextGenerator  # noqa: E402

TEST_JWT_SECRET = "test-secret"


# ==============================================================================
# Fake Generators
# ==============================================================================


class StaticGenerator(TextGenerator):
    """Returns a fixed text and records every instruction it receives."""

    def __init__(self, text: str = "Enhanced: write a vivid story"):
        self.text = text
        self.calls: list[str] = []

    @property
    def model(self) -> str:
        return "fake/static"

    async def generate(self, instruction: str, config: GenerationConfig) -> str:
        self.calls.append(instruction)
        return self.text


class FailingGenerator(TextGenerator):
    """Raises the given exception on every call."""

    def __init__(self, exc: BaseException):
        self.exc = exc
        self.calls: list[str] = []

    @property
    def model(self) -> str:
        return "fake/failing"

    async def generate(self, instruction: str, config: GenerationConfig) -> str:
        self.calls.append(instruction)
        raise self.exc


class HangingGenerator(TextGenerator):
    """Blocks until released; records whether it was cancelled."""

    def __init__(self, text: str = "Enhanced after waiting"):
        self.text = text
        self.calls: list[str] = []
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.cancelled = False

    @property
    def model(self) -> str:
        return "fake/hanging"

    async def generate(self, instruction: str, config: GenerationConfig) -> str:
        self.calls.append(instruction)
        self.started.set()
        try:
            await self.release.wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return self.text


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 1_000_000):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


# ==============================================================================
# Pipeline Fixtures
# ==============================================================================


@pytest.fixture
def clock():
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def generator():
    """Default generator for pipeline and API tests."""
    return StaticGenerator()


@pytest.fixture
def make_pipeline(clock):
    """Factory building a pipeline around a generator."""

    def _make(gen: TextGenerator, timeout_ms: int = 15000, cooldown_ms: int = 30000):
        invoker = EnhancementInvoker(gen, timeout_ms=timeout_ms)
        limiter = RateLimiter(min_interval_ms=cooldown_ms, clock=clock)
        return EnhancementPipeline(invoker, limiter)

    return _make


@pytest.fixture
def test_settings():
    """Settings with progress ticking disabled."""
    return Settings(progress_tick_ms=0)


@pytest.fixture
def registry(generator, test_settings, clock):
    """Session registry backed by the fake generator."""
    return SessionRegistry(generator, test_settings, clock=clock)


# ==============================================================================
# API Fixtures
# ==============================================================================


def make_token(user_id: str = "user-1", secret: str = TEST_JWT_SECRET, **claims) -> str:
    """Mint an identity provider style access token."""
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "email": f"{user_id}@example.com",
        "user_metadata": {"full_name": "Test User"},
        "exp": int(time.time()) + 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(user_id: str = "user-1", **extra) -> dict:
    headers = {"Authorization": f"Bearer {make_token(user_id)}"}
    headers.update(extra)
    return headers


@pytest.fixture
def client(registry):
    """TestClient with the lifespan run and the fake registry injected."""
    from promptpilot.main import app

    app.dependency_overrides[get_session_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
