"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "PromptPilot"
    debug: bool = True
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    frontend_port: int = 3000

    # Database
    database_url: str = "sqlite+aiosqlite:///./promptpilot.db"

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    # LLM provider (litellm routing)
    llm_provider: str = "gemini"
    llm_model: str = "gemini-1.5-pro"
    llm_base_url: Optional[str] = None

    # LLM API Keys (loaded from environment)
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # Generation parameters
    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 512  # Kept small for faster responses

    # Enhancement pipeline
    enhancement_timeout_ms: int = 15000
    enhancement_cooldown_ms: int = 30000
    quota_retry_after_ms: int = 60000  # Suggested wait after a provider quota error
    progress_tick_ms: int = 800
    session_idle_ttl_ms: int = 30 * 60 * 1000  # Idle sessions are dropped after this
    max_sessions_per_user: int = 5  # Tab sessions per user; least recently used evicted

    # Authentication (identity provider issued JWTs)
    auth_jwt_secret: Optional[str] = None
    auth_jwt_audience: str = "authenticated"
    auth_jwt_algorithm: str = "HS256"
    # Local development only: every request acts as this user when no secret is set
    dev_user_id: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Build CORS origins based on frontend port
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
            ]

    def get_api_key(self, provider: Optional[str] = None) -> Optional[str]:
        """Get API key for a provider (defaults to the configured one)."""
        key_map = {
            "gemini": self.gemini_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }
        return key_map.get(provider or self.llm_provider)


settings = Settings()
