"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "NYC Dubbing QA"
    debug: bool = True
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    frontend_port: int = 5173

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    # LLM API Keys (loaded from environment)
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    # Provider A: the more trusted model, kept on agreement
    provider_a_provider: str = "openai"
    provider_a_model: str = "gpt-4-turbo-preview"
    provider_a_label: str = "gpt-4"
    provider_a_temperature: float = 0.3
    provider_a_confidence: float = 0.90

    # Provider B: same prompt, higher temperature for variation
    provider_b_provider: str = "openai"
    provider_b_model: str = "gpt-4-turbo-preview"
    provider_b_label: str = "gpt-4-turbo"
    provider_b_temperature: float = 0.5
    provider_b_confidence: float = 0.85

    translation_max_tokens: int = 500

    # Verification arbiter
    arbiter_provider: str = "openai"
    arbiter_model: str = "gpt-4-turbo-preview"

    # Merge thresholds (tuned against token-set Jaccard agreement)
    high_agreement_threshold: float = 0.90
    low_agreement_threshold: float = 0.70

    # LLM transport
    llm_timeout_seconds: float = 60.0
    # Total attempts per call, including the first
    llm_max_attempts: int = 3

    # Segments per sequential group in chunked batch translation
    segment_batch_size: int = 5

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

    def api_key_for(self, provider: str) -> Optional[str]:
        """Return the configured API key for a provider name."""
        keys = {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
            "gemini": self.gemini_api_key,
        }
        return keys.get(provider)


settings = Settings()
