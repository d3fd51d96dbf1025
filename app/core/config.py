"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. RESET_TOKEN_SECRET) are
validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.enums import MismatchPolicy, SignatureScheme


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except reset_token_secret,
    validated in validate_required_and_backends.
    """

    # App
    app_name: str = "scribe-reset"
    app_version: str = "1.0.0"
    debug: bool = False

    # Reset token: shared secret for issuing and validating reset links.
    # Must be identical on every process that issues or validates tokens.
    reset_token_secret: SecretStr = SecretStr("")
    reset_token_ttl_hours: float = 24
    # "legacy" keeps the original reversible signature for compatibility;
    # "hmac" signs with HMAC-SHA256 (tokens are not interchangeable).
    reset_token_signature: str = SignatureScheme.LEGACY.value

    # Pending reset staging slot
    pending_reset_ttl_seconds: int = 300  # 5 minutes
    pending_reset_mismatch_policy: str = MismatchPolicy.KEEP.value
    pending_reset_backend: str = "memory"

    # Redis (pending_reset_backend == "redis")
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_key_prefix: str = "scribe-reset"

    # Reset flow
    reset_rate_limit_seconds: int = 60
    frontend_base_url: str = "http://localhost:5173"
    identity_api_base_url: str = "http://localhost:3000"
    email_api_base_url: str = "http://localhost:3000"
    http_timeout_seconds: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_backends(self) -> "Settings":
        """Validate the token secret and the enum-like string settings."""
        if not self.reset_token_secret.get_secret_value():
            raise ValueError(
                "RESET_TOKEN_SECRET is required. Generate with: openssl rand -hex 32. "
                "Every process that issues or validates reset tokens needs the same value."
            )
        if self.reset_token_signature not in SignatureScheme.values():
            raise ValueError(
                f"reset_token_signature must be one of {SignatureScheme.values()}, "
                f"got: {self.reset_token_signature!r}"
            )
        if self.pending_reset_mismatch_policy not in MismatchPolicy.values():
            raise ValueError(
                f"pending_reset_mismatch_policy must be one of {MismatchPolicy.values()}, "
                f"got: {self.pending_reset_mismatch_policy!r}"
            )
        if self.pending_reset_backend not in ("memory", "redis"):
            raise ValueError(
                f"Invalid pending_reset_backend '{self.pending_reset_backend}'. "
                "Must be one of: 'memory', 'redis'"
            )
        if self.reset_token_ttl_hours < 0:
            raise ValueError("reset_token_ttl_hours must not be negative")
        if self.pending_reset_ttl_seconds <= 0:
            raise ValueError("pending_reset_ttl_seconds must be positive")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
