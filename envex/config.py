"""Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with an ENVEX_-prefixed environment variable
    - get_settings() is cached (lru_cache) — single instance per process
    - Extra registry entries use 64-bit unsigned codes only

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - extra_functions / extra_parameters parsed from JSON objects ({"100": "sqrt"}):
      deployments extend the well-known tables without code changes
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ENVEX_", env_file=".env", case_sensitive=False,
    )

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # Registry extension, applied by services.bootstrap.initialize()
    extra_functions: dict[int, str] = {}
    extra_parameters: dict[int, str] = {}

    # Wire limits
    max_message_bytes: int = 1_048_576

    @field_validator("extra_functions", "extra_parameters")
    @classmethod
    def codes_are_unsigned(cls, v: dict[int, str]) -> dict[int, str]:
        invalid = [code for code in v if not 0 <= code < 2**64]
        if invalid:
            raise ValueError(f"registry codes must be 64-bit unsigned, got {invalid}")
        return v

    @field_validator("log_format")
    @classmethod
    def known_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
