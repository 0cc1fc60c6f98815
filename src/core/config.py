from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):  # type: ignore[misc]
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False

    # GitHub (action inputs arrive as INPUT_<NAME>)
    github_token: SecretStr = Field(
        default=...,
        validation_alias=AliasChoices("INPUT_GITHUB_TOKEN", "GITHUB_TOKEN", "github_token"),
    )
    github_api_url: str = "https://api.github.com"
    github_event_path: str = ""
    github_event_name: str = ""
    github_timeout_seconds: float = 30.0

    # LLM Providers
    llm_provider: Literal["openai", "anthropic", "ollama"] = "openai"
    openai_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "INPUT_OPENAI_API_KEY", "OPENAI_API_KEY", "openai_api_key"
        ),
    )
    openai_api_model: str = Field(
        default="gpt-4",
        validation_alias=AliasChoices(
            "INPUT_OPENAI_API_MODEL", "OPENAI_API_MODEL", "openai_api_model"
        ),
    )
    openai_api_url: str = "https://api.openai.com/v1"
    anthropic_api_key: SecretStr | None = None
    anthropic_model: str = "claude-sonnet-4-20250514"
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "deepseek-coder:6.7b"
    llm_timeout_seconds: float = 300.0

    # LLM Sampling
    llm_temperature: float = 0.2
    llm_top_p: float = 1.0
    llm_frequency_penalty: float = 0.0
    llm_presence_penalty: float = 0.0

    # Review Settings
    exclude: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_EXCLUDE", "EXCLUDE", "exclude"),
    )
    max_review_comments: int = 15
    comment_prefix: str = "[ai-review] "
    restrict_comments_to_diff: bool = True

    @property
    def exclude_patterns(self) -> list[str]:
        """Comma-separated exclude globs, trimmed, blanks removed."""
        return [p.strip() for p in self.exclude.split(",") if p.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
