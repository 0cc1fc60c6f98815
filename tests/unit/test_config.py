import pytest

from src.core.config import Settings


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, settings: Settings) -> None:
        assert settings.llm_provider == "openai"
        assert settings.openai_api_model == "gpt-4"
        assert settings.max_review_comments == 15
        assert settings.comment_prefix == "[ai-review] "
        assert settings.llm_temperature == 0.2
        assert settings.llm_top_p == 1.0
        assert settings.llm_frequency_penalty == 0.0
        assert settings.llm_presence_penalty == 0.0

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", []),
            ("*.md", ["*.md"]),
            (" *.md , docs/** ,,", ["*.md", "docs/**"]),
            (" , ", []),
        ],
    )
    def test_exclude_patterns(self, settings: Settings, raw: str, expected: list[str]) -> None:
        settings = settings.model_copy(update={"exclude": raw})

        assert settings.exclude_patterns == expected

    def test_action_inputs_take_precedence(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        monkeypatch.setenv("INPUT_GITHUB_TOKEN", "from-input")
        monkeypatch.setenv("INPUT_OPENAI_API_MODEL", "gpt-4o-mini")
        monkeypatch.setenv("INPUT_EXCLUDE", "*.lock")

        settings = Settings(_env_file=None)

        assert settings.github_token.get_secret_value() == "from-input"
        assert settings.openai_api_model == "gpt-4o-mini"
        assert settings.exclude_patterns == ["*.lock"]

    def test_plain_environment_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("INPUT_GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("GITHUB_TOKEN", "plain")
        monkeypatch.setenv("LLM_PROVIDER", "anthropic")

        settings = Settings(_env_file=None)

        assert settings.github_token.get_secret_value() == "plain"
        assert settings.llm_provider == "anthropic"
