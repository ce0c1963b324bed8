"""Unit tests for Settings.from_env.

Tests cover:
- Required variables
- Defaults and overrides
- Invalid values
"""

import pytest

from tyto.config import ConfigError, Settings

REQUIRED = {
    "GIT_REPO_URL": "https://example.com/docs.git",
    "REPOSITORY_DIR": "/srv/docs",
    "WEBHOOK_SECRET": "s3cret",
}


def from_env(**overrides: str) -> Settings:
    return Settings.from_env({**REQUIRED, **overrides}, load_env_file=False)


class TestSettings:
    """Tests for environment parsing."""

    def test_defaults(self) -> None:
        settings = from_env()

        assert settings.git_repo_url == "https://example.com/docs.git"
        assert settings.repository_dir == "/srv/docs"
        assert settings.port == 9001
        assert settings.sync_cooldown_seconds == 1.0
        assert settings.sync_on_startup is True
        assert settings.uncategorized_label == "Uncategorized"
        assert settings.cors_origins == ["*"]

    @pytest.mark.parametrize("missing", sorted(REQUIRED))
    def test_missing_required(self, missing) -> None:
        env = {k: v for k, v in REQUIRED.items() if k != missing}
        with pytest.raises(ConfigError, match=missing):
            Settings.from_env(env, load_env_file=False)

    def test_empty_required_counts_as_missing(self) -> None:
        with pytest.raises(ConfigError, match="WEBHOOK_SECRET"):
            from_env(WEBHOOK_SECRET="")

    def test_overrides(self) -> None:
        settings = from_env(
            TYTO_PORT="8080",
            SYNC_COOLDOWN_SECONDS="2.5",
            SYNC_ON_STARTUP="false",
            UNCATEGORIZED_LABEL="Misc",
            CORS_ORIGINS="https://a.example, https://b.example",
        )

        assert settings.port == 8080
        assert settings.sync_cooldown_seconds == 2.5
        assert settings.sync_on_startup is False
        assert settings.uncategorized_label == "Misc"
        assert settings.cors_origins == ["https://a.example", "https://b.example"]

    @pytest.mark.parametrize(
        "var,value",
        [
            ("TYTO_PORT", "not-a-port"),
            ("SYNC_COOLDOWN_SECONDS", "-1"),
            ("FETCH_TIMEOUT_SECONDS", "0"),
            ("SYNC_ON_STARTUP", "maybe"),
        ],
    )
    def test_invalid_values(self, var, value) -> None:
        with pytest.raises(ConfigError):
            from_env(**{var: value})
