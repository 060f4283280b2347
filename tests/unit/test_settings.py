"""Tests for pydantic-settings configuration."""

from flowshare.configs.database import DatabaseSettings
from flowshare.configs.editor import DEFAULT_NODE_PALETTE, EditorSettings
from flowshare.configs.settings import Settings


class TestEditorSettings:
    """Tests for EditorSettings defaults and env overrides."""

    def test_defaults(self) -> None:
        settings = EditorSettings()

        assert settings.default_color == DEFAULT_NODE_PALETTE[0]
        assert settings.default_node_label == "New Node"
        assert (settings.spawn_origin_x, settings.spawn_origin_y) == (250, 100)
        assert settings.spawn_offset == 200
        assert settings.edge_style == {"stroke": "var(--accent-primary)", "strokeWidth": 2}

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("EDITOR_DEFAULT_NODE_LABEL", "Step")
        monkeypatch.setenv("EDITOR_EDGE_ANIMATED", "false")

        settings = EditorSettings()

        assert settings.default_node_label == "Step"
        assert settings.edge_animated is False


class TestDatabaseSettings:
    """Tests for DatabaseSettings URL building."""

    def test_url_override(self) -> None:
        settings = DatabaseSettings(url="sqlite+aiosqlite:///./flowshare.db")

        assert settings.async_database_url == "sqlite+aiosqlite:///./flowshare.db"
        assert settings.is_sqlite is True

    def test_postgres_url(self, monkeypatch) -> None:
        monkeypatch.delenv("POSTGRES_URL", raising=False)

        settings = DatabaseSettings(
            host="db", port=5432, user="flow", password="secret", db="flowshare"
        )

        assert settings.async_database_url.startswith("postgresql+asyncpg://flow:secret@db:5432/flowshare")
        assert settings.is_sqlite is False


class TestSharedSettings:
    """Tests for fields every settings class inherits."""

    def test_shared_defaults(self, monkeypatch) -> None:
        for name in ("ENVIRONMENT", "LOG_LEVEL", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.cors_origins == ["*"]

    def test_cors_origins_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", '["https://flowshare.example"]')

        assert Settings().cors_origins == ["https://flowshare.example"]
