"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="claude-market", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")

    # Marketplace
    marketplace_dir: Optional[Path] = Field(default=None, alias="MARKETPLACE_DIR")

    # Claude Code
    claude_plugins_dir: Optional[Path] = Field(default=None, alias="CLAUDE_PLUGINS_DIR")

    @property
    def marketplace_root(self) -> Path:
        """Marketplace checkout root (the directory holding ``plugins/``).

        Without ``MARKETPLACE_DIR`` this is the checkout the package lives in.
        A regular install puts the package in site-packages without
        ``plugins/``; then the current directory is used.
        """
        if self.marketplace_dir:
            return self.marketplace_dir.expanduser().resolve()
        if (PACKAGE_ROOT.parent / "plugins").is_dir():
            return PACKAGE_ROOT.parent
        return Path.cwd()

    @property
    def plugins_dir(self) -> Path:
        """Directory with the marketplace plugins."""
        return self.marketplace_root / "plugins"

    @property
    def install_dir(self) -> Path:
        """Local Claude Code plugins directory."""
        if self.claude_plugins_dir:
            return self.claude_plugins_dir.expanduser()
        return Path.home() / ".claude" / "plugins"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
