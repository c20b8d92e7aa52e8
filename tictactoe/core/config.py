"""
Configuration management using pydantic-settings.

Loads settings from environment variables and .env file.
Provides type-safe access with validation.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ─────────────────────────────────────────────────────────────
# NESTED SETTINGS
# ─────────────────────────────────────────────────────────────


class GameSettings(BaseSettings):
    """Game setup defaults."""

    model_config = SettingsConfigDict(env_prefix="GAME_", env_file=".env", extra="ignore")

    mode: Literal["classic", "frenzy"] = "classic"
    grid_size: int = Field(default=3, ge=3, description="Grid size (Frenzy only)")
    players: int = Field(default=2, ge=2)


class AISettings(BaseSettings):
    """Bot player configuration."""

    model_config = SettingsConfigDict(env_prefix="AI_", env_file=".env", extra="ignore")

    seed: int | None = Field(
        default=None,
        description="Seed for turn order and random fallback moves",
    )
    offense_threshold: int = Field(
        default=3,
        ge=1,
        description="Minimum total connected for a bot to play offensively",
    )
    move_delay: float = Field(
        default=0.0,
        ge=0.0,
        description="Pause in seconds after each bot move (CLI only)",
    )


class UISettings(BaseSettings):
    """Terminal rendering configuration."""

    model_config = SettingsConfigDict(env_prefix="UI_", env_file=".env", extra="ignore")

    color: bool = True
    highlight_chain: int = Field(
        default=3,
        ge=1,
        description="Per-direction cap when checking cells to highlight",
    )


# ─────────────────────────────────────────────────────────────
# MAIN SETTINGS
# ─────────────────────────────────────────────────────────────


class Settings(BaseSettings):
    """
    Main application settings.

    Loads from .env file and environment variables.
    Environment variables take precedence over .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    game: GameSettings = Field(default_factory=GameSettings)
    ai: AISettings = Field(default_factory=AISettings)
    ui: UISettings = Field(default_factory=UISettings)


# ─────────────────────────────────────────────────────────────
# SINGLETON ACCESS
# ─────────────────────────────────────────────────────────────

_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (for testing)."""
    global _settings
    _settings = None
