"""Configuration loading from YAML and the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .engine.errors import ConfigError
from .engine.game import GameConfig


PROVIDER_KINDS = ("builtin", "openrouter")


@dataclass
class ProviderSettings:
    """Where riddles and hints come from."""
    kind: str = "builtin"
    model: str = "anthropic/claude-sonnet-4"
    delay_seconds: float = 0.5
    check_delay_seconds: float = 0.0
    api_key: Optional[str] = None


@dataclass
class AppConfig:
    """Everything loaded from the config file and environment."""
    game: GameConfig = field(default_factory=GameConfig)
    provider: ProviderSettings = field(default_factory=ProviderSettings)
    log_dir: Optional[str] = "games"


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def _number(name: str, value, cast):
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def _positive(name: str, value, cast):
    value = _number(name, value, cast)
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _non_negative(name: str, value):
    value = _number(name, value, float)
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def parse_config(data: Optional[dict]) -> AppConfig:
    """Build an AppConfig from parsed YAML. Missing keys take defaults."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping")

    game_data = _section(data, "game")
    defaults = GameConfig()
    game = GameConfig(
        total_rounds=_positive("game.total_rounds", game_data.get("total_rounds", defaults.total_rounds), int),
        round_seconds=_positive("game.round_seconds", game_data.get("round_seconds", defaults.round_seconds), int),
        points_correct=_positive("game.points_correct", game_data.get("points_correct", defaults.points_correct), int),
        points_with_hint=_positive(
            "game.points_with_hint", game_data.get("points_with_hint", defaults.points_with_hint), int
        ),
        tick_seconds=_positive("game.tick_seconds", game_data.get("tick_seconds", defaults.tick_seconds), float),
    )

    provider_data = _section(data, "provider")
    provider = ProviderSettings(
        kind=str(provider_data.get("kind", "builtin")).lower(),
        model=provider_data.get("model", ProviderSettings.model),
        delay_seconds=_non_negative(
            "provider.delay_seconds", provider_data.get("delay_seconds", ProviderSettings.delay_seconds)
        ),
        check_delay_seconds=_non_negative(
            "provider.check_delay_seconds",
            provider_data.get("check_delay_seconds", ProviderSettings.check_delay_seconds),
        ),
        api_key=os.getenv("OPENROUTER_API_KEY"),
    )
    if provider.kind not in PROVIDER_KINDS:
        raise ConfigError(f"Unknown provider kind: {provider.kind}. Available: {list(PROVIDER_KINDS)}")

    logging_data = _section(data, "logging")
    log_dir = logging_data.get("dir", "games")

    return AppConfig(game=game, provider=provider, log_dir=log_dir or None)


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from a YAML file.

    Environment variables (including a ``.env`` file) supply secrets such
    as ``OPENROUTER_API_KEY``. Without a path, defaults are used.
    """
    load_dotenv()

    if config_path is None:
        return parse_config({})

    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    return parse_config(data)
