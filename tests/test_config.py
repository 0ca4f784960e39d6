import pytest

from riddle_rush.config import load_config, parse_config
from riddle_rush.engine.errors import ConfigError
from riddle_rush.engine.game import GameConfig


def test_defaults_without_file():
    config = load_config(None)
    assert config.game == GameConfig()
    assert config.provider.kind == "builtin"
    assert config.log_dir == "games"


def test_load_yaml(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text(
        "game:\n"
        "  total_rounds: 5\n"
        "  round_seconds: 20\n"
        "  tick_seconds: 0.5\n"
        "provider:\n"
        "  kind: OpenRouter\n"
        "  model: openai/gpt-4o\n"
        "logging:\n"
        "  dir: ''\n"
    )
    config = load_config(str(path))

    assert config.game.total_rounds == 5
    assert config.game.round_seconds == 20
    assert config.game.tick_seconds == 0.5
    assert config.game.points_correct == 10
    assert config.game.points_with_hint == 5
    assert config.provider.kind == "openrouter"
    assert config.provider.model == "openai/gpt-4o"
    assert config.log_dir is None


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    assert parse_config({}).provider.api_key == "sk-test"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "nope.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("game: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(str(path))


@pytest.mark.parametrize("data", [
    {"provider": {"kind": "carrier-pigeon"}},
    {"game": {"total_rounds": 0}},
    {"game": {"round_seconds": "soon"}},
    {"game": ["not", "a", "mapping"]},
    {"provider": {"delay_seconds": "slow"}},
    {"provider": {"check_delay_seconds": -1}},
    {"provider": {"delay_seconds": None}},
])
def test_invalid_values(data):
    with pytest.raises(ConfigError):
        parse_config(data)


def test_zero_delays_are_allowed():
    provider = parse_config({"provider": {"delay_seconds": 0, "check_delay_seconds": "0.25"}}).provider
    assert provider.delay_seconds == 0.0
    assert provider.check_delay_seconds == 0.25
