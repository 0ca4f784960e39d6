import asyncio

import pytest
from rich.console import Console

from riddle_rush import main
from riddle_rush.config import AppConfig
from riddle_rush.engine.collaborators import check_answer
from riddle_rush.engine.intents import (
    NextRound,
    PlayAgain,
    RequestHint,
    Retry,
    SelectDifficulty,
    StartGame,
    SubmitAnswer,
)
from riddle_rush.engine.stages import Difficulty, Stage
from riddle_rush.main import QUIT, build_engine, intent_for, play, report_failure
from riddle_rush.riddles.llm_provider import LLMRiddleProvider
from riddle_rush.riddles.providers import BuiltInRiddleProvider


@pytest.mark.parametrize("stage,line,expected", [
    (Stage.START, "", StartGame()),
    (Stage.START, "q", QUIT),
    (Stage.DIFFICULTY_SELECT, "2", SelectDifficulty(Difficulty.MEDIUM)),
    (Stage.DIFFICULTY_SELECT, "hard", SelectDifficulty(Difficulty.HARD)),
    (Stage.DIFFICULTY_SELECT, "impossible", None),
    (Stage.ROUND, "?", RequestHint()),
    (Stage.ROUND, "/retry", Retry()),
    (Stage.ROUND, "ECHO ", SubmitAnswer("ECHO ")),
    (Stage.ROUND, "", SubmitAnswer("")),
    (Stage.ROUND, "/quit", QUIT),
    (Stage.RESULT, "", NextRound()),
    (Stage.FINAL, "", PlayAgain()),
    (Stage.FINAL, "n", QUIT),
])
def test_intent_for(stage, line, expected):
    assert intent_for(stage, line) == expected


def test_difficulty_parse_rejects_out_of_range():
    with pytest.raises(ValueError):
        Difficulty.parse("4")


def test_build_builtin_engine(tmp_path):
    config = AppConfig(log_dir=str(tmp_path))
    engine = build_engine(config)
    assert isinstance(engine.riddle_provider, BuiltInRiddleProvider)
    assert engine.answer_checker is check_answer
    assert engine.logger.base_dir == tmp_path


def test_build_openrouter_engine():
    config = AppConfig(log_dir=None)
    config.provider.kind = "openrouter"
    config.provider.api_key = "sk-test"
    engine = build_engine(config)
    assert isinstance(engine.riddle_provider, LLMRiddleProvider)
    assert engine.hint_provider is engine.riddle_provider
    assert engine.logger is None


@pytest.fixture()
def recorded_console(monkeypatch):
    console = Console(record=True, width=100)
    monkeypatch.setattr(main, "console", console)
    return console


async def test_report_failure_prints_crashed_dispatch(recorded_console):
    async def crash():
        raise RuntimeError("bad completion")

    task = asyncio.create_task(crash())
    await asyncio.gather(task, return_exceptions=True)
    report_failure(task)

    assert "bad completion" in recorded_console.export_text()


async def test_report_failure_ignores_cancelled_dispatch(recorded_console):
    task = asyncio.create_task(asyncio.sleep(10))
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)
    report_failure(task)

    assert recorded_console.export_text() == ""


async def test_play_reports_errors_and_waits_for_dispatches(
    monkeypatch, recorded_console, make_engine, riddles, wait_until
):
    async def broken_fetch(difficulty):
        raise RuntimeError("bad completion")

    riddles.fetch_riddle = broken_fetch
    engine = make_engine()
    await engine.start_game()
    feeders = []

    def scripted_reader(loop, lines):
        async def feed():
            await lines.put("1")
            await wait_until(lambda: engine.state.error is not None)
            await asyncio.sleep(0.01)
            await lines.put(None)
        feeders.append(loop.create_task(feed()))

    monkeypatch.setattr(main, "start_reader", scripted_reader)
    await asyncio.wait_for(play(engine), timeout=2)

    output = recorded_console.export_text()
    assert "Unexpected error" in output
    assert "bad completion" in output
    assert engine.state.loading is False
    assert not engine.countdown.running
