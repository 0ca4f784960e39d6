import asyncio
from typing import Optional

import pytest

from riddle_rush.engine.errors import ProviderError
from riddle_rush.engine.game import GameConfig, RoundEngine
from riddle_rush.engine.stages import RoundResult
from riddle_rush.engine.collaborators import check_answer
from riddle_rush.engine.state import Riddle


ECHO = Riddle(
    text="I speak without a mouth and hear without ears. I have nobody, but I come alive with wind. What am I?",
    answer="echo",
)
MAP = Riddle(
    text="I have cities, but no houses. I have mountains, but no trees. What am I?",
    answer="map",
)


class FakeRiddleProvider:
    """Serves riddles in order. Can be held open with ``gate`` or made to fail."""

    def __init__(self, riddles=None):
        self.riddles = list(riddles or [ECHO])
        self.calls = []
        self.gate: Optional[asyncio.Event] = None
        self.fail = False

    async def fetch_riddle(self, difficulty):
        self.calls.append(difficulty)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise ProviderError("riddle service down")
        return self.riddles[(len(self.calls) - 1) % len(self.riddles)]


class FakeHintProvider:
    def __init__(self, hint: str = "It bounces back"):
        self.hint = hint
        self.calls = []
        self.gate: Optional[asyncio.Event] = None
        self.fail = False

    async def fetch_hint(self, riddle_text):
        self.calls.append(riddle_text)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise ProviderError("hint service down")
        return self.hint


class GatedChecker:
    def __init__(self):
        self.gate = asyncio.Event()
        self.calls = []

    async def __call__(self, correct_answer, user_input) -> RoundResult:
        self.calls.append((correct_answer, user_input))
        await self.gate.wait()
        return await check_answer(correct_answer, user_input)


@pytest.fixture()
def riddles():
    return FakeRiddleProvider([ECHO, MAP])


@pytest.fixture()
def hints():
    return FakeHintProvider()


@pytest.fixture()
def make_engine(riddles, hints):
    engines = []

    def factory(**kwargs) -> RoundEngine:
        config = GameConfig(**{k: kwargs.pop(k) for k in list(kwargs) if hasattr(GameConfig, k)})
        engine = RoundEngine(
            riddle_provider=kwargs.pop("riddle_provider", riddles),
            hint_provider=kwargs.pop("hint_provider", hints),
            config=config,
            **kwargs,
        )
        engines.append(engine)
        return engine

    yield factory

    for engine in engines:
        engine.close()


@pytest.fixture()
def engine(make_engine):
    return make_engine()


@pytest.fixture()
def wait_until():
    async def _wait(predicate, timeout: float = 2.0):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError("condition not met before timeout")
            await asyncio.sleep(0.001)

    return _wait
