import random

import pytest

from riddle_rush.engine.collaborators import DelayedChecker, check_answer, normalize_answer
from riddle_rush.engine.stages import Difficulty, RoundResult
from riddle_rush.riddles.catalog import RIDDLES, get_riddles
from riddle_rush.riddles.providers import BuiltInHintProvider, BuiltInRiddleProvider


@pytest.mark.parametrize("typed,expected", [
    ("echo", RoundResult.CORRECT),
    ("ECHO ", RoundResult.CORRECT),
    ("  Echo\n", RoundResult.CORRECT),
    ("echoes", RoundResult.INCORRECT),
    ("", RoundResult.INCORRECT),
    ("   ", RoundResult.INCORRECT),
])
async def test_check_answer(typed, expected):
    assert await check_answer("echo", typed) == expected


async def test_delayed_checker_matches_default():
    checker = DelayedChecker(delay=0.001)
    assert await checker("map", " MAP") == RoundResult.CORRECT
    assert await checker("map", "globe") == RoundResult.INCORRECT


def test_normalize_answer():
    assert normalize_answer("  KeyBoard ") == "keyboard"


def test_catalog_covers_every_difficulty():
    for difficulty in Difficulty:
        riddles = get_riddles(difficulty)
        assert riddles
        assert all(r.answer == r.answer.lower() for r in riddles)


async def test_builtin_provider_uses_difficulty_pool():
    provider = BuiltInRiddleProvider(rng=random.Random(7))
    for _ in range(10):
        riddle = await provider.fetch_riddle(Difficulty.MEDIUM)
        assert riddle in RIDDLES[Difficulty.MEDIUM]


async def test_builtin_provider_does_not_repeat_until_exhausted():
    provider = BuiltInRiddleProvider(rng=random.Random(1))
    pool = RIDDLES[Difficulty.EASY]

    served = [await provider.fetch_riddle(Difficulty.EASY) for _ in pool]
    assert set(served) == set(pool)

    again = await provider.fetch_riddle(Difficulty.EASY)
    assert again in pool


async def test_builtin_hint_uses_opening_words():
    provider = BuiltInHintProvider()
    hint = await provider.fetch_hint("I speak without a mouth and hear without ears.")
    assert hint == "Think about: I speak without..."
