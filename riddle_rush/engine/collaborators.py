"""Contracts for the riddle, hint, and answer collaborators."""

import asyncio
from typing import Protocol

from .stages import Difficulty, RoundResult
from .state import Riddle


class RiddleProvider(Protocol):
    """Supplies a riddle for a difficulty. Raises ProviderError on failure."""

    async def fetch_riddle(self, difficulty: Difficulty) -> Riddle:
        ...


class HintProvider(Protocol):
    """Supplies a hint for a riddle text. Raises ProviderError on failure."""

    async def fetch_hint(self, riddle_text: str) -> str:
        ...


class AnswerChecker(Protocol):
    """Compares a typed answer with the canonical one."""

    async def __call__(self, correct_answer: str, user_input: str) -> RoundResult:
        ...


def normalize_answer(text: str) -> str:
    """Canonical form used for answer comparison."""
    return text.strip().casefold()


async def check_answer(correct_answer: str, user_input: str) -> RoundResult:
    """Default answer checker: case-insensitive, trims the user input."""
    if normalize_answer(user_input) == normalize_answer(correct_answer):
        return RoundResult.CORRECT
    return RoundResult.INCORRECT


class DelayedChecker:
    """Answer checker that simulates a round trip before answering."""

    def __init__(self, delay: float = 0.3):
        self.delay = delay

    async def __call__(self, correct_answer: str, user_input: str) -> RoundResult:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        return await check_answer(correct_answer, user_input)
