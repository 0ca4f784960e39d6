"""Built-in riddle and hint providers."""

import asyncio
import random
from typing import Optional

from ..engine.stages import Difficulty
from ..engine.state import Riddle
from .catalog import get_riddles


class BuiltInRiddleProvider:
    """Serves riddles from the built-in catalogue.

    Riddles are not repeated within a difficulty until every riddle of that
    difficulty has been served once.
    """

    def __init__(self, delay: float = 0.0, rng: Optional[random.Random] = None):
        """Initialize the provider.

        Args:
            delay: Simulated latency in seconds before a riddle is returned.
            rng: Random source, for reproducible games.
        """
        self.delay = delay
        self.rng = rng or random.Random()
        self._served: dict[Difficulty, set[Riddle]] = {}

    async def fetch_riddle(self, difficulty: Difficulty) -> Riddle:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        pool = get_riddles(difficulty)
        served = self._served.setdefault(difficulty, set())
        fresh = [r for r in pool if r not in served]
        if not fresh:
            served.clear()
            fresh = list(pool)

        riddle = self.rng.choice(fresh)
        served.add(riddle)
        return riddle


class BuiltInHintProvider:
    """Hints with the opening words of the riddle."""

    def __init__(self, delay: float = 0.0, words: int = 3):
        self.delay = delay
        self.words = words

    async def fetch_hint(self, riddle_text: str) -> str:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        opening = " ".join(riddle_text.split(" ")[:self.words])
        return f"Think about: {opening}..."
