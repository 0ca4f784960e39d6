"""Riddles and the mutable game state owned by the engine."""

from dataclasses import dataclass, field, replace
from typing import Optional

from .stages import Difficulty, RoundResult, Stage


@dataclass(frozen=True)
class Riddle:
    """A riddle and its canonical answer."""

    text: str
    answer: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class RoundRecord:
    """Outcome of one finished round."""
    round_number: int
    riddle: Riddle
    answer: str
    result: RoundResult
    used_hint: bool
    points: int


@dataclass
class GameState:
    """Everything a presentation layer needs to render the game.

    Only the engine mutates this object. Renderers should work from
    ``snapshot()`` copies.
    """

    stage: Stage = Stage.START
    difficulty: Difficulty = Difficulty.EASY
    round_number: int = 1
    score: int = 0
    current_riddle: Optional[Riddle] = None
    hint: Optional[str] = None
    used_hint: bool = False
    seconds_remaining: int = 15
    last_answer: str = ""
    last_result: RoundResult = RoundResult.INCORRECT
    error: Optional[str] = None
    loading: bool = False
    history: list[RoundRecord] = field(default_factory=list)

    def snapshot(self) -> "GameState":
        """Return an independent copy of the state."""
        return replace(self, history=list(self.history))

    def clear_round(self, round_seconds: int) -> None:
        """Reset the per-round fields on entry to a round."""
        self.current_riddle = None
        self.hint = None
        self.used_hint = False
        self.seconds_remaining = round_seconds
        self.last_answer = ""
        self.last_result = RoundResult.INCORRECT
        self.error = None
        self.loading = False

    @property
    def correct_rounds(self) -> int:
        """Number of rounds answered correctly so far."""
        return sum(1 for r in self.history if r.result == RoundResult.CORRECT)
