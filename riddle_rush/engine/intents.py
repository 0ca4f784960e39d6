"""Named user actions a presentation layer dispatches to the engine."""

from dataclasses import dataclass
from typing import Union

from .stages import Difficulty


@dataclass(frozen=True)
class StartGame:
    """Leave the title screen."""


@dataclass(frozen=True)
class SelectDifficulty:
    """Pick the difficulty and begin round 1."""
    difficulty: Difficulty


@dataclass(frozen=True)
class SubmitAnswer:
    """Submit the typed answer for the current riddle."""
    text: str


@dataclass(frozen=True)
class RequestHint:
    """Reveal the hint for the current riddle."""


@dataclass(frozen=True)
class NextRound:
    """Move on from the result screen."""


@dataclass(frozen=True)
class PlayAgain:
    """Start over from the final screen."""


@dataclass(frozen=True)
class Retry:
    """Re-request a riddle after a failed fetch."""


Intent = Union[StartGame, SelectDifficulty, SubmitAnswer, RequestHint, NextRound, PlayAgain, Retry]
