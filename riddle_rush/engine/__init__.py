"""Game engine - stages, state, timer, and the round state machine."""

from .errors import InvalidTransition, ProviderError, RiddleRushError
from .game import GameConfig, RoundEngine
from .stages import Difficulty, RoundResult, Stage
from .state import GameState, Riddle, RoundRecord

__all__ = [
    "Difficulty",
    "GameConfig",
    "GameState",
    "InvalidTransition",
    "ProviderError",
    "Riddle",
    "RiddleRushError",
    "RoundEngine",
    "RoundRecord",
    "RoundResult",
    "Stage",
]
