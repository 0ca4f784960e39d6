"""Error types raised by the engine and its collaborators."""

from typing import Optional


class RiddleRushError(Exception):
    """Base class for all Riddle Rush errors."""


class ProviderError(RiddleRushError):
    """A riddle, hint, or answer provider failed to deliver a result."""


class InvalidTransition(RiddleRushError):
    """An intent arrived in a stage (or round state) that does not accept it."""

    def __init__(self, intent: str, stage, reason: Optional[str] = None):
        self.intent = intent
        self.stage = stage
        self.reason = reason or f"not accepted in stage {stage.value}"
        super().__init__(f"{intent}: {self.reason}")


class ConfigError(RiddleRushError):
    """The configuration file holds an invalid value."""
