"""Game stage definitions."""

from enum import Enum


class Stage(Enum):
    """Coarse phases of a riddle game."""
    START = "start"                    # Title screen
    DIFFICULTY_SELECT = "difficulty"   # Choosing Easy / Medium / Hard
    ROUND = "round"                    # Riddle shown, countdown running
    RESULT = "result"                  # Round outcome shown
    FINAL = "final"                    # Final score, offer to play again


class Difficulty(Enum):
    """Difficulty chosen once per game."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "Difficulty":
        """Parse a difficulty from user input (name, value, or 1-based index)."""
        text = value.strip().lower()
        members = list(cls)
        if text.isdigit() and 1 <= int(text) <= len(members):
            return members[int(text) - 1]
        for member in members:
            if text in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown difficulty: {value}. Available: {[m.value for m in members]}")


class RoundResult(Enum):
    """Outcome of a single round."""
    CORRECT = "correct"
    INCORRECT = "incorrect"
    TIMEOUT = "timeout"

    @property
    def headline(self) -> str:
        """Human-readable headline for the result screen."""
        if self == RoundResult.CORRECT:
            return "Correct!"
        elif self == RoundResult.TIMEOUT:
            return "Time's up!"
        return "Incorrect!"
