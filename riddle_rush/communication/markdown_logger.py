"""Markdown transcript of riddle games."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from ..engine.stages import RoundResult
from ..engine.state import RoundRecord


class MarkdownLogger:
    """Writes each game's rounds and final score to a markdown file."""

    def __init__(self, base_dir: str = "games"):
        """Initialize the logger.

        Args:
            base_dir: Base directory for game logs.
        """
        self.base_dir = Path(base_dir)
        self.game_dir: Optional[Path] = None
        self.game_id: Optional[str] = None

    @property
    def game_file(self) -> Optional[Path]:
        """Path of the transcript for the current game."""
        if self.game_dir is None:
            return None
        return self.game_dir / "game_state.md"

    def start_game(self, difficulty: str, game_id: Optional[str] = None) -> Path:
        """Start logging a new game.

        Args:
            difficulty: Difficulty chosen for the game.
            game_id: Optional game identifier. If not provided, uses timestamp.

        Returns:
            Path to the game directory.
        """
        if game_id is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S_%f")
            game_id = f"game_{timestamp}"

        self.game_id = game_id
        self.game_dir = self.base_dir / game_id
        self.game_dir.mkdir(parents=True, exist_ok=True)

        with open(self.game_file, "w") as f:
            f.write(f"# Riddle Rush - {self.game_id}\n\n")
            f.write(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
            f.write(f"Difficulty: **{difficulty}**\n\n")
            f.write("---\n\n")
            f.write("| Round | Riddle | Answer | Given | Result | Hint | Points |\n")
            f.write("|-------|--------|--------|-------|--------|------|--------|\n")

        return self.game_dir

    def log_round(self, record: RoundRecord) -> None:
        """Append a finished round to the transcript."""
        if self.game_file is None:
            return
        given = record.answer.strip().replace("|", "\\|") or "-"
        riddle = record.riddle.text.replace("|", "\\|")
        with open(self.game_file, "a") as f:
            f.write(
                f"| {record.round_number} | {riddle} | {record.riddle.answer} | {given} "
                f"| {record.result.value} | {'yes' if record.used_hint else 'no'} | {record.points} |\n"
            )

    def log_error(self, round_number: int, message: str) -> None:
        """Record a provider failure."""
        if self.game_file is None:
            return
        with open(self.game_file, "a") as f:
            f.write(f"\n> Round {round_number}: provider error: {message}\n\n")

    def log_game_end(self, score: int, rounds: list[RoundRecord]) -> None:
        """Log the final score.

        Args:
            score: Final score.
            rounds: Every round played in this game.
        """
        if self.game_file is None:
            return
        correct = sum(1 for r in rounds if r.result == RoundResult.CORRECT)
        hints = sum(1 for r in rounds if r.used_hint)
        with open(self.game_file, "a") as f:
            f.write("\n---\n\n")
            f.write("# GAME OVER\n\n")
            f.write(f"## Final Score: {score}\n\n")
            f.write(f"- Correct answers: {correct}/{len(rounds)}\n")
            f.write(f"- Hints used: {hints}\n")
            f.write(f"\n\nEnded: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
