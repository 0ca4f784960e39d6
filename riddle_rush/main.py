"""Main entry point for Riddle Rush."""

import asyncio
import sys
import threading
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .communication.markdown_logger import MarkdownLogger
from .config import AppConfig, load_config
from .engine.collaborators import DelayedChecker, check_answer
from .engine.errors import ConfigError
from .engine.game import RoundEngine
from .engine.intents import (
    Intent,
    NextRound,
    PlayAgain,
    RequestHint,
    Retry,
    SelectDifficulty,
    StartGame,
    SubmitAnswer,
)
from .engine.stages import Difficulty, RoundResult, Stage
from .engine.state import GameState
from .llm.openrouter import OpenRouterClient
from .riddles.llm_provider import LLMRiddleProvider
from .riddles.providers import BuiltInHintProvider, BuiltInRiddleProvider


DEFAULT_CONFIG = "config/game.yaml"
QUIT = "quit"
HINT_COMMANDS = ("?", "/hint")
RETRY_COMMANDS = ("/retry",)
QUIT_COMMANDS = ("/quit", "/exit")
ANNOUNCED_SECONDS = (10, 5, 3, 2, 1)

console = Console()


def build_engine(config: AppConfig) -> RoundEngine:
    """Wire providers, checker, and transcript logger into an engine."""
    settings = config.provider
    if settings.kind == "openrouter":
        llm = LLMRiddleProvider(OpenRouterClient(api_key=settings.api_key), model=settings.model)
        riddle_provider, hint_provider = llm, llm
    else:
        riddle_provider = BuiltInRiddleProvider(delay=settings.delay_seconds)
        hint_provider = BuiltInHintProvider(delay=settings.delay_seconds * 0.8)

    checker = DelayedChecker(settings.check_delay_seconds) if settings.check_delay_seconds > 0 else check_answer
    logger = MarkdownLogger(base_dir=config.log_dir) if config.log_dir else None

    return RoundEngine(
        riddle_provider=riddle_provider,
        hint_provider=hint_provider,
        answer_checker=checker,
        config=config.game,
        logger=logger,
    )


def intent_for(stage: Stage, line: str) -> Optional[Union[Intent, str]]:
    """Translate a line of input into an intent for the given stage.

    Returns:
        An intent, ``QUIT``, or None if the line means nothing here.
    """
    text = line.strip()
    command = text.lower()

    if command in QUIT_COMMANDS:
        return QUIT

    if stage == Stage.START:
        return QUIT if command == "q" else StartGame()

    elif stage == Stage.DIFFICULTY_SELECT:
        try:
            return SelectDifficulty(Difficulty.parse(text))
        except ValueError:
            return None

    elif stage == Stage.ROUND:
        if command in HINT_COMMANDS:
            return RequestHint()
        if command in RETRY_COMMANDS:
            return Retry()
        return SubmitAnswer(line)

    elif stage == Stage.RESULT:
        return NextRound()

    elif stage == Stage.FINAL:
        if command in ("q", "n", "no"):
            return QUIT
        return PlayAgain()

    return None


class TerminalView:
    """Prints the parts of each state change a player needs to see."""

    def __init__(self, total_rounds: int):
        self.total_rounds = total_rounds
        self._last: Optional[GameState] = None

    def __call__(self, state: GameState) -> None:
        prev, self._last = self._last, state

        if prev is None or prev.stage != state.stage:
            self.render_stage(state)
            return

        if state.stage != Stage.ROUND:
            return

        if state.current_riddle is not None and prev.current_riddle is None:
            display_riddle(state, self.total_rounds)
        if state.hint and state.hint != prev.hint:
            console.print(f"[italic magenta]Hint: {state.hint}[/italic magenta] [dim](worth 5 points now)[/dim]")
        if state.error and state.error != prev.error:
            console.print(f"[red]{state.error}[/red]")
            if state.current_riddle is None:
                console.print("[dim]Type /retry to ask for another riddle.[/dim]")
        if state.seconds_remaining != prev.seconds_remaining and state.seconds_remaining in ANNOUNCED_SECONDS:
            console.print(f"[yellow]Time: {state.seconds_remaining}s[/yellow]")

    def render_stage(self, state: GameState) -> None:
        if state.stage == Stage.START:
            display_welcome()
        elif state.stage == Stage.DIFFICULTY_SELECT:
            display_difficulties()
        elif state.stage == Stage.ROUND:
            if state.current_riddle is None:
                console.print(f"[dim]Round {state.round_number} - fetching a riddle...[/dim]")
            else:
                display_riddle(state, self.total_rounds)
        elif state.stage == Stage.RESULT:
            display_result(state)
        elif state.stage == Stage.FINAL:
            display_final(state)


def display_welcome():
    """Display welcome message."""
    console.print(Panel.fit(
        "[bold cyan]AI RIDDLE RUSH[/bold cyan]\n"
        "[dim]Ten riddles. Fifteen seconds each.[/dim]",
        border_style="cyan",
    ))
    console.print("[dim]How to play: type your answer and press Enter. "
                  "Type ? for a hint (a correct answer is then worth 5 instead of 10).[/dim]")
    console.print("[yellow]Press Enter to start the game (q to quit)...[/yellow]")


def display_difficulties():
    """Display the difficulty menu."""
    console.print()
    console.print("[bold]Choose Difficulty[/bold]")
    for i, difficulty in enumerate(Difficulty, start=1):
        console.print(f"  [cyan]{i}[/cyan]. {difficulty}")


def display_riddle(state: GameState, total_rounds: int):
    """Display the riddle for the current round."""
    console.print()
    console.print(Panel(
        f"[bold]{state.current_riddle.text}[/bold]",
        title=f"Round {state.round_number} / {total_rounds}",
        subtitle=f"Time: {state.seconds_remaining}s",
        border_style="blue",
    ))


def display_result(state: GameState):
    """Display the outcome of the round."""
    color = "green" if state.last_result == RoundResult.CORRECT else "red"
    console.print()
    console.print(f"[bold {color}]{state.last_result.headline}[/bold {color}]")
    if state.current_riddle is not None:
        console.print(f"Answer: [bold]{state.current_riddle.answer}[/bold]")
    console.print(f"Score: {state.score}")
    console.print("[yellow]Press Enter for the next round...[/yellow]")


def display_final(state: GameState):
    """Display the final score and the round summary."""
    console.print()
    console.print(Panel(
        f"[bold]{state.score} points[/bold]",
        title="Final Score",
        border_style="green",
    ))

    table = Table(title="Rounds", show_header=True, header_style="bold magenta")
    table.add_column("Round", style="cyan")
    table.add_column("Answer", style="green")
    table.add_column("You said")
    table.add_column("Result")
    table.add_column("Points", justify="right")

    for record in state.history:
        color = "green" if record.result == RoundResult.CORRECT else "red"
        hint = " (hint)" if record.used_hint else ""
        table.add_row(
            str(record.round_number),
            record.riddle.answer,
            record.answer.strip() or "[dim]-[/dim]",
            f"[{color}]{record.result.value}{hint}[/{color}]",
            str(record.points),
        )

    console.print(table)
    console.print("[yellow]Play again? Press Enter (q to quit)...[/yellow]")


def start_reader(loop: asyncio.AbstractEventLoop, lines: asyncio.Queue) -> threading.Thread:
    """Read stdin on a daemon thread and feed lines into ``lines``.

    End of input is signalled with None.
    """
    def _worker():
        for line in sys.stdin:
            loop.call_soon_threadsafe(lines.put_nowait, line.rstrip("\n"))
        loop.call_soon_threadsafe(lines.put_nowait, None)

    thread = threading.Thread(target=_worker, name="riddle-rush-stdin", daemon=True)
    thread.start()
    return thread


def report_failure(task: asyncio.Task) -> None:
    """Print the error of a background dispatch that crashed."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        console.print(f"[red]Unexpected error: {error!r}[/red]")


async def play(engine: RoundEngine) -> None:
    """Run the interactive loop until the player quits or input ends."""
    view = TerminalView(engine.config.total_rounds)
    engine.subscribe(view)
    view(engine.snapshot())

    lines: asyncio.Queue = asyncio.Queue()
    start_reader(asyncio.get_running_loop(), lines)
    pending: set[asyncio.Task] = set()

    try:
        while True:
            line = await lines.get()
            if line is None:
                break

            intent = intent_for(engine.state.stage, line)
            if intent == QUIT:
                break
            if intent is None:
                console.print("[dim]Not understood here.[/dim]")
                continue

            # Dispatch in the background so the countdown and input stay live
            # while a provider call is pending.
            task = asyncio.create_task(engine.dispatch(intent))
            pending.add(task)
            task.add_done_callback(pending.discard)
            task.add_done_callback(report_failure)
    finally:
        engine.close()
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)


async def main():
    """Main entry point."""
    if len(sys.argv) > 1:
        config_path = sys.argv[1]
    else:
        config_path = DEFAULT_CONFIG if Path(DEFAULT_CONFIG).exists() else None

    if config_path:
        console.print(f"[dim]Loading config from: {config_path}[/dim]")
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        engine = build_engine(config)
    except ValueError as e:
        # Missing OPENROUTER_API_KEY
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    try:
        await play(engine)
    except KeyboardInterrupt:
        console.print("\n[yellow]Game interrupted by user.[/yellow]")

    if engine.logger and engine.logger.game_dir:
        console.print(f"[dim]Game log saved to: {engine.logger.game_dir}[/dim]")


def run():
    """Entry point for the CLI."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
