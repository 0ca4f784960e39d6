"""Round engine: the state machine behind a riddle game."""

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from ..communication.channels import EventChannel, EventKind, Subscriber
from .collaborators import AnswerChecker, HintProvider, RiddleProvider, check_answer
from .errors import InvalidTransition, ProviderError
from .intents import (
    Intent,
    NextRound,
    PlayAgain,
    RequestHint,
    Retry,
    SelectDifficulty,
    StartGame,
    SubmitAnswer,
)
from .stages import Difficulty, RoundResult, Stage
from .state import GameState, RoundRecord
from .timer import Countdown

if TYPE_CHECKING:
    from ..communication.markdown_logger import MarkdownLogger


@dataclass
class GameConfig:
    """Configuration for a game."""
    total_rounds: int = 10
    round_seconds: int = 15
    points_correct: int = 10
    points_with_hint: int = 5
    tick_seconds: float = 1.0


def accepts(*stages: Stage):
    """Mark an engine method as an intent accepted only in ``stages``.

    Intents that arrive in any other stage, or that raise InvalidTransition
    before mutating state, are recorded as ignored and return False.
    """
    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self: "RoundEngine", *args, **kwargs) -> bool:
            try:
                if self.state.stage not in stages:
                    raise InvalidTransition(method.__name__, self.state.stage)
                return await method(self, *args, **kwargs)
            except InvalidTransition as e:
                self.channel.add_event(EventKind.IGNORED, str(e), self.state.round_number)
                return False
        return wrapper
    return decorator


class RoundEngine:
    """Owns the game state and applies every transition to it.

    The engine never lets a provider failure or a misplaced intent escape:
    failures land in ``state.error`` and misplaced intents are ignored.
    Every async result is tagged with the generation it was requested in
    and dropped if that round is no longer live when it resolves.
    """

    def __init__(
        self,
        riddle_provider: RiddleProvider,
        hint_provider: HintProvider,
        answer_checker: AnswerChecker = check_answer,
        config: Optional[GameConfig] = None,
        logger: Optional["MarkdownLogger"] = None,
        channel: Optional[EventChannel] = None,
    ):
        """Initialize the engine.

        Args:
            riddle_provider: Supplies riddles for a difficulty.
            hint_provider: Supplies hints for a riddle text.
            answer_checker: Compares typed answers with the canonical one.
            config: Game configuration.
            logger: Optional markdown transcript writer.
            channel: Optional event channel shared with renderers.
        """
        self.config = config or GameConfig()
        self.riddle_provider = riddle_provider
        self.hint_provider = hint_provider
        self.answer_checker = answer_checker
        self.logger = logger
        self.channel = channel or EventChannel()

        self.state = GameState(seconds_remaining=self.config.round_seconds)
        self.countdown = Countdown(self._tick, interval=self.config.tick_seconds)
        self.generation = 0
        self._hint_pending = False

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback notified with a snapshot after every change."""
        return self.channel.subscribe(callback)

    def snapshot(self) -> GameState:
        """Get a copy of the current state."""
        return self.state.snapshot()

    # --- intents -----------------------------------------------------------

    async def dispatch(self, intent: Intent) -> bool:
        """Route a named intent to its transition.

        Returns:
            True if the intent was accepted, False if it was ignored.
        """
        if isinstance(intent, StartGame):
            return await self.start_game()
        elif isinstance(intent, SelectDifficulty):
            return await self.select_difficulty(intent.difficulty)
        elif isinstance(intent, SubmitAnswer):
            return await self.submit_answer(intent.text)
        elif isinstance(intent, RequestHint):
            return await self.request_hint()
        elif isinstance(intent, NextRound):
            return await self.next_round()
        elif isinstance(intent, PlayAgain):
            return await self.play_again()
        elif isinstance(intent, Retry):
            return await self.retry()
        raise TypeError(f"Unknown intent: {intent!r}")

    @accepts(Stage.START)
    async def start_game(self) -> bool:
        """Leave the title screen."""
        self._set_stage(Stage.DIFFICULTY_SELECT)
        self._notify()
        return True

    @accepts(Stage.DIFFICULTY_SELECT)
    async def select_difficulty(self, difficulty: Difficulty) -> bool:
        """Pick the difficulty and play round 1."""
        self.state.difficulty = difficulty
        self._reset_game()
        await self._enter_round()
        return True

    @accepts(Stage.ROUND)
    async def submit_answer(self, text: str) -> bool:
        """Check the typed answer and move to the result screen.

        Whitespace-only answers are checked like any other. If the round
        times out while the check is pending, the late result is dropped.
        """
        riddle = self.state.current_riddle
        if riddle is None:
            raise InvalidTransition("submit_answer", self.state.stage, "no riddle to answer")

        generation = self.generation
        self.state.last_answer = text
        self._notify()

        try:
            result = await self.answer_checker(riddle.answer, text)
        except ProviderError as e:
            self._fail(generation, f"Answer check failed: {e}")
            return False

        if not self._is_live(generation):
            self.channel.add_event(EventKind.INFO, "Dropped late answer check", self.state.round_number)
            return False

        self.state.last_result = result
        self._enter_result()
        return True

    @accepts(Stage.ROUND)
    async def request_hint(self) -> bool:
        """Reveal a hint for the current riddle, at most once per round.

        The countdown keeps running while the hint is fetched.
        """
        riddle = self.state.current_riddle
        if riddle is None:
            raise InvalidTransition("request_hint", self.state.stage, "no riddle to hint")
        if self.state.hint is not None or self._hint_pending:
            raise InvalidTransition("request_hint", self.state.stage, "hint already requested this round")

        generation = self.generation
        self._hint_pending = True

        try:
            hint = await self.hint_provider.fetch_hint(riddle.text)
        except ProviderError as e:
            if self._is_live(generation):
                self._hint_pending = False
            self._fail(generation, f"Hint request failed: {e}")
            return False
        except Exception as e:
            if self._is_live(generation):
                self._hint_pending = False
            self._fail(generation, f"Hint request failed: {e!r}")
            raise

        if not self._is_live(generation):
            self.channel.add_event(EventKind.INFO, "Dropped late hint", self.state.round_number)
            return False

        self._hint_pending = False
        self.state.hint = hint
        self.state.used_hint = True
        self.state.error = None
        self.channel.add_event(EventKind.INFO, "Hint revealed", self.state.round_number)
        self._notify()
        return True

    @accepts(Stage.RESULT)
    async def next_round(self) -> bool:
        """Advance to the next round, or to the final screen after the last."""
        if self.state.round_number >= self.config.total_rounds:
            self._set_stage(Stage.FINAL)
            self.state.current_riddle = None
            if self.logger:
                self.logger.log_game_end(self.state.score, self.state.history)
            self._notify()
            return True

        self.state.round_number += 1
        await self._enter_round()
        return True

    @accepts(Stage.FINAL)
    async def play_again(self) -> bool:
        """Start a new game with the same difficulty."""
        self._reset_game()
        await self._enter_round()
        return True

    @accepts(Stage.ROUND)
    async def retry(self) -> bool:
        """Request a riddle again after a failed fetch."""
        if self.state.current_riddle is not None or self.state.loading:
            raise InvalidTransition("retry", self.state.stage, "riddle already loaded or loading")
        self.generation += 1
        await self._load_riddle(self.generation)
        return True

    def close(self) -> None:
        """Stop the countdown and drop every in-flight provider result."""
        self.generation += 1
        self._hint_pending = False
        self.countdown.stop()

    # --- transitions -------------------------------------------------------

    def _reset_game(self) -> None:
        self.state.round_number = 1
        self.state.score = 0
        self.state.history = []
        if self.logger:
            self.logger.start_game(str(self.state.difficulty))

    async def _enter_round(self) -> None:
        self.generation += 1
        self._hint_pending = False
        self.state.clear_round(self.config.round_seconds)
        self._set_stage(Stage.ROUND)
        await self._load_riddle(self.generation)

    async def _load_riddle(self, generation: int) -> None:
        self.state.loading = True
        self.state.error = None
        self._notify()

        try:
            riddle = await self.riddle_provider.fetch_riddle(self.state.difficulty)
        except ProviderError as e:
            self._fail(generation, f"Riddle request failed: {e}")
            return
        except Exception as e:
            # Unexpected failures still propagate, but never leave the round loading.
            self._fail(generation, f"Riddle request failed: {e!r}")
            raise

        if not self._is_live(generation):
            self.channel.add_event(EventKind.INFO, "Dropped stale riddle", self.state.round_number)
            return

        self.state.current_riddle = riddle
        self.state.loading = False
        self.state.hint = None
        self.state.used_hint = False
        self.state.seconds_remaining = self.config.round_seconds
        self.state.last_answer = ""
        self.state.last_result = RoundResult.INCORRECT
        self.channel.add_event(EventKind.INFO, "Riddle loaded", self.state.round_number)
        self.countdown.start()
        self._notify()

    def _tick(self) -> None:
        if self.state.stage != Stage.ROUND or self.state.current_riddle is None:
            self.countdown.stop()
            return

        self.state.seconds_remaining = max(0, self.state.seconds_remaining - 1)
        if self.state.seconds_remaining == 0:
            self.state.last_result = RoundResult.TIMEOUT
            self._enter_result()
            return
        self._notify()

    def _enter_result(self) -> None:
        # Only reachable from a live round, so each round is scored once.
        self._set_stage(Stage.RESULT)

        points = 0
        if self.state.last_result == RoundResult.CORRECT:
            points = self.config.points_with_hint if self.state.used_hint else self.config.points_correct
            self.state.score += points

        record = RoundRecord(
            round_number=self.state.round_number,
            riddle=self.state.current_riddle,
            answer=self.state.last_answer,
            result=self.state.last_result,
            used_hint=self.state.used_hint,
            points=points,
        )
        self.state.history.append(record)
        if self.logger:
            self.logger.log_round(record)
        self._notify()

    def _set_stage(self, stage: Stage) -> None:
        if self.state.stage == Stage.ROUND and stage != Stage.ROUND:
            self.countdown.stop()
        self.state.stage = stage
        self.channel.add_event(EventKind.STAGE, stage.value, self.state.round_number)

    def _fail(self, generation: int, message: str) -> None:
        if not self._is_live(generation):
            return
        self.state.loading = False
        self.state.error = message
        self.channel.add_event(EventKind.ERROR, message, self.state.round_number)
        if self.logger:
            self.logger.log_error(self.state.round_number, message)
        self._notify()

    def _is_live(self, generation: int) -> bool:
        return generation == self.generation and self.state.stage == Stage.ROUND

    def _notify(self) -> None:
        self.channel.publish(self.state)
