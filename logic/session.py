"""
Game session for TicTacToe.

Ties together the engine, the AI, score keeping and the deferred AI move.
Shells (Tkinter UI, console) only talk to GameSession.

Game flow:
1. Player sets a name (and optionally a difficulty) while WAITING
2. start() begins a game, the human (X) moves first
3. After each human move the AI (O) move is scheduled AI_DELAY_MS later
4. When the game ends the score keeper credits the result
5. play_again() keeps name, difficulty and session score;
   reset() goes back to setup and clears the session score
"""

import logging
from typing import Any, Callable, List, Optional

from storage.score_keeper import ScoreKeeper
from storage.store import MemoryStore
from .ai_player import AIPlayer, Difficulty
from .config import GameConfig
from .exceptions import DifficultyLocked, InvalidMove, InvalidPlayerName, NoMoveAvailable
from .game_engine import GameEngine, MoveResult
from .game_state import GameStatus, HUMAN_SYMBOL, AI_SYMBOL
from .scheduler import ManualScheduler, Scheduler

logger = logging.getLogger(__name__)

ChangeListener = Callable[["GameSession"], None]


def validate_player_name(name: str) -> str:
    """
    Check a player name and return it stripped.

    Raises:
        InvalidPlayerName: with a message fit for the user.
    """
    name = (name or "").strip()
    if not name:
        raise InvalidPlayerName("Please enter your name")
    if len(name) < GameConfig.MIN_NAME_LENGTH:
        raise InvalidPlayerName(f"Name must be at least {GameConfig.MIN_NAME_LENGTH} characters")
    if len(name) > GameConfig.MAX_NAME_LENGTH:
        raise InvalidPlayerName(f"Name must be at most {GameConfig.MAX_NAME_LENGTH} characters")
    if any(char in GameConfig.FORBIDDEN_NAME_CHARS for char in name):
        raise InvalidPlayerName("Name contains invalid characters")
    return name


class GameSession:
    """
    Controller for one player's games against the AI.

    At most one AI move is pending at a time. Its scheduler handle is kept
    so it can be cancelled, and every callback carries the generation it
    was scheduled in: starting or resetting a game bumps the generation,
    so a callback that slipped through cancellation does nothing.
    """

    def __init__(
        self,
        scores: Optional[ScoreKeeper] = None,
        scheduler: Optional[Scheduler] = None,
        ai: Optional[AIPlayer] = None,
        ai_delay_ms: int = GameConfig.AI_DELAY_MS,
    ):
        self.engine = GameEngine()
        self.scores = scores or ScoreKeeper(MemoryStore())
        self.scheduler = scheduler or ManualScheduler()
        self.ai = ai or AIPlayer(AI_SYMBOL)
        self.ai_delay_ms = ai_delay_ms

        self.last_result: Optional[MoveResult] = None
        self.last_error: Optional[str] = None

        self._generation = 0
        self._pending_ai: Optional[Any] = None
        self._listeners: List[ChangeListener] = []

        self.engine.subscribe(self.scores.on_game_over)

    # ------------------------------------------------------------------ #
    # Read-only views for shells
    # ------------------------------------------------------------------ #

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    @property
    def board(self):
        return self.engine.board

    @property
    def player_name(self) -> str:
        return self.scores.player_name

    @property
    def difficulty(self) -> Difficulty:
        return self.scores.difficulty

    @property
    def ai_pending(self) -> bool:
        return self._pending_ai is not None

    @property
    def is_human_turn(self) -> bool:
        return (self.engine.status == GameStatus.PLAYING
                and self.engine.current_player == HUMAN_SYMBOL)

    def status_message(self) -> str:
        """One-line status for the shell."""
        state = self.engine.state
        if state.status == GameStatus.WAITING:
            d = self.difficulty
            if not self.player_name:
                return f"Enter your name to start playing (AI: {d.display_name} - {d.description})"
            return f"Welcome {self.player_name}! Start a game (AI: {d.display_name})"
        if state.status == GameStatus.ENDED:
            if state.winner == HUMAN_SYMBOL:
                return f"{self.player_name} wins!"
            if state.winner == AI_SYMBOL:
                return "AI wins!"
            return "It's a tie!"
        if self.is_human_turn:
            return f"{self.player_name}'s turn ({HUMAN_SYMBOL.value})"
        return "AI is thinking..."

    # ------------------------------------------------------------------ #
    # Setup (only while WAITING)
    # ------------------------------------------------------------------ #

    def set_player_name(self, name: str) -> str:
        if self.engine.status == GameStatus.PLAYING:
            raise InvalidPlayerName("Cannot change the player during a game")
        name = validate_player_name(name)
        self.scores.save_player_name(name)
        logger.info("Player name saved: %s", name)
        self._changed()
        return name

    def set_difficulty(self, difficulty: Difficulty):
        if self.engine.status != GameStatus.WAITING:
            raise DifficultyLocked("Difficulty can only be changed before a game starts")
        self.scores.save_difficulty(difficulty)
        logger.info("Difficulty changed to: %s", difficulty.name)
        self._changed()

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def start(self):
        """Start a new game for the current player."""
        if not self.player_name:
            raise InvalidPlayerName("Please enter your name first")
        self._cancel_ai_move()
        self.engine.new_game(HUMAN_SYMBOL)
        self.last_result = None
        self.last_error = None
        logger.info("New game started (%s vs AI %s)", self.player_name, self.difficulty.display_name)
        self._changed()

    def play_again(self):
        """Same player, same difficulty, session score kept."""
        self.start()

    def _return_to_waiting(self):
        self._cancel_ai_move()
        self.engine.reset()
        self.last_result = None

    def back_to_setup(self):
        """Return to WAITING so name/difficulty can change; keep session score."""
        self._return_to_waiting()
        self._changed()

    def reset(self):
        """Return to WAITING and clear the session score."""
        self._return_to_waiting()
        self.scores.reset_session()
        logger.info("Game reset")
        self._changed()

    # ------------------------------------------------------------------ #
    # Moves
    # ------------------------------------------------------------------ #

    def handle_cell(self, index: int) -> Optional[MoveResult]:
        """
        Human clicked a cell.

        Invalid moves are ignored (None is returned and nothing changes).
        """
        try:
            result = self.engine.apply_move(index, HUMAN_SYMBOL)
        except InvalidMove as e:
            logger.debug("Ignoring move %s: %s", index, e)
            return None

        self.last_result = result
        if self.engine.status == GameStatus.PLAYING:
            self._schedule_ai_move()
        self._changed()
        return result

    def _schedule_ai_move(self):
        if self.engine.status != GameStatus.PLAYING or self.engine.current_player != AI_SYMBOL:
            return
        self._cancel_ai_move()
        generation = self._generation
        self._pending_ai = self.scheduler.call_later(
            self.ai_delay_ms, lambda: self._run_ai_move(generation)
        )

    def _cancel_ai_move(self):
        self._generation += 1
        if self._pending_ai is not None:
            self.scheduler.cancel(self._pending_ai)
            self._pending_ai = None

    def _run_ai_move(self, generation: int):
        if generation != self._generation:
            logger.debug("Dropping stale AI move from generation %d", generation)
            return
        self._pending_ai = None

        if self.engine.status != GameStatus.PLAYING or self.engine.current_player != AI_SYMBOL:
            return

        try:
            index = self.ai.select_move(self.engine.board, self.difficulty)
            self.last_result = self.engine.apply_move(index, AI_SYMBOL)
        except NoMoveAvailable as e:
            # Caller ordering bug: the terminal check should have caught this
            logger.error("AI could not move: %s", e)
            self.last_error = str(e)
        except InvalidMove as e:
            logger.error("AI produced an invalid move: %s", e)
            self.last_error = str(e)
        self._changed()

    # ------------------------------------------------------------------ #
    # Change notifications
    # ------------------------------------------------------------------ #

    def add_listener(self, listener: ChangeListener):
        """Call `listener(session)` after every state change."""
        self._listeners.append(listener)

    def _changed(self):
        for listener in list(self._listeners):
            listener(self)
