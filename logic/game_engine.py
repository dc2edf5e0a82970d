"""
Game engine for TicTacToe.

Pure state machine over the 3x3 board: applies moves, detects wins and
draws and switches turns. It does no I/O; shells call into it and listen
for terminal results.

    WAITING --new_game()--> PLAYING --win/draw--> ENDED
       ^                                            |
       +------------------reset()-------------------+
    (ENDED --new_game()--> PLAYING is allowed directly)
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .exceptions import InvalidMove
from .game_state import Board, GameState, GameStatus, Symbol, HUMAN_SYMBOL
from .move_validator import MoveValidator
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class MoveResult:
    """Outcome of an accepted move."""

    is_terminal = False


@dataclass(frozen=True)
class Continue(MoveResult):
    """The game goes on, `next_turn` moves next."""
    next_turn: Symbol


@dataclass(frozen=True)
class Win(MoveResult):
    """`symbol` completed `line`."""
    symbol: Symbol
    line: tuple = ()

    is_terminal = True


@dataclass(frozen=True)
class Draw(MoveResult):
    """The board is full and nobody has a line."""

    is_terminal = True


GameOverListener = Callable[[MoveResult], None]


class GameEngine:
    """
    Owns the board, the turn and the status of one game session.

    Moves that break the rules raise InvalidMove and change nothing.
    """

    def __init__(self):
        self.state = GameState()
        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self._listeners: List[GameOverListener] = []

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def new_game(self, first_player: Symbol = HUMAN_SYMBOL) -> GameState:
        """
        Start a fresh game: empty board, X to move, status PLAYING.

        Args:
            first_player: Symbol that moves first.

        Returns:
            The new game state.
        """
        self.state = GameState(current_player=first_player, status=GameStatus.PLAYING)
        logger.debug("New game started, %s moves first", first_player.value)
        return self.state

    def reset(self) -> GameState:
        """Go back to WAITING with an empty board."""
        self.state = GameState()
        return self.state

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current_player(self) -> Symbol:
        return self.state.current_player

    # ------------------------------------------------------------------ #
    # Moves
    # ------------------------------------------------------------------ #

    def apply_move(self, index: int, symbol: Symbol) -> MoveResult:
        """
        Apply a move for `symbol` at `index`.

        Args:
            index: Cell index (0-8).
            symbol: Player making the move; must be the current turn.

        Returns:
            Continue(next_turn), Win(symbol, line) or Draw().

        Raises:
            InvalidMove: if the game is not PLAYING, the index is off the
                board, the cell is occupied or it is not `symbol`'s turn.
        """
        validation = self.validator.validate_move(self.state, index, symbol)
        if not validation.is_valid:
            raise InvalidMove(validation.error_message, index)

        self.state.place(index, symbol)
        result = self._evaluate()

        if result.is_terminal:
            self.state.status = GameStatus.ENDED
            self._notify(result)

        return result

    def _evaluate(self) -> MoveResult:
        """Terminal check: win before full, so a full won board is a win."""
        board = self.state.board

        line = self.win_checker.get_winning_line(board)
        if line is not None:
            self.state.winner = board[line[0]]
            self.state.winning_line = line
            return Win(self.state.winner, tuple(line))

        if self.win_checker.is_full(board):
            self.state.is_draw = True
            return Draw()

        return Continue(self.state.current_player)

    # ------------------------------------------------------------------ #
    # Predicates
    # ------------------------------------------------------------------ #

    def winner(self, board: Optional[Board] = None) -> Optional[Symbol]:
        return self.win_checker.check_winner(self.state.board if board is None else board)

    def is_full(self, board: Optional[Board] = None) -> bool:
        return self.win_checker.is_full(self.state.board if board is None else board)

    def winning_line(self, board: Optional[Board] = None) -> Optional[List[int]]:
        return self.win_checker.get_winning_line(self.state.board if board is None else board)

    # ------------------------------------------------------------------ #
    # Notifications
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: GameOverListener):
        """Call `listener(result)` every time a game reaches a terminal state."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: GameOverListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, result: MoveResult):
        logger.info("Game over: %s", result)
        for listener in list(self._listeners):
            listener(result)
