"""
AI player for TicTacToe.
Uses the Minimax algorithm to choose the best move, with a
difficulty-dependent chance of playing a random move instead.
"""

import logging
import random
from enum import Enum
from typing import Optional

from .config import GameConfig
from .exceptions import NoMoveAvailable
from .game_state import Board, Symbol, AI_SYMBOL, empty_cells
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """AI difficulty levels."""
    BEGINNER = ("Beginner", 0.7, "AI makes many mistakes")
    AMATEUR = ("Amateur", 0.3, "AI sometimes makes mistakes")
    PRO = ("Pro", 0.0, "AI never makes mistakes")

    def __init__(self, display_name: str, random_move_chance: float, description: str):
        self.display_name = display_name
        self.random_move_chance = random_move_chance
        self.description = description

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Look up a level by its name, case-insensitive ("pro", "PRO")."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {name!r}") from None


DEFAULT_DIFFICULTY = Difficulty.AMATEUR


class AIPlayer:
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    On PRO it always plays optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    Lower levels replace the minimax move by a random legal move
    with the level's probability.
    """

    def __init__(self, symbol: Symbol = AI_SYMBOL, rng: Optional[random.Random] = None):
        """
        Initialize the AI player.

        Args:
            symbol: Which symbol the AI plays (default: O)
            rng: Random source, injectable for reproducible games
        """
        self.symbol = symbol
        self.opponent = symbol.opposite()
        self.rng = rng or random.Random()
        self.win_checker = WinChecker()

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

    def select_move(self, board: Board, difficulty: Difficulty = Difficulty.PRO) -> int:
        """
        Choose a move for the given board.

        Args:
            board: Current board. Cells are changed during the search and
                restored before returning.
            difficulty: Level deciding the chance of a random move.

        Returns:
            Index of the chosen cell.

        Raises:
            NoMoveAvailable: if the board is full.
        """
        valid_moves = empty_cells(board)
        if not valid_moves:
            raise NoMoveAvailable("AI asked to move on a full board")

        if self.rng.random() < difficulty.random_move_chance:
            move = self.rng.choice(valid_moves)
            logger.debug("AI (%s) plays random move %d", difficulty.display_name, move)
            return move

        return self.get_best_move(board)

    def get_best_move(self, board: Board) -> int:
        """
        Get the minimax move for the current position.

        Ties keep the first cell found in board order.
        """
        valid_moves = empty_cells(board)
        if not valid_moves:
            raise NoMoveAvailable("AI asked to move on a full board")

        self.positions_evaluated = 0
        best_score = float('-inf')
        best_move = valid_moves[0]

        for index in valid_moves:
            # Try this move
            board[index] = self.symbol
            try:
                score = self.minimax(board, depth=0, is_maximizing=False)
            finally:
                board[index] = Symbol.EMPTY

            if score > best_score:
                best_score = score
                best_move = index

        logger.debug(
            "AI evaluated %d positions. Best move: %d (score: %s)",
            self.positions_evaluated, best_move, best_score
        )
        return best_move

    def minimax(
        self,
        board: Board,
        depth: int,
        is_maximizing: bool,
        alpha: float = float('-inf'),
        beta: float = float('inf')
    ) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Scores are from the AI's point of view: a win scores 10 - depth and
        a loss depth - 10, so faster wins and slower losses are preferred.
        Called with the default full window the returned score is exact.

        Args:
            board: Position to evaluate (restored on return).
            depth: Plies played since the root move.
            is_maximizing: True if it's the AI's turn.
            alpha: Alpha value for pruning.
            beta: Beta value for pruning.

        Returns:
            The score of the position.
        """
        self.positions_evaluated += 1

        winner = self.win_checker.check_winner(board)
        if winner == self.symbol:
            return GameConfig.WIN_SCORE - depth
        if winner == self.opponent:
            return depth - GameConfig.WIN_SCORE
        if self.win_checker.is_full(board):
            return 0

        if is_maximizing:
            max_score = float('-inf')
            for index in empty_cells(board):
                board[index] = self.symbol
                score = self.minimax(board, depth + 1, False, alpha, beta)
                board[index] = Symbol.EMPTY
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Prune
            return max_score
        else:
            min_score = float('inf')
            for index in empty_cells(board):
                board[index] = self.opponent
                score = self.minimax(board, depth + 1, True, alpha, beta)
                board[index] = Symbol.EMPTY
                min_score = min(min_score, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break  # Prune
            return min_score
