"""
Win checker for TicTacToe.
Checks if a player has won or if the board is full.
"""

from typing import Optional, List, Sequence

from .config import GameConfig
from .game_state import Board, Symbol


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 equal symbols in a row
    (horizontally, vertically, or diagonally).

    All checks are pure functions of the board; nothing is cached,
    so the result is always recomputed from the cells.
    """

    WINNING_LINES = GameConfig.WINNING_LINES

    def check_winner(self, board: Board) -> Optional[Symbol]:
        """
        Check if there's a winner.

        Args:
            board: The 9-cell board.

        Returns:
            The winning Symbol of the first complete line, or None.
        """
        line = self.get_winning_line(board)
        if line is None:
            return None
        return board[line[0]]

    def get_winning_line(self, board: Board) -> Optional[List[int]]:
        """
        Get the winning line if there is one.

        Args:
            board: The 9-cell board.

        Returns:
            The winning line as a list of cell indices, or None.
        """
        for line in self.WINNING_LINES:
            if self._check_line(board, line):
                return list(line)
        return None

    def _check_line(self, board: Board, line: Sequence[int]) -> bool:
        a, b, c = line
        return board[a] != Symbol.EMPTY and board[a] == board[b] == board[c]

    def is_full(self, board: Board) -> bool:
        """True iff no empty cell remains."""
        return all(cell != Symbol.EMPTY for cell in board)

    def check_draw(self, board: Board) -> bool:
        """
        Check if the board is a draw.

        A won board is never a draw, even when it is also full.
        """
        if self.check_winner(board) is not None:
            return False
        return self.is_full(board)


_checker = WinChecker()


def winner(board: Board) -> Optional[Symbol]:
    """Module-level shortcut for WinChecker.check_winner."""
    return _checker.check_winner(board)


def is_full(board: Board) -> bool:
    """Module-level shortcut for WinChecker.is_full."""
    return _checker.is_full(board)
