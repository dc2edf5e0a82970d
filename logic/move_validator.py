"""
Move validator for TicTacToe.
Validates that moves follow the rules.
"""

from typing import Optional, List
from dataclasses import dataclass

from .config import GameConfig
from .game_state import GameState, GameStatus, Symbol, empty_cells


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. A game must be running (not waiting, not over)
    2. The index must be on the board (0-8)
    3. Can only place on empty cells
    4. Players must alternate: only the current player may move
    """

    def validate_move(
        self,
        game_state: GameState,
        index: int,
        symbol: Symbol
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Cell to place the symbol on (0-8).
            symbol: Symbol of the player making the move.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if game_state.status == GameStatus.WAITING:
            return ValidationResult(
                is_valid=False,
                error_message="Game has not started!"
            )

        if game_state.status == GameStatus.ENDED:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # bool is an int subclass, reject it explicitly
        if isinstance(index, bool) or not isinstance(index, int):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be an integer."
            )

        if not 0 <= index < GameConfig.BOARD_SIZE:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index}. Must be 0-{GameConfig.BOARD_SIZE - 1}."
            )

        if game_state.board[index] != Symbol.EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {game_state.board[index].value}"
            )

        if symbol != game_state.current_player:
            return ValidationResult(
                is_valid=False,
                error_message=f"It's not {symbol.value}'s turn!"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[int]:
        """
        Get all valid moves for the current player.

        Args:
            game_state: Current game state.

        Returns:
            List of valid cell indices.
        """
        if game_state.status != GameStatus.PLAYING:
            return []
        return empty_cells(game_state.board)
