"""
Game state management for TicTacToe.
Tracks the board, current player, game status and move history.
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass, field

from .config import GameConfig


class Symbol(Enum):
    """Contents of a board cell."""
    EMPTY = ""
    X = "X"
    O = "O"

    def opposite(self) -> "Symbol":
        """Get the opposite player symbol."""
        if self == Symbol.X:
            return Symbol.O
        if self == Symbol.O:
            return Symbol.X
        raise ValueError("EMPTY has no opposite")


# Human always plays X and moves first, the AI plays O
HUMAN_SYMBOL = Symbol.X
AI_SYMBOL = Symbol.O


class GameStatus(Enum):
    """Lifecycle of one game."""
    WAITING = "waiting"   # No game running (setup)
    PLAYING = "playing"   # Moves are accepted
    ENDED = "ended"       # Win or draw reached


Board = List[Symbol]


def empty_board() -> Board:
    """Create a board with every cell empty."""
    return [Symbol.EMPTY] * GameConfig.BOARD_SIZE


def board_from_string(text: str) -> Board:
    """
    Build a board from 9 characters, e.g. "XX__O___O".
    Any character other than X/O (case-insensitive) is an empty cell;
    whitespace and '|' separators are ignored.
    """
    chars = [c for c in text.upper() if not c.isspace() and c != "|"]
    if len(chars) != GameConfig.BOARD_SIZE:
        raise ValueError(f"Expected {GameConfig.BOARD_SIZE} cells, got {len(chars)}")
    lookup = {"X": Symbol.X, "O": Symbol.O}
    return [lookup.get(c, Symbol.EMPTY) for c in chars]


def empty_cells(board: Board) -> List[int]:
    """
    Get all empty cells on the board.

    Args:
        board: The board to inspect.

    Returns:
        List of cell indices in board order.
    """
    return [index for index, cell in enumerate(board) if cell == Symbol.EMPTY]


@dataclass
class Move:
    """
    A move in the game.
    """
    symbol: Symbol          # Who made the move
    index: int              # Cell (0-8)
    move_number: int        # Which move this is (0-8)


@dataclass
class GameState:
    """
    The complete state of one TicTacToe game.

    Tracks:
    - The 9-cell board
    - Current player
    - Game status (waiting, playing, ended)
    - Move history
    - Game result
    """

    board: Board = field(default_factory=empty_board)

    # Current player's turn
    current_player: Symbol = HUMAN_SYMBOL

    status: GameStatus = GameStatus.WAITING

    # Move history
    moves: List[Move] = field(default_factory=list)

    # Game result
    winner: Optional[Symbol] = None
    winning_line: Optional[List[int]] = None
    is_draw: bool = False

    @property
    def is_game_over(self) -> bool:
        return self.status == GameStatus.ENDED

    def place(self, index: int, symbol: Symbol) -> Move:
        """
        Put a symbol on the board, record the move and pass the turn.
        Rules are checked by MoveValidator before this is called.
        """
        self.board[index] = symbol
        move = Move(symbol=symbol, index=index, move_number=len(self.moves))
        self.moves.append(move)
        self.current_player = symbol.opposite()
        return move

    def copy(self) -> "GameState":
        """Create a deep copy of the game state."""
        return GameState(
            board=list(self.board),
            current_player=self.current_player,
            status=self.status,
            moves=list(self.moves),
            winner=self.winner,
            winning_line=list(self.winning_line) if self.winning_line else None,
            is_draw=self.is_draw,
        )

    def render(self) -> str:
        """Draw the board as text, empty cells show their number (1-9)."""
        size = GameConfig.GRID_SIZE
        rows = []
        for row in range(size):
            cells = []
            for col in range(size):
                index = row * size + col
                cell = self.board[index]
                cells.append(cell.value if cell != Symbol.EMPTY else str(index + 1))
            rows.append(" " + " | ".join(cells))
        return "\n---+---+---\n".join(rows)

    def print_board(self):
        """Print the board to console."""
        print()
        print(self.render())

        if self.is_game_over:
            if self.winner:
                print(f"\n{self.winner.value} WINS!")
            else:
                print("\nIt's a DRAW!")
        elif self.status == GameStatus.PLAYING:
            print(f"\nCurrent turn: {self.current_player.value}")
