"""
Game configuration for TicTacToe.
Board geometry, players, timing and validation rules.
"""


class GameConfig:
    """
    Configuration class for game settings.
    Shells may override the timing values (e.g. from command line flags).
    """

    # ==================== BOARD SETTINGS ====================
    GRID_SIZE = 3
    BOARD_SIZE = GRID_SIZE * GRID_SIZE  # 9 cells, index = row * 3 + col

    # All possible winning lines (cell indices)
    WINNING_LINES = (
        # Rows
        (0, 1, 2), (3, 4, 5), (6, 7, 8),
        # Columns
        (0, 3, 6), (1, 4, 7), (2, 5, 8),
        # Diagonals
        (0, 4, 8), (2, 4, 6),
    )

    # ==================== AI SETTINGS ====================
    # Delay before the AI move is computed and applied (milliseconds)
    AI_DELAY_MS = 500

    # Terminal score base for minimax: win = 10 - depth, loss = depth - 10
    WIN_SCORE = 10

    # ==================== PLAYER NAME VALIDATION ====================
    MIN_NAME_LENGTH = 2
    MAX_NAME_LENGTH = 20
    FORBIDDEN_NAME_CHARS = '<>"\'&'

    # ==================== HIGH SCORES ====================
    MAX_HIGH_SCORES = 5
