"""
Storage configuration for TicTacToe.
Key names and the default location of the JSON store.
"""

from pathlib import Path


class StorageConfig:
    """
    Configuration class for persistence settings.
    Key names match the ones the browser version kept in localStorage,
    so exported data can be loaded as is.
    """

    # ==================== KEYS ====================
    HIGH_SCORES_KEY = "ticTacToeHighScores"
    PLAYER_NAME_KEY = "lastPlayerName"
    GAME_STATS_KEY = "gameStatistics"
    DIFFICULTY_KEY = "aiDifficulty"

    # ==================== FILE STORE ====================
    DEFAULT_DATA_FILE = Path.home() / ".tictactoe" / "storage.json"
