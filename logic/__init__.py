"""
Logic module for TicTacToe.
Handles game state, rules, and AI opponent.
"""

__version__ = "1.0.0"

from .config import GameConfig
from .exceptions import GameError, InvalidMove, NoMoveAvailable, InvalidPlayerName, DifficultyLocked
from .game_state import GameState, GameStatus, Symbol, Move, HUMAN_SYMBOL, AI_SYMBOL
from .move_validator import MoveValidator
from .win_checker import WinChecker, winner, is_full
from .game_engine import GameEngine, MoveResult, Continue, Win, Draw
from .ai_player import AIPlayer, Difficulty
