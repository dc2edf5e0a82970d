"""
Storage module for TicTacToe.
Key-value stores, persisted records and score keeping.
"""

from .config import StorageConfig
from .store import KeyValueStore, MemoryStore, JsonFileStore, StorageUnavailable
from .records import ScoreRecord, GameStats
from .score_keeper import ScoreKeeper, Outcome, SessionScore
