"""
Score keeping for TicTacToe.

Tracks the current session score, the top-5 high-score table and the
cumulative statistics, and persists them in a KeyValueStore. Storage
problems never stop a game: they are logged and the in-memory values
keep working for the rest of the session.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from logic.ai_player import Difficulty, DEFAULT_DIFFICULTY
from logic.config import GameConfig
from logic.game_engine import MoveResult, Win
from logic.game_state import HUMAN_SYMBOL
from .config import StorageConfig
from .records import (
    GameStats, ScoreRecord, utc_now,
    dump_high_scores, load_high_scores, dump_stats, load_stats,
)
from .store import KeyValueStore, StorageUnavailable

logger = logging.getLogger(__name__)

_Text = TypeAdapter(str)


class Outcome(Enum):
    """Result of a game from the human player's side."""
    WIN = "wins"
    LOSS = "losses"
    TIE = "ties"


@dataclass
class SessionScore:
    """Wins in the current session (reset with the session)."""
    player: int = 0
    ai: int = 0


class ScoreKeeper:
    """
    Bookkeeping for finished games.

    Subscribe `on_game_over` to a GameEngine; the keeper uses its
    `player_name` and `difficulty` (kept in sync by the session) to
    credit wins to the high-score table.
    """

    def __init__(
        self,
        store: KeyValueStore,
        max_high_scores: int = GameConfig.MAX_HIGH_SCORES,
        clock: Callable = utc_now,
    ):
        """
        Args:
            store: Where records are persisted.
            max_high_scores: Size of the high-score table.
            clock: Returns the current aware datetime (injectable for tests).
        """
        self.store = store
        self.max_high_scores = max_high_scores
        self.clock = clock

        self.session = SessionScore()
        self.high_scores: List[ScoreRecord] = self.load_high_scores()
        self.stats: GameStats = self.load_stats()
        self.player_name: str = self.load_player_name() or ""
        self.difficulty: Difficulty = self.load_difficulty()

    # ------------------------------------------------------------------ #
    # Raw store access: failures degrade to "nothing stored"
    # ------------------------------------------------------------------ #

    def _read(self, key: str) -> Optional[bytes]:
        try:
            return self.store.get(key)
        except StorageUnavailable as e:
            logger.warning("Could not load %s: %s", key, e)
            return None

    def _write(self, key: str, value: bytes) -> bool:
        try:
            self.store.set(key, value)
            return True
        except StorageUnavailable as e:
            logger.warning("Could not save %s: %s", key, e)
            return False

    # ------------------------------------------------------------------ #
    # High scores
    # ------------------------------------------------------------------ #

    def load_high_scores(self) -> List[ScoreRecord]:
        raw = self._read(StorageConfig.HIGH_SCORES_KEY)
        if raw is None:
            return []
        try:
            records = load_high_scores(raw)
        except ValidationError as e:
            logger.warning("Ignoring unreadable high scores: %s", e)
            return []
        return self._ranked(records)

    def save_high_scores(self) -> bool:
        return self._write(StorageConfig.HIGH_SCORES_KEY, dump_high_scores(self.high_scores))

    def _ranked(self, records: List[ScoreRecord]) -> List[ScoreRecord]:
        # Score first, most recent first among equal scores
        ranked = sorted(records, key=lambda r: (r.score, r.date), reverse=True)
        return ranked[:self.max_high_scores]

    def add_high_score(self, name: str, score: int, difficulty: Difficulty) -> bool:
        """
        Insert or raise the record of `name` at `difficulty`.

        Only the higher of two entries for the same (name, difficulty) is
        kept; a lower score never replaces a higher one. The table is then
        re-ranked and cut to the top entries.

        Returns:
            True if the table changed.
        """
        name = name.strip()
        record = ScoreRecord(
            name=name,
            score=score,
            difficulty=difficulty.name,
            difficulty_name=difficulty.display_name,
            date=self.clock(),
        )

        existing = next((r for r in self.high_scores if r.key == record.key), None)
        if existing is not None:
            if score <= existing.score:
                return False
            records = [record if r is existing else r for r in self.high_scores]
        else:
            records = self.high_scores + [record]

        ranked = self._ranked(records)
        changed = ranked != self.high_scores
        self.high_scores = ranked
        if changed:
            self.save_high_scores()
        return changed

    def best_score(self, name: str, difficulty: Difficulty) -> Optional[int]:
        for record in self.high_scores:
            if record.key == (name, difficulty.name):
                return record.score
        return None

    # ------------------------------------------------------------------ #
    # Statistics
    # ------------------------------------------------------------------ #

    def load_stats(self) -> GameStats:
        raw = self._read(StorageConfig.GAME_STATS_KEY)
        if raw is None:
            return GameStats()
        try:
            return load_stats(raw)
        except ValidationError as e:
            logger.warning("Ignoring unreadable game statistics: %s", e)
            return GameStats()

    def save_stats(self) -> bool:
        return self._write(StorageConfig.GAME_STATS_KEY, dump_stats(self.stats))

    def record_result(self, outcome: Outcome):
        """Count one finished game."""
        self.stats.total_games += 1
        setattr(self.stats, outcome.value, getattr(self.stats, outcome.value) + 1)
        self.stats.last_played = self.clock()
        self.save_stats()

    def reset_stats(self):
        """Explicit external reset of the cumulative counters."""
        self.stats = GameStats()
        self.save_stats()

    # ------------------------------------------------------------------ #
    # Player profile
    # ------------------------------------------------------------------ #

    def _read_text(self, key: str) -> Optional[str]:
        """
        Read a plain-text value. Older files held a JSON string
        ('"Ann"'), which is unwrapped.
        """
        raw = self._read(key)
        if raw is None:
            return None
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Ignoring unreadable %s: %s", key, e)
            return None
        if text.startswith('"'):
            try:
                return _Text.validate_json(raw)
            except ValidationError:
                pass
        return text

    def load_player_name(self) -> Optional[str]:
        return self._read_text(StorageConfig.PLAYER_NAME_KEY)

    def save_player_name(self, name: str) -> bool:
        self.player_name = name
        return self._write(StorageConfig.PLAYER_NAME_KEY, name.encode("utf-8"))

    def load_difficulty(self) -> Difficulty:
        text = self._read_text(StorageConfig.DIFFICULTY_KEY)
        if text is None:
            return DEFAULT_DIFFICULTY
        try:
            return Difficulty.from_name(text)
        except ValueError as e:
            logger.warning("Ignoring stored difficulty: %s", e)
            return DEFAULT_DIFFICULTY

    def save_difficulty(self, difficulty: Difficulty) -> bool:
        self.difficulty = difficulty
        return self._write(StorageConfig.DIFFICULTY_KEY, difficulty.name.encode("utf-8"))

    # ------------------------------------------------------------------ #
    # Engine notifications
    # ------------------------------------------------------------------ #

    def on_game_over(self, result: MoveResult):
        """GameEngine listener: credit the finished game."""
        if isinstance(result, Win) and result.symbol == HUMAN_SYMBOL:
            self.session.player += 1
            if self.player_name:
                self.add_high_score(self.player_name, self.session.player, self.difficulty)
            self.record_result(Outcome.WIN)
        elif isinstance(result, Win):
            self.session.ai += 1
            self.record_result(Outcome.LOSS)
        else:
            self.record_result(Outcome.TIE)

    def reset_session(self):
        self.session = SessionScore()
