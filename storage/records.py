"""
Persisted records: high-score entries and cumulative game statistics.

Field names on disk are camelCase (difficultyName, totalGames, ...);
dates are ISO-8601 strings.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive timestamps are taken as UTC so records always compare
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ScoreRecord(BaseModel):
    """One row of the high-score table."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Player name.")
    score: int = Field(..., ge=0, description="Session wins when the record was set.")
    difficulty: str = Field(..., description="Difficulty level name, e.g. PRO.")
    difficulty_name: str = Field("Amateur", alias="difficultyName", description="Display name of the level.")
    date: datetime = Field(default_factory=utc_now, description="When the record was set.")

    @field_validator("date")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @property
    def key(self):
        """High scores are unique per (name, difficulty)."""
        return (self.name, self.difficulty)


class GameStats(BaseModel):
    """Cumulative counters over every game played."""

    model_config = ConfigDict(populate_by_name=True)

    total_games: int = Field(0, ge=0, alias="totalGames")
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    ties: int = Field(0, ge=0)
    last_played: Optional[datetime] = Field(None, alias="lastPlayed")

    @field_validator("last_played")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)


HighScoreList = TypeAdapter(List[ScoreRecord])


def dump_high_scores(records: List[ScoreRecord]) -> bytes:
    return HighScoreList.dump_json(records, by_alias=True)


def load_high_scores(raw: bytes) -> List[ScoreRecord]:
    return HighScoreList.validate_json(raw)


def dump_stats(stats: GameStats) -> bytes:
    return stats.model_dump_json(by_alias=True).encode("utf-8")


def load_stats(raw: bytes) -> GameStats:
    return GameStats.model_validate_json(raw)
