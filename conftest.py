"""
Pytest fixtures for TicTacToe tests.
"""

import random
from typing import List

import pytest

from logic.ai_player import AIPlayer
from logic.exceptions import NoMoveAvailable
from logic.game_state import AI_SYMBOL
from logic.scheduler import ManualScheduler
from logic.session import GameSession
from storage.score_keeper import ScoreKeeper
from storage.store import MemoryStore


class ScriptedAI:
    """Stands in for AIPlayer: plays a fixed list of moves."""

    def __init__(self, moves: List[int]):
        self.moves = list(moves)
        self.calls = 0

    def select_move(self, board, difficulty):
        self.calls += 1
        if not self.moves:
            raise NoMoveAvailable("script exhausted")
        return self.moves.pop(0)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def scores(store) -> ScoreKeeper:
    return ScoreKeeper(store)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def pro_ai() -> AIPlayer:
    return AIPlayer(AI_SYMBOL, rng=random.Random(1234))


@pytest.fixture
def session(scores, scheduler, pro_ai) -> GameSession:
    """Session with a named player, ready to start."""
    s = GameSession(scores=scores, scheduler=scheduler, ai=pro_ai)
    s.set_player_name("Ann")
    return s


@pytest.fixture
def scripted_session(scores, scheduler):
    """Factory: session whose AI plays the given moves."""
    def make(moves: List[int]) -> GameSession:
        s = GameSession(scores=scores, scheduler=scheduler, ai=ScriptedAI(moves))
        s.set_player_name("Ann")
        return s
    return make


@pytest.fixture
def scripted_ai():
    """The ScriptedAI class, for tests that build their own session."""
    return ScriptedAI
