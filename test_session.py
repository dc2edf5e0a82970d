"""
Tests for the game session: setup rules, the deferred AI move and its
cancellation, and score bookkeeping across games.
"""

import logging

import pytest

from logic.ai_player import Difficulty
from logic.exceptions import DifficultyLocked, InvalidPlayerName
from logic.game_engine import Continue, Draw, Win
from logic.game_state import GameStatus, Symbol, empty_board, empty_cells
from logic.scheduler import ManualScheduler
from logic.session import GameSession, validate_player_name

X, O, E = Symbol.X, Symbol.O, Symbol.EMPTY


class NoCancelScheduler(ManualScheduler):
    """Scheduler whose cancel() does nothing, like a timer that already fired."""

    def cancel(self, handle):
        pass


def play(session, scheduler, human_moves):
    """Click each cell and let the AI answer after its delay."""
    result = None
    for index in human_moves:
        result = session.handle_cell(index)
        scheduler.advance(session.ai_delay_ms)
    return result


# ════════════════════════════════════════════════════════════════════════════
#  PLAYER NAME AND DIFFICULTY
# ════════════════════════════════════════════════════════════════════════════

class TestPlayerName:
    def test_valid_names(self):
        assert validate_player_name("Ann") == "Ann"
        assert validate_player_name("  Bo  ") == "Bo"
        assert validate_player_name("x" * 20) == "x" * 20

    @pytest.mark.parametrize("name, message", [
        ("", "Please enter your name"),
        ("   ", "Please enter your name"),
        ("A", "at least 2"),
        ("x" * 21, "at most 20"),
        ("<b>", "invalid characters"),
        ("Tom & Jerry", "invalid characters"),
        ('say "hi"', "invalid characters"),
    ])
    def test_invalid_names(self, name, message):
        with pytest.raises(InvalidPlayerName) as exc:
            validate_player_name(name)
        assert message in str(exc.value)

    def test_name_is_persisted(self, session, store):
        session.set_player_name(" Cleo ")
        assert session.player_name == "Cleo"
        assert store.data["lastPlayerName"] == b"Cleo"

    def test_name_locked_during_game(self, session):
        session.start()
        with pytest.raises(InvalidPlayerName):
            session.set_player_name("Bo")
        assert session.player_name == "Ann"

    def test_start_needs_a_name(self, scheduler):
        fresh = GameSession(scheduler=scheduler)
        with pytest.raises(InvalidPlayerName):
            fresh.start()
        assert fresh.status == GameStatus.WAITING


class TestDifficultySetting:
    def test_default_is_amateur(self, session):
        assert session.difficulty == Difficulty.AMATEUR

    def test_change_while_waiting(self, session, store):
        session.set_difficulty(Difficulty.PRO)
        assert session.difficulty == Difficulty.PRO
        assert store.data["aiDifficulty"] == b"PRO"

    def test_locked_while_playing(self, session):
        session.start()
        with pytest.raises(DifficultyLocked):
            session.set_difficulty(Difficulty.BEGINNER)
        assert session.difficulty == Difficulty.AMATEUR

    def test_locked_after_game_until_back_to_setup(self, scripted_session, scheduler):
        session = scripted_session([3, 4])
        session.start()
        play(session, scheduler, [0, 1, 2])
        assert session.status == GameStatus.ENDED
        with pytest.raises(DifficultyLocked):
            session.set_difficulty(Difficulty.PRO)
        session.back_to_setup()
        session.set_difficulty(Difficulty.PRO)
        assert session.difficulty == Difficulty.PRO


# ════════════════════════════════════════════════════════════════════════════
#  DEFERRED AI MOVE
# ════════════════════════════════════════════════════════════════════════════

class TestDeferredAIMove:
    def test_ai_moves_after_delay(self, session, scheduler):
        session.set_difficulty(Difficulty.PRO)
        session.start()
        assert session.handle_cell(4) == Continue(O)
        assert session.ai_pending
        assert not session.is_human_turn

        scheduler.advance(499)
        assert O not in session.board

        scheduler.advance(1)
        assert session.board.count(O) == 1
        assert not session.ai_pending
        assert session.is_human_turn

    def test_custom_delay(self, scores, scheduler, scripted_ai):
        session = GameSession(scores=scores, scheduler=scheduler, ai=scripted_ai([8]), ai_delay_ms=50)
        session.set_player_name("Ann")
        session.start()
        session.handle_cell(0)
        scheduler.advance(50)
        assert session.board[8] == O

    def test_human_clicks_ignored_while_ai_pending(self, session, scheduler):
        session.start()
        session.handle_cell(0)
        assert session.handle_cell(1) is None
        assert session.board[1] == E
        assert scheduler.pending == 1

    def test_start_cancels_pending_move(self, session, scheduler):
        session.start()
        session.handle_cell(0)
        session.start()
        assert scheduler.pending == 0
        scheduler.advance(1000)
        assert session.board == empty_board()
        assert session.is_human_turn

    def test_reset_cancels_pending_move(self, session, scheduler):
        session.start()
        session.handle_cell(0)
        session.reset()
        scheduler.advance(1000)
        assert session.status == GameStatus.WAITING
        assert O not in session.board

    def test_stale_callback_does_nothing(self, scores, pro_ai):
        scheduler = NoCancelScheduler()
        session = GameSession(scores=scores, scheduler=scheduler, ai=pro_ai)
        session.set_player_name("Ann")
        session.start()
        session.handle_cell(0)
        session.start()
        assert scheduler.advance(1000) == 1
        assert session.board == empty_board()
        assert session.is_human_turn

    def test_stale_callback_does_not_move_in_next_game(self, scores, pro_ai):
        scheduler = NoCancelScheduler()
        session = GameSession(scores=scores, scheduler=scheduler, ai=pro_ai)
        session.set_player_name("Ann")
        session.start()
        session.handle_cell(0)
        scheduler.advance(200)
        session.play_again()
        session.handle_cell(4)
        # Old callback is due first and must not add a second O
        scheduler.advance(300)
        assert session.board.count(O) == 0
        scheduler.advance(200)
        assert session.board.count(O) == 1

    def test_no_ai_move_scheduled_after_game_ends(self, scripted_session, scheduler):
        session = scripted_session([3, 4])
        session.start()
        result = play(session, scheduler, [0, 1, 2])
        assert result == Win(X, (0, 1, 2))
        assert scheduler.pending == 0
        assert session.board.count(O) == 2


# ════════════════════════════════════════════════════════════════════════════
#  GAMES AND SCORES
# ════════════════════════════════════════════════════════════════════════════

class TestGames:
    def test_invalid_clicks_are_ignored(self, session):
        assert session.handle_cell(0) is None          # not started
        session.start()
        assert session.handle_cell(9) is None
        assert session.handle_cell(-1) is None
        assert session.board == empty_board()

    def test_human_win(self, scripted_session, scheduler, scores):
        session = scripted_session([3, 4])
        session.start()
        play(session, scheduler, [0, 1, 2])
        assert session.status == GameStatus.ENDED
        assert session.engine.state.winning_line == [0, 1, 2]
        assert scores.session.player == 1
        assert scores.stats.wins == 1
        assert scores.best_score("Ann", Difficulty.AMATEUR) == 1
        assert session.status_message() == "Ann wins!"
        assert session.handle_cell(5) is None

    def test_ai_win(self, scripted_session, scheduler, scores):
        session = scripted_session([3, 4, 5])
        session.start()
        play(session, scheduler, [0, 1, 8])
        assert isinstance(session.last_result, Win)
        assert session.last_result.symbol == O
        assert scores.session.ai == 1
        assert scores.stats.losses == 1
        assert scores.high_scores == []
        assert session.status_message() == "AI wins!"

    def test_draw(self, scripted_session, scheduler, scores):
        session = scripted_session([4, 1, 6, 5])
        session.start()
        result = play(session, scheduler, [0, 2, 7, 3, 8])
        assert result == Draw()
        assert scores.stats.ties == 1
        assert (scores.session.player, scores.session.ai) == (0, 0)
        assert session.status_message() == "It's a tie!"

    def test_play_again_keeps_session_score(self, scripted_session, scheduler, scores):
        session = scripted_session([3, 4, 3, 4])
        session.start()
        play(session, scheduler, [0, 1, 2])
        session.play_again()
        assert session.status == GameStatus.PLAYING
        assert session.board == empty_board()
        assert scores.session.player == 1

        play(session, scheduler, [0, 1, 2])
        assert scores.session.player == 2
        assert scores.best_score("Ann", Difficulty.AMATEUR) == 2
        assert len(scores.high_scores) == 1

    def test_reset_clears_session_score_only(self, scripted_session, scheduler, scores):
        session = scripted_session([3, 4])
        session.start()
        play(session, scheduler, [0, 1, 2])
        session.reset()
        assert session.status == GameStatus.WAITING
        assert scores.session.player == 0
        assert scores.stats.wins == 1
        assert session.player_name == "Ann"

    def test_back_to_setup_keeps_session_score(self, scripted_session, scheduler, scores):
        session = scripted_session([3, 4])
        session.start()
        play(session, scheduler, [0, 1, 2])
        session.back_to_setup()
        assert session.status == GameStatus.WAITING
        assert scores.session.player == 1

    def test_pro_ai_never_loses_a_session_game(self, session, scheduler):
        session.set_difficulty(Difficulty.PRO)
        session.start()
        while session.status == GameStatus.PLAYING:
            session.handle_cell(empty_cells(session.board)[0])
            scheduler.advance(session.ai_delay_ms)
        assert session.engine.state.winner != X


class TestAIFailures:
    def test_ai_without_move_is_logged(self, scripted_session, scheduler, caplog):
        session = scripted_session([])
        session.start()
        with caplog.at_level(logging.ERROR):
            play(session, scheduler, [0])
        assert "AI could not move" in caplog.text
        assert session.last_error
        assert session.status == GameStatus.PLAYING

    def test_ai_invalid_move_is_logged(self, scripted_session, scheduler, caplog):
        session = scripted_session([0])
        session.start()
        with caplog.at_level(logging.ERROR):
            play(session, scheduler, [0])
        assert "invalid move" in caplog.text
        assert session.board.count(O) == 0


class TestNotifications:
    def test_listeners_called_on_changes(self, scripted_session, scheduler):
        session = scripted_session([3])
        seen = []
        session.add_listener(lambda s: seen.append(s.status))
        session.start()
        session.handle_cell(0)
        scheduler.advance(500)
        assert seen == [GameStatus.PLAYING] * 3

    def test_reset_notifies_once(self, session):
        session.start()
        seen = []
        session.add_listener(lambda s: seen.append(s.status))
        session.reset()
        assert seen == [GameStatus.WAITING]

    def test_back_to_setup_notifies_once(self, session):
        session.start()
        seen = []
        session.add_listener(lambda s: seen.append(s.status))
        session.back_to_setup()
        assert seen == [GameStatus.WAITING]

    def test_status_messages(self, scheduler, scores, pro_ai):
        session = GameSession(scores=scores, scheduler=scheduler, ai=pro_ai)
        assert session.status_message().startswith("Enter your name")
        session.set_player_name("Ann")
        assert session.status_message().startswith("Welcome Ann!")
        session.start()
        assert session.status_message() == "Ann's turn (X)"
        session.handle_cell(0)
        assert session.status_message() == "AI is thinking..."
