"""
Main entry point for TicTacToe.

This script ties together:
- Logic (game engine, AI, session)
- Storage (high scores and statistics)
- Shells (Tkinter UI by default, console with --no-ui)
- Web (static portfolio page with --serve)

Run this script to play TicTacToe against the AI!
"""

import argparse
import logging
import random
import sys
from typing import Optional

from logic.ai_player import AIPlayer, Difficulty
from logic.config import GameConfig
from logic.exceptions import GameError
from logic.game_engine import GameEngine, Win
from logic.game_state import GameStatus, HUMAN_SYMBOL, AI_SYMBOL
from logic.scheduler import ManualScheduler
from logic.session import GameSession
from storage.config import StorageConfig
from storage.score_keeper import ScoreKeeper
from storage.store import JsonFileStore, KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


class ConsoleGame:
    """
    Text-mode shell.

    Game flow:
    1. Human (X) types a cell number 1-9
    2. AI (O) answers after the thinking delay
    3. Repeat until someone wins or it's a draw, then play again or quit
    """

    def __init__(self, scores: ScoreKeeper, input_fn=input):
        self.scheduler = ManualScheduler()
        self.session = GameSession(scores=scores, scheduler=self.scheduler)
        self.input = input_fn

    def setup(self, name: Optional[str], difficulty: Optional[Difficulty]):
        while True:
            if name is None:
                default = self.session.player_name
                prompt = f"Your name [{default}]: " if default else "Your name: "
                name = self.input(prompt).strip() or default
            try:
                self.session.set_player_name(name)
                break
            except GameError as e:
                print(e)
                name = None

        if difficulty is not None:
            self.session.set_difficulty(difficulty)
        print(f"AI: {self.session.difficulty.display_name} - {self.session.difficulty.description}")

    def play(self):
        """Play games until the user quits."""
        self.session.start()
        while True:
            if not self._play_one():
                self.session.back_to_setup()
                return
            self._show_result()
            answer = self.input("Play again? [y/N] ").strip().lower()
            if answer not in ("y", "yes"):
                break
            self.session.play_again()

    def _play_one(self) -> bool:
        """Play until the game ends. Returns False if the user quit."""
        while self.session.status == GameStatus.PLAYING:
            self.session.engine.state.print_board()
            raw = self.input("Your move (1-9, q to quit): ").strip().lower()
            if raw in ("q", "quit"):
                return False
            if not (raw.isascii() and raw.isdigit()):
                print("Please type a number from 1 to 9.")
                continue
            if self.session.handle_cell(int(raw) - 1) is None:
                print("That cell is not available.")
                continue
            if self.session.ai_pending:
                print(self.session.status_message())
                self.scheduler.advance(self.session.ai_delay_ms)
        return True

    def _show_result(self):
        print("\n" + "=" * 40)
        print("   GAME OVER!")
        print("=" * 40)
        self.session.engine.state.print_board()
        print(f"\n{self.session.status_message()}")
        score = self.session.scores.session
        print(f"Score - {self.session.player_name}: {score.player}  AI: {score.ai}")
        print("\nHigh scores:")
        if not self.session.scores.high_scores:
            print("  No scores yet")
        for rank, record in enumerate(self.session.scores.high_scores, start=1):
            print(f"  {rank}. {record.name} - {record.score} wins ({record.difficulty_name})")
        print("=" * 40)


def self_play(games: int, difficulty: Difficulty, opponent: Difficulty, seed: Optional[int] = None) -> dict:
    """
    Let the AI (O) play `games` games against another AI playing X.

    Returns:
        Tally of results: {"X": wins, "O": wins, "draw": draws}.
    """
    rng = random.Random(seed)
    ai = AIPlayer(AI_SYMBOL, rng=rng)
    opponent_ai = AIPlayer(HUMAN_SYMBOL, rng=rng)
    tally = {HUMAN_SYMBOL.value: 0, AI_SYMBOL.value: 0, "draw": 0}

    engine = GameEngine()
    for game in range(games):
        # Alternate who opens
        first = HUMAN_SYMBOL if game % 2 == 0 else AI_SYMBOL
        engine.new_game(first)
        result = None
        while engine.status == GameStatus.PLAYING:
            if engine.current_player == AI_SYMBOL:
                index = ai.select_move(engine.board, difficulty)
            else:
                index = opponent_ai.select_move(engine.board, opponent)
            result = engine.apply_move(index, engine.current_player)
        tally[result.symbol.value if isinstance(result, Win) else "draw"] += 1
    return tally


def build_store(args) -> KeyValueStore:
    if args.memory:
        return MemoryStore()
    return JsonFileStore(args.data_file)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="TicTacToe against a minimax AI")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Play in the console instead of the Tkinter window"
    )
    parser.add_argument(
        "--name",
        help="Player name (console mode)"
    )
    parser.add_argument(
        "--difficulty",
        type=Difficulty.from_name,
        choices=list(Difficulty),
        metavar="{beginner,amateur,pro}",
        help="AI difficulty level"
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=GameConfig.AI_DELAY_MS,
        help="AI thinking delay in milliseconds (UI mode)"
    )
    parser.add_argument(
        "--data-file",
        default=str(StorageConfig.DEFAULT_DATA_FILE),
        help="JSON file for high scores and statistics"
    )
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Keep scores in memory only"
    )
    parser.add_argument(
        "--self-play",
        type=int,
        metavar="N",
        help="Play N AI-vs-AI games and print the results"
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the portfolio page instead of playing"
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        import uvicorn
        from web.app import app
        uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
        return 0

    if args.self_play is not None:
        difficulty = args.difficulty or Difficulty.PRO
        tally = self_play(args.self_play, difficulty, Difficulty.PRO)
        print(f"AI ({difficulty.display_name}) as O vs Pro as X over {args.self_play} games:")
        print(f"  X wins: {tally['X']}  O wins: {tally['O']}  draws: {tally['draw']}")
        return 0

    scores = ScoreKeeper(build_store(args))

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(scores, ai_delay_ms=args.delay)
        if args.difficulty is not None:
            ui.session.set_difficulty(args.difficulty)
        ui.run()
        return 0

    game = ConsoleGame(scores)
    try:
        game.setup(args.name, args.difficulty)
        game.play()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
