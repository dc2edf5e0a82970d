"""
TicTacToe UI
A graphical interface for playing TicTacToe against the AI using Tkinter.

Shows:
- Player name entry and difficulty level selection
- The 3x3 board (X for the human, O for the AI)
- Game status, session score and statistics
- High score table (top 5)
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional

from logic.ai_player import Difficulty
from logic.exceptions import GameError
from logic.game_state import GameStatus, Symbol
from logic.scheduler import TkScheduler
from logic.session import GameSession
from storage.score_keeper import ScoreKeeper

logger = logging.getLogger(__name__)


# Button colors per difficulty
DIFFICULTY_COLORS = {
    Difficulty.BEGINNER: "#4ade80",
    Difficulty.AMATEUR: "#fbbf24",
    Difficulty.PRO: "#f87171",
}

CELL_BG = "#16213e"
WIN_BG = "#065f46"
SYMBOL_COLORS = {
    Symbol.X: "#00ff88",   # Human
    Symbol.O: "#ff6b6b",   # AI
    Symbol.EMPTY: "white",
}


class TicTacToeUI:
    """
    Main UI class. All game rules live in GameSession; the UI forwards
    clicks and redraws whenever the session reports a change.
    """

    def __init__(self, scores: ScoreKeeper, ai_delay_ms: Optional[int] = None):
        self.root = tk.Tk()
        kwargs = {} if ai_delay_ms is None else {"ai_delay_ms": ai_delay_ms}
        self.session = GameSession(scores=scores, scheduler=TkScheduler(self.root), **kwargs)
        self.session.add_listener(lambda _session: self._refresh())

        self._create_ui()
        self._refresh()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root.title("TicTacToe")
        self.root.configure(bg='#1a1a2e')
        self.root.minsize(420, 640)

        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('TLabel', background='#1a1a2e', foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')
        style.configure('Error.TLabel', font=('Segoe UI', 10), foreground='#ef4444')

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Player section
        ttk.Label(main_frame, text="Player", style='Title.TLabel').pack(pady=(0, 5))

        name_frame = ttk.Frame(main_frame)
        name_frame.pack()
        self.name_var = tk.StringVar(value=self.session.player_name)
        self.name_entry = ttk.Entry(name_frame, textvariable=self.name_var, width=22)
        self.name_entry.pack(side=tk.LEFT, padx=5)
        self.name_entry.bind('<Return>', lambda _e: self._save_name())
        self.save_name_btn = tk.Button(
            name_frame, text="Save", font=('Segoe UI', 10, 'bold'),
            bg='#6366f1', fg='white', command=self._save_name
        )
        self.save_name_btn.pack(side=tk.LEFT)

        self.error_label = ttk.Label(main_frame, text="", style='Error.TLabel')
        self.error_label.pack()

        # Difficulty section
        diff_frame = ttk.Frame(main_frame)
        diff_frame.pack(pady=5)
        self.diff_buttons = {}
        for difficulty in Difficulty:
            btn = tk.Button(
                diff_frame,
                text=difficulty.display_name,
                font=('Segoe UI', 10, 'bold'),
                width=8,
                activebackground=DIFFICULTY_COLORS[difficulty],
                command=lambda d=difficulty: self._set_difficulty(d)
            )
            btn.pack(side=tk.LEFT, padx=5)
            self.diff_buttons[difficulty] = btn

        # Board
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)
        board_frame = ttk.Frame(main_frame)
        board_frame.pack(pady=5)

        self.board_cells = []
        for index in range(9):
            cell = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 24, 'bold'),
                width=4,
                height=2,
                bg=CELL_BG,
                fg='white',
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell(i)
            )
            cell.grid(row=index // 3, column=index % 3, padx=2, pady=2)
            self.board_cells.append(cell)

        self.status_label = ttk.Label(main_frame, text="", style='Status.TLabel', wraplength=380)
        self.status_label.pack(pady=5)

        self.score_label = ttk.Label(main_frame, text="")
        self.score_label.pack()

        # Controls
        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=10)

        self.start_btn = tk.Button(
            control_frame, text="Start Game", font=('Segoe UI', 11, 'bold'),
            bg='#10b981', fg='white', width=12, command=self._start_game
        )
        self.start_btn.pack(side=tk.LEFT, padx=5)

        self.setup_btn = tk.Button(
            control_frame, text="New Setup", font=('Segoe UI', 11, 'bold'),
            bg='#6366f1', fg='white', width=10, command=self.session.back_to_setup
        )
        self.setup_btn.pack(side=tk.LEFT, padx=5)

        self.reset_btn = tk.Button(
            control_frame, text="Reset", font=('Segoe UI', 11, 'bold'),
            bg='#6366f1', fg='white', width=8, command=self.session.reset
        )
        self.reset_btn.pack(side=tk.LEFT, padx=5)

        # High scores
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)
        ttk.Label(main_frame, text="High Scores", style='Title.TLabel').pack()
        self.high_scores_label = ttk.Label(main_frame, text="", justify=tk.LEFT)
        self.high_scores_label.pack(pady=5)

        self.stats_label = ttk.Label(main_frame, text="")
        self.stats_label.pack()

        tk.Button(
            main_frame, text="Quit", font=('Segoe UI', 10),
            bg='#ef4444', fg='white', width=26, command=self._quit
        ).pack(pady=10)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #

    def _run(self, action, *args):
        """Run a session action, showing rule violations in the error label."""
        try:
            action(*args)
        except GameError as e:
            self.error_label.configure(text=str(e))
            return False
        self.error_label.configure(text="")
        return True

    def _save_name(self):
        self._run(self.session.set_player_name, self.name_var.get())

    def _set_difficulty(self, difficulty: Difficulty):
        self._run(self.session.set_difficulty, difficulty)

    def _start_game(self):
        if self.name_var.get().strip() != self.session.player_name:
            if not self._run(self.session.set_player_name, self.name_var.get()):
                return
        if self.session.status == GameStatus.ENDED:
            self._run(self.session.play_again)
        else:
            self._run(self.session.start)

    def _on_cell(self, index: int):
        self.session.handle_cell(index)

    # ------------------------------------------------------------------ #
    # Drawing
    # ------------------------------------------------------------------ #

    def _refresh(self):
        session = self.session
        state = session.engine.state
        waiting = state.status == GameStatus.WAITING

        for index, cell in enumerate(self.board_cells):
            symbol = state.board[index]
            on_line = state.winning_line is not None and index in state.winning_line
            cell.configure(
                text=symbol.value,
                fg=SYMBOL_COLORS[symbol],
                bg=WIN_BG if on_line else CELL_BG,
                state='normal' if session.is_human_turn and symbol == Symbol.EMPTY else 'disabled',
                disabledforeground=SYMBOL_COLORS[symbol],
            )

        for difficulty, btn in self.diff_buttons.items():
            selected = difficulty == session.difficulty
            btn.configure(
                bg=DIFFICULTY_COLORS[difficulty] if selected else '#2d3748',
                fg='black' if selected else 'white',
                state='normal' if waiting else 'disabled',
            )

        entry_state = 'disabled' if state.status == GameStatus.PLAYING else 'normal'
        self.name_entry.configure(state=entry_state)
        self.save_name_btn.configure(state=entry_state)

        if state.status == GameStatus.ENDED:
            self.start_btn.configure(text=f"Play Again ({session.player_name})", state='normal', width=18)
        else:
            self.start_btn.configure(
                text="Start Game", width=12,
                state='normal' if waiting else 'disabled'
            )

        self.status_label.configure(text=session.status_message())

        score = session.scores.session
        self.score_label.configure(text=f"You: {score.player}    AI: {score.ai}")

        if session.scores.high_scores:
            lines = [
                f"{rank}. {record.name} - {record.score} wins ({record.difficulty_name})"
                for rank, record in enumerate(session.scores.high_scores, start=1)
            ]
            self.high_scores_label.configure(text="\n".join(lines))
        else:
            self.high_scores_label.configure(text="No scores yet")

        stats = session.scores.stats
        self.stats_label.configure(
            text=f"Games: {stats.total_games}  Wins: {stats.wins}  "
                 f"Losses: {stats.losses}  Ties: {stats.ties}"
        )

    def _quit(self):
        """Quit the application."""
        logger.info("Quitting...")
        self.session.back_to_setup()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()
