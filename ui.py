"""
Tic Tac Toe UI
A graphical interface for Tic Tac Toe using Tkinter.

Shows:
- The board (click a cell to play)
- Whose turn it is
- Score board (X, O, ties)
- Mode selection (two players / vs computer) and difficulty level
- Restart and New Game buttons
"""

import tkinter as tk
from tkinter import ttk
from typing import Optional

import numpy as np
from PIL import ImageTk

from display import BoardRenderer, DisplayConfig
from logic.game_controller import GameController, GameSnapshot
from logic.game_state import Difficulty, Mode


class TicTacToeUI:
    """
    Main UI class for Tic Tac Toe.
    """

    def __init__(
        self,
        mode: Mode = Mode.HUMAN_VS_HUMAN,
        difficulty: Difficulty = Difficulty.MEDIUM,
        seed: Optional[int] = None
    ):
        """Initialize the UI."""
        self.display_config = DisplayConfig()
        self.renderer = BoardRenderer(self.display_config)

        # Set once the player closes the end-of-round message
        self.message_dismissed = False

        # Create UI
        self._create_ui()

        # The AI's reply is paced with Tk's own timer
        self.controller = GameController(
            mode=mode,
            difficulty=difficulty,
            rng=np.random.default_rng(seed),
            schedule=self.root.after,
            cancel=self.root.after_cancel
        )
        self.controller.add_listener(self._on_state_change)

        self._update_mode_buttons()
        self._update_difficulty_buttons()
        self._on_state_change(self.controller.snapshot())

    def _create_ui(self):
        """Create the Tkinter UI."""
        cfg = self.display_config

        self.root = tk.Tk()
        self.root.title("Tic Tac Toe")
        self.root.configure(bg=cfg.BACKGROUND)
        self.root.resizable(False, False)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=cfg.BACKGROUND)
        style.configure('TLabel', background=cfg.BACKGROUND, foreground=cfg.TEXT_COLOR, font=(cfg.FONT, 11))
        style.configure('Title.TLabel', font=(cfg.FONT, 20, 'bold'))
        style.configure('Score.TLabel', font=(cfg.FONT, 13, 'bold'))

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=20, pady=20)

        ttk.Label(main_frame, text="Tic Tac Toe", style='Title.TLabel').pack(pady=(0, 10))

        # Mode selection
        mode_frame = ttk.Frame(main_frame)
        mode_frame.pack(pady=5)

        self.pvp_btn = tk.Button(
            mode_frame,
            text="Player vs Player",
            font=(cfg.FONT, 10, 'bold'),
            width=16,
            fg='white',
            command=lambda: self._set_mode(Mode.HUMAN_VS_HUMAN)
        )
        self.pvp_btn.pack(side=tk.LEFT, padx=5)

        self.pvc_btn = tk.Button(
            mode_frame,
            text="Player vs Computer",
            font=(cfg.FONT, 10, 'bold'),
            width=16,
            fg='white',
            command=lambda: self._set_mode(Mode.HUMAN_VS_AI)
        )
        self.pvc_btn.pack(side=tk.LEFT, padx=5)

        # Difficulty selection (only shown against the computer)
        self.diff_frame = ttk.Frame(main_frame)

        for level in Difficulty:
            color = cfg.DIFFICULTY_COLORS[level.name]
            btn = tk.Button(
                self.diff_frame,
                text=level.name.capitalize(),
                font=(cfg.FONT, 10, 'bold'),
                width=8,
                activebackground=color,
                command=lambda v=level: self._set_difficulty(v)
            )
            btn.pack(side=tk.LEFT, padx=5)
            setattr(self, f'btn_{level.name.lower()}', btn)

        # Turn banner
        self.turn_label = tk.Label(
            main_frame,
            text="",
            font=(cfg.FONT, 13, 'bold'),
            fg='white',
            width=24,
            pady=6
        )
        self.turn_label.pack(pady=10)

        # Board
        self.board_canvas = tk.Canvas(
            main_frame,
            width=self.renderer.size,
            height=self.renderer.size,
            bg=cfg.BACKGROUND,
            highlightthickness=0
        )
        self.board_canvas.pack()
        self.board_canvas.bind("<Button-1>", self._on_canvas_click)

        # End-of-round message, placed over the board when a round ends
        self.message_frame = tk.Frame(self.board_canvas, bg=cfg.PANEL_COLOR, padx=20, pady=15)
        self.message_label = tk.Label(
            self.message_frame,
            text="",
            font=(cfg.FONT, 16, 'bold'),
            bg=cfg.PANEL_COLOR,
            fg=cfg.TEXT_COLOR
        )
        self.message_label.pack(pady=(0, 10))
        tk.Button(
            self.message_frame,
            text="Close",
            font=(cfg.FONT, 10, 'bold'),
            width=10,
            command=self._hide_message
        ).pack()

        # Score board
        score_frame = ttk.Frame(main_frame)
        score_frame.pack(pady=10)

        self.score_x_label = ttk.Label(score_frame, text="", style='Score.TLabel', foreground=cfg.X_COLOR)
        self.score_x_label.pack(side=tk.LEFT, padx=12)
        self.score_tie_label = ttk.Label(score_frame, text="", style='Score.TLabel')
        self.score_tie_label.pack(side=tk.LEFT, padx=12)
        self.score_o_label = ttk.Label(score_frame, text="", style='Score.TLabel', foreground=cfg.O_COLOR)
        self.score_o_label.pack(side=tk.LEFT, padx=12)

        # Control buttons
        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame,
            text="🔄 Restart",
            font=(cfg.FONT, 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self._restart
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="▶ New Game",
            font=(cfg.FONT, 11, 'bold'),
            bg=cfg.ACTIVE_BUTTON_COLOR,
            fg='white',
            width=12,
            command=self._new_game
        ).pack(side=tk.LEFT, padx=5)

        # Bind close event
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _on_canvas_click(self, event):
        """Translate a click into a cell and hand it to the controller."""
        index = self.renderer.cell_at(event.x, event.y)
        if index is not None:
            self.controller.on_cell_selected(index)

    def _on_state_change(self, snapshot: GameSnapshot):
        """Redraw everything from a controller snapshot."""
        cfg = self.display_config

        if not snapshot.is_game_over:
            self.message_dismissed = False

        # Board image
        image = self.renderer.render(
            snapshot.board,
            snapshot.winning_line,
            strike=not self.message_dismissed
        )
        photo = ImageTk.PhotoImage(image)
        self.board_canvas.delete("all")
        self.board_canvas.create_image(0, 0, anchor=tk.NW, image=photo)
        self.board_canvas.image = photo  # Keep reference

        # Turn banner
        if snapshot.is_ai_thinking:
            turn_text = "Computer is thinking..."
        elif snapshot.is_game_over:
            turn_text = "Game Over"
        else:
            turn_text = snapshot.message
        self.turn_label.configure(
            text=turn_text,
            bg=cfg.player_color(snapshot.current_player.value)
        )

        # Scores
        self.score_x_label.configure(text=f"X: {snapshot.score['X']}")
        self.score_o_label.configure(text=f"O: {snapshot.score['O']}")
        self.score_tie_label.configure(text=f"Ties: {snapshot.score['tie']}")

        # End-of-round message
        if snapshot.is_game_over and not self.message_dismissed:
            self._show_message(snapshot.message)
        else:
            self.message_frame.place_forget()

    def _show_message(self, text: str):
        self.message_label.configure(text=text)
        self.message_frame.place(relx=0.5, rely=0.5, anchor=tk.CENTER)

    def _hide_message(self):
        """Close the end-of-round message and the strike-through line."""
        self.message_dismissed = True
        self._on_state_change(self.controller.snapshot())

    def _set_mode(self, mode: Mode):
        """Switch game mode (restarts the round)."""
        self.controller.switch_mode(mode)
        self._update_mode_buttons()

    def _update_mode_buttons(self):
        cfg = self.display_config
        vs_ai = self.controller.mode == Mode.HUMAN_VS_AI

        self.pvp_btn.configure(bg=cfg.BUTTON_COLOR if vs_ai else cfg.ACTIVE_BUTTON_COLOR)
        self.pvc_btn.configure(bg=cfg.ACTIVE_BUTTON_COLOR if vs_ai else cfg.BUTTON_COLOR)

        if vs_ai:
            self.diff_frame.pack(pady=5, after=self.pvp_btn.master)
        else:
            self.diff_frame.pack_forget()

    def _set_difficulty(self, level: Difficulty):
        """Set the AI difficulty level."""
        self.controller.set_difficulty(level)
        self._update_difficulty_buttons()

    def _update_difficulty_buttons(self):
        cfg = self.display_config
        for level in Difficulty:
            btn = getattr(self, f'btn_{level.name.lower()}')
            if level == self.controller.difficulty:
                btn.configure(bg=cfg.DIFFICULTY_COLORS[level.name], fg='black')
            else:
                btn.configure(bg=cfg.BUTTON_COLOR, fg='white')

    def _restart(self):
        """Reset the board, keep the scores."""
        self.controller.restart()

    def _new_game(self):
        """Reset the board and the scores."""
        self.controller.new_game()

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self.controller.remove_listener(self._on_state_change)
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Tic Tac Toe UI")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=Mode.HUMAN_VS_HUMAN.value,
        help="pvp: two players, pvc: play against the computer"
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default=Difficulty.MEDIUM.name.lower(),
        help="Computer difficulty (pvc mode)"
    )

    args = parser.parse_args()

    ui = TicTacToeUI(mode=Mode(args.mode), difficulty=Difficulty.parse(args.difficulty))
    ui.run()


if __name__ == "__main__":
    main()
