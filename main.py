"""
Main entry point for Tic Tac Toe.

Launches the Tkinter UI by default, or a console game with --no-ui.

Console commands:
    0-8        place your mark on that cell
    r          restart the round (scores kept)
    n          new game (scores cleared)
    m          toggle between two players and vs computer
    d LEVEL    set computer difficulty (easy, medium, hard)
    q          quit
"""

from typing import Optional

import numpy as np

from logic.game_controller import GameController, GameSnapshot
from logic.game_state import Board, Cell, Difficulty, Mode


class ConsoleGame:
    """
    Plays Tic Tac Toe in the terminal.

    The computer replies immediately, there is no delay to pace in a console.
    """

    def __init__(
        self,
        mode: Mode = Mode.HUMAN_VS_HUMAN,
        difficulty: Difficulty = Difficulty.MEDIUM,
        seed: Optional[int] = None
    ):
        self.controller = GameController(
            mode=mode,
            difficulty=difficulty,
            rng=np.random.default_rng(seed)
        )
        self.controller.add_listener(self._on_state_change)
        self.is_running = False

    def start(self):
        """Run the input loop until the player quits."""
        print("\n" + "="*40)
        print("   Tic Tac Toe")
        print(f"   Mode: {self.controller.mode.name}")
        print("="*40)
        print(__doc__.split("Console commands:")[1])

        self._on_state_change(self.controller.snapshot())

        self.is_running = True
        while self.is_running:
            try:
                command = input("> ").strip().lower()
            except EOFError:
                break
            self.handle_command(command)

        print("Goodbye!")

    def handle_command(self, command: str):
        """
        Apply one console command.

        Args:
            command: A line of user input, already stripped and lower-cased.
        """
        if not command:
            return

        if command.isdigit():
            self.controller.on_cell_selected(int(command))
        elif command == "r":
            self.controller.restart()
        elif command == "n":
            self.controller.new_game()
        elif command == "m":
            if self.controller.mode == Mode.HUMAN_VS_HUMAN:
                self.controller.switch_mode(Mode.HUMAN_VS_AI)
            else:
                self.controller.switch_mode(Mode.HUMAN_VS_HUMAN)
        elif command.startswith("d "):
            try:
                self.controller.set_difficulty(command[2:].strip())
            except ValueError as e:
                print(e)
        elif command == "q":
            self.is_running = False
        else:
            print(f"Unknown command: {command}")

    def _on_state_change(self, snapshot: GameSnapshot):
        Board(cells=[Cell(value) for value in snapshot.board]).print_board()
        score = snapshot.score
        print(f"Score  X: {score['X']}  O: {score['O']}  Ties: {score['tie']}")
        print(snapshot.message)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Tic Tac Toe")
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
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the computer's random choices"
    )
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )

    args = parser.parse_args()

    mode = Mode(args.mode)
    difficulty = Difficulty.parse(args.difficulty)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(mode=mode, difficulty=difficulty, seed=args.seed)
        ui.run()
        return

    # Console mode (--no-ui)
    game = ConsoleGame(mode=mode, difficulty=difficulty, seed=args.seed)

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")


if __name__ == "__main__":
    main()
