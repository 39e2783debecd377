"""Interactive CLI driver for playing Scotland Yard.

This module provides a hot-seat, text-based interface. It serves as
both a playable game and a reference for how a user interface drives
the engine through the observable Model.

The driver is designed to be extensible:
- GameRenderer handles all display logic (can be swapped for a GUI)
- ActionPrompter handles all user input (can be swapped for GUI events)
- GameDriver orchestrates the game loop

Usage:
    python -m engine.driver --detectives 3 --seed 7

Or from code:
    from engine.driver import GameDriver
    driver = GameDriver(model)
    driver.run()
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Any

from core.config import GameConfig
from core.constants import Piece, Ticket, MAX_DETECTIVES, MIN_DETECTIVES
from core.errors import ScotlandYardError
from core.move import Move

from engine.game_state import GameState
from engine.model import Event, Model, Observer
from engine.setup import initialize_game

logger = logging.getLogger(__name__)


# =============================================================================
# Display Formatters (GUI-ready abstraction)
# =============================================================================

class GameRenderer(ABC):
    """Abstract base class for rendering game state.

    Implement this interface to create a GUI renderer.
    The CLI renderer is provided as TextRenderer.
    """

    @abstractmethod
    def render_state(self, state: GameState) -> None:
        """Render the full game state."""
        pass

    @abstractmethod
    def render_message(self, message: str) -> None:
        """Render a message to the user."""
        pass

    @abstractmethod
    def render_error(self, error: str) -> None:
        """Render an error message."""
        pass

    @abstractmethod
    def render_game_over(self, state: GameState) -> None:
        """Render the game over screen."""
        pass


class TextRenderer(GameRenderer):
    """CLI text-based renderer for the game state."""

    H_LINE = "─"
    V_LINE = "│"
    TL_CORNER = "┌"
    TR_CORNER = "┐"
    BL_CORNER = "└"
    BR_CORNER = "┘"

    # Piece colors (ANSI codes)
    PIECE_COLORS = {
        Piece.MRX: "\033[90m",
        Piece.RED: "\033[91m",
        Piece.GREEN: "\033[92m",
        Piece.BLUE: "\033[94m",
        Piece.WHITE: "\033[97m",
        Piece.YELLOW: "\033[93m",
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    def __init__(self, use_colors: bool = True):
        """Initialize the renderer.

        Args:
            use_colors: Whether to use ANSI color codes.
        """
        self.use_colors = use_colors

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_colors:
            return f"{color}{text}{self.RESET}"
        return text

    def _piece(self, piece: Piece) -> str:
        name = "Mr X" if piece.is_mrx else piece.name.title()
        return self._color(name, self.PIECE_COLORS[piece])

    def _box(self, title: str, content: list[str], width: int = 60) -> str:
        """Create a box around content."""
        lines = []
        title_space = width - len(title) - 4
        lines.append(f"{self.TL_CORNER}{self.H_LINE}{self.H_LINE} {title} {self.H_LINE * title_space}{self.TR_CORNER}")

        for line in content:
            # Strip ANSI codes for padding calculation
            visible_len = len(self._strip_ansi(line))
            padding = max(width - visible_len - 2, 0)
            lines.append(f"{self.V_LINE} {line}{' ' * padding}{self.V_LINE}")

        lines.append(f"{self.BL_CORNER}{self.H_LINE * width}{self.BR_CORNER}")
        return "\n".join(lines)

    def _strip_ansi(self, text: str) -> str:
        """Strip ANSI escape codes from text."""
        return re.sub(r'\033\[[0-9;]*m', '', text)

    def _tickets(self, state: GameState, piece: Piece) -> str:
        board = state.get_player_tickets(piece)
        return " ".join(f"{t.value[:3].upper()}={board.get_count(t)}" for t in Ticket)

    def render_state(self, state: GameState) -> None:
        """Render the full game state."""
        print("\n" + "=" * 70)
        to_move = "Mr X" if state.is_mrx_turn() else "Detectives"
        header = f"Round {state.current_round()} of {len(state.setup.rounds)} - {to_move} to move"
        print(self._color(header.center(70), self.BOLD))
        print("=" * 70)

        content = []
        # Mr X's position is only visible to the player moving him
        mrx_where = state.mrx.location if state.is_mrx_turn() else "?"
        content.append(f"{self._piece(Piece.MRX)} @ {mrx_where}  {self._tickets(state, Piece.MRX)}")
        for detective in state.detectives:
            done = "" if detective.piece in state.remaining else self._color(" [moved]", self.DIM)
            content.append(
                f"{self._piece(detective.piece)} @ {detective.location}  "
                f"{self._tickets(state, detective.piece)}{done}"
            )
        print(self._box("Players", content))

        log_lines = [
            f"{i + 1:2}. {entry}" + (" *" if state.setup.rounds[i] else "")
            for i, entry in enumerate(state.mrx_travel_log)
        ]
        print(self._box("Mr X Travel Log", log_lines or ["(empty)"]))

    def render_message(self, message: str) -> None:
        """Render a message to the user."""
        print(f"\n{message}")

    def render_error(self, error: str) -> None:
        """Render an error message."""
        print(self._color(f"\n[ERROR] {error}", "\033[91m"))

    def render_game_over(self, state: GameState) -> None:
        """Render the game over screen."""
        print("\n" + "=" * 70)
        print(self._color("GAME OVER".center(70), self.BOLD))
        print("=" * 70)
        winners = ", ".join(self._piece(p) for p in sorted(state.winner, key=lambda p: p.name))
        print(f"\nWinner(s): {winners}")
        print(f"Mr X was hiding at {state.mrx.location}")
        print("=" * 70)


# =============================================================================
# Action Prompter (GUI-ready abstraction)
# =============================================================================

@dataclass
class ActionChoice:
    """Represents a choice the player can make."""
    index: int
    description: str
    action: Any  # The move to execute


class ActionPrompter(ABC):
    """Abstract base class for prompting player actions.

    Implement this interface to create a GUI action selector.
    The CLI prompter is provided as TextPrompter.
    """

    @abstractmethod
    def prompt_choice(
        self,
        message: str,
        choices: list[ActionChoice],
    ) -> Optional[ActionChoice]:
        """Prompt the player to make a choice.

        Args:
            message: The prompt message.
            choices: List of available choices.

        Returns:
            The selected choice, or None if the player quits.
        """
        pass


class TextPrompter(ActionPrompter):
    """CLI text-based action prompter."""

    def prompt_choice(
        self,
        message: str,
        choices: list[ActionChoice],
    ) -> Optional[ActionChoice]:
        """Prompt the player to make a choice."""
        print(f"\n{message}")
        print("-" * 50)

        for choice in choices:
            print(f"  {choice.index}. {choice.description}")
        print("  q. Quit")

        print()
        while True:
            try:
                raw = input("Enter choice: ").strip().lower()

                if raw == "q":
                    return None

                idx = int(raw)
                for choice in choices:
                    if choice.index == idx:
                        return choice

                print("Invalid choice. Please try again.")
            except ValueError:
                print("Invalid input. Please enter a number.")
            except (KeyboardInterrupt, EOFError):
                print("\nGame interrupted.")
                return None


# =============================================================================
# Game Driver
# =============================================================================

def sort_moves(moves: frozenset[Move]) -> list[Move]:
    """Order moves for stable display: by piece, then by description."""
    return sorted(moves, key=lambda m: (m.commenced_by.name, str(m)))


class GameDriver(Observer):
    """Main driver for running an interactive game session.

    This class orchestrates the game loop and delegates to:
    - Model for game logic
    - GameRenderer for display
    - ActionPrompter for user input

    To create a GUI version, simply provide different renderer and prompter.
    """

    def __init__(
        self,
        model: Model,
        renderer: Optional[GameRenderer] = None,
        prompter: Optional[ActionPrompter] = None,
    ):
        """Initialize the game driver.

        Args:
            model: The game to drive.
            renderer: The renderer to use (default: TextRenderer).
            prompter: The prompter to use (default: TextPrompter).
        """
        self.model = model
        self.renderer = renderer or TextRenderer()
        self.prompter = prompter or TextPrompter()
        self.finished = False
        self.model.register_observer(self)

    def on_model_changed(self, board: GameState, event: Event) -> None:
        if event is Event.GAME_OVER:
            self.finished = True
            self.renderer.render_game_over(board)

    def run(self) -> Optional[frozenset[Piece]]:
        """Run the main game loop.

        Returns:
            The winning pieces, or None if the players quit early.
        """
        self.renderer.render_message("Starting Scotland Yard!")

        while not self.finished:
            state = self.model.current_board
            self.renderer.render_state(state)

            moves = sort_moves(state.available_moves)
            if not moves:
                # Only reachable for a state that was already won at creation
                self.renderer.render_game_over(state)
                break

            choices = [
                ActionChoice(index=i, description=str(move), action=move)
                for i, move in enumerate(moves, 1)
            ]
            who = "Mr X" if state.is_mrx_turn() else "Detectives"
            choice = self.prompter.prompt_choice(f"{who}, choose a move:", choices)
            if choice is None:
                self.renderer.render_message("Game abandoned.")
                return None

            try:
                self.model.choose_move(choice.action)
            except ScotlandYardError as e:
                self.renderer.render_error(str(e))

        return self.model.current_board.winner


# =============================================================================
# Entry Point
# =============================================================================

def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play a hot-seat game of Scotland Yard in the terminal.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--detectives", type=int, default=MAX_DETECTIVES,
        help=f"Number of detectives ({MIN_DETECTIVES}-{MAX_DETECTIVES})",
    )
    parser.add_argument(
        "--board", type=str, default=None,
        help="Path to a board JSON file (default: bundled board)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for start locations")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI driver."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    graph = None
    try:
        if args.board:
            from data.loader import load_board
            graph = load_board(args.board)
        model = initialize_game(GameConfig(num_detectives=args.detectives), graph, args.seed)
    except (ScotlandYardError, ValueError) as e:
        print(f"Could not start game: {e}", file=sys.stderr)
        return 1

    print("=" * 60)
    print("SCOTLAND YARD - Interactive CLI".center(60))
    print("=" * 60)

    driver = GameDriver(model, renderer=TextRenderer(use_colors=not args.no_color))
    try:
        driver.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted. Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
