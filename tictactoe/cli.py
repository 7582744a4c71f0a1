"""
Tic-Tac-Toe CLI - Command-line interface for the engine.

Usage:
    tictactoe play [--mode pvp|pvai]    Play in the terminal
    tictactoe serve                     Run the HTTP API
"""

import argparse
import logging
import sys
import time

from . import config
from .engine_core.state import GameMode, GamePhase, StateSnapshot
from .logging_setup import setup_logging
from .session import GameEngine, MoveOutcome

logger = logging.getLogger(__name__)

MODE_CHOICES = {"pvp": GameMode.PVP, "pvai": GameMode.PVAI}

REJECTION_MESSAGES = {
    "cell_occupied": "That cell is already taken.",
    "game_over": "The game is over. Press r to restart or m to change mode.",
    "ai_busy": "Wait for the AI to move.",
    "invalid_index": "Pick a cell from 1 to 9.",
    "no_active_game": "Choose a game mode first.",
    "not_ai_turn": "It is not the AI's turn.",
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tic-Tac-Toe - two players or against the AI",
        prog="tictactoe",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--mode", choices=sorted(MODE_CHOICES), help="Skip the mode menu")
    play_parser.add_argument("--seed", type=int, default=config.AI_SEED, help="Seed for the AI's random picks")
    play_parser.add_argument(
        "--ai-delay-ms", type=int, default=config.AI_DELAY_MS,
        help="Pause before the AI moves (cosmetic)",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    if args.command == "play":
        # Keep engine chatter out of the game screen unless asked for
        setup_logging(level=args.log_level or "WARNING")
        cmd_play(args)
    elif args.command == "serve":
        setup_logging(level=args.log_level)
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def render_board(snapshot: StateSnapshot) -> str:
    """Board as text; empty cells show their 1-9 key."""
    cells = [
        cell or str(i + 1)
        for i, cell in enumerate(snapshot.cells)
    ]
    rows = [f" {cells[r]} | {cells[r + 1]} | {cells[r + 2]} " for r in (0, 3, 6)]
    return "\n---+---+---\n".join(rows)


def render(snapshot: StateSnapshot) -> str:
    lines = [
        "",
        f"{snapshot.mode_label}    Turn: {snapshot.turn_count}",
        "",
        render_board(snapshot),
        "",
        snapshot.status_message,
    ]
    return "\n".join(lines)


def ask(read, prompt: str) -> str:
    """Read one command; end of input or Ctrl-C counts as quit."""
    try:
        return read(prompt).strip().lower()
    except (EOFError, KeyboardInterrupt):
        print()
        return "q"


def prompt_mode(read=input) -> GameMode | None:
    """Ask for a mode; None means quit."""
    while True:
        choice = ask(read, "Mode - 1: Player vs Player, 2: Player vs AI, q: quit > ")
        if choice in ("1", "pvp"):
            return GameMode.PVP
        if choice in ("2", "pvai", "ai"):
            return GameMode.PVAI
        if choice in ("q", "quit"):
            return None
        print("Please enter 1, 2 or q.")


def parse_cell(text: str) -> int | None:
    """User's 1-9 key to a 0-8 index; None if not a number."""
    try:
        return int(text) - 1
    except ValueError:
        return None


def cmd_play(args, read=input, sleep=time.sleep):
    """Interactive terminal game."""
    engine = GameEngine(seed=args.seed)

    mode = MODE_CHOICES.get(args.mode) if args.mode else prompt_mode(read)
    if mode is None:
        return
    engine.start_session(mode)
    print(render(engine.snapshot()))

    while True:
        command = ask(read, "Cell 1-9, r: restart, m: change mode, q: quit > ")

        if command in ("q", "quit"):
            return
        if command in ("r", "restart"):
            outcome = engine.reset_session()
        elif command in ("m", "mode"):
            engine.change_mode()
            mode = prompt_mode(read)
            if mode is None:
                return
            outcome = engine.start_session(mode)
        else:
            index = parse_cell(command)
            if index is None:
                print(REJECTION_MESSAGES["invalid_index"])
                continue
            outcome = engine.apply_move(index)

        report(outcome)

        if outcome.accepted and outcome.snapshot.phase == GamePhase.AI_THINKING:
            sleep(max(args.ai_delay_ms, 0) / 1000.0)
            outcome = engine.play_ai_turn()
            print(f"AI plays {outcome.ai_move + 1}.")
            report(outcome)


def report(outcome: MoveOutcome):
    if outcome.rejected:
        print(REJECTION_MESSAGES.get(outcome.reason.value, "Move rejected."))
        return
    print(render(outcome.snapshot))


def cmd_serve(args):
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    logger.info("Serving on http://%s:%d (env=%s)", args.host, args.port, config.TICTACTOE_ENV)
    uvicorn.run("tictactoe.api.app:create_app", factory=True, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
