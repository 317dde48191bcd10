"""
Oddball CLI - Command-line interface for the engine.

Usage:
    oddball play [--balls N] [--seed S]     Play the puzzle in the terminal
    oddball serve [--host H] [--port P]     Run the HTTP API
"""

import argparse
import random
import sys

from .config import configure_logging, load_config
from .engine_core import (
    Action,
    Pan,
    PuzzleState,
    apply_action,
    init_session,
)

HELP_TEXT = """Commands:
  pan 0|1                    select the left (0) or right (1) pan
  add <id> [<id> ...]        place balls on the selected pan
  remove <id> [<id> ...]     take balls off the scale
  weigh                      weigh the pans
  guess <id> heavier|lighter name the odd ball
  show                       show the scale and history
  help                       show this help
  quit                       give up"""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Oddball - find the odd ball with a balance scale",
        prog="oddball",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play the puzzle in the terminal")
    play_parser.add_argument("--balls", type=int, default=None, help="Number of balls")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible puzzle")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    try:
        config = load_config()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    configure_logging(config.log_level)

    if args.command == "play":
        cmd_play(args, config)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, config, input_fn=input, output_fn=print):
    """Play an interactive game."""
    try:
        state = init_session(
            config.ball_count if args.balls is None else args.balls,
            rng=random.Random(args.seed),
            baseline=config.baseline_weight,
            offset=config.anomaly_offset,
            min_weighings_to_guess=config.min_weighings_to_guess,
        )
    except ValueError as e:
        output_fn(f"Error: {e}")
        sys.exit(1)

    output_fn(f"One of {len(state.balls)} balls is heavier or lighter than the rest.")
    output_fn(HELP_TEXT)
    output_fn(render(state))

    while state.last_guess_correct is None:
        try:
            line = input_fn("> ")
        except EOFError:
            break
        command = line.split()
        if not command:
            continue
        if command[0] in {"quit", "exit"}:
            break
        state, message = run_command(state, command)
        if message:
            output_fn(message)

    if state.last_guess_correct is not None:
        output_fn("Correct!" if state.last_guess_correct else "Incorrect!")
    return state


def run_command(state: PuzzleState, command: list[str]) -> tuple[PuzzleState, str]:
    """Apply one parsed command line. Returns the new state and a message."""
    name, args = command[0].lower(), command[1:]

    try:
        if name == "pan" and len(args) == 1:
            result = apply_action(state, Action.select_pan(Pan.from_index(int(args[0]))))
            return result.new_state, render(result.new_state)

        if name in {"add", "remove"} and args:
            factory = Action.place_ball if name == "add" else Action.remove_ball
            notes = []
            for ball_id in args:
                result = apply_action(state, factory(int(ball_id)))
                state = result.new_state
                if result.ignored:
                    notes.append(result.ignored)
            return state, "\n".join(notes + [render(state)])

        if name == "weigh" and not args:
            result = apply_action(state, Action.weigh())
            return result.new_state, f"Result: {format_record(result.weighing)}"

        if name == "guess" and len(args) == 2:
            if not state.can_guess:
                remaining = state.min_weighings_to_guess - len(state.history)
                return state, f"Weigh {remaining} more time(s) before guessing"
            result = apply_action(state, Action.submit_guess(int(args[0]), args[1]))
            return result.new_state, result.ignored or ""

        if name == "show" and not args:
            return state, render(state) + "\n" + render_history(state)

        if name == "help":
            return state, HELP_TEXT
    except ValueError as e:
        return state, f"Error: {e}"

    return state, f"Unknown command: {' '.join(command)} (type 'help')"


def format_record(record) -> str:
    return f"{list(record.left_ids)} {record.symbol} {list(record.right_ids)}"


def render(state: PuzzleState) -> str:
    """Render the balls off the scale and both pans."""
    marker = {pan: "*" if state.active_pan is pan else " " for pan in Pan}
    return "\n".join([
        f"Balls: {[b.ball_id for b in state.available_balls]}",
        f"{marker[Pan.LEFT]}Left pan (0):  {list(state.left)}",
        f"{marker[Pan.RIGHT]}Right pan (1): {list(state.right)}",
    ])


def render_history(state: PuzzleState) -> str:
    if not state.history:
        return "No weighings yet"
    lines = ["Previous results:"]
    for i, record in enumerate(state.history, start=1):
        lines.append(f"  {i}. {format_record(record)}")
    return "\n".join(lines)


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("oddball.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
