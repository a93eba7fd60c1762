"""
Pocket Arcade CLI - Terminal front end for the engines.

Usage:
    pocketarcade list                         List games
    pocketarcade play <game> [--seed N]       Play a turn-based game
    pocketarcade demo <game> [--seed N]       Run a timed game and print the snapshot

In `play`, type `:new` for a new game and `:quit` to quit.
"""

import argparse
import sys

from .config import configure_logging
from .engine_core import Command
from .games.word_guess import masked_word, wrong_guesses
from .session import Session, SessionManager

PLAYABLE = ("tictactoe", "connect_four", "word_guess", "memory_match")
TIMED = ("snake", "pong")

# Control words, kept apart from single-letter guesses
NEW_GAME = ":new"
QUIT = ":quit"


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Pocket Arcade - six deterministic game engines",
        prog="pocketarcade",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("list", help="List available games")

    play_parser = subparsers.add_parser("play", help="Play a turn-based game in the terminal")
    play_parser.add_argument("game", choices=PLAYABLE)
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible game")

    demo_parser = subparsers.add_parser("demo", help="Run a timed game for a while")
    demo_parser.add_argument("game", choices=TIMED)
    demo_parser.add_argument("--seed", type=int, default=None)
    demo_parser.add_argument("--ticks", type=int, default=100, help="Number of ticks to run")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "list":
        cmd_list(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "demo":
        cmd_demo(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_list(args):
    """List games."""
    from .api import ArcadeService

    for info in ArcadeService().list_games():
        kind = "timed" if info.timed else "turn-based"
        commands = ", ".join(c.value for c in info.commands)
        print(f"{info.name.value:<14} {kind:<11} {commands}")


def cmd_play(args):
    """Interactive terminal play."""
    manager = SessionManager()
    session = manager.create_session(args.game, seed=args.seed)

    try:
        while True:
            print()
            print(render(session))
            if session.is_terminal():
                print(result_line(session))
                print(f"{NEW_GAME} = new game, {QUIT} = quit")

            try:
                text = input("> ").strip()
            except EOFError:
                break
            if text == QUIT:
                break
            if text == NEW_GAME:
                session.new_game()
                continue

            command = parse_input(session.game, text)
            if command is None:
                print("Unrecognised input")
                continue

            result = session.submit(command)
            if not result.accepted:
                print(result.reason)
                continue

            delay = session.engine.pending_delay_ms(session.game_state)
            if delay is not None:
                # Show the pair before it resolves
                print(render(session))
                session.advance(delay)
    finally:
        manager.end_session(session.session_id)


def cmd_demo(args):
    """Run a timed game with no input and print the final snapshot."""
    from .api import ArcadeService, CreateGameRequest

    service = ArcadeService()
    snapshot = service.create_game(CreateGameRequest(game=args.game, seed=args.seed))
    session = service.session_manager.get_session(snapshot.session_id)

    if args.game == "pong":
        session.submit(Command.start())

    for _ in range(args.ticks):
        interval = session.engine.tick_interval_ms(session.game_state)
        if interval is None:
            break
        session.advance(interval)

    print(service.get_snapshot(session.session_id).model_dump_json(indent=2))
    service.end_game(session.session_id)


def parse_input(game, text):
    """Translate a line of terminal input into a command."""
    if game == "word_guess":
        return Command.guess(text) if len(text) == 1 else None
    if not text.isdigit():
        return None
    number = int(text)
    if game == "tictactoe":
        return Command.move(number)
    if game == "connect_four":
        return Command.drop(number)
    if game == "memory_match":
        return Command.flip(number)
    return None


def render(session: Session) -> str:
    """Plain-text picture of the current state."""
    state = session.game_state

    if session.game == "tictactoe":
        cells = [c.value if c else str(i) for i, c in enumerate(state.board)]
        rows = [" | ".join(cells[r * 3:r * 3 + 3]) for r in range(3)]
        return "\n---------\n".join(rows) + f"\n\nTo play: {state.to_play.value}"

    if session.game == "connect_four":
        lines = [" ".join(str(c.value) if c else "." for c in row) for row in state.board]
        lines.append(" ".join(str(i) for i in range(len(state.board[0]))))
        return "\n".join(lines) + f"\n\nPlayer {state.current_player.value} to drop"

    if session.game == "word_guess":
        return (
            f"{' '.join(masked_word(state))}\n"
            f"Tries left: {state.tries_remaining}   Misses: {' '.join(wrong_guesses(state))}"
        )

    if session.game == "memory_match":
        shown = []
        for i, card in enumerate(state.cards):
            shown.append(f"{i:>2}:{card.value if card.face_up or card.matched else '??'}")
        rows = [" ".join(shown[r:r + 4]) for r in range(0, len(shown), 4)]
        return "\n".join(rows) + f"\n\nMoves: {state.moves}"

    return str(session.view())


def result_line(session: Session) -> str:
    outcome = session.engine.outcome(session.game_state)
    if outcome.kind.value == "win":
        return f"Winner: {outcome.player}" if outcome.player else "You won!"
    if outcome.kind.value == "draw":
        return "Draw!"
    if session.game == "word_guess":
        return f"Game over! The word was {session.game_state.word}"
    return "Game over!"


if __name__ == "__main__":
    main()
