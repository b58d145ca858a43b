# Area: Shared
"""
trivia_duel.cli - Command-line interface
========================================

Plays a game from the terminal. Messages that would go into the
conversation are printed to stdout as JSON lines; paste a printed
payload back in to play the other side.

Usage:
    python -m trivia_duel new --category 9 --mode 0
    python -m trivia_duel show --payload '?g=...'
    python -m trivia_duel answer --payload '?g=...' 2
    python -m trivia_duel new --category 9 --mode 1 --answers 0 3 1 2 0 1
    python -m trivia_duel nudge --payload '?g=...'

Configuration comes from --config, a .env file or TRIVIA_* environment
variables (see trivia_duel.config).
"""

import argparse
import json
import logging
import sys
import time
from datetime import timedelta
from typing import Any, Dict, List, Optional

from ._cache import RecentCategories, ResponseCache, SQLiteStore
from ._shared import log_and_terminate, setup_logging
from .config import load_config, validate_config
from .errors import ConfigError, GameEncodingError, QuestionSourceError
from .question_source import OpenTDBQuestionSource
from .session import GameSession, Screen, TurnAction


class PrintTransport:
    """Prints outgoing messages to stdout instead of a conversation."""

    def insert(self, payload: str, caption: Optional[str]) -> None:
        self._emit("insert", payload, caption)

    def send(self, payload: str, caption: Optional[str]) -> None:
        self._emit("send", payload, caption)

    @staticmethod
    def _emit(action: str, payload: str, caption: Optional[str]) -> None:
        print(json.dumps({"action": action, "caption": caption, "payload": payload}))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="trivia_duel",
        description="Trivia duel - play a two-player trivia game over messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m trivia_duel new --category 9 --mode 0
  python -m trivia_duel show --payload '?g=...'
  echo '?g=...' | python -m trivia_duel answer --payload - 2
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--participant", type=str, help="Local participant id")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a game and stage the challenge")
    new.add_argument("--category", type=str, default="any", help="Category id")
    new.add_argument("--mode", type=int, default=0, help="0 = turn-based, 1 = rapid-fire")
    new.add_argument("--answers", type=int, nargs="*", default=[],
                     help="Options to play right away (rapid-fire)")

    show = sub.add_parser("show", help="Show the game in a payload")
    show.add_argument("--payload", type=str, help="Message payload, '-' for stdin")

    answer = sub.add_parser("answer", help="Answer questions in a received game")
    answer.add_argument("--payload", type=str, required=True, help="Message payload, '-' for stdin")
    answer.add_argument("options", type=int, nargs="+", help="Option indices to answer with")

    nudge = sub.add_parser("nudge", help="Remind the opponent about a game")
    nudge.add_argument("--payload", type=str, required=True, help="Message payload, '-' for stdin")

    return parser.parse_args(argv)


def read_payload(value: Optional[str]) -> Optional[str]:
    if value == "-":
        return sys.stdin.read().strip()
    return value


def build_session(config: Dict[str, Any]) -> GameSession:
    """Wire a session to the SQLite cache, the question bank and stdout."""
    store = SQLiteStore(config["cache_path"])
    return GameSession(
        participant_id=config["participant_id"],
        transport=PrintTransport(),
        cache=ResponseCache(store),
        question_source=OpenTDBQuestionSource(
            base_url=config["api_url"],
            timeout=float(config["request_timeout"]),
        ),
        recent=RecentCategories(store),
        nudge_delay=timedelta(seconds=int(config["nudge_delay_seconds"])),
    )


def play(session: GameSession, options: List[int]) -> None:
    """
    Answer the open game's questions with the given options in order.

    Stops as soon as the game is sent, waiting or refuses an answer.
    """
    game = session.game
    if game is None:
        return

    if session.screen is Screen.QUESTION and game.mode.time_limit is not None:
        session.start_clock()
    last = time.monotonic()

    for option in options:
        if session.screen is not Screen.QUESTION:
            break
        # A round both players answered is revealed before the next one
        if game.all_players_answered and not session.reveal():
            break

        action = session.answer(option)
        now = time.monotonic()
        session.tick(now - last)
        last = now
        if session.screen is not Screen.QUESTION:
            break

        if action is TurnAction.REVEAL:
            session.reveal()
        elif action is not TurnAction.IGNORED:
            break
        else:
            print(f"Option {option} was not accepted", file=sys.stderr)
            break


def print_summary(session: GameSession) -> None:
    print(json.dumps(session.summary(), indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
        if args.participant:
            config["participant_id"] = args.participant
        validate_config(config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Set TRIVIA_PARTICIPANT_ID or pass --participant.", file=sys.stderr)
        return 1

    setup_logging(config.get("log_file"), logging.DEBUG if args.verbose else logging.INFO)
    session = build_session(config)

    try:
        if args.command == "new":
            session.start_game(args.category, args.mode)
            if session.game_queue:
                session.open()
                play(session, args.answers)
            return 0

        if args.command == "show":
            payload = read_payload(args.payload)
            session.open(payload)
            if session.game is None:
                print(json.dumps({"recent_categories": session.recent.list()}))
                return 0
            print_summary(session)
            return 0

        if args.command == "answer":
            payload = read_payload(args.payload)
            if session.open(payload) is Screen.CATEGORY_SELECT:
                print("Error: payload holds no game", file=sys.stderr)
                return 1
            play(session, args.options)
            print_summary(session)
            return 0

        if args.command == "nudge":
            session.open(read_payload(args.payload))
            if not session.nudge():
                print("Nudge not available yet", file=sys.stderr)
                return 1
            return 0
    except (QuestionSourceError, GameEncodingError) as e:
        log_and_terminate(e)

    return 1
