from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Callable, List, Optional, TextIO

from .config import GameSettings, load_config
from .engine import OperationResult, TicketEngine
from .errors import MalformedScenario
from .events import (
    Event,
    InstantWin,
    Match,
    NoMatch,
    PurchaseRejected,
    TicketSettled,
    TicketStarted,
    WinningRowUnlocked,
)
from .gamedata import GameData, build_prize_table, load_game_data
from .prizes import PrizeTable
from .scenarios import RandomScenarioSource, ScenarioPool, ScenarioSource


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


def format_amount(pence: int) -> str:
    return f"£{pence / 100:.2f}"


def build_scenario_source(settings: GameSettings, game_data: GameData, prize_table: PrizeTable) -> ScenarioSource:
    rng = random.Random(settings.scenario_seed)
    if settings.scenario_mode == "random":
        draw = settings.random_draw
        return RandomScenarioSource(
            prize_table.instant_win_tags,
            rng=rng,
            number_range=draw.number_range,
            instant_win_chance=draw.instant_win_chance,
            max_instant_wins=draw.max_instant_wins,
        )
    if not game_data.scenarios:
        raise RuntimeError("SCENARIO_MODE=pool but the game data lists no scenarios.")
    return ScenarioPool(game_data.scenarios, rng=rng)


def build_engine(settings: GameSettings, logger: Optional[logging.Logger] = None) -> TicketEngine:
    game_data = load_game_data(settings.data_source, settings.data_timeout_seconds)
    prize_table = build_prize_table(game_data, settings.max_instant_wins)
    source = build_scenario_source(settings, game_data, prize_table)
    return TicketEngine(
        prize_table,
        game_data.ticket_prices,
        source,
        balance=settings.starting_balance,
        max_instant_wins=settings.max_instant_wins,
        logger=logger,
    )


def describe_event(event: Event) -> Optional[str]:
    if isinstance(event, TicketStarted):
        return f"Ticket {event.ticket_id} bought for {format_amount(event.price)}."
    if isinstance(event, WinningRowUnlocked):
        return "Winning coins revealed; player coins unlocked."
    if isinstance(event, InstantWin):
        return f"You found an Instant Win: {event.symbol}! You win!"
    if isinstance(event, Match):
        return f"You matched {event.symbol}! You win!"
    if isinstance(event, NoMatch):
        return "No match yet..."
    if isinstance(event, TicketSettled):
        if event.amount > 0:
            return f"Congrats! You Won: {format_amount(event.amount)}!"
        return "You Lost! Better luck next time!"
    if isinstance(event, PurchaseRejected):
        return f"Purchase rejected: {event.reason}"
    return None


def play_ticket(engine: TicketEngine, emit: Callable[[str], None]) -> bool:
    """Buy one ticket and reveal every position in order. Returns False if the purchase was declined."""
    results: List[OperationResult] = [engine.buy_ticket()]
    if not results[0].accepted:
        _narrate(results, emit)
        return False
    ticket_state = results[0].state
    for index in range(len(ticket_state.winning_revealed)):
        results.append(engine.reveal_winning_symbol(index))
    for index in range(len(ticket_state.player_revealed)):
        results.append(engine.reveal_player_symbol(index))
    _narrate(results, emit)
    return True


def _narrate(results: List[OperationResult], emit: Callable[[str], None]) -> None:
    for result in results:
        for event in result.events:
            line = describe_event(event)
            if line:
                emit(line)


def run_play(args: argparse.Namespace, engine: TicketEngine, out: Optional[TextIO] = None) -> int:
    stream = out or sys.stdout

    def emit(line: str) -> None:
        print(line, file=stream)

    if args.price is not None:
        selected = engine.select_ticket_price(args.price)
        if not selected.accepted:
            emit(f"Cannot select price {args.price}: {selected.reason}")
            return 2
    if args.scenario:
        try:
            engine.source.force(args.scenario)
        except MalformedScenario as exc:
            emit(f"Cannot force scenario: {exc}")
            return 2

    played = 0
    for _ in range(args.tickets):
        if not play_ticket(engine, emit):
            break
        played += 1
    emit(f"Played {played} ticket(s). Balance: {format_amount(engine.balance)}")
    return 0 if played == args.tickets else 1


def run_serve(args: argparse.Namespace) -> int:
    from scratchcard_server.app import create_app

    app = create_app()
    app.run(host=args.host, port=args.port, debug=app.config.get("DEBUG", False))
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scratchcard ticket engine")
    parser.add_argument("--env-file", type=str, default=None, help="Path to .env file with settings")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging (default INFO)."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP game service.")
    serve.add_argument("--host", type=str, default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)

    play = subparsers.add_parser("play", help="Buy and fully reveal tickets in the terminal.")
    play.add_argument("--tickets", type=int, default=1, help="Number of tickets to play.")
    play.add_argument("--price", type=int, default=None, help="Ticket price in pence.")
    play.add_argument("--scenario", type=str, default=None, help="Force the first ticket's scenario.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_config(args.env_file)
    configure_logging(args.verbose)
    logger = logging.getLogger("scratchcard.engine")

    try:
        if args.command == "serve":
            return run_serve(args)
        return run_play(args, build_engine(settings, logger=logger))
    except KeyboardInterrupt:
        print("Scratchcard stopped by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
