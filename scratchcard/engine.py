from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .errors import (
    AlreadyRevealed,
    DeclinedOperation,
    InsufficientFunds,
    InvalidIndex,
    InvalidPhaseTransition,
    InvalidPrice,
    MalformedScenario,
    ScratchcardError,
)
from .events import (
    Event,
    InstantWin,
    Match,
    NoMatch,
    PositionRevealed,
    PurchaseRejected,
    TicketSettled,
    TicketStarted,
    WinningRowUnlocked,
)
from .parser import parse_scenario
from .prizes import PrizeTable
from .scenarios.base import ScenarioSource
from .ticket import Ticket
from .types import EnginePhase, Row, Symbol, TicketPhase

_ENGINE_PHASES = {
    TicketPhase.WINNING_REVEAL_PENDING: EnginePhase.AWAITING_WINNING_REVEAL,
    TicketPhase.PLAYER_REVEAL_PENDING: EnginePhase.AWAITING_PLAYER_REVEAL,
    TicketPhase.SETTLED: EnginePhase.SETTLED,
}


def _values(symbols: Sequence[Optional[Symbol]]) -> List[Any]:
    return [s.value if s is not None else None for s in symbols]


@dataclass(frozen=True)
class EngineSnapshot:
    phase: EnginePhase
    balance: int
    ticket_price: int
    ticket_id: Optional[str] = None
    winnings: int = 0
    winning_revealed: Tuple[bool, ...] = ()
    player_revealed: Tuple[bool, ...] = ()
    winning_symbols: Tuple[Optional[Symbol], ...] = ()
    player_symbols: Tuple[Optional[Symbol], ...] = ()
    highlighted: Tuple[int, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "balance": self.balance,
            "ticket_price": self.ticket_price,
            "ticket_id": self.ticket_id,
            "winnings": self.winnings,
            "winning_revealed": list(self.winning_revealed),
            "player_revealed": list(self.player_revealed),
            "winning_symbols": _values(self.winning_symbols),
            "player_symbols": _values(self.player_symbols),
            "highlighted": list(self.highlighted),
        }


@dataclass(frozen=True)
class OperationResult:
    accepted: bool
    state: EngineSnapshot
    events: Tuple[Event, ...] = field(default_factory=tuple)
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "accepted": self.accepted,
            "events": [event.to_dict() for event in self.events],
            "state": self.state.to_dict(),
        }
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


class TicketEngine:
    """Ticket lifecycle for a single player: buy, reveal both rows, settle.

    Operations never raise for player mistakes. They return an
    ``OperationResult`` whose ``reason`` carries the error code, and the
    engine is left exactly as it was.
    """

    def __init__(
        self,
        prize_table: PrizeTable,
        ticket_prices: Sequence[int],
        source: ScenarioSource,
        balance: int = 0,
        max_instant_wins: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not ticket_prices:
            raise ValueError("At least one ticket price must be configured")
        if balance < 0:
            raise ValueError("Starting balance must not be negative")
        prize_table.validate(ticket_prices)
        self._prize_table = prize_table
        self._ticket_prices: Tuple[int, ...] = tuple(ticket_prices)
        self._source = source
        self._balance = balance
        self._price = self._ticket_prices[0]
        self._max_instant_wins = max_instant_wins
        self._ticket: Optional[Ticket] = None
        self._logger = logger or logging.getLogger("scratchcard.engine")

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def ticket_price(self) -> int:
        return self._price

    @property
    def ticket_prices(self) -> Tuple[int, ...]:
        return self._ticket_prices

    @property
    def prize_table(self) -> PrizeTable:
        return self._prize_table

    @property
    def source(self) -> ScenarioSource:
        return self._source

    @property
    def phase(self) -> EnginePhase:
        if self._ticket is None:
            return EnginePhase.IDLE
        return _ENGINE_PHASES[self._ticket.phase]

    def current_state(self) -> EngineSnapshot:
        ticket = self._ticket
        if ticket is None:
            return EngineSnapshot(phase=EnginePhase.IDLE, balance=self._balance, ticket_price=self._price)
        return EngineSnapshot(
            phase=self.phase,
            balance=self._balance,
            ticket_price=ticket.price,
            ticket_id=ticket.ticket_id,
            winnings=ticket.winnings,
            winning_revealed=tuple(ticket.winning_revealed),
            player_revealed=tuple(ticket.player_revealed),
            winning_symbols=tuple(ticket.visible_symbols(Row.WINNING)),
            player_symbols=tuple(ticket.visible_symbols(Row.PLAYER)),
            highlighted=tuple(sorted(ticket.highlighted)),
        )

    def select_ticket_price(self, price: int) -> OperationResult:
        try:
            self._require_idle("select a ticket price")
            if price not in self._ticket_prices:
                raise InvalidPrice(f"{price!r} is not one of {list(self._ticket_prices)}")
        except DeclinedOperation as exc:
            return self._decline(exc)
        self._price = price
        return self._accept()

    def step_ticket_price(self, step: int) -> OperationResult:
        """Move the selection ``step`` places along the price list, stopping at either end."""
        try:
            self._require_idle("change the ticket price")
        except DeclinedOperation as exc:
            return self._decline(exc)
        index = self._ticket_prices.index(self._price) + step
        index = max(0, min(index, len(self._ticket_prices) - 1))
        self._price = self._ticket_prices[index]
        return self._accept()

    def buy_ticket(self) -> OperationResult:
        try:
            self._require_idle("buy a ticket")
            if self._balance < self._price:
                raise InsufficientFunds(f"balance {self._balance} is below ticket price {self._price}")
            descriptor = self._source.next()
            scenario = parse_scenario(descriptor)
            self._check_instant_win_limit(scenario.player_symbols, descriptor)
        except (DeclinedOperation, MalformedScenario) as exc:
            if isinstance(exc, MalformedScenario):
                self._logger.warning("Discarding malformed scenario draw: %s", exc)
            return self._decline(exc, PurchaseRejected(reason=exc.code))

        ticket = Ticket(self._price, scenario.winning_symbols, scenario.player_symbols)
        ticket.start()
        self._balance -= ticket.price
        self._ticket = ticket
        self._logger.info(
            "Ticket %s bought at %s (balance %s): %s", ticket.ticket_id, ticket.price, self._balance, descriptor
        )
        return self._accept(
            TicketStarted(
                ticket_id=ticket.ticket_id,
                price=ticket.price,
                winning_symbols=ticket.winning_symbols,
                player_symbols=ticket.player_symbols,
            )
        )

    def reveal_winning_symbol(self, index: int) -> OperationResult:
        try:
            ticket = self._require_ticket(EnginePhase.AWAITING_WINNING_REVEAL, "reveal a winning symbol")
            symbol = ticket.reveal(Row.WINNING, index)
        except AlreadyRevealed as exc:
            self._logger.debug("Ignoring repeat reveal: %s", exc)
            return self._accept()
        except DeclinedOperation as exc:
            return self._decline(exc)

        events: List[Event] = [PositionRevealed(row=Row.WINNING, index=index, symbol=symbol)]
        if ticket.winning_row_complete:
            events.append(WinningRowUnlocked())
        return self._accept(*events)

    def reveal_player_symbol(self, index: int) -> OperationResult:
        try:
            ticket = self._require_ticket(EnginePhase.AWAITING_PLAYER_REVEAL, "reveal a player symbol")
            symbol = ticket.reveal(Row.PLAYER, index)
        except AlreadyRevealed as exc:
            self._logger.debug("Ignoring repeat reveal: %s", exc)
            return self._accept()
        except DeclinedOperation as exc:
            return self._decline(exc)

        events: List[Event] = [PositionRevealed(row=Row.PLAYER, index=index, symbol=symbol)]
        events.extend(self._resolve(ticket, symbol))
        if ticket.player_row_complete:
            events.append(self._settle(ticket))
        return self._accept(*events)

    def reveal(self, row: Union[Row, str], index: int) -> OperationResult:
        try:
            row = Row(row)
        except ValueError:
            return self._decline(InvalidIndex(f"{row!r} is not a row"))
        if row is Row.WINNING:
            return self.reveal_winning_symbol(index)
        return self.reveal_player_symbol(index)

    def _resolve(self, ticket: Ticket, symbol: Symbol) -> List[Event]:
        if self._prize_table.is_instant_win(symbol):
            amount = self._prize_table.instant_win_amount(symbol, ticket.price)
            ticket.add_winnings(amount)
            return [InstantWin(symbol=symbol, amount=amount)]
        if symbol in ticket.winning_symbols:
            amount = self._prize_table.match_amount(ticket.price)
            ticket.add_winnings(amount)
            highlighted = ticket.highlight_matches(symbol)
            return [Match(symbol=symbol, amount=amount, highlighted=tuple(highlighted))]
        if not ticket.win_found:
            return [NoMatch()]
        return []

    def _settle(self, ticket: Ticket) -> TicketSettled:
        amount = ticket.settle()
        self._balance += amount
        self._ticket = None
        self._logger.info("Ticket %s settled: won %s, balance %s", ticket.ticket_id, amount, self._balance)
        return TicketSettled(ticket_id=ticket.ticket_id, amount=amount, new_balance=self._balance)

    def _check_instant_win_limit(self, player_symbols: Sequence[Symbol], descriptor: str) -> None:
        if self._max_instant_wins is None:
            return
        count = sum(1 for s in player_symbols if self._prize_table.is_instant_win(s))
        if count > self._max_instant_wins:
            raise MalformedScenario(
                f"{descriptor!r} has {count} instant-win symbols; at most {self._max_instant_wins} allowed"
            )

    def _require_idle(self, action: str) -> None:
        if self._ticket is not None:
            raise InvalidPhaseTransition(f"cannot {action} while ticket {self._ticket.ticket_id} is in play")

    def _require_ticket(self, expected: EnginePhase, action: str) -> Ticket:
        if self._ticket is None or self.phase is not expected:
            raise InvalidPhaseTransition(f"cannot {action} while {self.phase.value}")
        return self._ticket

    def _accept(self, *events: Event) -> OperationResult:
        return OperationResult(accepted=True, state=self.current_state(), events=tuple(events))

    def _decline(self, exc: ScratchcardError, *events: Event) -> OperationResult:
        self._logger.debug("Declined (%s): %s", exc.code, exc)
        return OperationResult(accepted=False, state=self.current_state(), events=tuple(events), reason=exc.code)
