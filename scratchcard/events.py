from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .types import Row, Symbol


def _symbol_value(symbol: Symbol) -> Any:
    return symbol.value


@dataclass(frozen=True)
class Event:
    kind = "event"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class TicketStarted(Event):
    """A ticket was bought. Symbols are carried for the presenter to render face down."""

    kind = "ticket_started"
    ticket_id: str
    price: int
    winning_symbols: Tuple[Symbol, ...]
    player_symbols: Tuple[Symbol, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "ticket_id": self.ticket_id,
            "price": self.price,
            "winning_count": len(self.winning_symbols),
            "player_count": len(self.player_symbols),
        }


@dataclass(frozen=True)
class WinningRowUnlocked(Event):
    """Every winning position is revealed; the player row now accepts reveals."""

    kind = "winning_row_unlocked"


@dataclass(frozen=True)
class PositionRevealed(Event):
    kind = "position_revealed"
    row: Row
    index: int
    symbol: Symbol

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "row": self.row.value, "index": self.index, "symbol": _symbol_value(self.symbol)}


@dataclass(frozen=True)
class InstantWin(Event):
    kind = "instant_win"
    symbol: Symbol
    amount: int

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "symbol": _symbol_value(self.symbol), "amount": self.amount}


@dataclass(frozen=True)
class Match(Event):
    kind = "match"
    symbol: Symbol
    amount: int
    highlighted: Tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "symbol": _symbol_value(self.symbol),
            "amount": self.amount,
            "highlighted": list(self.highlighted),
        }


@dataclass(frozen=True)
class NoMatch(Event):
    kind = "no_match"


@dataclass(frozen=True)
class TicketSettled(Event):
    kind = "ticket_settled"
    ticket_id: str
    amount: int
    new_balance: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "ticket_id": self.ticket_id,
            "amount": self.amount,
            "new_balance": self.new_balance,
        }


@dataclass(frozen=True)
class PurchaseRejected(Event):
    kind = "purchase_rejected"
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "reason": self.reason}
