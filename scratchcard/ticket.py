from __future__ import annotations

import secrets
from typing import List, Optional, Sequence, Set, Tuple

from .errors import AlreadyRevealed, InvalidIndex, InvalidPhaseTransition
from .types import Row, Symbol, TicketPhase


class Ticket:
    """One paid play: both symbol rows, their reveal state and the winnings so far."""

    def __init__(
        self,
        price: int,
        winning_symbols: Sequence[Symbol],
        player_symbols: Sequence[Symbol],
        ticket_id: Optional[str] = None,
    ) -> None:
        if not winning_symbols or not player_symbols:
            raise ValueError("Both symbol rows must contain at least one symbol")
        self.ticket_id = ticket_id or secrets.token_hex(8)
        self.price = price
        self.winning_symbols: Tuple[Symbol, ...] = tuple(winning_symbols)
        self.player_symbols: Tuple[Symbol, ...] = tuple(player_symbols)
        self.winning_revealed: List[bool] = [False] * len(self.winning_symbols)
        self.player_revealed: List[bool] = [False] * len(self.player_symbols)
        self.highlighted: Set[int] = set()
        self.winnings = 0
        self.win_found = False
        self.phase = TicketPhase.UNSTARTED

    def start(self) -> None:
        self._require_phase(TicketPhase.UNSTARTED)
        self.phase = TicketPhase.WINNING_REVEAL_PENDING

    @property
    def winning_row_complete(self) -> bool:
        return all(self.winning_revealed)

    @property
    def player_row_complete(self) -> bool:
        return all(self.player_revealed)

    def reveal(self, row: Row, index: int) -> Symbol:
        """Mark one position revealed and return its symbol.

        Raises ``InvalidPhaseTransition`` when the row is locked,
        ``InvalidIndex`` when out of range and ``AlreadyRevealed`` for a
        position that is already shown. Nothing changes when it raises.
        """
        if row is Row.WINNING:
            self._require_phase(TicketPhase.WINNING_REVEAL_PENDING)
            flags, symbols = self.winning_revealed, self.winning_symbols
        else:
            self._require_phase(TicketPhase.PLAYER_REVEAL_PENDING)
            flags, symbols = self.player_revealed, self.player_symbols

        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(flags):
            raise InvalidIndex(f"{row.value} position {index!r} is out of range 0..{len(flags) - 1}")
        if flags[index]:
            raise AlreadyRevealed(f"{row.value} position {index} is already revealed")

        flags[index] = True
        if row is Row.WINNING and self.winning_row_complete:
            self.phase = TicketPhase.PLAYER_REVEAL_PENDING
        return symbols[index]

    def highlight_matches(self, symbol: Symbol) -> List[int]:
        positions = [i for i, s in enumerate(self.winning_symbols) if s == symbol]
        self.highlighted.update(positions)
        return positions

    def add_winnings(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("winnings cannot decrease")
        self.winnings += amount
        self.win_found = True

    def settle(self) -> int:
        self._require_phase(TicketPhase.PLAYER_REVEAL_PENDING)
        if not self.player_row_complete:
            raise InvalidPhaseTransition("ticket cannot settle before every player symbol is revealed")
        self.phase = TicketPhase.SETTLED
        return self.winnings

    def visible_symbols(self, row: Row) -> List[Optional[Symbol]]:
        if row is Row.WINNING:
            flags, symbols = self.winning_revealed, self.winning_symbols
        else:
            flags, symbols = self.player_revealed, self.player_symbols
        return [symbol if shown else None for symbol, shown in zip(symbols, flags)]

    def _require_phase(self, expected: TicketPhase) -> None:
        if self.phase is not expected:
            raise InvalidPhaseTransition(
                f"ticket {self.ticket_id} is {self.phase.value}; expected {expected.value}"
            )
