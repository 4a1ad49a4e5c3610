from __future__ import annotations

import threading
from typing import Callable, Optional

from flask import current_app

from scratchcard.engine import EngineSnapshot, OperationResult, TicketEngine
from scratchcard.events import TicketSettled, TicketStarted

from .ledger import TicketLedger

EXTENSION_KEY = "scratchcard"


class GameService:
    """Serialises requests onto the process's single engine and mirrors tickets into the ledger."""

    def __init__(self, engine: TicketEngine, ledger: TicketLedger) -> None:
        self._engine = engine
        self._ledger = ledger
        self._lock = threading.Lock()

    @property
    def engine(self) -> TicketEngine:
        return self._engine

    @property
    def ledger(self) -> TicketLedger:
        return self._ledger

    def run(self, operation: Callable[[TicketEngine], OperationResult]) -> OperationResult:
        with self._lock:
            result = operation(self._engine)
            self._record(result)
            return result

    def current_state(self) -> EngineSnapshot:
        with self._lock:
            return self._engine.current_state()

    def pending_override(self) -> Optional[str]:
        with self._lock:
            return self._engine.source.pending_override

    def force_scenario(self, descriptor: str) -> None:
        with self._lock:
            self._engine.source.force(descriptor)

    def clear_scenario(self) -> None:
        with self._lock:
            self._engine.source.clear_override()

    def _record(self, result: OperationResult) -> None:
        # The engine has already committed; ledger failures are logged and the result returned as is.
        for event in result.events:
            try:
                if isinstance(event, TicketStarted):
                    self._ledger.open_ticket(
                        event.ticket_id,
                        event.price,
                        [s.value for s in event.winning_symbols],
                        [s.value for s in event.player_symbols],
                    )
                elif isinstance(event, TicketSettled):
                    self._ledger.settle_ticket(event.ticket_id, event.amount, event.new_balance)
            except Exception as exc:
                current_app.logger.exception("Ledger write failed for %s: %s", event.kind, exc)


def get_game_service() -> GameService:
    return current_app.extensions[EXTENSION_KEY]
