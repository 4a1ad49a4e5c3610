from __future__ import annotations

import datetime as dt
import json
from typing import List, Optional, Union

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()

SymbolValue = Union[int, str]

STATUS_IN_PLAY = "in_play"
STATUS_SETTLED = "settled"


class TicketRecord(Base):
    __tablename__ = "tickets"

    id = Column(String(32), primary_key=True)
    price = Column(Integer, nullable=False)
    winning_symbols = Column(Text, nullable=False)
    player_symbols = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default=STATUS_IN_PLAY)
    winnings = Column(Integer, nullable=True)
    balance_after = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=dt.datetime.utcnow, nullable=False)
    settled_at = Column(DateTime, nullable=True)

    def set_symbols(self, winning: List[SymbolValue], player: List[SymbolValue]) -> None:
        self.winning_symbols = json.dumps(winning)
        self.player_symbols = json.dumps(player)

    def get_winning_symbols(self) -> List[SymbolValue]:
        return json.loads(self.winning_symbols)

    def get_player_symbols(self) -> List[SymbolValue]:
        return json.loads(self.player_symbols)

    def to_dict(self) -> dict:
        settled = self.status == STATUS_SETTLED
        # Symbols stay hidden until the ticket is fully scratched.
        winning: Optional[List[SymbolValue]] = self.get_winning_symbols() if settled else None
        player: Optional[List[SymbolValue]] = self.get_player_symbols() if settled else None
        return {
            "ticket_id": self.id,
            "price": self.price,
            "status": self.status,
            "winning_symbols": winning,
            "player_symbols": player,
            "winnings": self.winnings,
            "balance_after": self.balance_after,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "settled_at": self.settled_at.isoformat() if self.settled_at else None,
        }
