from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional, Sequence

from sqlalchemy import case, desc, func

from ..db import session_scope
from ..models import STATUS_IN_PLAY, STATUS_SETTLED, SymbolValue, TicketRecord


class TicketLedger:
    """Audit trail of the tickets played by this process."""

    def open_ticket(
        self,
        ticket_id: str,
        price: int,
        winning_symbols: Sequence[SymbolValue],
        player_symbols: Sequence[SymbolValue],
    ) -> TicketRecord:
        with session_scope() as session:
            record = TicketRecord(id=ticket_id, price=price, status=STATUS_IN_PLAY)
            record.set_symbols(list(winning_symbols), list(player_symbols))
            session.add(record)
            session.flush()
            session.refresh(record)
            session.expunge(record)
            return record

    def settle_ticket(self, ticket_id: str, winnings: int, balance_after: int) -> Optional[TicketRecord]:
        with session_scope() as session:
            record = session.get(TicketRecord, ticket_id)
            if not record:
                return None
            record.status = STATUS_SETTLED
            record.winnings = winnings
            record.balance_after = balance_after
            record.settled_at = dt.datetime.utcnow()
            session.flush()
            session.refresh(record)
            session.expunge(record)
            return record

    def get_ticket(self, ticket_id: str) -> Optional[TicketRecord]:
        with session_scope() as session:
            record = session.get(TicketRecord, ticket_id)
            if record:
                session.expunge(record)
            return record

    def list_tickets(self, limit: Optional[int] = None) -> List[Dict[str, object]]:
        with session_scope() as session:
            query = session.query(TicketRecord).order_by(desc(TicketRecord.created_at))
            if limit:
                query = query.limit(limit)
            return [record.to_dict() for record in query.all()]

    def summary(self) -> Dict[str, int]:
        with session_scope() as session:
            row = session.query(
                func.count(TicketRecord.id).label("ticket_count"),
                func.sum(case((TicketRecord.status == STATUS_SETTLED, 1), else_=0)).label("settled_count"),
                func.sum(TicketRecord.price).label("total_staked"),
                func.sum(func.coalesce(TicketRecord.winnings, 0)).label("total_won"),
                func.sum(case((TicketRecord.winnings > 0, 1), else_=0)).label("winning_count"),
            ).one()
            return {
                "ticket_count": int(row.ticket_count or 0),
                "settled_count": int(row.settled_count or 0),
                "winning_count": int(row.winning_count or 0),
                "total_staked": int(row.total_staked or 0),
                "total_won": int(row.total_won or 0),
            }
