from __future__ import annotations

from flask import Blueprint, jsonify, request

from ..services.game import get_game_service

bp = Blueprint("tickets", __name__)


@bp.get("")
def list_tickets():
    limit = request.args.get("limit", type=int)
    tickets = get_game_service().ledger.list_tickets(limit=limit)
    return jsonify(tickets)


@bp.get("/<ticket_id>")
def get_ticket(ticket_id: str):
    record = get_game_service().ledger.get_ticket(ticket_id)
    if not record:
        return jsonify({"error": "ticket not found"}), 404
    return jsonify(record.to_dict())
