from __future__ import annotations

from flask import Blueprint, jsonify, request

from scratchcard.engine import OperationResult

from ..schemas import PriceSelectionRequest, PriceStepRequest, RevealRequest
from ..services.game import get_game_service

bp = Blueprint("game", __name__)


def _respond(result: OperationResult):
    return jsonify(result.to_dict()), 200 if result.accepted else 400


@bp.get("")
def get_state():
    return jsonify(get_game_service().current_state().to_dict())


@bp.post("/price")
def select_price():
    payload = request.get_json(force=True, silent=True) or {}
    data = PriceSelectionRequest(**payload)
    return _respond(get_game_service().run(lambda engine: engine.select_ticket_price(data.price)))


@bp.post("/price/step")
def step_price():
    payload = request.get_json(force=True, silent=True) or {}
    data = PriceStepRequest(**payload)
    return _respond(get_game_service().run(lambda engine: engine.step_ticket_price(data.step)))


@bp.post("/tickets")
def buy_ticket():
    return _respond(get_game_service().run(lambda engine: engine.buy_ticket()))


@bp.post("/reveal")
def reveal():
    payload = request.get_json(force=True, silent=True) or {}
    data = RevealRequest(**payload)
    return _respond(get_game_service().run(lambda engine: engine.reveal(data.row, data.index)))
