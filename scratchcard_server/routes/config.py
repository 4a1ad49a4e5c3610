from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..schemas import GameConfigResponse
from ..services.game import get_game_service

bp = Blueprint("config", __name__)


@bp.get("/config")
def get_config():
    engine = get_game_service().engine
    game_settings = current_app.config["GAME_SETTINGS"]
    prize_table = engine.prize_table
    response = GameConfigResponse(
        ticket_prices=list(engine.ticket_prices),
        instant_wins={tag: {str(p): a for p, a in payouts.items()} for tag, payouts in prize_table.instant_wins.items()},
        match_multiplier=prize_table.match_multiplier,
        starting_balance=game_settings.starting_balance,
        scenario_mode=game_settings.scenario_mode,
    )
    return jsonify(response.dict())


@bp.get("/health")
def health():
    return jsonify({"status": "ok"})
