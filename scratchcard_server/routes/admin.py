from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from scratchcard.errors import MalformedScenario

from ..schemas import LedgerSummaryResponse, ScenarioOverrideRequest
from ..services.game import get_game_service

bp = Blueprint("admin", __name__)


def _require_admin() -> bool:
    api_key = current_app.config.get("ADMIN_API_KEY")
    if api_key:
        provided = request.headers.get("X-Admin-Token")
        if provided != api_key:
            return False
    return True


@bp.before_request
def verify_admin():
    if not _require_admin():
        return jsonify({"error": "unauthorized"}), 401
    return None


@bp.post("/scenario")
def force_scenario():
    payload = request.get_json(force=True, silent=True) or {}
    data = ScenarioOverrideRequest(**payload)
    try:
        get_game_service().force_scenario(data.scenario)
    except MalformedScenario as exc:
        return jsonify({"error": str(exc), "reason": exc.code}), 400
    current_app.logger.info("Next ticket forced to scenario %s", data.scenario)
    return jsonify({"pending_override": data.scenario})


@bp.delete("/scenario")
def clear_scenario():
    get_game_service().clear_scenario()
    return jsonify({"pending_override": None})


@bp.get("/summary")
def summary():
    service = get_game_service()
    response = LedgerSummaryResponse(
        **service.ledger.summary(),
        pending_override=service.pending_override(),
    )
    return jsonify(response.dict())
