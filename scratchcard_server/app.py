from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from scratchcard.service import build_engine

from . import db
from .config import AppSettings, load_settings
from .models import Base
from .routes.admin import bp as admin_bp
from .routes.config import bp as config_bp
from .routes.game import bp as game_bp
from .routes.tickets import bp as tickets_bp
from .services.game import EXTENSION_KEY, GameService
from .services.ledger import TicketLedger


def create_app(settings: Optional[AppSettings] = None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.flask.secret_key
    app.config["DEBUG"] = settings.flask.debug
    app.config["ADMIN_API_KEY"] = settings.admin_api_key
    app.config["GAME_SETTINGS"] = settings.game

    engine = db.bind_engine(settings.database_url)
    Base.metadata.create_all(engine)

    ticket_engine = build_engine(settings.game)
    app.extensions[EXTENSION_KEY] = GameService(ticket_engine, TicketLedger())
    app.logger.info(
        "Scratchcard ready: prices=%s balance=%s mode=%s",
        list(ticket_engine.ticket_prices),
        ticket_engine.balance,
        settings.game.scenario_mode,
    )

    app.register_blueprint(config_bp)
    app.register_blueprint(game_bp, url_prefix="/game")
    app.register_blueprint(tickets_bp, url_prefix="/tickets")
    app.register_blueprint(admin_bp, url_prefix="/admin/api")

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return jsonify({"error": "invalid request", "details": str(exc)}), 400

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return app
