"""
Backend package bootstrap: app factory dello Strandstübchen.

Configurazione da variabili d'ambiente (sovrascrivibile con `test_config`):
  BOT_SECRET       secret condiviso per le POST del bot
  DAILY_DATA_FILE  file JSON del documento daily (default data/daily.json)
  DATABASE_URL     se impostato il documento sta nella tabella daily_document
  TIMEZONE         fuso orario del locale (default Europe/Berlin)
  LOG_LEVEL        livello di logging (default INFO)
"""

from __future__ import annotations

import logging
import os
import random
from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

__all__ = ["create_app"]
__version__ = "1.0.0"

DEFAULT_BOT_SECRET = "strandstuebchen-bot"

logger = logging.getLogger(__name__)


def _build_store(app: Flask):
    from backend.models import db
    from backend.store import JsonFileStore, SqlStore

    store = app.config.get("DAILY_STORE")
    if store is not None:
        return store
    if app.config.get("SQLALCHEMY_DATABASE_URI"):
        db.init_app(app)
        with app.app_context():
            db.create_all()
        return SqlStore()
    return JsonFileStore(app.config["DAILY_DATA_FILE"])


def create_app(test_config: Optional[Dict[str, Any]] = None) -> Flask:
    from backend.api import api
    from backend.api_daily import api_daily
    from backend.daily import DailyStateManager
    from backend.errors import DailyError

    app = Flask(__name__)
    app.config.from_mapping(
        BOT_SECRET=os.getenv("BOT_SECRET", "").strip(),
        DAILY_DATA_FILE=os.getenv("DAILY_DATA_FILE", os.path.join("data", "daily.json")),
        SQLALCHEMY_DATABASE_URI=os.getenv("DATABASE_URL") or None,
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        TIMEZONE=os.getenv("TIMEZONE", "Europe/Berlin"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
    )
    if test_config:
        app.config.update(test_config)
    app.json.ensure_ascii = False
    app.json.sort_keys = False  # giorni in ordine lun-dom

    logging.basicConfig(
        level=str(app.config["LOG_LEVEL"]).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if not app.config["BOT_SECRET"]:
        logger.warning("BOT_SECRET not set, using the built-in fallback secret")
        app.config["BOT_SECRET"] = DEFAULT_BOT_SECRET

    tz = ZoneInfo(app.config["TIMEZONE"])
    clock = app.config.get("DAILY_CLOCK") or (lambda: datetime.now(tz))
    rng = app.config.get("DAILY_RANDOM") or random.Random()

    app.extensions["daily_state"] = DailyStateManager(
        store=_build_store(app),
        secret=app.config["BOT_SECRET"],
        clock=clock,
        rng=rng,
    )

    app.register_blueprint(api)
    app.register_blueprint(api_daily)

    @app.errorhandler(DailyError)
    def handle_daily_error(e: DailyError):
        return jsonify({"ok": False, "error": e.message}), e.status

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        if not request.path.startswith("/api/"):
            return e
        return jsonify({"ok": False, "error": (e.name or "error").lower().replace(" ", "_")}), e.code

    return app
