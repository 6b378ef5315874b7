# -*- coding: utf-8 -*-
# backend/api.py
from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from backend.static_data import INFO, MENU

api = Blueprint("api", __name__, url_prefix="/api")


def daily_manager():
    return current_app.extensions["daily_state"]


# ----------------------------------------------------------
#  Menu (filtrabile per stagione)
#    GET /api/menu?season=winter|summer
# ----------------------------------------------------------
@api.get("/menu")
def get_menu():
    season = (request.args.get("season") or "").strip().lower()
    if season and season in MENU:
        return jsonify({"season": season, "items": MENU[season]})
    return jsonify({"winter": MENU["winter"], "summer": MENU["summer"]})


# ----------------------------------------------------------
#  Stato aperto/chiuso
#    GET /api/status
# ----------------------------------------------------------
@api.get("/status")
def get_status():
    status = daily_manager().status()
    status["todayHours"] = status["todayHoursLabel"]
    status["openingHours"] = status["schedule"]
    return jsonify(status)


@api.get("/info")
def get_info():
    return jsonify(INFO)


@api.get("/health")
def health():
    return jsonify({
        "ok": True,
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    })
