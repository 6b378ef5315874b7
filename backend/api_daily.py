# -*- coding: utf-8 -*-
# backend/api_daily.py — API del bot (piatto del giorno, avvisi, orari, piano settimanale)
#
# Le GET sono pubbliche; ogni POST richiede il secret condiviso
# (campo "secret" nel body, header X-Bot-Secret oppure ?secret=).
from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Blueprint, jsonify, request

from backend.api import daily_manager
from backend.models import coerce_bool

api_daily = Blueprint("api_daily", __name__, url_prefix="/api/daily")


# ---------- Utils ----------
def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _secret(data: Dict[str, Any]) -> Optional[str]:
    tok = data.get("secret") or request.headers.get("X-Bot-Secret") or request.args.get("secret")
    return str(tok) if tok is not None else None


def _opt(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


# ---------- Documento completo ----------
@api_daily.get("")
@api_daily.get("/")
def get_daily():
    return jsonify(daily_manager().read().to_dict())


# ---------- Piatto del giorno ----------
@api_daily.post("/tagesgericht")
def set_tagesgericht():
    data = _body()
    special = daily_manager().set_special(_secret(data), _opt(data.get("dish1")) or "", _opt(data.get("dish2")))
    return jsonify({"ok": True, "todaysSpecial": special.to_dict()})


# ---------- Avviso ----------
@api_daily.post("/hinweis")
def set_hinweis():
    data = _body()
    notice = daily_manager().set_notice(
        _secret(data),
        text=_opt(data.get("text")) or "",
        kind=_opt(data.get("kind")),
        active=None if data.get("active") is None else coerce_bool(data.get("active"), True),
    )
    return jsonify({"ok": True, "notice": notice.to_dict()})


# ---------- Override orari di una data ----------
@api_daily.post("/oeffnungszeiten")
def set_oeffnungszeiten():
    data = _body()
    override = daily_manager().set_hours_override(
        _secret(data),
        date=_opt(data.get("date")),
        start=_opt(data.get("from")),
        end=_opt(data.get("to")),
        closed=coerce_bool(data.get("closed"), False),
    )
    return jsonify({"ok": True, "hoursOverride": override.to_dict()})


# ---------- Orari settimanali ----------
@api_daily.get("/zeiten")
def get_zeiten():
    mgr = daily_manager()
    schedule, is_default = mgr.schedule_of(mgr.read())
    return jsonify({"ok": True, "weeklySchedule": schedule.to_dict(), "isDefault": is_default})


@api_daily.post("/zeiten")
def set_zeiten():
    data = _body()
    day, schedule = daily_manager().set_weekday(
        _secret(data),
        data.get("day"),
        is_open=coerce_bool(data.get("open"), True),
        start=_opt(data.get("from")),
        end=_opt(data.get("to")),
        reason=_opt(data.get("reason")),
    )
    return jsonify({
        "ok": True,
        "day": day,
        "entry": schedule.days[day].to_dict(),
        "weeklySchedule": schedule.to_dict(),
    })


@api_daily.post("/zeiten/bereich")
def set_zeiten_bereich():
    data = _body()
    days, schedule = daily_manager().set_weekday_range(
        _secret(data),
        data.get("startDay"),
        data.get("endDay"),
        is_open=coerce_bool(data.get("open"), True),
        start=_opt(data.get("from")),
        end=_opt(data.get("to")),
        reason=_opt(data.get("reason")),
    )
    return jsonify({"ok": True, "days": days, "weeklySchedule": schedule.to_dict()})


# ---------- Input orari in sospeso (dialogo a due passi) ----------
@api_daily.get("/zeiten/pending")
def get_zeiten_pending():
    pending = daily_manager().get_pending()
    return jsonify({"ok": True, "pending": pending.to_dict() if pending else None})


@api_daily.post("/zeiten/pending")
def set_zeiten_pending():
    data = _body()
    pending = daily_manager().set_pending(
        _secret(data),
        data.get("conversationId"),
        kind=_opt(data.get("kind")) or "single",
        day=_opt(data.get("day")),
        start_day=_opt(data.get("startDay")),
        end_day=_opt(data.get("endDay")),
        clear=coerce_bool(data.get("clear"), False),
    )
    return jsonify({"ok": True, "pending": pending.to_dict() if pending else None})


@api_daily.post("/zeiten/apply")
def apply_zeiten_pending():
    data = _body()
    days, start, end, schedule = daily_manager().apply_pending(
        _secret(data),
        data.get("conversationId"),
        data.get("text") or "",
    )
    return jsonify({"ok": True, "days": days, "from": start, "to": end, "weeklySchedule": schedule.to_dict()})


# ---------- Reset avviso / override ----------
@api_daily.post("/reset")
def reset_daily():
    data = _body()
    want_notice = data.get("notice")
    want_override = data.get("hoursOverride", data.get("override"))
    if want_notice is None and want_override is None:
        notice, override = True, True
    else:
        notice, override = coerce_bool(want_notice, False), coerce_bool(want_override, False)
    done = daily_manager().reset(_secret(data), notice=notice, override=override)
    return jsonify({"ok": True, "reset": done})


# ---------- Piano settimanale ----------
@api_daily.get("/gerichte")
def get_gerichte():
    return jsonify({"ok": True, "dishes": daily_manager().dishes()})


@api_daily.get("/wochenplan")
def get_wochenplan():
    return jsonify({"ok": True, "weeklyPlan": daily_manager().get_plan().to_dict()})


@api_daily.post("/wochenplan")
def set_wochenplan():
    data = _body()
    mgr = daily_manager()
    if data.get("days") is not None:
        plan = mgr.set_plan(_secret(data), data.get("days"))
    else:
        plan = mgr.generate_plan(_secret(data))
    return jsonify({"ok": True, "weeklyPlan": plan.to_dict()})


@api_daily.post("/wochenplan/tag")
def set_wochenplan_tag():
    data = _body()
    day, plan = daily_manager().set_plan_day(_secret(data), data.get("day"), data.get("dish1"), data.get("dish2"))
    return jsonify({"ok": True, "day": day, "weeklyPlan": plan.to_dict()})


@api_daily.post("/wochenplan/deaktivieren")
def deactivate_wochenplan():
    data = _body()
    plan = daily_manager().deactivate_plan(_secret(data))
    return jsonify({"ok": True, "weeklyPlan": plan.to_dict()})


# ---------- Selezione interattiva ----------
@api_daily.get("/selection")
def get_selection():
    sel = daily_manager().get_selection()
    return jsonify({"ok": True, "selection": sel.to_dict() if sel else None})


@api_daily.post("/selection")
def set_selection():
    data = _body()
    extra = data.get("data")
    sel = daily_manager().set_selection(
        _secret(data),
        data.get("conversationId"),
        step=_opt(data.get("step")),
        data=extra if isinstance(extra, dict) else None,
        clear=coerce_bool(data.get("clear"), False),
    )
    return jsonify({"ok": True, "selection": sel.to_dict() if sel else None})


# ---------- Piatto effettivo di oggi ----------
@api_daily.get("/heute")
def get_heute():
    return jsonify({"ok": True, **daily_manager().today_dish()})
