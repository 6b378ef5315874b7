# -*- coding: utf-8 -*-
# backend/weekly_plan.py
#
# Piano settimanale: giorno -> {dish1, dish2}.
# Il lunedì è Ruhetag e non entra mai nella generazione casuale.

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from backend.errors import BadRequest
from backend.models import WEEKDAYS, TodaysSpecial, WeeklyPlan

REST_DAY = "monday"
PLAN_DAYS = tuple(d for d in WEEKDAYS if d != REST_DAY)


def _dish(v: Any) -> str:
    return "" if v is None else str(v).strip()


def generate_days(pool: List[str], rng: random.Random) -> Dict[str, Dict[str, str]]:
    """
    Mescola la lista piatti e assegna due piatti per giorno (mar-dom).
    dish2 è il successivo nella lista mescolata, o quello dopo se coincide
    con dish1 (con un solo piatto i due restano uguali).
    """
    if not pool:
        raise BadRequest("dish pool is empty")
    shuffled = list(pool)
    rng.shuffle(shuffled)
    n = len(shuffled)

    days: Dict[str, Dict[str, str]] = {}
    for i, day in enumerate(PLAN_DAYS):
        dish1 = shuffled[i % n]
        dish2 = shuffled[(i + 1) % n]
        if dish2 == dish1:
            dish2 = shuffled[(i + 2) % n]
        days[day] = {"dish1": dish1, "dish2": dish2}
    return days


def generate_plan(pool: List[str], rng: random.Random, stamp: str) -> WeeklyPlan:
    return WeeklyPlan(active=True, days=generate_days(pool, rng), updated_at=stamp)


def manual_plan(days: Any, stamp: str) -> WeeklyPlan:
    if not isinstance(days, dict):
        raise BadRequest("days must be an object")
    out: Dict[str, Dict[str, str]] = {}
    for k, v in days.items():
        v = v if isinstance(v, dict) else {}
        out[str(k)] = {"dish1": _dish(v.get("dish1")), "dish2": _dish(v.get("dish2"))}
    return WeeklyPlan(active=True, days=out, updated_at=stamp)


def set_plan_day(plan: WeeklyPlan, day: Any, dish1: Any, dish2: Any, stamp: str) -> str:
    # nome giorno solo in minuscolo: non viene confrontato con WEEKDAYS
    key = str(day or "").strip().lower()
    plan.days[key] = {"dish1": _dish(dish1), "dish2": _dish(dish2)}
    plan.updated_at = stamp
    return key


def deactivate(plan: WeeklyPlan, stamp: str) -> None:
    plan.active = False
    plan.updated_at = stamp


def resolve_today(plan: WeeklyPlan, special: TodaysSpecial, today: str) -> Dict[str, Optional[Any]]:
    """Piatto effettivo di oggi: prima il piano attivo, poi il piatto impostato a mano."""
    if plan.active:
        if today == REST_DAY:
            return {"day": today, "dish1": "", "dish2": "", "source": "plan", "restDay": True}
        entry = plan.days.get(today) or {}
        if entry.get("dish1"):
            return {
                "day": today,
                "dish1": entry["dish1"],
                "dish2": entry.get("dish2", ""),
                "source": "plan",
                "restDay": False,
            }
    return {
        "day": today,
        "dish1": special.dish1,
        "dish2": special.dish2,
        "source": "manual",
        "restDay": False,
    }
