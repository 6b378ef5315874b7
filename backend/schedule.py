# -*- coding: utf-8 -*-
# backend/schedule.py
#
# Orari di apertura: calcolo stato aperto/chiuso, range di giorni
# (anche a cavallo della settimana) e parsing "HH:MM-HH:MM".
# Funzioni pure: "now" viene sempre passato dal chiamante.

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from backend.errors import BadRequest
from backend.models import WEEKDAYS, DayHours, HoursOverride, WeeklySchedule

DAY_LABELS = {
    "monday": "Monday",
    "tuesday": "Tuesday",
    "wednesday": "Wednesday",
    "thursday": "Thursday",
    "friday": "Friday",
    "saturday": "Saturday",
    "sunday": "Sunday",
}
REST_DAY_LABEL = "Ruhetag"

DEFAULT_FROM = "11:00"
DEFAULT_TO = "17:00"

_RX_RANGE = re.compile(r"^\s*(\d{1,2}:\d{2})\s*[-–]\s*(\d{1,2}:\d{2})\s*$")


def default_schedule() -> WeeklySchedule:
    """Lunedì Ruhetag, 11:00-17:00 gli altri giorni."""
    days: Dict[str, Optional[DayHours]] = {d: DayHours.opened(DEFAULT_FROM, DEFAULT_TO) for d in WEEKDAYS}
    days["monday"] = DayHours.closed(REST_DAY_LABEL)
    return WeeklySchedule(days=days)


# ----------------- util -----------------
def _to_min(s: Optional[str]) -> Optional[int]:
    try:
        h, m = str(s).split(":")
        return int(h) * 60 + int(m)
    except (TypeError, ValueError):
        return None


def weekday_name(when: date) -> str:
    return WEEKDAYS[when.weekday()]


def normalize_weekday(name: Any) -> Optional[str]:
    s = str(name or "").strip().lower()
    return s if s in WEEKDAYS else None


def weekday_range(start: str, end: str) -> List[str]:
    """Giorni da start a end inclusi, ripartendo da lunedì dopo domenica."""
    i = WEEKDAYS.index(start)
    j = WEEKDAYS.index(end)
    out = [WEEKDAYS[i]]
    while i != j:
        i = (i + 1) % len(WEEKDAYS)
        out.append(WEEKDAYS[i])
    return out


def parse_time_range(text: Any) -> Tuple[str, str]:
    m = _RX_RANGE.match(str(text or ""))
    if not m:
        raise BadRequest("expected HH:MM-HH:MM")
    return m.group(1), m.group(2)


def apply_override(schedule: WeeklySchedule, override: HoursOverride, today: date) -> WeeklySchedule:
    """Sovrappone l'override del giorno (se attivo per oggi) agli orari settimanali."""
    if not override.active or override.date != today.isoformat():
        return schedule
    out = schedule.copy()
    if override.closed:
        out.days[weekday_name(today)] = DayHours.closed()
    else:
        out.days[weekday_name(today)] = DayHours.opened(
            override.start or DEFAULT_FROM, override.end or DEFAULT_TO
        )
    return out


# ----------------- stato -----------------
def compute_status(schedule: WeeklySchedule, now: datetime) -> Dict[str, Any]:
    """
    Stato aperto/chiuso per l'istante `now`:
    {isOpen, currentDay, currentTime, todayHoursLabel, closesAt, nextOpen, schedule}

    Intervallo semiaperto [from, to): al minuto di chiusura risulta chiuso.
    Se oggi è chiuso (o già passato) cerca il prossimo giorno aperto entro 7 giorni;
    se non c'è nessun giorno aperto nextOpen resta None.
    """
    today = weekday_name(now)
    hours = schedule.get(today)
    now_min = now.hour * 60 + now.minute

    is_open = False
    closes_at = None
    next_open = None
    label = REST_DAY_LABEL

    if hours and hours.open and hours.start and hours.end:
        a = _to_min(hours.start)
        b = _to_min(hours.end)
        if a is not None and b is not None:
            label = f"{hours.start} - {hours.end}"
            is_open = a <= now_min < b
            if is_open:
                closes_at = hours.end
            elif now_min < a:
                next_open = hours.start

    if not is_open and next_open is None:
        idx = WEEKDAYS.index(today)
        for i in range(1, len(WEEKDAYS) + 1):
            name = WEEKDAYS[(idx + i) % len(WEEKDAYS)]
            h = schedule.get(name)
            if h and h.open and _to_min(h.start) is not None:
                next_open = f"{DAY_LABELS[name]} {h.start}"
                break

    return {
        "isOpen": is_open,
        "currentDay": today,
        "currentTime": f"{now.hour:02d}:{now.minute:02d}",
        "todayHoursLabel": label,
        "closesAt": closes_at,
        "nextOpen": next_open,
        "schedule": schedule.to_dict(),
    }
