"""
Modello del documento "daily" dello Strandstübchen.

Un unico documento JSON contiene tutto lo stato modificabile dal bot:
piatto del giorno, avviso, override orari, orari settimanali, input
in sospeso, piano settimanale e lista piatti.

Ogni `from_dict` riempie i campi mancanti con i default, così i documenti
salvati da versioni precedenti restano leggibili (niente versioning).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
NOTICE_KINDS = ("info", "warning", "closed")

DEFAULT_DISH_POOL = [
    "Soljanka 'Original'",
    "Wurstgulasch",
    "Panierte Jägerschnitzel",
    "Tote Oma",
    "Kesselgulasch",
    "Senfeier",
]


# ----------------- coercion -----------------
def coerce_bool(v: Any, default: bool = False) -> bool:
    if v is None or v == "":
        return default
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "t", "yes", "ja", "on")
    return bool(v)


def _str(v: Any, default: str = "") -> str:
    if v is None:
        return default
    return str(v).strip()


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _dict(v: Any) -> Dict[str, Any]:
    return v if isinstance(v, dict) else {}


# =============================================================================
#  Orari settimanali
# =============================================================================

@dataclass
class DayHours:
    open: bool = False
    start: Optional[str] = None
    end: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def opened(cls, start: Optional[str], end: Optional[str]) -> "DayHours":
        return cls(open=True, start=start, end=end, reason=None)

    @classmethod
    def closed(cls, reason: Optional[str] = None) -> "DayHours":
        return cls(open=False, start=None, end=None, reason=reason)

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["DayHours"]:
        if not isinstance(raw, dict):
            return None
        # formato legacy: {"open": "11:00", "close": "17:00"}
        legacy_open = raw.get("open")
        if isinstance(legacy_open, str) and ":" in legacy_open:
            return cls.opened(legacy_open.strip(), _opt_str(raw.get("close")))
        if coerce_bool(raw.get("open")):
            return cls.opened(_opt_str(raw.get("from")), _opt_str(raw.get("to")))
        return cls.closed(_opt_str(raw.get("reason")))

    def to_dict(self) -> Dict[str, Any]:
        return {"open": self.open, "from": self.start, "to": self.end, "reason": self.reason}


@dataclass
class WeeklySchedule:
    days: Dict[str, Optional[DayHours]] = field(default_factory=dict)
    updated_at: Optional[str] = None

    def get(self, day: str) -> Optional[DayHours]:
        return self.days.get(day)

    def copy(self) -> "WeeklySchedule":
        return WeeklySchedule.from_dict(self.to_dict())

    @classmethod
    def from_dict(cls, raw: Any) -> "WeeklySchedule":
        raw = _dict(raw)
        return cls(
            days={d: DayHours.from_dict(raw.get(d)) for d in WEEKDAYS},
            updated_at=_opt_str(raw.get("updatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for d in WEEKDAYS:
            h = self.days.get(d)
            out[d] = h.to_dict() if h else None
        out["updatedAt"] = self.updated_at
        return out


# =============================================================================
#  Sotto-documenti
# =============================================================================

@dataclass
class TodaysSpecial:
    dish1: str = ""
    dish2: str = ""
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "TodaysSpecial":
        raw = _dict(raw)
        return cls(_str(raw.get("dish1")), _str(raw.get("dish2")), _opt_str(raw.get("updatedAt")))

    def to_dict(self) -> Dict[str, Any]:
        return {"dish1": self.dish1, "dish2": self.dish2, "updatedAt": self.updated_at}


@dataclass
class Notice:
    active: bool = False
    text: str = ""
    kind: str = "info"
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Notice":
        raw = _dict(raw)
        kind = _str(raw.get("kind"), "info").lower()
        return cls(
            active=coerce_bool(raw.get("active")),
            text=_str(raw.get("text")),
            kind=kind if kind in NOTICE_KINDS else "info",
            updated_at=_opt_str(raw.get("updatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"active": self.active, "text": self.text, "kind": self.kind, "updatedAt": self.updated_at}


@dataclass
class HoursOverride:
    active: bool = False
    date: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    closed: bool = False
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "HoursOverride":
        raw = _dict(raw)
        return cls(
            active=coerce_bool(raw.get("active")),
            date=_opt_str(raw.get("date")),
            start=_opt_str(raw.get("from")),
            end=_opt_str(raw.get("to")),
            closed=coerce_bool(raw.get("closed")),
            updated_at=_opt_str(raw.get("updatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active": self.active,
            "date": self.date,
            "from": self.start,
            "to": self.end,
            "closed": self.closed,
            "updatedAt": self.updated_at,
        }


@dataclass
class PendingTimeInput:
    conversation_id: str
    kind: str = "single"  # single / range
    day: Optional[str] = None
    start_day: Optional[str] = None
    end_day: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["PendingTimeInput"]:
        if not isinstance(raw, dict) or raw.get("conversationId") is None:
            return None
        return cls(
            conversation_id=_str(raw.get("conversationId")),
            kind="range" if _str(raw.get("kind")).lower() == "range" else "single",
            day=_opt_str(raw.get("day")),
            start_day=_opt_str(raw.get("startDay")),
            end_day=_opt_str(raw.get("endDay")),
            created_at=_opt_str(raw.get("createdAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conversationId": self.conversation_id,
            "kind": self.kind,
            "day": self.day,
            "startDay": self.start_day,
            "endDay": self.end_day,
            "createdAt": self.created_at,
        }


@dataclass
class PendingSelection:
    conversation_id: str
    step: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["PendingSelection"]:
        if not isinstance(raw, dict) or raw.get("conversationId") is None:
            return None
        return cls(
            conversation_id=_str(raw.get("conversationId")),
            step=_opt_str(raw.get("step")),
            data=dict(_dict(raw.get("data"))),
            updated_at=_opt_str(raw.get("updatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conversationId": self.conversation_id,
            "step": self.step,
            "data": self.data,
            "updatedAt": self.updated_at,
        }


@dataclass
class WeeklyPlan:
    active: bool = False
    days: Dict[str, Dict[str, str]] = field(default_factory=dict)
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "WeeklyPlan":
        raw = _dict(raw)
        days: Dict[str, Dict[str, str]] = {}
        for k, v in _dict(raw.get("days")).items():
            v = _dict(v)
            days[str(k)] = {"dish1": _str(v.get("dish1")), "dish2": _str(v.get("dish2"))}
        return cls(active=coerce_bool(raw.get("active")), days=days, updated_at=_opt_str(raw.get("updatedAt")))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active": self.active,
            "days": {k: dict(v) for k, v in self.days.items()},
            "updatedAt": self.updated_at,
        }


# =============================================================================
#  Documento completo
# =============================================================================

@dataclass
class DailyState:
    todays_special: TodaysSpecial = field(default_factory=TodaysSpecial)
    notice: Notice = field(default_factory=Notice)
    hours_override: HoursOverride = field(default_factory=HoursOverride)
    weekly_schedule: Optional[WeeklySchedule] = None
    pending_time_input: Optional[PendingTimeInput] = None
    pending_selection: Optional[PendingSelection] = None
    weekly_plan: WeeklyPlan = field(default_factory=WeeklyPlan)
    dish_pool: List[str] = field(default_factory=lambda: list(DEFAULT_DISH_POOL))

    @classmethod
    def from_dict(cls, raw: Any) -> "DailyState":
        raw = _dict(raw)
        schedule = raw.get("weeklySchedule")
        pool = raw.get("dishPool")
        if isinstance(pool, list):
            pool = [_str(p) for p in pool if _str(p)]
        else:
            pool = list(DEFAULT_DISH_POOL)
        return cls(
            todays_special=TodaysSpecial.from_dict(raw.get("todaysSpecial")),
            notice=Notice.from_dict(raw.get("notice")),
            hours_override=HoursOverride.from_dict(raw.get("hoursOverride")),
            weekly_schedule=WeeklySchedule.from_dict(schedule) if isinstance(schedule, dict) else None,
            pending_time_input=PendingTimeInput.from_dict(raw.get("pendingTimeInput")),
            pending_selection=PendingSelection.from_dict(raw.get("pendingSelection")),
            weekly_plan=WeeklyPlan.from_dict(raw.get("weeklyPlan")),
            dish_pool=pool,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "todaysSpecial": self.todays_special.to_dict(),
            "notice": self.notice.to_dict(),
            "hoursOverride": self.hours_override.to_dict(),
            "weeklySchedule": self.weekly_schedule.to_dict() if self.weekly_schedule else None,
            "pendingTimeInput": self.pending_time_input.to_dict() if self.pending_time_input else None,
            "pendingSelection": self.pending_selection.to_dict() if self.pending_selection else None,
            "weeklyPlan": self.weekly_plan.to_dict(),
            "dishPool": list(self.dish_pool),
        }


# =============================================================================
#  MODEL: DailyDocument (store su database, una sola riga)
# =============================================================================

class DailyDocument(db.Model):
    __tablename__ = "daily_document"

    id = db.Column(db.Integer, primary_key=True)
    payload = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime)

    def __repr__(self):
        return f"<DailyDocument {self.id} updated={self.updated_at}>"
