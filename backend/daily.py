# -*- coding: utf-8 -*-
# backend/daily.py
#
# Gestione del documento daily: letture (con scadenza dell'override del giorno)
# e tutte le modifiche richieste dal bot. Ogni modifica passa da authorize()
# e poi da load -> modifica in memoria -> save del documento intero.

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from backend import schedule as sched
from backend import weekly_plan
from backend.errors import BadRequest, Unauthorized
from backend.models import (
    DailyState,
    DayHours,
    HoursOverride,
    Notice,
    NOTICE_KINDS,
    PendingSelection,
    PendingTimeInput,
    TodaysSpecial,
    WeeklyPlan,
    WeeklySchedule,
)
from backend.store import DailyStore

logger = logging.getLogger(__name__)


def secret_matches(supplied: Optional[str], configured: str) -> bool:
    return supplied is not None and supplied == configured


class DailyStateManager:
    def __init__(
        self,
        store: DailyStore,
        secret: str,
        clock: Callable[[], datetime],
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.secret = secret
        self.clock = clock
        self.rng = rng or random.Random()

    # ----------------- helpers -----------------
    def now(self) -> datetime:
        return self.clock()

    def _stamp(self) -> str:
        return self.now().isoformat(timespec="seconds")

    def authorize(self, secret: Optional[str]) -> None:
        if not secret_matches(secret, self.secret):
            logger.warning("rejected daily mutation: invalid secret")
            raise Unauthorized("unauthorized")

    def _load_for_update(self, secret: Optional[str]) -> DailyState:
        self.authorize(secret)
        return self.store.load()

    def _save(self, state: DailyState, what: str) -> None:
        self.store.save(state)
        logger.info("daily state updated: %s", what)

    @staticmethod
    def schedule_of(state: DailyState) -> Tuple[WeeklySchedule, bool]:
        """Orari salvati, oppure quelli di default (secondo valore True)."""
        if state.weekly_schedule is None:
            return sched.default_schedule(), True
        return state.weekly_schedule, False

    # ----------------- letture -----------------
    def read(self) -> DailyState:
        """Documento completo; disattiva (e salva) l'override se non è di oggi."""
        state = self.store.load()
        ov = state.hours_override
        today = self.now().date().isoformat()
        if ov.active and ov.date != today:
            ov.active = False
            ov.updated_at = self._stamp()
            self.store.save(state)
            logger.info("hours override for %s expired", ov.date)
        return state

    def status(self) -> Dict[str, Any]:
        state = self.read()
        now = self.now()
        schedule, _ = self.schedule_of(state)
        schedule = sched.apply_override(schedule, state.hours_override, now.date())
        return sched.compute_status(schedule, now)

    def today_dish(self) -> Dict[str, Any]:
        state = self.read()
        today = sched.weekday_name(self.now())
        return weekly_plan.resolve_today(state.weekly_plan, state.todays_special, today)

    # ----------------- piatto del giorno / avviso -----------------
    def set_special(self, secret: Optional[str], dish1: str, dish2: Optional[str] = None) -> TodaysSpecial:
        state = self._load_for_update(secret)
        state.todays_special = TodaysSpecial(
            dish1=(dish1 or "").strip(),
            dish2=(dish2 or "").strip(),
            updated_at=self._stamp(),
        )
        self._save(state, "todaysSpecial")
        return state.todays_special

    def set_notice(
        self,
        secret: Optional[str],
        text: str,
        kind: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> Notice:
        state = self._load_for_update(secret)
        kind = (kind or "info").strip().lower()
        state.notice = Notice(
            active=True if active is None else active,
            text=(text or "").strip(),
            kind=kind if kind in NOTICE_KINDS else "info",
            updated_at=self._stamp(),
        )
        self._save(state, "notice")
        return state.notice

    # ----------------- override di una data -----------------
    def set_hours_override(
        self,
        secret: Optional[str],
        date: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        closed: bool = False,
    ) -> HoursOverride:
        state = self._load_for_update(secret)
        if closed:
            start = end = None
        else:
            start = start or sched.DEFAULT_FROM
            end = end or sched.DEFAULT_TO
        state.hours_override = HoursOverride(
            active=True,
            date=date or self.now().date().isoformat(),
            start=start,
            end=end,
            closed=closed,
            updated_at=self._stamp(),
        )
        self._save(state, "hoursOverride")
        return state.hours_override

    # ----------------- orari settimanali -----------------
    @staticmethod
    def _valid_day(name: Any) -> str:
        day = sched.normalize_weekday(name)
        if day is None:
            raise BadRequest(f"unknown weekday: {name}")
        return day

    @staticmethod
    def _day_hours(is_open: bool, start: Optional[str], end: Optional[str], reason: Optional[str]) -> DayHours:
        if not is_open:
            return DayHours.closed(reason)
        return DayHours.opened(start or sched.DEFAULT_FROM, end or sched.DEFAULT_TO)

    def _write_days(self, state: DailyState, days: List[str], hours: DayHours) -> WeeklySchedule:
        schedule, _ = self.schedule_of(state)
        schedule = schedule.copy()
        for d in days:
            schedule.days[d] = DayHours(hours.open, hours.start, hours.end, hours.reason)
        schedule.updated_at = self._stamp()
        state.weekly_schedule = schedule
        return schedule

    def set_weekday(
        self,
        secret: Optional[str],
        day: Any,
        is_open: bool = True,
        start: Optional[str] = None,
        end: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Tuple[str, WeeklySchedule]:
        state = self._load_for_update(secret)
        name = self._valid_day(day)
        schedule = self._write_days(state, [name], self._day_hours(is_open, start, end, reason))
        self._save(state, f"weeklySchedule.{name}")
        return name, schedule

    def set_weekday_range(
        self,
        secret: Optional[str],
        start_day: Any,
        end_day: Any,
        is_open: bool = True,
        start: Optional[str] = None,
        end: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Tuple[List[str], WeeklySchedule]:
        state = self._load_for_update(secret)
        days = sched.weekday_range(self._valid_day(start_day), self._valid_day(end_day))
        schedule = self._write_days(state, days, self._day_hours(is_open, start, end, reason))
        self._save(state, f"weeklySchedule.{days[0]}-{days[-1]}")
        return days, schedule

    # ----------------- input orari in sospeso -----------------
    def get_pending(self) -> Optional[PendingTimeInput]:
        return self.read().pending_time_input

    def set_pending(
        self,
        secret: Optional[str],
        conversation_id: Any,
        kind: str = "single",
        day: Optional[str] = None,
        start_day: Optional[str] = None,
        end_day: Optional[str] = None,
        clear: bool = False,
    ) -> Optional[PendingTimeInput]:
        state = self._load_for_update(secret)
        if clear:
            state.pending_time_input = None
        else:
            if conversation_id is None or str(conversation_id).strip() == "":
                raise BadRequest("missing conversationId")
            state.pending_time_input = PendingTimeInput(
                conversation_id=str(conversation_id).strip(),
                kind="range" if (kind or "").lower() == "range" else "single",
                day=day,
                start_day=start_day,
                end_day=end_day,
                created_at=self._stamp(),
            )
        self._save(state, "pendingTimeInput")
        return state.pending_time_input

    def apply_pending(
        self,
        secret: Optional[str],
        conversation_id: Any,
        text: str,
    ) -> Tuple[List[str], str, str, WeeklySchedule]:
        state = self._load_for_update(secret)
        start, end = sched.parse_time_range(text)

        pending = state.pending_time_input
        if pending is None:
            raise BadRequest("no pending time input")
        if pending.conversation_id != str(conversation_id or "").strip():
            raise BadRequest("pending time input belongs to another conversation")

        if pending.kind == "range":
            days = sched.weekday_range(self._valid_day(pending.start_day), self._valid_day(pending.end_day))
        else:
            days = [self._valid_day(pending.day)]

        schedule = self._write_days(state, days, DayHours.opened(start, end))
        state.pending_time_input = None
        self._save(state, f"weeklySchedule via pending input ({', '.join(days)})")
        return days, start, end, schedule

    # ----------------- reset -----------------
    def reset(self, secret: Optional[str], notice: bool = True, override: bool = True) -> List[str]:
        state = self._load_for_update(secret)
        stamp = self._stamp()
        done: List[str] = []
        if notice:
            state.notice = Notice(updated_at=stamp)
            done.append("notice")
        if override:
            state.hours_override = HoursOverride(updated_at=stamp)
            done.append("hoursOverride")
        self._save(state, "reset " + ", ".join(done or ["nothing"]))
        return done

    # ----------------- selezione interattiva -----------------
    def get_selection(self) -> Optional[PendingSelection]:
        return self.read().pending_selection

    def set_selection(
        self,
        secret: Optional[str],
        conversation_id: Any,
        step: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        clear: bool = False,
    ) -> Optional[PendingSelection]:
        state = self._load_for_update(secret)
        if clear:
            state.pending_selection = None
        else:
            if conversation_id is None or str(conversation_id).strip() == "":
                raise BadRequest("missing conversationId")
            state.pending_selection = PendingSelection(
                conversation_id=str(conversation_id).strip(),
                step=step,
                data=dict(data or {}),
                updated_at=self._stamp(),
            )
        self._save(state, "pendingSelection")
        return state.pending_selection

    # ----------------- piano settimanale -----------------
    def dishes(self) -> List[str]:
        return list(self.read().dish_pool)

    def get_plan(self) -> WeeklyPlan:
        return self.read().weekly_plan

    def generate_plan(self, secret: Optional[str]) -> WeeklyPlan:
        state = self._load_for_update(secret)
        state.weekly_plan = weekly_plan.generate_plan(state.dish_pool, self.rng, self._stamp())
        self._save(state, "weeklyPlan (random)")
        return state.weekly_plan

    def set_plan(self, secret: Optional[str], days: Any) -> WeeklyPlan:
        state = self._load_for_update(secret)
        state.weekly_plan = weekly_plan.manual_plan(days, self._stamp())
        self._save(state, "weeklyPlan (manual)")
        return state.weekly_plan

    def set_plan_day(self, secret: Optional[str], day: Any, dish1: Any, dish2: Any = None) -> Tuple[str, WeeklyPlan]:
        state = self._load_for_update(secret)
        key = weekly_plan.set_plan_day(state.weekly_plan, day, dish1, dish2, self._stamp())
        self._save(state, f"weeklyPlan.{key}")
        return key, state.weekly_plan

    def deactivate_plan(self, secret: Optional[str]) -> WeeklyPlan:
        state = self._load_for_update(secret)
        weekly_plan.deactivate(state.weekly_plan, self._stamp())
        self._save(state, "weeklyPlan deactivated")
        return state.weekly_plan
