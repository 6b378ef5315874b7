"""DailyStateManager: secret guard, override expiry, schedule and pending input."""

from __future__ import annotations

import pytest

from backend.daily import secret_matches
from backend.errors import BadRequest, Unauthorized
from tests.conftest import MONDAY, SECRET, at


def test_secret_predicate():
    assert secret_matches("abc", "abc") is True
    assert secret_matches("abd", "abc") is False
    assert secret_matches(None, "abc") is False
    assert secret_matches("", "abc") is False


@pytest.mark.parametrize("call", [
    lambda m, s: m.set_special(s, "A", "B"),
    lambda m, s: m.set_notice(s, "Heute geschlossen", "closed"),
    lambda m, s: m.set_hours_override(s, closed=True),
    lambda m, s: m.set_weekday(s, "tuesday", False),
    lambda m, s: m.set_weekday_range(s, "friday", "tuesday"),
    lambda m, s: m.set_pending(s, "42", "single", day="friday"),
    lambda m, s: m.apply_pending(s, "42", "9:00-18:00"),
    lambda m, s: m.reset(s),
    lambda m, s: m.set_selection(s, "42", "dish"),
    lambda m, s: m.generate_plan(s),
    lambda m, s: m.set_plan(s, {}),
    lambda m, s: m.set_plan_day(s, "tuesday", "A"),
    lambda m, s: m.deactivate_plan(s),
])
def test_wrong_secret_leaves_document_untouched(manager, store, call):
    manager.set_special(SECRET, "Soljanka", "")
    before, writes = store.raw, store.writes
    with pytest.raises(Unauthorized):
        call(manager, "wrong")
    assert store.raw == before
    assert store.writes == writes


def test_set_special_clears_missing_dish2(manager):
    manager.set_special(SECRET, "Soljanka", "Senfeier")
    special = manager.set_special(SECRET, "Wurstgulasch")
    assert (special.dish1, special.dish2) == ("Wurstgulasch", "")
    assert special.updated_at == "2025-01-14T12:00:00+01:00"


def test_set_notice_defaults(manager):
    notice = manager.set_notice(SECRET, "Heute Livemusik")
    assert notice.active is True
    assert notice.kind == "info"


def test_hours_override_defaults_to_today(manager):
    ov = manager.set_hours_override(SECRET)
    assert (ov.active, ov.date, ov.start, ov.end, ov.closed) == (True, "2025-01-14", "11:00", "17:00", False)


def test_hours_override_closed_forces_null_hours(manager):
    ov = manager.set_hours_override(SECRET, "2025-01-20", "12:00", "14:00", closed=True)
    assert (ov.start, ov.end, ov.closed) == (None, None, True)


def test_stale_override_expires_on_read(manager, store, clock):
    manager.set_hours_override(SECRET, date="2025-01-13", closed=True)
    writes = store.writes
    assert manager.read().hours_override.active is False
    assert store.writes == writes + 1
    assert store.load().hours_override.active is False


def test_override_for_today_survives_read(manager, store):
    manager.set_hours_override(SECRET, closed=True)
    writes = store.writes
    assert manager.read().hours_override.active is True
    assert store.writes == writes


def test_status_honours_today_override(manager):
    manager.set_hours_override(SECRET, closed=True)
    st = manager.status()
    assert st["isOpen"] is False
    assert st["nextOpen"] == "Wednesday 11:00"


def test_set_weekday_validates_name(manager, store):
    manager.read()
    before, writes = store.raw, store.writes
    with pytest.raises(BadRequest):
        manager.set_weekday(SECRET, "Dienstag")
    assert store.raw == before
    assert store.writes == writes


def test_set_weekday_closed_with_reason(manager):
    day, schedule = manager.set_weekday(SECRET, "Saturday", False, "11:00", "17:00", "Betriebsfeier")
    assert day == "saturday"
    assert schedule.days["saturday"].to_dict() == {"open": False, "from": None, "to": None, "reason": "Betriebsfeier"}
    # gli altri giorni partono dagli orari di default
    assert schedule.days["monday"].open is False
    assert schedule.days["tuesday"].start == "11:00"


def test_weekday_range_wraps_and_is_idempotent(manager, store):
    days, first = manager.set_weekday_range(SECRET, "friday", "tuesday", True, "10:00", "20:00")
    assert days == ["friday", "saturday", "sunday", "monday", "tuesday"]
    assert first.days["wednesday"].start == "11:00"
    snapshot = {d: (h.to_dict() if h else None) for d, h in first.days.items()}

    _, second = manager.set_weekday_range(SECRET, "friday", "tuesday", True, "10:00", "20:00")
    assert {d: (h.to_dict() if h else None) for d, h in second.days.items()} == snapshot


def test_weekday_range_validates_both_ends(manager):
    with pytest.raises(BadRequest):
        manager.set_weekday_range(SECRET, "friday", "funday")


def test_apply_pending_single_day(manager, store):
    manager.set_pending(SECRET, "chat-1", "single", day="wednesday")
    days, start, end, schedule = manager.apply_pending(SECRET, "chat-1", "9:00-18:00")
    assert days == ["wednesday"]
    assert schedule.days["wednesday"].to_dict() == {"open": True, "from": "9:00", "to": "18:00", "reason": None}
    assert store.load().pending_time_input is None


def test_apply_pending_range(manager):
    manager.set_pending(SECRET, 77, "range", start_day="saturday", end_day="monday")
    days, *_ = manager.apply_pending(SECRET, "77", "12:00–15:00")
    assert days == ["saturday", "sunday", "monday"]


def test_apply_pending_without_record(manager):
    with pytest.raises(BadRequest):
        manager.apply_pending(SECRET, "chat-1", "9:00-18:00")


def test_apply_pending_other_conversation(manager, store):
    manager.set_pending(SECRET, "chat-1", "single", day="friday")
    with pytest.raises(BadRequest):
        manager.apply_pending(SECRET, "chat-2", "9:00-18:00")
    assert store.load().pending_time_input.conversation_id == "chat-1"


def test_apply_pending_bad_text_keeps_pending(manager, store):
    manager.set_pending(SECRET, "chat-1", "single", day="friday")
    with pytest.raises(BadRequest) as exc:
        manager.apply_pending(SECRET, "chat-1", "ab neun")
    assert exc.value.message == "expected HH:MM-HH:MM"
    assert store.load().pending_time_input is not None


def test_pending_is_last_writer_wins(manager):
    manager.set_pending(SECRET, "chat-1", "single", day="friday")
    manager.set_pending(SECRET, "chat-2", "range", start_day="friday", end_day="sunday")
    pending = manager.get_pending()
    assert pending.conversation_id == "chat-2"
    assert pending.kind == "range"


def test_reset_selective(manager):
    manager.set_notice(SECRET, "Achtung")
    manager.set_hours_override(SECRET, closed=True)
    assert manager.reset(SECRET, notice=True, override=False) == ["notice"]
    state = manager.read()
    assert state.notice.active is False
    assert state.notice.updated_at is not None
    assert state.hours_override.active is True


def test_selection_round_trip(manager):
    manager.set_selection(SECRET, "chat-9", "pick_dish", {"day": "friday"})
    sel = manager.get_selection()
    assert (sel.conversation_id, sel.step, sel.data) == ("chat-9", "pick_dish", {"day": "friday"})
    assert manager.set_selection(SECRET, None, clear=True) is None


def test_today_dish_on_monday_with_plan(manager, clock):
    manager.generate_plan(SECRET)
    clock.now = at(*MONDAY, 10, 0)
    out = manager.today_dish()
    assert out["restDay"] is True


def test_today_dish_prefers_plan(manager):
    manager.set_special(SECRET, "Manuell")
    plan = manager.generate_plan(SECRET)
    out = manager.today_dish()
    assert out["source"] == "plan"
    assert out["dish1"] == plan.days["tuesday"]["dish1"]

    manager.deactivate_plan(SECRET)
    assert manager.today_dish()["dish1"] == "Manuell"
