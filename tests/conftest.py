import random
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from backend import create_app
from backend.store import MemoryStore

SECRET = "test-secret"
TZ = ZoneInfo("Europe/Berlin")


def at(year, month, day, hour=12, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=TZ)


# 2025-01-13 è un lunedì, 2025-01-14 un martedì
MONDAY = (2025, 1, 13)
TUESDAY = (2025, 1, 14)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(at(*TUESDAY, 12, 0))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def app(store, clock):
    return create_app(
        {
            "TESTING": True,
            "BOT_SECRET": SECRET,
            "DAILY_STORE": store,
            "DAILY_CLOCK": clock,
            "DAILY_RANDOM": random.Random(42),
        }
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def manager(app):
    return app.extensions["daily_state"]
