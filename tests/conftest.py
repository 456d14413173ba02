"""Shared test fixtures for the Realme backend tests."""

import datetime
from typing import Any, Dict, List, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from realme.core.database import Base, register_models
from realme.core.exceptions import GenerationError
from realme.flows.ai_providers.base import StructuredGenerator
from realme.wellness.persistence import InMemoryKeyValueStore, SqlKeyValueStore
from realme.wellness.store import WellnessStore


class FakeGenerator(StructuredGenerator):
    """
    Replays queued responses in order. An Exception instance in the queue is
    raised instead of returned. Every call is recorded.
    """

    model_tag = "fake"

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def generate(self, prompt: str, schema: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append({"prompt": prompt, "schema": schema})
        if not self.responses:
            raise GenerationError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def prompts(self) -> List[str]:
        return [c["prompt"] for c in self.calls]


class RecordingSleep:
    """Awaitable stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FixedClock:
    def __init__(self, now: datetime.datetime):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += datetime.timedelta(**kwargs)


NOW = datetime.datetime(2026, 10, 19, 9, 30)
TODAY = NOW.date()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv, clock):
    return WellnessStore(kv, clock=clock)


@pytest.fixture
def identity():
    return {"email": "sam@example.com", "uid": "u-1", "name": "Sam"}


@pytest.fixture
def session_factory():
    register_models()
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def sql_kv(session_factory):
    return SqlKeyValueStore(session_factory)


def days_back(count: int, today: Optional[datetime.date] = None) -> List[datetime.date]:
    """The `count` consecutive dates ending at today."""
    today = today or TODAY
    return [today - datetime.timedelta(days=i) for i in range(count)]
