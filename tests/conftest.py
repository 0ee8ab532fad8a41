"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Generator
from fastapi.testclient import TestClient
from fintech_agent_api.api.main import create_app
from fintech_agent_api.config import Settings
from fintech_agent_api.domain.models import TransactionStatus, TransactionType
from fintech_agent_api.domain.scoring import FixedScoringStrategy
from fintech_agent_api.infrastructure.seed import seed_demo_data
from fintech_agent_api.infrastructure.store import FintechStore


class FrozenClock:
    """Store clock that only moves when told to"""

    def __init__(self, start: datetime = datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def store(clock: FrozenClock) -> FintechStore:
    """Empty store with a frozen clock"""
    return FintechStore(clock=clock)


@pytest.fixture
def seeded_store(clock: FrozenClock) -> FintechStore:
    """Store holding the demo fixtures"""
    return seed_demo_data(FintechStore(clock=clock))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        seed_demo_data=False,
        airtime_completion_delay_seconds=0.05,
        log_level="WARNING",
    )


@pytest.fixture
def scoring() -> FixedScoringStrategy:
    return FixedScoringStrategy(720)


@pytest.fixture
def client(
    test_settings: Settings,
    seeded_store: FintechStore,
    scoring: FixedScoringStrategy,
) -> Generator[TestClient, None, None]:
    """FastAPI test client over a fresh seeded store and deterministic scoring"""
    app = create_app(test_settings, store=seeded_store, scoring=scoring)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_transfer_leg(store: FintechStore):
    """Create a single transaction directly in the store"""

    def _make(account_id: str = "acc-001", status: TransactionStatus = TransactionStatus.PENDING, **overrides):
        fields = {
            "account_id": account_id,
            "type": TransactionType.DEBIT,
            "amount": 100.0,
            "currency": "GHS",
            "description": "Transfer",
            "status": status,
            "counterparty": "acc-002",
        }
        fields.update(overrides)
        return store.transactions.create(fields)

    return _make
