"""Shared test fixtures."""

import os

# Settings are read at import time; provide test values before any src import
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("PERSIST_EVENTS", "false")
os.environ.setdefault("OWNER_ADDRESS", "owner")

import pytest  # noqa: E402

from src.dl_engine.domain.engine import LedgerEngine  # noqa: E402
from src.dl_treasury.infrastructure.memory_vault import InMemoryVault  # noqa: E402

ETH = 10**18
START_TIME = 1_700_000_000


class FakeClock:
    """Settable unix-seconds clock."""

    def __init__(self, now: int = START_TIME) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def vault() -> InMemoryVault:
    return InMemoryVault()


@pytest.fixture
def engine(clock: FakeClock, vault: InMemoryVault) -> LedgerEngine:
    return LedgerEngine("owner", vault=vault, clock=clock)
