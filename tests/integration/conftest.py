"""Integration-test fixtures.

The app runs against a fresh in-memory LedgerEngine per test with event
persistence disabled, so no database is needed. The DB session dependency
is overridden to yield None.
"""
from collections.abc import AsyncGenerator, Callable, Iterator

import pytest
from httpx import ASGITransport, AsyncClient

from src.dl_common.database import get_db_session
from src.dl_engine.application.runtime import EngineRuntime, set_runtime
from src.dl_engine.domain.engine import LedgerEngine
from src.dl_gateway.auth.jwt_handler import create_access_token
from src.main import app


async def _no_db() -> AsyncGenerator[None, None]:
    yield None


@pytest.fixture
def runtime(engine: LedgerEngine) -> Iterator[EngineRuntime]:
    rt = EngineRuntime(engine, persist_events=False)
    set_runtime(rt)
    yield rt
    set_runtime(None)


@pytest.fixture
async def client(runtime: EngineRuntime) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    app.dependency_overrides[get_db_session] = _no_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_db_session, None)


@pytest.fixture
def auth() -> Callable[[str], dict[str, str]]:
    """Build a Bearer header for an address."""

    def _headers(address: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(address)}"}

    return _headers
