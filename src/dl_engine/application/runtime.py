"""EngineRuntime — the process-wide LedgerEngine plus its request lock.

Mutations are serialised with an asyncio.Lock (one writer at a time, as
the matching engine does per market). Each mutation and the audit rows it
produced commit together: the engine's unit of work stays open across the
DB write, and a DB failure rolls the ledger back as well.

Queries do not take the lock. While a writer awaits its audit write, a
query can observe that writer's change before it is committed; if the
write then fails, the change is rolled back and a later query no longer
sees it. Queries never block, so this window is accepted; a client that
needs a committed view reads after its own mutation has returned.

At startup, rebuild() replays the audit table into a fresh engine, so the
ledger survives restarts whenever events are persisted.
"""
import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.dl_common.errors import InternalError
from src.dl_engine.domain.engine import LedgerEngine
from src.dl_engine.infrastructure.event_store import load_events, write_events

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EngineRuntime:
    def __init__(self, engine: LedgerEngine, persist_events: bool = True) -> None:
        self.engine = engine
        self.persist_events = persist_events
        self.lock = asyncio.Lock()

    async def execute(self, db: AsyncSession | None, op: Callable[[LedgerEngine], T]) -> T:
        async with self.lock:
            with self.engine.unit_of_work():
                mark = len(self.engine.events)
                result = op(self.engine)
                if self.persist_events and db is not None:
                    try:
                        await write_events(self.engine.events[mark:], db)
                        await db.commit()
                    except Exception as exc:
                        await db.rollback()
                        logger.exception("Audit write failed, ledger change rolled back")
                        raise InternalError("Audit write failed") from exc
                return result

    async def rebuild(self, db: AsyncSession) -> int:
        """Replay the audit table into the engine. Returns events applied.

        Only valid on an engine no operation has touched yet.
        """
        if self.engine.events or self.engine.state.total_supply or self.engine.vault.held():
            raise InternalError("Ledger already has state, refusing to replay")
        async with self.lock:
            events = await load_events(db)
            return self.engine.replay(events)


_runtime: EngineRuntime | None = None


def build_runtime() -> EngineRuntime:
    engine = LedgerEngine(
        settings.OWNER_ADDRESS,
        conversion_rate=settings.CONVERSION_RATE,
        staking_rate_bps=settings.STAKING_RATE_BPS,
        name=settings.TOKEN_NAME,
        symbol=settings.TOKEN_SYMBOL,
        event_log_limit=settings.EVENT_LOG_LIMIT,
    )
    return EngineRuntime(engine, persist_events=settings.PERSIST_EVENTS)


def get_runtime() -> EngineRuntime:
    """Return the process-wide runtime, creating it on first use."""
    global _runtime  # noqa: PLW0603
    if _runtime is None:
        _runtime = build_runtime()
    return _runtime


def set_runtime(runtime: EngineRuntime | None) -> None:
    """Replace (or with None, reset) the process-wide runtime."""
    global _runtime  # noqa: PLW0603
    _runtime = runtime
