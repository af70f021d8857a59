"""LedgerApplicationService — transfers and read-only account/stat queries.

Queries read the engine directly without the runtime lock; they never
mutate and never block a writer, and may see a change whose audit write is
still in flight (see EngineRuntime).
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_engine.application.runtime import EngineRuntime, get_runtime
from src.dl_engine.domain.engine import LedgerEngine
from src.dl_engine.infrastructure.event_store import event_to_item, list_events
from src.dl_ledger.application.schemas import (
    AccountInfoResponse,
    EventItem,
    EventListResponse,
    StatsResponse,
    TransferResponse,
)


class LedgerApplicationService:
    def __init__(self, runtime: EngineRuntime | None = None) -> None:
        self._runtime = runtime

    @property
    def runtime(self) -> EngineRuntime:
        return self._runtime or get_runtime()

    async def transfer(
        self, db: AsyncSession | None, caller: str, recipient: str, units: int
    ) -> TransferResponse:
        def op(engine: LedgerEngine) -> TransferResponse:
            engine.transfer(caller, recipient, units)
            return TransferResponse(
                sender_balance=engine.balance_of(caller),
                recipient_balance=engine.balance_of(recipient),
            )

        return await self.runtime.execute(db, op)

    def account_info(self, address: str) -> AccountInfoResponse:
        engine = self.runtime.engine
        info = engine.account_info(address)
        return AccountInfoResponse.from_info(info, engine.staking.status_of(address).value)

    def stats(self) -> StatsResponse:
        return StatsResponse.from_stats(self.runtime.engine.stats())

    async def list_events(
        self, db: AsyncSession | None, address: str, limit: int
    ) -> EventListResponse:
        runtime = self.runtime
        if runtime.persist_events and db is not None:
            rows = await list_events(address, limit, db)
        else:
            # Without the audit table, serve this process's event log, newest first
            recent = [e for e in reversed(runtime.engine.events) if e.account == address]
            rows = [event_to_item(e) for e in recent[:limit]]
        return EventListResponse(items=[EventItem(**row) for row in rows])
