"""DividendApplicationService — distribution and withdrawal."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_common.amounts import amount_to_display
from src.dl_dividend.application.schemas import DistributeResponse, WithdrawResponse
from src.dl_engine.application.runtime import EngineRuntime, get_runtime
from src.dl_engine.domain.engine import LedgerEngine


class DividendApplicationService:
    def __init__(self, runtime: EngineRuntime | None = None) -> None:
        self._runtime = runtime

    @property
    def runtime(self) -> EngineRuntime:
        return self._runtime or get_runtime()

    async def distribute(
        self, db: AsyncSession | None, caller: str, value: int
    ) -> DistributeResponse:
        def op(engine: LedgerEngine) -> DistributeResponse:
            engine.distribute(caller, value)
            return DistributeResponse(
                distributed=value,
                distributed_display=amount_to_display(value),
                total_dividends_distributed=engine.state.total_dividends_distributed,
                total_supply=engine.total_supply(),
            )

        return await self.runtime.execute(db, op)

    async def withdraw(self, db: AsyncSession | None, caller: str) -> WithdrawResponse:
        def op(engine: LedgerEngine) -> WithdrawResponse:
            amount = engine.withdraw_dividends(caller)
            return WithdrawResponse.from_result(amount, engine.withdrawn_dividend_of(caller))

        return await self.runtime.execute(db, op)
