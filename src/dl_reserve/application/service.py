"""ReserveApplicationService — mint and burn through the shared runtime."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_engine.application.runtime import EngineRuntime, get_runtime
from src.dl_engine.domain.engine import LedgerEngine
from src.dl_reserve.application.schemas import BurnResponse, MintResponse


class ReserveApplicationService:
    def __init__(self, runtime: EngineRuntime | None = None) -> None:
        self._runtime = runtime

    @property
    def runtime(self) -> EngineRuntime:
        return self._runtime or get_runtime()

    async def mint(self, db: AsyncSession | None, caller: str, value: int) -> MintResponse:
        def op(engine: LedgerEngine) -> MintResponse:
            units = engine.mint(caller, value)
            return MintResponse.from_result(
                value, units, engine.balance_of(caller), engine.state.reserve_balance
            )

        return await self.runtime.execute(db, op)

    async def burn(self, db: AsyncSession | None, caller: str, units: int) -> BurnResponse:
        def op(engine: LedgerEngine) -> BurnResponse:
            value = engine.burn(caller, units)
            return BurnResponse.from_result(
                units, value, engine.balance_of(caller), engine.state.reserve_balance
            )

        return await self.runtime.execute(db, op)
